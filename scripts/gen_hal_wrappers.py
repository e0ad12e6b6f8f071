#!/usr/bin/env python3
"""
gen_hal_wrappers.py - wrapper header generator entry point

Usage:
    python scripts/gen_hal_wrappers.py COMPILE_DB_DIR DRIVERS_DIR [OUTDIR] [-j N]
"""

import os
import sys

# Add scripts directory to path
script_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, script_dir)

from hal_bindgen.cli import main

if __name__ == '__main__':
    sys.exit(main())
