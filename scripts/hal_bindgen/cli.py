"""
Batch driver

Usage:
    hal-bindgen build/ Drivers/ include/wrappers [-j N]

Finds */*hal*.c and */*ll*.h under the input root, generates one wrapper
header per driver file and reports one line per file on stderr. Failing
files are reported, never fatal to the batch.
"""

import argparse
import glob
import logging
import os
import sys
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional

from .compdb import CompilationDatabase
from .errors import GenerateError, EXTENSION_MODULE
from .generator import Generator

logger = logging.getLogger(__name__)

INPUT_PATTERNS = ('*/*hal*.c', '*/*ll*.h')

OK = 'ok'
ERR = 'err'
SKIP = 'skip'


@dataclass(frozen=True)
class GenerateConfig:
    compile_db: str
    input_root: str
    output_dir: str
    jobs: int
    clang: Optional[str]
    ignores: tuple[str, ...] = ()
    ir_dir: Optional[str] = None
    verbose: bool = False


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hal-bindgen',
        description='Generate C++ wrapper classes for STM32 HAL/LL drivers')
    parser.add_argument('compiler', help='Build directory holding compile_commands.json')
    parser.add_argument('input', help='Driver root; files are searched in its subdirectories')
    parser.add_argument('outdir', nargs='?', default='.',
                        help='Output directory (default: current directory)')
    parser.add_argument('-j', '--jobs', type=int, default=1,
                        help='Number of parallel jobs (default: 1)')
    parser.add_argument('--clang', default=None,
                        help='clang executable (default: $CLANG or clang)')
    parser.add_argument('--ignore', action='append', default=[], metavar='FUNC',
                        help='Function never to wrap (repeatable)')
    parser.add_argument('--dump-ir', default=None, metavar='DIR',
                        help='Also write the parsed IR of every file as JSON into DIR')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def parse_args(argv: Optional[list[str]] = None) -> GenerateConfig:
    args = build_argument_parser().parse_args(argv)
    if args.jobs < 1:
        build_argument_parser().error('--jobs must be at least 1')
    return GenerateConfig(
        compile_db=args.compiler,
        input_root=args.input,
        output_dir=args.outdir,
        jobs=args.jobs,
        clang=args.clang,
        ignores=tuple(args.ignore),
        ir_dir=args.dump_ir,
        verbose=args.verbose,
    )


def find_inputs(input_root: str) -> list[str]:
    """Driver files in the immediate subdirectories of input_root"""
    files = []
    for pattern in INPUT_PATTERNS:
        files.extend(sorted(glob.glob(os.path.join(input_root, pattern))))
    return list(dict.fromkeys(files))


def run_one(generator: Generator, path: str, flags: list[str]) -> tuple[str, str, str]:
    """Process a single file. Returns (status, path, message)."""
    try:
        unit = generator.process_file(path, flags)
    except GenerateError as e:
        if e.code == EXTENSION_MODULE:
            return SKIP, path, e.message
        return ERR, path, e.message
    return OK, path, f'{path} converted to {unit.path}'


def _report(status: str, path: str, message: str):
    if status == OK:
        print(f'[OK] {message}', file=sys.stderr)
    elif status == ERR:
        print(f'[ERR] {path}: {message}', file=sys.stderr)
    else:
        logger.debug(f'Skipping {path}: {message}')


def run_batch(config: GenerateConfig, db: CompilationDatabase) -> dict[str, int]:
    """Process every discovered file, returning a count per status"""
    generator = Generator(config.output_dir, clang=config.clang, ir_dir=config.ir_dir)
    generator.ignore(*config.ignores)

    tasks = [(path, db.flags_for(path)) for path in find_inputs(config.input_root)]
    logger.info(f'Generating {len(tasks)} files with {config.jobs} jobs...')

    counts = {OK: 0, ERR: 0, SKIP: 0}
    if config.jobs == 1:
        for path, flags in tasks:
            status, path, message = run_one(generator, path, flags)
            counts[status] += 1
            _report(status, path, message)
        return counts

    with ProcessPoolExecutor(max_workers=config.jobs) as executor:
        futures = [executor.submit(run_one, generator, path, flags) for path, flags in tasks]
        for future in as_completed(futures):
            status, path, message = future.result()
            counts[status] += 1
            _report(status, path, message)
    return counts


def main(argv: Optional[list[str]] = None) -> int:
    config = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if config.verbose else logging.WARNING,
                        format='%(levelname)s: %(message)s')

    try:
        db = CompilationDatabase.from_directory(config.compile_db)
    except (OSError, ValueError) as e:
        print(f'Error: could not load compilation database: {e}', file=sys.stderr)
        return 1

    counts = run_batch(config, db)
    logger.info(f'Results: {counts[OK]} generated, {counts[ERR]} failed, '
                f'{counts[SKIP]} skipped')
    return 0


if __name__ == '__main__':
    sys.exit(main())
