"""
File classification

Vendor driver files are named <version>_<kind>_<peripheral>[_ex].{c,h},
e.g. stm32f4xx_hal_uart.c or stm32f4xx_ll_usart.h.
"""

import os
from dataclasses import dataclass

from .errors import (
    ClassifyError,
    BAD_EXTENSION,
    MALFORMED_NAME,
    EXTENSION_MODULE,
    UNKNOWN_KIND,
)

SOURCE_EXTENSIONS = ('.c', '.h')
KINDS = ('hal', 'll')
EXTENSION_MODULE_SUFFIX = '_ex'


@dataclass(frozen=True)
class FileClassification:
    """What a driver file is about, derived from its name"""
    version: str
    kind: str
    peripheral: str
    stem: str

    @property
    def is_extension(self) -> bool:
        return self.peripheral.endswith(EXTENSION_MODULE_SUFFIX)


def _strip_extension(filename: str) -> str:
    for ext in SOURCE_EXTENSIONS:
        if filename.endswith(ext):
            return filename[:-len(ext)]
    raise ClassifyError(BAD_EXTENSION, f'Wrong extension: {filename}')


def classify(filename: str) -> FileClassification:
    """Split a driver file name into (version, kind, peripheral)

    Raises ClassifyError with the code of the first rule the name breaks.
    Extension modules (..._uart_ex.c) are rejected with EXTENSION_MODULE;
    the non-extension file of the same peripheral already covers them.
    """
    stem = _strip_extension(os.path.basename(filename))

    version, sep, rest = stem.partition('_')
    if not sep or not version:
        raise ClassifyError(MALFORMED_NAME, f'Invalid file name {stem}')

    kind, sep, peripheral = rest.partition('_')
    if not sep or not kind or not peripheral:
        raise ClassifyError(MALFORMED_NAME, f'Invalid file name {rest}')

    if peripheral.endswith(EXTENSION_MODULE_SUFFIX):
        raise ClassifyError(EXTENSION_MODULE, f'{stem} is an extension module')

    if kind not in KINDS:
        raise ClassifyError(UNKNOWN_KIND, f'Invalid kind {kind} in {stem}')

    return FileClassification(version=version, kind=kind, peripheral=peripheral, stem=stem)
