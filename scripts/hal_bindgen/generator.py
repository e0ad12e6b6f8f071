"""
Main generator module

Runs the per-file pipeline: classify the file name, parse it with clang,
resolve handle types, select and synthesize methods, emit and write the
wrapper header.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Optional

from .classify import FileClassification, classify
from .clang_ast import gen_ir
from .emitter import emit, render_modes
from .errors import GenerateError, WriteError, NO_HANDLE_TYPE
from .handles import resolve_handle_types
from .ir import IR
from .method import synthesize
from .selector import select_functions

logger = logging.getLogger(__name__)

OUTPUT_EXTENSION = '.hpp'


@dataclass(frozen=True)
class GeneratedUnit:
    """Wrapper header text and where it goes"""
    path: str
    text: str
    classes: tuple[str, ...]
    method_count: int


def output_path(classification: FileClassification, output_dir: str) -> str:
    """<output_dir>/<stem>.hpp"""
    return os.path.join(output_dir, classification.stem + OUTPUT_EXTENSION)


def generate_unit(ir: IR, classification: FileClassification, output_dir: str,
                  ignores: Iterable[str] = ()) -> GeneratedUnit:
    """Generate the wrapper header for one parsed driver file

    Without handle types the methods go into a static namespace; a file
    that would produce an empty namespace raises NO_HANDLE_TYPE.
    """
    kind = classification.kind
    peripheral = classification.peripheral
    ignores = set(ignores)

    handle_types = resolve_handle_types(kind, peripheral, ir.structs, ir.funcs)
    funcs = [f for f in select_functions(ir.funcs, kind) if f.name not in ignores]
    modes = render_modes(handle_types)
    logger.debug(f'{classification.stem}: handle types {handle_types}, '
                 f'{len(funcs)} candidate functions')

    methods = {}
    for mode in modes:
        synthesized = (synthesize(func, mode.handle_type, peripheral) for func in funcs)
        methods[mode] = [m for m in synthesized if m is not None]

    if not handle_types and not any(methods.values()):
        raise GenerateError(NO_HANDLE_TYPE, 'No handle type found')

    text, classes = emit(classification, modes, methods)
    return GeneratedUnit(
        path=output_path(classification, output_dir),
        text=text,
        classes=tuple(classes),
        method_count=sum(len(m) for m in methods.values()),
    )


def write_unit(unit: GeneratedUnit):
    """Write the header, creating its directory"""
    try:
        os.makedirs(os.path.dirname(unit.path) or '.', exist_ok=True)
        with open(unit.path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(unit.text)
    except OSError as e:
        raise WriteError(f'Could not create {unit.path}: {e}') from e


class Generator:
    """Batch-wide settings shared by every file of a run"""

    def __init__(self, output_dir: str = '.', clang: Optional[str] = None,
                 ir_dir: Optional[str] = None):
        self.output_dir = output_dir
        self.clang = clang
        self.ir_dir = ir_dir
        self._ignores: set[str] = set()

    def ignore(self, *names: str):
        """Add functions never to wrap"""
        self._ignores.update(names)

    def process_file(self, path: str, flags: list[str]) -> GeneratedUnit:
        """Classify, parse, generate and write one driver file"""
        classification = classify(path)
        ir = IR.from_dict(gen_ir(path, flags, self.clang, self.ir_dir))
        unit = generate_unit(ir, classification, self.output_dir, self._ignores)
        write_unit(unit)
        return unit
