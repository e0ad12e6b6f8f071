"""
hal_bindgen - C++ wrapper generation for STM32 HAL/LL drivers

Turns vendor peripheral APIs (functions taking a handle struct or a register
block pointer) into thin C++ classes, one per hardware handle type, from the
clang AST of each driver file.
"""

from .errors import GenerateError, ClassifyError, ParseError, WriteError, VALID_ERROR_CODES
from .ir import IR, ArgInfo, FuncInfo, StructInfo
from .classify import FileClassification, classify
from .handles import resolve_handle_types
from .selector import select_functions
from .method import MethodKind, MethodDescriptor, synthesize
from .emitter import NoHandle, PerHandle, emit, render_modes
from .compdb import CompilationDatabase
from .generator import GeneratedUnit, Generator, generate_unit

__all__ = [
    'GenerateError', 'ClassifyError', 'ParseError', 'WriteError', 'VALID_ERROR_CODES',
    'IR', 'ArgInfo', 'FuncInfo', 'StructInfo',
    'FileClassification', 'classify',
    'resolve_handle_types',
    'select_functions',
    'MethodKind', 'MethodDescriptor', 'synthesize',
    'NoHandle', 'PerHandle', 'emit', 'render_modes',
    'CompilationDatabase',
    'GeneratedUnit', 'Generator', 'generate_unit',
]
