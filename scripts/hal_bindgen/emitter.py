"""
Wrapper header emission

Renders the synthesized methods of one driver file either as one class per
handle type or, for peripherals without a handle, as a static namespace.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Union

from .classify import FileClassification
from .codegen import CodeGen
from .method import MethodDescriptor
from .naming import as_pascal_case

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoHandle:
    """Render all methods into a namespace named after the peripheral"""

    @property
    def handle_type(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class PerHandle:
    """Render one class wrapping a handle of this type"""
    handle_type: str


RenderMode = Union[NoHandle, PerHandle]


def render_modes(handle_types: Sequence[str]) -> list[RenderMode]:
    """One PerHandle per handle type, or a single NoHandle without any"""
    if not handle_types:
        return [NoHandle()]
    return [PerHandle(handle_type) for handle_type in handle_types]


def class_name(handle_type: str) -> Optional[str]:
    """Wrapper class name for a handle type

    Examples:
        UART_HandleTypeDef * -> Uart
        __DMA_HandleTypeDef * -> Dma
        USART_TypeDef * -> Usart
    """
    if '_' not in handle_type:
        return None
    return as_pascal_case(handle_type.rsplit('_', 1)[0]) or None


def _emit_methods(methods: Sequence[MethodDescriptor], gen: CodeGen):
    for method in methods:
        gen.line(method.render())


def _emit_namespace(classification: FileClassification,
                    methods: Sequence[MethodDescriptor], gen: CodeGen):
    name = as_pascal_case(classification.peripheral)
    with gen.block(f'namespace {name} {{', f'}} // namespace {name}'):
        _emit_methods(methods, gen)


def _emit_class(handle_type: str, methods: Sequence[MethodDescriptor],
                gen: CodeGen) -> Optional[str]:
    name = class_name(handle_type)
    if name is None:
        logger.warning(f'Skipping handle type without a separator: {handle_type}')
        return None
    with gen.block(f'class {name} {{', '};'):
        gen.dedent()
        gen.line('public:')
        gen.indent()
        gen.line(f'{handle_type} handle;')
        gen.line(f'{name}({handle_type} _handle) : handle(_handle) {{}}')
        _emit_methods(methods, gen)
    return name


def emit(classification: FileClassification, modes: Sequence[RenderMode],
         methods: Mapping[RenderMode, Sequence[MethodDescriptor]]) -> tuple[str, list[str]]:
    """Render the wrapper header

    Returns the header text and the names of the classes or namespace
    actually emitted.
    """
    gen = CodeGen()
    emitted = []

    gen.line('#pragma once')
    gen.line(f'#include "{classification.stem}.h"')
    kind = classification.kind
    with gen.block(f'namespace {kind} {{', f'}} // namespace {kind}'):
        for mode in modes:
            mode_methods = methods.get(mode, ())
            if isinstance(mode, NoHandle):
                _emit_namespace(classification, mode_methods, gen)
                emitted.append(as_pascal_case(classification.peripheral))
            else:
                name = _emit_class(mode.handle_type, mode_methods, gen)
                if name is not None:
                    emitted.append(name)

    return gen.output(), emitted
