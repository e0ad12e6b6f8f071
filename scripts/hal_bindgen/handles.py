"""
Handle type resolution

A handle type is the C type naming the hardware instance an API call
operates on. HAL drivers declare a <PERIPH>_HandleTypeDef struct; LL drivers
pass a pointer to the register block (<PERIPH>_TypeDef *) as the first
argument of every call, so the type is read off the call sites instead.
"""

from typing import Iterable

from .ir import FuncInfo, StructInfo
from .naming import PeripheralMatcher, strip_type_decorations

HAL_HANDLE_SUFFIX = 'HandleTypeDef'
LL_HANDLE_SUFFIX = 'TypeDef'
POINTER_MARK = ' *'


def _unique(items: Iterable[str]) -> list[str]:
    """Deduplicate, keeping first-seen order"""
    return list(dict.fromkeys(items))


def _ends_with_token(name: str, token: str) -> bool:
    return '_' in name and name.rsplit('_', 1)[1] == token


def hal_handle_types(peripheral: str, structs: Iterable[StructInfo]) -> list[str]:
    """Handle structs declared for this peripheral, as pointer types"""
    matcher = PeripheralMatcher(peripheral)
    return _unique(
        struct.name + POINTER_MARK
        for struct in structs
        if _ends_with_token(struct.name, HAL_HANDLE_SUFFIX)
        and matcher.matches(struct.name)
        and 'const' not in struct.name
    )


def ll_handle_types(peripheral: str, funcs: Iterable[FuncInfo]) -> list[str]:
    """Register block types passed first to this peripheral's functions"""
    matcher = PeripheralMatcher(peripheral)
    found = []
    for func in funcs:
        if not func.params or not matcher.matches(func.name):
            continue
        type_text = func.params[0].type
        if not _ends_with_token(strip_type_decorations(type_text), LL_HANDLE_SUFFIX):
            continue
        if 'const' in type_text:
            continue
        found.append(type_text)
    return _unique(found)


def resolve_handle_types(kind: str, peripheral: str, structs: Iterable[StructInfo],
                         funcs: Iterable[FuncInfo]) -> list[str]:
    """Distinct handle types for the peripheral, in first-seen order

    An empty list means the peripheral only has free functions.
    """
    if kind == 'hal':
        return hal_handle_types(peripheral, structs)
    if kind == 'll':
        return ll_handle_types(peripheral, funcs)
    raise ValueError(f'Unknown kind: {kind}')
