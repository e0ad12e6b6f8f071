"""
Function selection

Picks the functions of a translation unit that are candidates for wrapping.
"""

from typing import Iterable

from .ir import FuncInfo

KIND_PREFIXES = {
    'hal': 'HAL_',
    'll': 'LL_',
}

# Hooks called by the vendor runtime, never by user code
SKIP_SUFFIXES = ('IRQHandler', 'Callback')


def is_candidate(func: FuncInfo, kind: str) -> bool:
    """Check whether a function belongs to the kind's API and is user-callable"""
    prefix = KIND_PREFIXES[kind]
    return func.name.startswith(prefix) and not func.name.endswith(SKIP_SUFFIXES)


def select_functions(funcs: Iterable[FuncInfo], kind: str) -> list[FuncInfo]:
    """Candidate functions, last declared first"""
    if kind not in KIND_PREFIXES:
        raise ValueError(f'Unknown kind: {kind}')
    return [func for func in reversed(list(funcs)) if is_candidate(func, kind)]
