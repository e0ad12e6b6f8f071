"""
Method synthesis

Maps one vendor function onto a wrapper method: an instance method when its
first argument is the wrapped handle, a static method when it merely belongs
to the peripheral, nothing otherwise.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from .ir import ArgInfo, FuncInfo
from .naming import PeripheralMatcher, escape_keyword, split_identifier

HANDLE_REF = 'this->handle'


class MethodKind(enum.Enum):
    INSTANCE = 'instance'
    STATIC = 'static'
    DISCARD = 'discard'


@dataclass(frozen=True)
class MethodDescriptor:
    """A wrapper method forwarding to a vendor function"""
    kind: MethodKind
    return_type: str
    name: str
    params: tuple[ArgInfo, ...]
    call_args: tuple[str, ...]
    original_name: str

    def render(self) -> str:
        """One-line C++ definition of the method"""
        prefix = 'static ' if self.kind is MethodKind.STATIC else ''
        params = ', '.join(p.pretty for p in self.params)
        call_args = ', '.join(self.call_args)
        return (f'{prefix}inline {self.return_type} {self.name}({params}) '
                f'{{ return {self.original_name}({call_args}); }}')


def handle_matches(arg: ArgInfo, handle_type: Optional[str]) -> bool:
    """Check whether an argument is the wrapped handle"""
    if handle_type is None:
        return False
    return handle_type.removeprefix('__') in arg.type


# (has arguments, first argument is the handle, name mentions the peripheral)
_DECISIONS = {
    (False, False, True): MethodKind.STATIC,
    (False, False, False): MethodKind.DISCARD,
    (True, True, True): MethodKind.INSTANCE,
    (True, True, False): MethodKind.INSTANCE,
    (True, False, True): MethodKind.STATIC,
    (True, False, False): MethodKind.DISCARD,
}


def classify_function(func: FuncInfo, handle_type: Optional[str],
                      matcher: PeripheralMatcher) -> MethodKind:
    has_args = bool(func.params)
    is_handle = has_args and handle_matches(func.params[0], handle_type)
    return _DECISIONS[(has_args, is_handle, matcher.matches(func.name))]


def method_name(func_name: str, matcher: PeripheralMatcher) -> Optional[str]:
    """Derive the wrapper method name from a vendor function name

    Examples (peripheral 'uart' / 'usart'):
        HAL_UART_Transmit -> transmit
        HAL_UARTEx_ReceiveToIdle -> ex_receive_to_idle
        LL_USART_EnableIT_RXNE -> enable_it_rxne
        HAL_GetTick -> get_tick
    """
    if '_' not in func_name:
        return None
    rest = func_name.split('_', 1)[1]
    parts = matcher.strip_leading(rest.split('_'))
    words = [word.lower() for word in split_identifier('_'.join(parts))]
    words = matcher.strip_leading(words)
    if not words:
        return None
    return escape_keyword('_'.join(words))


def synthesize(func: FuncInfo, handle_type: Optional[str],
               peripheral: str) -> Optional[MethodDescriptor]:
    """Build the wrapper method for func, or None when it does not apply

    handle_type is None when rendering a static namespace. Anything that
    cannot be resolved (return type, method name, forwarded argument names
    or types) makes the function not apply rather than failing the file.
    """
    matcher = PeripheralMatcher(peripheral)
    kind = classify_function(func, handle_type, matcher)
    if kind is MethodKind.DISCARD:
        return None

    return_type = func.return_type
    name = method_name(func.name, matcher)
    if return_type is None or name is None:
        return None

    if kind is MethodKind.INSTANCE:
        params = func.params[1:]
        handle_args = (HANDLE_REF,)
    else:
        params = func.params
        handle_args = ()

    if any(p.pretty is None for p in params):
        return None

    return MethodDescriptor(
        kind=kind,
        return_type=return_type,
        name=name,
        params=tuple(params),
        call_args=handle_args + tuple(p.name for p in params),
        original_name=func.name,
    )
