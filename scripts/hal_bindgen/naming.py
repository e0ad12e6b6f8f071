"""
Identifier helpers

Tokenizes vendor identifiers (HAL_UARTEx_ReceiveToIdle, LL_USART_EnableIT_RXNE,
UART_HandleTypeDef) and matches peripheral names against them by whole
tokens, so that TIM never matches LPTIM and DMA never matches DMA2D.
"""

import re

# One word inside an underscore-separated part:
#   acronym (digits allowed) followed by a capitalized word: UART|Ex, I2C|Ex
#   capitalized word: Transmit, Tick2
#   lower-case run: ex
#   trailing acronym: RXNE, DMA2D
_WORD_RE = re.compile(r'[A-Z0-9]+(?=[A-Z][a-z])|[A-Z][a-z0-9]+|[a-z0-9]+|[A-Z0-9]+')

# Suffix the vendor appends to a peripheral token in extension APIs (HAL_UARTEx_...)
EXTENSION_SUFFIX = 'EX'

CPP_KEYWORDS = {
    'alignas', 'alignof', 'and', 'and_eq', 'asm', 'auto', 'bitand', 'bitor',
    'bool', 'break', 'case', 'catch', 'char', 'class', 'compl', 'const',
    'constexpr', 'const_cast', 'continue', 'decltype', 'default', 'delete',
    'do', 'double', 'dynamic_cast', 'else', 'enum', 'explicit', 'export',
    'extern', 'false', 'float', 'for', 'friend', 'goto', 'if', 'inline', 'int',
    'long', 'mutable', 'namespace', 'new', 'noexcept', 'not', 'not_eq',
    'nullptr', 'operator', 'or', 'or_eq', 'private', 'protected', 'public',
    'register', 'reinterpret_cast', 'return', 'short', 'signed', 'sizeof',
    'static', 'static_assert', 'static_cast', 'struct', 'switch', 'template',
    'this', 'thread_local', 'throw', 'true', 'try', 'typedef', 'typeid',
    'typename', 'union', 'unsigned', 'using', 'virtual', 'void', 'volatile',
    'wchar_t', 'while', 'xor', 'xor_eq',
}


def split_identifier(name: str) -> list[str]:
    """Split an identifier into words

    Examples:
        EnableIT_RXNE -> ['Enable', 'IT', 'RXNE']
        UARTEx_ReceiveToIdle -> ['UART', 'Ex', 'Receive', 'To', 'Idle']
        I2CEx_ConfigAnalogFilter -> ['I2C', 'Ex', 'Config', 'Analog', 'Filter']
    """
    words = []
    for part in name.split('_'):
        words.extend(_WORD_RE.findall(part))
    return words


def to_snake_case(name: str) -> str:
    """Convert a vendor identifier to snake_case

    Examples:
        Transmit -> transmit
        EnableIT_RXNE -> enable_it_rxne
        TransmitReceive_DMA -> transmit_receive_dma
    """
    return '_'.join(word.lower() for word in split_identifier(name))


def as_pascal_case(name: str) -> str:
    """Convert an underscore-separated C name to PascalCase

    Examples:
        UART -> Uart
        __UART -> Uart
        flash_ramfunc -> FlashRamfunc
    """
    return ''.join(part.capitalize() for part in name.split('_') if part)


def escape_keyword(name: str) -> str:
    """Append an underscore to names that collide with C++ keywords"""
    if name in CPP_KEYWORDS:
        return name + '_'
    return name


class PeripheralMatcher:
    """Matches a peripheral name against identifiers by whole tokens"""

    def __init__(self, peripheral: str):
        self.peripheral = peripheral
        self.tokens = [token.upper() for token in peripheral.split('_') if token]

    def _run_at(self, parts: list[str], start: int, allow_extension: bool) -> bool:
        """Check that the peripheral tokens occur in parts starting at start"""
        count = len(self.tokens)
        if start + count > len(parts):
            return False
        for i, token in enumerate(self.tokens):
            part = parts[start + i].upper()
            if part == token:
                continue
            # Only the last token may carry the extension suffix
            if allow_extension and i == count - 1 and part == token + EXTENSION_SUFFIX:
                continue
            return False
        return True

    def matches(self, identifier: str) -> bool:
        """Check whether the identifier mentions this peripheral

        Examples (peripheral 'uart'):
            HAL_UART_Transmit -> True
            HAL_UARTEx_ReceiveToIdle -> True
            HAL_USART_Transmit -> False
        """
        if not self.tokens:
            return False
        parts = identifier.split('_')
        return any(self._run_at(parts, i, True) for i in range(len(parts)))

    def strip_leading(self, parts: list[str]) -> list[str]:
        """Remove the peripheral tokens from the start of parts, if present"""
        if self.tokens and self._run_at(parts, 0, False):
            return parts[len(self.tokens):]
        return parts


def strip_type_decorations(type_text: str) -> str:
    """Reduce a C type to its base name

    Examples:
        UART_HandleTypeDef * -> UART_HandleTypeDef
        const USART_TypeDef * -> USART_TypeDef
        volatile struct __DMA_HandleTypeDef * -> __DMA_HandleTypeDef
    """
    tokens = type_text.replace('*', ' ').replace('&', ' ').split()
    tokens = [t for t in tokens if t not in ('const', 'volatile', 'struct', 'restrict')]
    return tokens[-1] if tokens else ''

