import pytest

from hal_bindgen.handles import resolve_handle_types


def test_hal_handle_struct_becomes_pointer_type(make_struct) -> None:
    structs = [make_struct("UART_InitTypeDef"), make_struct("UART_HandleTypeDef")]

    assert resolve_handle_types("hal", "uart", structs, []) == ["UART_HandleTypeDef *"]


def test_hal_ignores_other_peripherals_and_const_names(make_struct) -> None:
    structs = [
        make_struct("USART_HandleTypeDef"),
        make_struct("DMA_HandleTypeDef"),
        make_struct("UART_const_HandleTypeDef"),
        make_struct("UART_HandleTypeDefs"),
        make_struct("UART_HandleTypeDef"),
    ]

    assert resolve_handle_types("hal", "uart", structs, []) == ["UART_HandleTypeDef *"]


def test_hal_peripheral_is_not_matched_inside_longer_token(make_struct) -> None:
    structs = [make_struct("LPTIM_HandleTypeDef"), make_struct("TIM_HandleTypeDef")]

    assert resolve_handle_types("hal", "tim", structs, []) == ["TIM_HandleTypeDef *"]


def test_hal_multiple_handles_keep_first_seen_order_without_duplicates(make_struct) -> None:
    structs = [
        make_struct("SMBUS_HandleTypeDef"),
        make_struct("SMBUS_Slave_HandleTypeDef"),
        make_struct("SMBUS_HandleTypeDef"),
    ]

    assert resolve_handle_types("hal", "smbus", structs, []) == [
        "SMBUS_HandleTypeDef *",
        "SMBUS_Slave_HandleTypeDef *",
    ]


def test_ll_handle_comes_from_first_argument_types(make_func) -> None:
    funcs = [
        make_func("LL_USART_Enable", [("USARTx", "USART_TypeDef *")], "void"),
        make_func("LL_USART_IsEnabled", [("USARTx", "const USART_TypeDef *")], "uint32_t"),
        make_func("LL_USART_StructInit", [("USART_InitStruct", "LL_USART_InitTypeDef *")], "void"),
        make_func("LL_USART_Disable", [("USARTx", "USART_TypeDef *")], "void"),
        make_func("LL_USART_Count", [], "uint32_t"),
        make_func("LL_DMA_Enable", [("DMAx", "DMA_TypeDef *")], "void"),
        make_func("LL_USART_SetBaudRate", [("USARTx", "USART_TypeDef *"), ("Baud", "uint32_t")], "void"),
    ]

    assert resolve_handle_types("ll", "usart", [], funcs) == ["USART_TypeDef *"]


def test_empty_result_is_valid(make_func, make_struct) -> None:
    assert resolve_handle_types("hal", "cortex", [make_struct("UART_HandleTypeDef")], []) == []
    assert resolve_handle_types("ll", "utils", [], [make_func("LL_mDelay", [("Delay", "uint32_t")], "void")]) == []


def test_resolution_is_idempotent(make_struct) -> None:
    structs = [make_struct("SPI_HandleTypeDef"), make_struct("SPI_HandleTypeDef")]

    first = resolve_handle_types("hal", "spi", structs, [])
    second = resolve_handle_types("hal", "spi", structs, [])

    assert first == second == ["SPI_HandleTypeDef *"]


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_handle_types("bsp", "uart", [], [])
