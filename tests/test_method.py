import pytest

from hal_bindgen.ir import ArgInfo, FuncInfo
from hal_bindgen.method import MethodKind, classify_function, method_name, synthesize
from hal_bindgen.naming import PeripheralMatcher

UART_HANDLE = "UART_HandleTypeDef *"


@pytest.mark.parametrize(
    ("func_name", "peripheral", "expected"),
    [
        ("HAL_UART_Transmit", "uart", "transmit"),
        ("LL_USART_EnableIT_RXNE", "usart", "enable_it_rxne"),
        ("HAL_UARTEx_ReceiveToIdle", "uart", "ex_receive_to_idle"),
        ("HAL_UART_Receive_DMA", "uart", "receive_dma"),
        ("HAL_GetTick", "uart", "get_tick"),
        ("HAL_I2C_Master_Transmit", "i2c", "master_transmit"),
        ("HAL_FLASH_RAMFUNC_Enable", "flash_ramfunc", "enable"),
        ("LL_USART_Default", "usart", "default_"),
    ],
)
def test_method_name_strips_prefix_and_peripheral(func_name: str, peripheral: str, expected: str) -> None:
    assert method_name(func_name, PeripheralMatcher(peripheral)) == expected


@pytest.mark.parametrize("func_name", ["HALInit", "HAL_UART", "HAL_"])
def test_method_name_is_none_when_nothing_is_left(func_name: str) -> None:
    assert method_name(func_name, PeripheralMatcher("uart")) is None


@pytest.mark.parametrize(
    ("name", "params", "handle_type", "expected"),
    [
        ("HAL_UART_Abort", [], UART_HANDLE, MethodKind.STATIC),
        ("HAL_GetTick", [], UART_HANDLE, MethodKind.DISCARD),
        ("HAL_UART_Init", [("huart", "UART_HandleTypeDef *")], UART_HANDLE, MethodKind.INSTANCE),
        ("HAL_MultiProcessor_Init", [("huart", "UART_HandleTypeDef *")], UART_HANDLE, MethodKind.INSTANCE),
        ("HAL_UART_Probe", [("port", "uint32_t")], UART_HANDLE, MethodKind.STATIC),
        ("HAL_DMA_Start", [("hdma", "DMA_HandleTypeDef *")], UART_HANDLE, MethodKind.DISCARD),
        ("HAL_UART_Init", [("huart", "UART_HandleTypeDef *")], None, MethodKind.STATIC),
    ],
)
def test_classify_function_decision_table(make_func, name, params, handle_type, expected) -> None:
    func = make_func(name, params)

    assert classify_function(func, handle_type, PeripheralMatcher("uart")) is expected


def test_instance_method_drops_handle_and_forwards_this_handle(make_func) -> None:
    func = make_func(
        "HAL_UART_Transmit",
        [
            ("huart", "UART_HandleTypeDef *"),
            ("pData", "uint8_t *"),
            ("Size", "uint16_t"),
            ("Timeout", "uint32_t"),
        ],
    )

    method = synthesize(func, UART_HANDLE, "uart")

    assert method is not None
    assert method.kind is MethodKind.INSTANCE
    assert [p.name for p in method.params] == ["pData", "Size", "Timeout"]
    assert method.call_args == ("this->handle", "pData", "Size", "Timeout")
    assert method.render() == (
        "inline HAL_StatusTypeDef transmit(uint8_t * pData, uint16_t Size, uint32_t Timeout) "
        "{ return HAL_UART_Transmit(this->handle, pData, Size, Timeout); }"
    )


def test_const_handle_argument_still_matches(make_func) -> None:
    func = make_func("HAL_UART_GetState", [("huart", "const UART_HandleTypeDef *")], "HAL_UART_StateTypeDef")

    method = synthesize(func, UART_HANDLE, "uart")

    assert method is not None
    assert method.render() == (
        "inline HAL_UART_StateTypeDef get_state() { return HAL_UART_GetState(this->handle); }"
    )


def test_struct_tag_handle_matches_typedef_argument(make_func) -> None:
    func = make_func("HAL_UART_Init", [("huart", "UART_HandleTypeDef *")])

    method = synthesize(func, "__UART_HandleTypeDef *", "uart")

    assert method is not None
    assert method.kind is MethodKind.INSTANCE


def test_static_method_keeps_every_argument(make_func) -> None:
    func = make_func("HAL_UART_Probe", [("port", "uint32_t"), ("flags", "uint8_t")], "void")

    method = synthesize(func, UART_HANDLE, "uart")

    assert method is not None
    assert method.kind is MethodKind.STATIC
    assert [p.name for p in method.params] == ["port", "flags"]
    assert method.render() == (
        "static inline void probe(uint32_t port, uint8_t flags) { return HAL_UART_Probe(port, flags); }"
    )


def test_zero_argument_function_of_peripheral_is_static(make_func) -> None:
    method = synthesize(make_func("HAL_UART_Count", [], "uint32_t"), UART_HANDLE, "uart")

    assert method is not None
    assert method.render() == "static inline uint32_t count() { return HAL_UART_Count(); }"


def test_zero_argument_function_of_other_peripheral_is_discarded(make_func) -> None:
    assert synthesize(make_func("HAL_GetTick", [], "uint32_t"), UART_HANDLE, "uart") is None


def test_non_handle_first_argument_is_never_dropped(make_func) -> None:
    func = make_func("HAL_UART_Map", [("huart2", "USART_TypeDef *"), ("n", "int")])

    method = synthesize(func, UART_HANDLE, "uart")

    assert method is not None
    assert [p.name for p in method.params] == ["huart2", "n"]
    assert "this->handle" not in method.call_args


def test_unnamed_forwarded_argument_skips_function(make_func) -> None:
    func = make_func("HAL_UART_Transmit", [("huart", "UART_HandleTypeDef *"), (None, "uint8_t *")])

    assert synthesize(func, UART_HANDLE, "uart") is None


def test_unnamed_handle_argument_is_fine_because_it_is_not_forwarded(make_func) -> None:
    func = make_func("HAL_UART_Init", [(None, "UART_HandleTypeDef *")])

    method = synthesize(func, UART_HANDLE, "uart")

    assert method is not None
    assert method.call_args == ("this->handle",)


def test_unresolvable_return_type_skips_function() -> None:
    func = FuncInfo(name="HAL_UART_Init", type="", params=(ArgInfo("huart", UART_HANDLE),))

    assert synthesize(func, UART_HANDLE, "uart") is None


def test_ll_register_block_becomes_instance_method(make_func) -> None:
    func = make_func("LL_USART_EnableIT_RXNE", [("USARTx", "USART_TypeDef *")], "void")

    method = synthesize(func, "USART_TypeDef *", "usart")

    assert method is not None
    assert method.render() == (
        "inline void enable_it_rxne() { return LL_USART_EnableIT_RXNE(this->handle); }"
    )


@pytest.mark.parametrize(
    ("type_text", "pretty"),
    [
        ("uint8_t *", "uint8_t * pData"),
        ("void (*)(struct __DMA_HandleTypeDef *)", "void (*pData)(struct __DMA_HandleTypeDef *)"),
        ("void (*const)(void)", "void (*const pData)(void)"),
        ("void (^)(int)", "void (^pData)(int)"),
        ("uint8_t[4]", "uint8_t pData[4]"),
        ("uint32_t (*)[2]", "uint32_t (*pData)[2]"),
    ],
)
def test_pretty_places_name_inside_declarator(type_text: str, pretty: str) -> None:
    assert ArgInfo("pData", type_text).pretty == pretty


def test_function_pointer_argument_is_forwarded_as_declarator(make_func) -> None:
    func = make_func("HAL_DMA_RegisterCallback", [
        ("hdma", "DMA_HandleTypeDef *"),
        ("CallbackID", "HAL_DMA_CallbackIDTypeDef"),
        ("pCallback", "void (*)(struct __DMA_HandleTypeDef *)"),
    ])

    method = synthesize(func, "DMA_HandleTypeDef *", "dma")

    assert method is not None
    assert method.render() == (
        "inline HAL_StatusTypeDef register_callback(HAL_DMA_CallbackIDTypeDef CallbackID, "
        "void (*pCallback)(struct __DMA_HandleTypeDef *)) "
        "{ return HAL_DMA_RegisterCallback(this->handle, CallbackID, pCallback); }"
    )
