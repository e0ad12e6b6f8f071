import json
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

from hal_bindgen.ir import IR, ArgInfo, FuncInfo, StructInfo  # noqa: E402

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def make_func() -> Callable[..., FuncInfo]:
    def _make_func(
        name: str,
        params: list[tuple[str | None, str]] | None = None,
        return_type: str = "HAL_StatusTypeDef",
    ) -> FuncInfo:
        params = params or []
        arg_types = ", ".join(type_text for _, type_text in params) or "void"
        return FuncInfo(
            name=name,
            type=f"{return_type} ({arg_types})",
            params=tuple(ArgInfo(name=arg_name, type=type_text) for arg_name, type_text in params),
        )

    return _make_func


@pytest.fixture
def make_struct() -> Callable[[str], StructInfo]:
    def _make_struct(name: str) -> StructInfo:
        return StructInfo(name=name)

    return _make_struct


@pytest.fixture
def make_ir() -> Callable[..., IR]:
    def _make_ir(
        module: str,
        funcs: list[FuncInfo] | None = None,
        structs: list[StructInfo] | None = None,
    ) -> IR:
        return IR(module=module, funcs=list(funcs or []), structs=list(structs or []))

    return _make_ir


@pytest.fixture
def uart_ast() -> dict:
    return json.loads((DATA_DIR / "uart_ast.json").read_text(encoding="utf-8"))

