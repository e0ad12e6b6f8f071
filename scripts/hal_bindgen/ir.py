"""
IR (Intermediate Representation) module

Holds the declarations the generator needs from one translation unit:
functions with their parameters, and struct names.
"""

from dataclasses import dataclass, field
from typing import Optional
import json


@dataclass(frozen=True)
class ArgInfo:
    """Function parameter information"""
    name: Optional[str]
    type: str

    @property
    def pretty(self) -> Optional[str]:
        """Declaration text as written in a parameter list, e.g. 'uint8_t * pData'"""
        if not self.name or not self.type:
            return None
        return declarator(self.type, self.name)


def declarator(type_text: str, name: str) -> str:
    """Place name inside a C type to form a declarator

    Examples:
        uint8_t *, pData -> uint8_t * pData
        void (*)(DMA_HandleTypeDef *), pCallback -> void (*pCallback)(DMA_HandleTypeDef *)
        uint8_t[4], buf -> uint8_t buf[4]
    """
    paren = min((i for i in (type_text.find('(*'), type_text.find('(^')) if i >= 0),
                default=-1)
    bracket = type_text.find('[')
    if paren >= 0 and (bracket < 0 or paren < bracket):
        close = type_text.index(')', paren)
        sep = '' if type_text[paren + 1:close].endswith(('*', '^')) else ' '
        return f'{type_text[:close]}{sep}{name}{type_text[close:]}'
    if bracket >= 0:
        return f'{type_text[:bracket].rstrip()} {name}{type_text[bracket:]}'
    return f'{type_text} {name}'


@dataclass(frozen=True)
class FuncInfo:
    """Function declaration information"""
    name: str
    type: str  # Full function type signature
    params: tuple[ArgInfo, ...] = ()

    @property
    def return_type(self) -> Optional[str]:
        """Extract return type from full type signature"""
        if '(' not in self.type:
            return None
        result = self.type[:self.type.index('(')].strip()
        return result or None


@dataclass(frozen=True)
class StructInfo:
    """Struct type information"""
    name: str


@dataclass
class IR:
    """Intermediate representation of one C translation unit"""
    module: str
    funcs: list[FuncInfo] = field(default_factory=list)
    structs: list[StructInfo] = field(default_factory=list)

    @classmethod
    def load(cls, json_path: str) -> 'IR':
        """Load IR from a JSON file"""
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'IR':
        """Create IR from a dictionary (e.g., from clang_ast.gen_ir())"""
        funcs = []
        structs = []

        for decl in data.get('decls', []):
            kind = decl.get('kind')
            if kind == 'func':
                funcs.append(cls._parse_func(decl))
            elif kind == 'struct':
                structs.append(StructInfo(name=decl['name']))

        return cls(
            module=data.get('module', ''),
            funcs=funcs,
            structs=structs,
        )

    @staticmethod
    def _parse_func(decl: dict) -> FuncInfo:
        """Parse function declaration"""
        params = tuple(
            ArgInfo(name=p.get('name') or None, type=p.get('type', ''))
            for p in decl.get('params', [])
        )
        return FuncInfo(
            name=decl['name'],
            type=decl.get('type', ''),
            params=params,
        )

