"""
Clang front end

Runs clang over a driver file and reduces its JSON AST dump to the IR
dictionary understood by IR.from_dict:

    {'module': 'stm32f4xx_hal_uart',
     'decls': [{'kind': 'struct', 'name': 'UART_HandleTypeDef'},
               {'kind': 'func', 'name': 'HAL_UART_Transmit',
                'type': 'HAL_StatusTypeDef (UART_HandleTypeDef *, ...)',
                'params': [{'name': 'huart', 'type': 'UART_HandleTypeDef *'}, ...]}]}
"""

import json
import logging
import os
import re
import subprocess
from typing import Optional

from .errors import ParseError, WriteError

logger = logging.getLogger(__name__)

DEFAULT_CLANG = 'clang'

# Static inline LL functions must look like ordinary definitions
FORCED_DEFINES = ['-D__STATIC_INLINE=', '-Dinline=']

_STRUCT_ALIAS_RE = re.compile(r'^struct (\w+)$')


def _filter_types(s):
    """Replace _Bool with bool."""
    return s.replace('_Bool', 'bool')


def clang_command(path: str, flags: list[str], clang: Optional[str] = None) -> list[str]:
    """Command line dumping the AST of path as JSON"""
    clang = clang or os.environ.get('CLANG', DEFAULT_CLANG)
    return [clang, '-x', 'c', '-fsyntax-only', '-Xclang', '-ast-dump=json',
            '-Xclang', '-skip-function-bodies', '-ferror-limit=0', '-w',
            *flags, *FORCED_DEFINES, path]


def _run_clang(path: str, flags: list[str], clang: Optional[str] = None) -> dict:
    """Run clang to get AST dump.

    clang may report errors for incomplete declarations and still print a
    usable AST, so the exit status is only consulted when no JSON came out.
    """
    cmd = clang_command(path, flags, clang)
    try:
        result = subprocess.run(cmd, capture_output=True,
                                encoding='utf-8', errors='replace')
    except (OSError, UnicodeError) as e:
        raise ParseError(f'Could not run {cmd[0]}: {e}') from e

    if result.returncode != 0:
        logger.debug(f'{cmd[0]} exited with {result.returncode} for {path}')
    try:
        return json.loads(result.stdout)
    except ValueError as e:
        detail = result.stderr.strip().splitlines()
        reason = detail[-1] if detail else str(e)
        raise ParseError(f'Could not parse {path}: {reason}') from e


def _parse_func(decl: dict) -> dict:
    """Parse function declaration."""
    outp = {'kind': 'func', 'name': decl['name'],
            'type': _filter_types(decl.get('type', {}).get('qualType', '')),
            'params': []}
    for param in decl.get('inner', []):
        if param.get('kind') != 'ParmVarDecl':
            continue
        outp_param = {'type': _filter_types(param.get('type', {}).get('qualType', ''))}
        if param.get('name'):
            outp_param['name'] = param['name']
        outp['params'].append(outp_param)
    return outp


def _struct_alias(decl: dict) -> Optional[str]:
    """Name of the struct a typedef aliases, '' for an anonymous struct, None otherwise"""
    qual_type = decl.get('type', {}).get('qualType', '')
    if not qual_type.startswith('struct '):
        return None
    match = _STRUCT_ALIAS_RE.match(qual_type)
    return match.group(1) if match else ''


def ir_from_ast(ast: dict, module: str) -> dict:
    """Reduce a clang JSON AST to functions and struct names

    Functions are deduplicated by name (a prototype and its definition
    count once, first declaration wins). Struct names prefer the typedef
    name over the tag it aliases: typedef struct __UART_HandleTypeDef
    {...} UART_HandleTypeDef yields only UART_HandleTypeDef.
    """
    funcs = {}
    typedef_names = []
    record_names = []
    aliased = set()

    for decl in ast.get('inner', []):
        if decl.get('isImplicit') or not decl.get('name'):
            continue
        kind = decl.get('kind')
        if kind == 'FunctionDecl':
            if decl['name'] not in funcs:
                funcs[decl['name']] = _parse_func(decl)
        elif kind == 'RecordDecl' and decl.get('tagUsed') == 'struct':
            record_names.append(decl['name'])
        elif kind == 'TypedefDecl':
            alias = _struct_alias(decl)
            if alias is None:
                continue
            typedef_names.append(decl['name'])
            if alias:
                aliased.add(alias)

    struct_names = list(dict.fromkeys(
        typedef_names + [name for name in record_names if name not in aliased]))

    outp = {'module': module, 'decls': []}
    outp['decls'].extend({'kind': 'struct', 'name': name} for name in struct_names)
    outp['decls'].extend(funcs.values())
    return outp


def gen_ir(path: str, flags: list[str], clang: Optional[str] = None,
           output_dir: Optional[str] = None) -> dict:
    """Generate IR for a driver file using the clang AST.

    Args:
        path: Path to the .c or .h file
        flags: -D / -I flags from the compilation database
        clang: clang executable, defaults to $CLANG or 'clang'
        output_dir: Optional directory for JSON output

    Returns:
        IR dictionary
    """
    if not os.path.isfile(path):
        raise ParseError(f'No such file: {path}')

    module = os.path.splitext(os.path.basename(path))[0]
    outp = ir_from_ast(_run_clang(path, flags, clang), module)
    logger.debug(f'{path}: {len(outp["decls"])} declarations')

    # Optionally save JSON
    if output_dir:
        json_path = os.path.join(output_dir, f'{module}.json')
        try:
            os.makedirs(output_dir, exist_ok=True)
            with open(json_path, 'w', encoding='utf-8') as f:
                json.dump(outp, f, indent=2)
        except OSError as e:
            raise WriteError(f'Could not write {json_path}: {e}') from e

    return outp
