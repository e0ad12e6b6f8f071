"""
Compilation database

Reads compile_commands.json and hands out the preprocessor flags (-D, -I)
each source file was built with.
"""

import json
import os
import shlex
from typing import Optional

COMPILE_COMMANDS = 'compile_commands.json'
KEPT_FLAGS = ('-D', '-I')


def _command_arguments(entry: dict) -> list[str]:
    if 'arguments' in entry:
        return list(entry['arguments'])
    return shlex.split(entry.get('command', ''))


def filter_flags(arguments: list[str], directory: str) -> list[str]:
    """Keep -D and -I flags, joining separated values and absolutizing includes

    Examples:
        ['gcc', '-DUSE_HAL_DRIVER', '-I', 'Inc', '-O2'] -> ['-DUSE_HAL_DRIVER', '-I<directory>/Inc']
    """
    flags = []
    args = iter(arguments)
    for arg in args:
        if not arg.startswith(KEPT_FLAGS):
            continue
        flag, value = arg[:2], arg[2:]
        if not value:
            value = next(args, '')
            if not value:
                continue
        if flag == '-I' and not os.path.isabs(value):
            value = os.path.normpath(os.path.join(directory, value))
        flags.append(flag + value)
    return flags


class CompilationDatabase:
    """Lookup table from source file to preprocessor flags"""

    def __init__(self, entries: list[dict]):
        self._flags: dict[str, list[str]] = {}
        for entry in entries:
            directory = entry.get('directory', '.')
            path = self._entry_path(entry, directory)
            if path is None or path in self._flags:
                continue
            self._flags[path] = filter_flags(_command_arguments(entry), directory)

    @staticmethod
    def _entry_path(entry: dict, directory: str) -> Optional[str]:
        if 'file' not in entry:
            return None
        return os.path.normpath(os.path.abspath(os.path.join(directory, entry['file'])))

    @classmethod
    def from_directory(cls, path: str) -> 'CompilationDatabase':
        """Load compile_commands.json from a build directory (or the file itself)

        Raises OSError when the file cannot be read and ValueError when it
        is not a list of command objects.
        """
        if os.path.isdir(path):
            path = os.path.join(path, COMPILE_COMMANDS)
        with open(path, 'r', encoding='utf-8') as f:
            entries = json.load(f)
        if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
            raise ValueError(f'{path} is not a compilation database')
        return cls(entries)

    def __len__(self) -> int:
        return len(self._flags)

    def flags_for(self, file: str) -> list[str]:
        """Flags of the first command compiling file, or [] when unknown"""
        key = os.path.normpath(os.path.abspath(file))
        return list(self._flags.get(key, []))
