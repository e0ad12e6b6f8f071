"""
Code generation utilities

Provides a line writer with indentation support for C++ output.
"""


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self, indent_str: str = '    '):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = indent_str

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string, newline terminated"""
        return '\n'.join(self._lines) + '\n'


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)
