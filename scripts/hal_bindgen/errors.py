"""
Error types

Every per-file failure carries a code so the batch driver can report it
uniformly and decide whether it is worth showing to the user.
"""

BAD_EXTENSION = 'BAD_EXTENSION'
MALFORMED_NAME = 'MALFORMED_NAME'
EXTENSION_MODULE = 'EXTENSION_MODULE'
UNKNOWN_KIND = 'UNKNOWN_KIND'
PARSE_FAILURE = 'PARSE_FAILURE'
NO_HANDLE_TYPE = 'NO_HANDLE_TYPE'
WRITE_FAILURE = 'WRITE_FAILURE'

VALID_ERROR_CODES = {
    BAD_EXTENSION,
    MALFORMED_NAME,
    EXTENSION_MODULE,
    UNKNOWN_KIND,
    PARSE_FAILURE,
    NO_HANDLE_TYPE,
    WRITE_FAILURE,
}


class GenerateError(Exception):
    """Failure while turning one input file into a wrapper header"""

    def __init__(self, code: str, message: str):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f'Unknown error code: {code}')
        super().__init__(message)
        self.code = code
        self.message = message


class ClassifyError(GenerateError):
    """The file name does not follow <version>_<kind>_<peripheral>.{c,h}"""


class ParseError(GenerateError):
    """The clang front end could not produce an AST"""

    def __init__(self, message: str):
        super().__init__(PARSE_FAILURE, message)


class WriteError(GenerateError):
    """The generated header could not be written"""

    def __init__(self, message: str):
        super().__init__(WRITE_FAILURE, message)
