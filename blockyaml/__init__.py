r"""Block-structure YAML parser.

    >>> parse("- 1\n- 2\n")
    [1, 2]
"""

from blockyaml.config import ParserConfig
from blockyaml.errors import (
    EncodingError, ErrorKind, InvalidIndentation, InvalidSyntax, MergeTypeError,
    NestingDepthError, ParseError, PatternEngineError, UndefinedReference,
)
from blockyaml.lines import ensure_text
from blockyaml.parser import Parser
from blockyaml.refs import ReferenceTable

__version__ = '0.1.0'

__all__ = [
    'EncodingError', 'ErrorKind', 'InvalidIndentation', 'InvalidSyntax', 'MergeTypeError',
    'NestingDepthError', 'ParseError', 'Parser', 'ParserConfig', 'PatternEngineError',
    'ReferenceTable', 'UndefinedReference', 'load_file', 'parse',
]


def parse(text, config=None):
    """Parse a YAML document (``str`` or UTF-8 ``bytes``) into Python values.

    Raises a ``ParseError`` subclass carrying the absolute line number and
    text of the offending line.
    """
    return Parser(config=config).parse(ensure_text(text))


def load_file(path, config=None):
    with open(path, 'rb') as f:
        return parse(f.read(), config)
