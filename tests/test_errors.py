from blockyaml.errors import (
    EncodingError, ErrorKind, InvalidIndentation, InvalidSyntax, MergeTypeError,
    NestingDepthError, ParseError, PatternEngineError, UndefinedReference,
)


def test_message_carries_position():
    err = InvalidSyntax('Unable to parse', 4, 'a b c')
    assert str(err) == 'Unable to parse at line 4 (a b c)'
    assert err.lineno == 4 and err.line == 'a b c'


def test_message_without_position():
    assert str(EncodingError('bad bytes')) == 'bad bytes'


def test_kinds():
    assert InvalidSyntax('x').kind is ErrorKind.SYNTAX
    assert InvalidIndentation('x').kind is ErrorKind.INDENTATION
    assert UndefinedReference('x').kind is ErrorKind.REFERENCE
    assert MergeTypeError('x').kind is ErrorKind.MERGE_TYPE
    assert EncodingError('x').kind is ErrorKind.ENCODING
    assert PatternEngineError('x').kind is ErrorKind.PATTERN_ENGINE
    assert NestingDepthError('x').kind is ErrorKind.NESTING


def test_all_errors_are_parse_errors():
    for cls in (InvalidSyntax, InvalidIndentation, MergeTypeError, EncodingError,
                PatternEngineError, NestingDepthError):
        assert issubclass(cls, ParseError)
    assert isinstance(UndefinedReference('x'), ParseError)
