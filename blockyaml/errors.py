"""Exceptions raised while parsing YAML text."""

import enum


class ErrorKind(enum.Enum):
    SYNTAX = 'syntax'
    INDENTATION = 'indentation'
    REFERENCE = 'reference'
    MERGE_TYPE = 'merge-type'
    ENCODING = 'encoding'
    PATTERN_ENGINE = 'pattern-engine'
    NESTING = 'nesting'


class ParseError(Exception):
    """Base class of every parse failure.

    Carries the error kind, the 1-based absolute line number (``None`` when
    the failure is not tied to a line) and the offending line's text.
    """

    kind = ErrorKind.SYNTAX

    def __init__(self, message, lineno=None, line=None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.line = line

    def __str__(self):
        coords = ""
        if self.lineno is not None:
            coords += " at line %s" % self.lineno
        if self.line is not None:
            coords += " (%s)" % self.line
        return "%s%s" % (self.message, coords)


class InvalidSyntax(ParseError):
    kind = ErrorKind.SYNTAX


class InvalidIndentation(ParseError):
    kind = ErrorKind.INDENTATION


class UndefinedReference(ParseError):
    kind = ErrorKind.REFERENCE

    def __init__(self, name, lineno=None, line=None):
        super().__init__('Reference "%s" does not exist' % name, lineno, line)
        self.name = name


class MergeTypeError(ParseError):
    kind = ErrorKind.MERGE_TYPE


class EncodingError(ParseError):
    kind = ErrorKind.ENCODING


class PatternEngineError(ParseError):
    kind = ErrorKind.PATTERN_ENGINE


class NestingDepthError(ParseError):
    kind = ErrorKind.NESTING


class InlineError(ValueError):
    """Raised by the inline parser; it knows nothing about lines."""


class FlowDepthError(InlineError):
    """Flow collections nested deeper than the configured limit."""
