"""Inline YAML: one line's scalar or flow collection.

``load`` turns the text after a ``key:`` or ``-`` marker into a Python value.
The quoted-string rules live here too; the line classifier in
``blockyaml.lexicon`` uses them to skip colons inside quoted keys.
"""

import datetime
import math
import re

from dateutil import tz

from blockyaml.errors import FlowDepthError, InlineError
from blockyaml.peg import (
    Input, capture, match_cp, match_none_of, match_range, match_str,
    peg_alt, peg_seq, star,
)

# ── Quoted strings ──

# [2] NB-JSON
def nb_json(inp):
    return peg_alt(inp, [lambda inp: match_cp(inp, 0x9), lambda inp: match_range(inp, 0x20, 0x10FFFF)])

# [107] NB-DOUBLE-CHAR
def nb_double_char(inp):
    return peg_alt(inp, [
        lambda inp: peg_seq(inp, [lambda inp: match_cp(inp, 92), lambda inp: nb_json(inp)]),
        lambda inp: match_none_of(inp, '\\"\n')])

# [109] C-DOUBLE-QUOTED
def c_double_quoted(inp):
    return capture(inp, 'DOUBLE', lambda inp: peg_seq(inp, [
        lambda inp: match_cp(inp, 34),
        lambda inp: star(inp, nb_double_char),
        lambda inp: match_cp(inp, 34)]))

# [118] NB-SINGLE-CHAR
def nb_single_char(inp):
    return peg_alt(inp, [lambda inp: match_str(inp, "''"), lambda inp: match_none_of(inp, "'\n")])

# [120] C-SINGLE-QUOTED
def c_single_quoted(inp):
    return capture(inp, 'SINGLE', lambda inp: peg_seq(inp, [
        lambda inp: match_cp(inp, 39),
        lambda inp: star(inp, nb_single_char),
        lambda inp: match_cp(inp, 39)]))

def c_quoted(inp):
    return peg_alt(inp, [c_double_quoted, c_single_quoted])


_ESCAPES = {
    '0': '\x00', 'a': '\x07', 'b': '\x08', 't': '\t', '\t': '\t',
    'n': '\n', 'v': '\x0b', 'f': '\x0c', 'r': '\r', 'e': '\x1b',
    ' ': ' ', '"': '"', '/': '/', '\\': '\\', 'N': '\x85',
    '_': '\xa0', 'L': '\u2028', 'P': '\u2029',
}
_HEX_ESCAPES = {'x': 2, 'u': 4, 'U': 8}


def unescape_double(body):
    """Decode the escape sequences of a double-quoted scalar body."""
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != '\\':
            out.append(ch)
            i += 1
            continue
        code = body[i + 1:i + 2]
        if code in _ESCAPES:
            out.append(_ESCAPES[code])
            i += 2
        elif code in _HEX_ESCAPES:
            width = _HEX_ESCAPES[code]
            digits = body[i + 2:i + 2 + width]
            if len(digits) != width or not all(c in '0123456789abcdefABCDEF' for c in digits):
                raise InlineError('Malformed escape sequence "\\%s%s"' % (code, digits))
            out.append(chr(int(digits, 16)))
            i += 2 + width
        else:
            raise InlineError('Found unknown escape character "\\%s"' % code)
    return ''.join(out)


def parse_quoted(text, i=0):
    """Parse the quoted scalar starting at ``text[i]``; return ``(value, end)``."""
    r = c_quoted(Input(text, i))
    if r.failed:
        raise InlineError('Malformed inline YAML string (%s).' % text[i:])
    body = r.val[1:-1]
    if r.ast.type == 'DOUBLE':
        return unescape_double(body), r.rest.pos
    return body.replace("''", "'"), r.rest.pos

# ── Scalars ──

def parse_scalar(text, delimiters=None, i=0, evaluate=True):
    """Parse one scalar starting at ``text[i]``; return ``(value, end)``.

    Quoted scalars are never evaluated. A plain scalar runs to the first of
    ``delimiters`` (at least one character is consumed), or to the end of the
    text minus any trailing comment when ``delimiters`` is empty.
    """
    if text[i:i + 1] in ('"', "'"):
        return parse_quoted(text, i)

    if not delimiters:
        output = text[i:]
        i += len(output)
        pos = output.find(' #')
        if pos != -1:
            output = output[:pos].rstrip()
    else:
        end = i + 1
        while end < len(text) and text[end] not in delimiters:
            end += 1
        if end >= len(text):
            raise InlineError('Malformed inline YAML string (%s).' % text)
        output = text[i:end]
        i = end

    if evaluate:
        output = evaluate_scalar(output)
    return output, i

# ── Flow collections ──

MAX_FLOW_DEPTH = 64


def _enter(depth, max_depth):
    if depth > max_depth:
        raise FlowDepthError('Flow collections nested deeper than %d levels' % max_depth)


def parse_sequence(text, i=0, depth=1, max_depth=MAX_FLOW_DEPTH):
    """Parse the flow sequence whose ``[`` is at ``text[i]``; return ``(list, end)``."""
    _enter(depth, max_depth)
    output = []
    i += 1
    while i < len(text):
        ch = text[i]
        if ch == '[':
            value, i = parse_sequence(text, i, depth + 1, max_depth)
            output.append(value)
        elif ch == '{':
            value, i = parse_mapping(text, i, depth + 1, max_depth)
            output.append(value)
        elif ch == ']':
            return output, i + 1
        elif ch in ', ':
            i += 1
        else:
            quoted = ch in ('"', "'")
            value, i = parse_scalar(text, (',', ']'), i)
            if not quoted and isinstance(value, str) and ': ' in value:
                # an implicit single-pair mapping
                try:
                    value, _ = parse_mapping('{%s}' % value)
                except InlineError:
                    pass
            output.append(value)
    raise InlineError('Malformed inline YAML string %s' % text)


def parse_mapping(text, i=0, depth=1, max_depth=MAX_FLOW_DEPTH):
    """Parse the flow mapping whose ``{`` is at ``text[i]``; return ``(dict, end)``."""
    _enter(depth, max_depth)
    output = {}
    i += 1
    while i < len(text):
        ch = text[i]
        if ch in ', ':
            i += 1
            continue
        if ch == '}':
            return output, i + 1

        key, i = parse_scalar(text, (':', ' '), i, evaluate=False)
        while i < len(text):
            ch = text[i]
            if ch in ': ':
                i += 1
                continue
            if ch == '[':
                value, i = parse_sequence(text, i, depth + 1, max_depth)
            elif ch == '{':
                value, i = parse_mapping(text, i, depth + 1, max_depth)
            elif ch in ',}':
                value = None
            else:
                value, i = parse_scalar(text, (',', '}'), i)
            output.pop(key, None)
            output[key] = value
            break
    raise InlineError('Malformed inline YAML string %s' % text)


def load(text, max_depth=MAX_FLOW_DEPTH):
    """Convert one line of inline YAML into a Python value.

    Flow collections nested more than ``max_depth`` levels raise
    ``FlowDepthError``.
    """
    text = text.strip()
    if not text:
        return ''

    if text[0] == '[':
        result, i = parse_sequence(text, max_depth=max_depth)
    elif text[0] == '{':
        result, i = parse_mapping(text, max_depth=max_depth)
    else:
        result, i = parse_scalar(text)
    rest = text[i:].strip()
    if rest and not rest.startswith('#'):
        raise InlineError('Unexpected characters near "%s"' % rest)
    return result

# ── Schema Coercion ──

_RE_INT = re.compile(r'^[-+]?[0-9]+$')
_RE_OCTAL = re.compile(r'^0o?[0-7]+$')
_RE_HEX = re.compile(r'^0x[0-9a-fA-F]+$')
_RE_FLOAT = re.compile(r'^[-+]?(\.[0-9]+|[0-9]+(\.[0-9]*)?)([eE][-+]?[0-9]+)?$')
_RE_GROUPED = re.compile(r'^[-+]?[0-9][0-9,]*(\.[0-9]+)?$')
_RE_DATE = re.compile(r'^([0-9]{4})-([0-9]{2})-([0-9]{2})$')
_RE_TIMESTAMP = re.compile(
    r'^(?P<year>[0-9]{4})-(?P<month>[0-9]{1,2})-(?P<day>[0-9]{1,2})'
    r'(?:[Tt]|[ \t]+)(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})'
    r'(?:\.(?P<fraction>[0-9]*))?'
    r'(?:[ \t]*(?P<tz>Z|[-+][0-9]{1,2}(?::?[0-9]{2})?))?$'
)


def _tzinfo(text):
    if text is None:
        return None
    if text == 'Z':
        return tz.UTC
    sign = -1 if text[0] == '-' else 1
    hours, _, minutes = text[1:].partition(':')
    if not minutes and len(hours) > 2:
        hours, minutes = hours[:-2], hours[-2:]
    offset = sign * (int(hours) * 3600 + int(minutes or 0) * 60)
    return tz.UTC if offset == 0 else tz.tzoffset(None, offset)


def _timestamp(m):
    fraction = (m.group('fraction') or '')[:6].ljust(6, '0')
    return datetime.datetime(
        int(m.group('year')), int(m.group('month')), int(m.group('day')),
        int(m.group('hour')), int(m.group('minute')), int(m.group('second')),
        int(fraction), tzinfo=_tzinfo(m.group('tz')))


def evaluate_scalar(s):
    """Resolve a plain scalar's implicit type."""
    s = s.strip()
    if s in ('null', 'Null', 'NULL', '~', ''):
        return None
    if s.startswith('!str '):
        return s[5:]
    if s in ('true', 'True', 'TRUE'):
        return True
    if s in ('false', 'False', 'FALSE'):
        return False
    if s in ('.inf', '.Inf', '.INF', '+.inf', '+.Inf', '+.INF'):
        return float('inf')
    if s in ('-.inf', '-.Inf', '-.INF'):
        return float('-inf')
    if s in ('.nan', '.NaN', '.NAN'):
        return math.nan
    if _RE_OCTAL.match(s) and len(s) > 1:
        return int(s.replace('o', ''), 8)
    if _RE_INT.match(s):
        return int(s, 10)
    if _RE_HEX.match(s):
        return int(s, 16)
    if _RE_FLOAT.match(s):
        return float(s)
    if _RE_GROUPED.match(s):
        return float(s.replace(',', ''))
    m = _RE_DATE.match(s)
    if m:
        try:
            return datetime.date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return s
    m = _RE_TIMESTAMP.match(s)
    if m:
        try:
            return _timestamp(m)
        except ValueError:
            return s
    return s
