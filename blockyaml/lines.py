"""Line handling: text cleanup, the line cursor and embedded blocks."""

import re

from blockyaml.errors import EncodingError, InvalidIndentation

_RE_VERSION = re.compile(r'\A%YAML[: ][\d.]+.*\n')
_RE_LEADING_COMMENTS = re.compile(r'\A(#.*\n)+')
_RE_DOCUMENT_START = re.compile(r'\A---.*\n')
_RE_DOCUMENT_END = re.compile(r'(\A|\n)\.\.\.\s*\Z')


def ensure_text(value):
    """Return ``value`` as a ``str`` that is valid Unicode.

    Bytes are decoded as UTF-8 (a leading BOM is dropped). Strings holding
    lone surrogates cannot be encoded and are rejected the same way.
    """
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode('utf-8')
        except UnicodeDecodeError as exc:
            lineno = value.count(b'\n', 0, exc.start) + 1
            raise EncodingError('The YAML value does not appear to be valid UTF-8', lineno) from exc
    else:
        try:
            value.encode('utf-8')
        except UnicodeEncodeError as exc:
            lineno = value.count('\n', 0, exc.start) + 1
            raise EncodingError('The YAML value does not appear to be valid UTF-8', lineno) from exc
    if value.startswith('\ufeff'):
        value = value[1:]
    return value


def cleanup(value):
    """Normalize line ends and strip document headers.

    Returns the cleaned text and the number of lines removed from its top.
    """
    value = value.replace('\r\n', '\n').replace('\r', '\n')
    if not value.endswith('\n'):
        value += '\n'

    offset = 0
    value, count = _RE_VERSION.subn('', value, count=1)
    offset += count

    trimmed = _RE_LEADING_COMMENTS.sub('', value, count=1)
    offset += value.count('\n') - trimmed.count('\n')
    value = trimmed

    trimmed, count = _RE_DOCUMENT_START.subn('', value, count=1)
    if count:
        offset += 1
        value = _RE_DOCUMENT_END.sub(r'\1', trimmed)
        if not value.endswith('\n'):
            value += '\n'
    return value, offset


def is_blank(line):
    return line.strip(' ') == ''


def is_comment(line):
    return line.lstrip(' ').startswith('#')


class LineCursor:
    """Walks the lines of one document, one step at a time.

    The cursor starts before the first line. ``retreat`` undoes exactly one
    ``advance``; callers never need to back up further than that.
    """

    def __init__(self, text, offset=0):
        lines = text.split('\n')
        # cleanup() guarantees a trailing newline; the empty tail is not a line
        if lines and lines[-1] == '':
            lines.pop()
        self.lines = lines
        self.offset = offset
        self.index = -1

    @property
    def line(self):
        return self.lines[self.index] if 0 <= self.index < len(self.lines) else ''

    @property
    def lineno(self):
        """Absolute 1-based number of the current line."""
        return self.index + self.offset + 1

    @property
    def indentation(self):
        line = self.line
        return len(line) - len(line.lstrip(' '))

    def advance(self):
        if self.index >= len(self.lines) - 1:
            return False
        self.index += 1
        return True

    def retreat(self):
        self.index -= 1

    def is_blank(self):
        return is_blank(self.line)

    def is_comment(self):
        return is_comment(self.line)

    def is_empty(self):
        return self.is_blank() or self.is_comment()

    def is_only_content_line(self):
        """True when every other line of the document is blank or a comment."""
        return all(
            i == self.index or is_blank(line) or is_comment(line)
            for i, line in enumerate(self.lines)
        )

    def next_line_is_nested(self):
        """Report whether the next content line is deeper than the current one.

        Blank and comment lines are skipped. The cursor is left just before
        that content line so it is read next.
        """
        current = self.indentation
        while True:
            if not self.advance():
                return False
            if not self.is_empty():
                break
        nested = self.indentation > current
        self.retreat()
        return nested

    def next_embed_block(self, indentation=None):
        """Collect the block nested under the current line.

        ``indentation`` fixes the block's baseline; otherwise the first
        content line sets it. Lines at the baseline or deeper are kept with
        the baseline removed, blank lines and shallow comments become empty
        lines, and a line at column 0 ends the block and is pushed back.
        """
        baseline = indentation
        data = []
        while self.advance():
            line = self.line
            if self.is_blank():
                data.append(line[baseline:] if baseline is not None else '')
                continue

            indent = self.indentation
            if baseline is None:
                if self.is_comment():
                    data.append('')
                    continue
                if indent == 0:
                    raise InvalidIndentation('Indentation problem', self.lineno, line)
                baseline = indent

            if indent >= baseline:
                data.append(line[baseline:])
            elif self.is_comment():
                data.append('')
            elif indent == 0:
                self.retreat()
                break
            else:
                raise InvalidIndentation('Indentation problem', self.lineno, line)
        return '\n'.join(data)
