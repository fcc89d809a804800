"""The block structure parser.

``Parser.parse`` walks a document line by line. Each line is tried as a
sequence item, then as a mapping entry, then as a whole one-line document.
Nested blocks are cut out of the text and handed to a child ``Parser`` that
shares the same ``ReferenceTable`` and knows where its text starts, so line
numbers in errors are always absolute.
"""

import logging

from blockyaml import inline
from blockyaml.config import ParserConfig
from blockyaml.errors import (
    FlowDepthError, InlineError, InvalidIndentation, InvalidSyntax, NestingDepthError,
    PatternEngineError,
)
from blockyaml.lexicon import (
    is_empty_value, match_anchor, match_block_header, match_mapping_entry, match_sequence_item,
)
from blockyaml.lines import LineCursor, cleanup
from blockyaml.peg import BAD_TEXT_UNIT, Meter
from blockyaml.refs import MERGE_KEY, ReferenceTable, alias_name, fold_merge_source
from blockyaml.scalars import read_block_scalar

logger = logging.getLogger(__name__)

_DIGITS = '0123456789'


class Parser:
    """Parses one block of YAML text.

    ``offset`` is the absolute line number of the line just before the
    block, ``refs`` the anchor table of the whole document and ``depth`` how
    many blocks enclose this one.
    """

    def __init__(self, offset=0, refs=None, depth=0, config=None):
        self.offset = offset
        self.refs = refs if refs is not None else ReferenceTable()
        self.depth = depth
        self.config = config if config is not None else ParserConfig()
        self.cursor = None

    def parse(self, text):
        """Return the value of ``text``: ``None``, a scalar, a list or a dict."""
        text, delta = cleanup(text)
        cursor = self.cursor = LineCursor(text, self.offset + delta)
        logger.debug("parsing %d lines from line %d (depth %d)",
                     len(cursor.lines), cursor.offset + 1, self.depth)

        data = None
        while cursor.advance():
            if cursor.is_empty():
                continue

            line = cursor.line
            if line.startswith('\t'):
                raise InvalidIndentation(
                    'A YAML file cannot contain tabs as indentation', cursor.lineno, line)

            meter = Meter(self.config.step_limit)

            item = match_sequence_item(line, meter)
            if item is not None:
                data = self._container(data, list)
                self._parse_item(data, item, meter)
                continue

            entry = match_mapping_entry(line, meter)
            if entry is not None:
                data = self._container(data, dict)
                data = self._parse_entry(data, entry, meter)
                continue

            if meter.diagnostic is None and cursor.is_only_content_line():
                return self._parse_document_line(line)

            raise self._unparsable(meter)

        return data

    # ── Line shapes ──

    def _parse_item(self, data, item, meter):
        cursor = self.cursor
        anchor, value_text = self._split_anchor(_value_text(item), meter)

        if is_empty_value(value_text):
            child = self._child(cursor.lineno)
            value = child.parse(cursor.next_embed_block())
        elif item.text_of('LEAD') == ' ' and match_mapping_entry(value_text, meter) is not None:
            value = self._parse_compact(value_text)
        else:
            value = self._parse_value(value_text, meter)

        data.append(value)
        if anchor is not None:
            self.refs.bind(anchor, value)

    def _parse_entry(self, data, entry, meter):
        cursor = self.cursor
        try:
            key, _ = inline.parse_scalar(entry.text_of('KEY'))
        except InlineError as exc:
            raise InvalidSyntax(str(exc), cursor.lineno, cursor.line) from exc
        value_text = _value_text(entry)

        if key == MERGE_KEY:
            # the merged mapping stands in for everything read so far
            return self._merge(value_text)

        anchor, value_text = self._split_anchor(value_text, meter)
        if is_empty_value(value_text):
            if cursor.next_line_is_nested():
                child = self._child(cursor.lineno)
                value = child.parse(cursor.next_embed_block())
            else:
                value = None
        else:
            value = self._parse_value(value_text, meter)

        data.pop(key, None)
        data[key] = value
        if anchor is not None:
            self.refs.bind(anchor, value)
        return data

    def _parse_compact(self, value_text):
        """``- key: value`` with any more-indented lines that follow it."""
        cursor = self.cursor
        child = self._child(cursor.lineno - 1)
        start = cursor.index
        indent = cursor.indentation

        block = value_text
        if cursor.next_line_is_nested():
            # keep skipped blank lines so the child counts lines correctly
            block += '\n' * (cursor.index - start + 1)
            block += cursor.next_embed_block(indent + 2)
        return child.parse(block)

    def _parse_document_line(self, line):
        cursor = self.cursor
        value = self._load(line)
        if isinstance(value, list) and value and str(value[0]).startswith('*'):
            return [self.refs.resolve(alias_name(str(alias)), cursor.lineno, line) for alias in value]
        return value

    # ── Values ──

    def _parse_value(self, value_text, meter):
        cursor = self.cursor
        if value_text.startswith('*'):
            return self.refs.resolve(alias_name(value_text), cursor.lineno, cursor.line)

        header = match_block_header(value_text, meter)
        if header is not None:
            modifiers = header.text_of('MODIFIERS', '')
            digits = ''.join(c for c in modifiers if c in _DIGITS)
            return read_block_scalar(
                cursor, header.text_of('STYLE'), modifiers.strip(_DIGITS), int(digits or 0))

        return self._load(value_text)

    def _load(self, value_text):
        cursor = self.cursor
        try:
            return inline.load(value_text, self.config.max_depth)
        except FlowDepthError as exc:
            raise NestingDepthError(str(exc), cursor.lineno, cursor.line) from exc
        except InlineError as exc:
            raise InvalidSyntax(str(exc), cursor.lineno, cursor.line) from exc

    def _split_anchor(self, value_text, meter):
        if value_text is None:
            return None, None
        anchored = match_anchor(value_text, meter)
        if anchored is None:
            return None, value_text
        return anchored.text_of('ANCHOR'), anchored.text_of('VALUE', '')

    def _merge(self, value_text):
        cursor = self.cursor
        lineno, line = cursor.lineno, cursor.line

        if value_text is not None and value_text.startswith('*'):
            source = self.refs.resolve(alias_name(value_text), lineno, line)
        elif is_empty_value(value_text):
            child = self._child(cursor.lineno)
            source = child.parse(cursor.next_embed_block())
        else:
            child = self._child(cursor.lineno - 1)
            source = child.parse(value_text)

        merged = fold_merge_source(source, lineno, line)
        logger.debug("merged %d keys at line %d", len(merged), lineno)
        return merged

    # ── Helpers ──

    def _container(self, data, kind):
        if data is None:
            return kind()
        if not isinstance(data, kind):
            raise InvalidSyntax(
                'Sequence items and mapping entries cannot share a block',
                self.cursor.lineno, self.cursor.line)
        return data

    def _child(self, offset):
        depth = self.depth + 1
        if depth > self.config.max_depth:
            raise NestingDepthError(
                'Nesting deeper than %d blocks' % self.config.max_depth,
                self.cursor.lineno, self.cursor.line)
        return Parser(offset, self.refs, depth, self.config)

    def _unparsable(self, meter):
        cursor = self.cursor
        if meter.exhausted:
            return PatternEngineError(
                'Line classification gave up after %d steps' % meter.limit,
                cursor.lineno, cursor.line)
        if meter.diagnostic == BAD_TEXT_UNIT:
            return InvalidSyntax('Malformed text unit boundaries', cursor.lineno, cursor.line)
        return InvalidSyntax('Unable to parse', cursor.lineno, cursor.line)


def _value_text(node):
    value = node.text_of('VALUE')
    return value.rstrip() if value is not None else None
