import pytest

from blockyaml.lines import LineCursor
from blockyaml.scalars import CLIP, FOLDED, KEEP, LITERAL, STRIP, read_block_scalar


def read(text, style, chomping=CLIP, indentation=0):
    cursor = LineCursor(text)
    cursor.advance()
    return read_block_scalar(cursor, style, chomping, indentation), cursor


def test_literal_keeps_line_breaks_and_pushes_back():
    value, cursor = read('x: |\n  a\n   b\n\n  c\nnext\n', LITERAL)
    assert value == 'a\n b\n\nc\n'
    assert cursor.advance() and cursor.line == 'next'


def test_folded_joins_lines():
    value, _ = read('x: >\n  a\n  b\n\n  c\n    d\n  e\n', FOLDED)
    assert value == 'a b\nc\n  d\ne\n'


@pytest.mark.parametrize('style,chomping,expected', [
    (LITERAL, CLIP, 'a\nb\n'),
    (LITERAL, STRIP, 'a\nb'),
    (LITERAL, KEEP, 'a\nb\n\n\n'),
    (FOLDED, CLIP, 'a b\n'),
    (FOLDED, STRIP, 'a b'),
    (FOLDED, KEEP, 'a b\n\n\n'),
])
def test_chomping(style, chomping, expected):
    value, _ = read('x:\n  a\n  b\n\n\n', style, chomping)
    assert value == expected


def test_leading_blank_lines_are_kept():
    value, _ = read('x: |\n\n  a\n', LITERAL)
    assert value == '\na\n'


def test_explicit_indentation_keeps_extra_spaces():
    value, _ = read('x: |2\n    a\n  b\n', LITERAL, indentation=2)
    assert value == '  a\nb\n'


def test_under_indented_first_line_gives_empty_scalar():
    value, cursor = read('x: |4\n  a\n', LITERAL, indentation=4)
    assert value == ''
    assert cursor.advance() and cursor.line == '  a'


def test_empty_at_end_of_input():
    value, _ = read('x: |\n', LITERAL)
    assert value == ''


def test_column_zero_line_ends_empty_scalar():
    value, cursor = read('x: >\ny: 1\n', FOLDED)
    assert value == ''
    assert cursor.advance() and cursor.line == 'y: 1'
