import pytest

from blockyaml.lexicon import (
    is_empty_value, match_anchor, match_block_header, match_mapping_entry, match_sequence_item,
)


def test_sequence_item_with_value():
    node = match_sequence_item('- foo')
    assert node.text_of('LEAD') == ' '
    assert node.text_of('VALUE') == 'foo'


def test_bare_dash_has_no_value():
    node = match_sequence_item('-')
    assert node is not None
    assert node.text_of('VALUE') is None


@pytest.mark.parametrize('line', ['-foo', '--', 'foo', ' - foo'])
def test_not_a_sequence_item(line):
    assert match_sequence_item(line) is None


@pytest.mark.parametrize('line,key,value', [
    ('key: value', 'key', 'value'),
    ('key:', 'key', None),
    ('key :  spaced', 'key', 'spaced'),
    ('two words: x', 'two words', 'x'),
    ('http://example.com: site', 'http://example.com', 'site'),
    ('"a: b": c', '"a: b"', 'c'),
    ("'q': r", "'q'", 'r'),
])
def test_mapping_entry(line, key, value):
    node = match_mapping_entry(line)
    assert node.text_of('KEY') == key
    assert node.text_of('VALUE') == value


@pytest.mark.parametrize('line', ['a:b', ' a: 1', '[a]: b', '{a: 1}', 'plain'])
def test_not_a_mapping_entry(line):
    assert match_mapping_entry(line) is None


def test_anchor_prefix():
    node = match_anchor('&base {a: 1}')
    assert node.text_of('ANCHOR') == 'base'
    assert node.text_of('VALUE') == '{a: 1}'
    assert match_anchor('&alone').text_of('VALUE') == ''
    assert match_anchor('plain') is None


@pytest.mark.parametrize('value,style,modifiers', [
    ('|', '|', None),
    ('>', '>', None),
    ('|-', '|', '-'),
    ('>+', '>', '+'),
    ('|2', '|', '2'),
    ('>2-', '>', '2-'),
    ('|+4', '|', '+4'),
    ('| # note', '|', None),
])
def test_block_header(value, style, modifiers):
    node = match_block_header(value)
    assert node.text_of('STYLE') == style
    assert node.text_of('MODIFIERS') == modifiers


@pytest.mark.parametrize('value', ['|x', '>>', '| a', 'text'])
def test_not_a_block_header(value):
    assert match_block_header(value) is None


def test_is_empty_value():
    assert is_empty_value(None)
    assert is_empty_value('')
    assert is_empty_value('   ')
    assert is_empty_value('# comment')
    assert not is_empty_value('0')
