import datetime
import math

import pytest
from dateutil import tz

from blockyaml.errors import FlowDepthError, InlineError
from blockyaml.inline import load, parse_quoted, parse_scalar, unescape_double


@pytest.mark.parametrize('text,expected', [
    ('', ''),
    ('foo', 'foo'),
    ('foo bar # trailing', 'foo bar'),
    ('42', 42),
    ('-7', -7),
    ('017', 15),
    ('0o17', 15),
    ('0x1A', 26),
    ('1.5', 1.5),
    ('1e3', 1000.0),
    ('1,000', 1000.0),
    ('true', True),
    ('FALSE', False),
    ('~', None),
    ('null', None),
    ('!str 123', '123'),
    ("'it''s'", "it's"),
    ('"a\\tb"', 'a\tb'),
    ('"\\x41\\u00e9"', 'Aé'),
    ('"# not a comment"', '# not a comment'),
])
def test_scalars(text, expected):
    assert load(text) == expected


def test_special_floats():
    assert load('.inf') == float('inf')
    assert load('-.Inf') == float('-inf')
    assert math.isnan(load('.NaN'))


def test_dates_and_timestamps():
    assert load('2001-12-14') == datetime.date(2001, 12, 14)

    stamp = load('2001-12-14t21:59:43.10-05:00')
    assert stamp.microsecond == 100000
    assert stamp.utcoffset() == datetime.timedelta(hours=-5)

    utc = load('2001-12-15 2:59:43Z')
    assert utc.tzinfo == tz.UTC
    assert utc.hour == 2

    assert load('2001-13-45') == '2001-13-45'


def test_flow_collections():
    assert load('[1, [2, 3], {a: b}]') == [1, [2, 3], {'a': 'b'}]
    assert load('{a: 1, b: [x, y]}') == {'a': 1, 'b': ['x', 'y']}
    assert load('{a: }') == {'a': None}
    assert load('[]') == []
    assert load('{}') == {}
    assert load('["a, b", c]') == ['a, b', 'c']


def test_flow_sequence_single_pair_mapping():
    assert load('[a: 1, b]') == [{'a': 1}, 'b']


def test_flow_mapping_keys_are_not_evaluated():
    assert load('{1: one}') == {'1': 'one'}


def test_flow_mapping_duplicate_key_moves_to_end():
    value = load('{a: 1, b: 2, a: 3}')
    assert value == {'a': 3, 'b': 2}
    assert list(value) == ['b', 'a']


@pytest.mark.parametrize('text', ['[1, 2', '{a: 1', '[1] junk', '"\\q"', "'open"])
def test_malformed(text):
    with pytest.raises(InlineError):
        load(text)


def test_parse_scalar_stops_at_delimiter():
    assert parse_scalar('abc, def', (',',)) == ('abc', 3)
    with pytest.raises(InlineError):
        parse_scalar('abc', (',',))


def test_parse_quoted_returns_end():
    assert parse_quoted('"ab" rest') == ('ab', 4)
    assert parse_quoted("x 'y'", 2) == ('y', 5)


def test_unescape_double():
    assert unescape_double('a\\nb\\\\') == 'a\nb\\'
    with pytest.raises(InlineError):
        unescape_double('\\x4')


def test_flow_nesting_limit():
    assert load('[[x]]', max_depth=2) == [['x']]
    with pytest.raises(FlowDepthError):
        load('[[x]]', max_depth=1)
    with pytest.raises(FlowDepthError):
        load('{a: {b: {c: 1}}}', max_depth=2)
    with pytest.raises(FlowDepthError):
        load('[' * 3000 + ']' * 3000)
