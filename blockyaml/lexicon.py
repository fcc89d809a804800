# ════════════════════════════════════════════════════════════════
# lexicon.py: the line shapes of block YAML
# ════════════════════════════════════════════════════════════════
# The block parser tries these in order: sequence item, mapping
# entry. Each match_* helper returns the capture tree of a whole-line
# match, or None.
# ════════════════════════════════════════════════════════════════

from blockyaml.inline import c_quoted
from blockyaml.peg import (
    build, capture, eof_ok, ahead, match_cp, match_none_of, match_range,
    neg, opt, parse_whole, peg_alt, peg_seq, plus_, star,
)

# ── Characters ──

# [31] S-SPACE
def s_space(inp):
    return match_cp(inp, 0x20)

# [33] S-WHITE
def s_white(inp):
    return peg_alt(inp, [s_space, lambda inp: match_cp(inp, 0x9)])

# [35] NS-DEC-DIGIT
def ns_dec_digit(inp):
    return match_range(inp, 0x30, 0x39)

def nb_char(inp):
    return match_none_of(inp, '\n')

def rest_of_line(inp):
    return star(inp, nb_char)

# ── Sequence items ──

# "-" alone, or "-" + whitespace + value
def l_sequence_item(inp):
    return build(inp, 'ITEM', lambda inp: peg_seq(inp, [
        lambda inp: match_cp(inp, 45),
        lambda inp: peg_alt(inp, [
            lambda inp: peg_seq(inp, [
                lambda inp: capture(inp, 'LEAD', lambda inp: plus_(inp, s_white)),
                lambda inp: capture(inp, 'VALUE', rest_of_line)]),
            eof_ok])]))

# ── Mapping entries ──

# ' '* ':' followed by whitespace or end of line
def c_key_end(inp):
    return peg_seq(inp, [
        lambda inp: star(inp, s_space),
        lambda inp: match_cp(inp, 58),
        lambda inp: ahead(inp, lambda inp: peg_alt(inp, [s_white, eof_ok]))])

# first character is not a space, quote or flow opener; the key is
# the shortest run that a key end follows
def ns_plain_key(inp):
    return peg_seq(inp, [
        lambda inp: match_none_of(inp, ' \'"[{'),
        lambda inp: star(inp, lambda inp: peg_seq(inp, [
            lambda inp: neg(inp, c_key_end),
            nb_char]))])

def l_mapping_entry(inp):
    return build(inp, 'ENTRY', lambda inp: peg_seq(inp, [
        lambda inp: capture(inp, 'KEY', lambda inp: peg_alt(inp, [
            lambda inp: peg_seq(inp, [c_quoted, lambda inp: ahead(inp, c_key_end)]),
            ns_plain_key])),
        c_key_end,
        lambda inp: peg_alt(inp, [
            lambda inp: peg_seq(inp, [
                lambda inp: plus_(inp, s_white),
                lambda inp: capture(inp, 'VALUE', rest_of_line)]),
            eof_ok])]))

# ── Value prefixes ──

# [101] C-NS-ANCHOR-PROPERTY, followed by the rest of the value
def c_anchor_prefix(inp):
    return build(inp, 'ANCHORED', lambda inp: peg_seq(inp, [
        lambda inp: match_cp(inp, 38),
        lambda inp: capture(inp, 'ANCHOR', lambda inp: plus_(inp, lambda inp: match_none_of(inp, ' '))),
        lambda inp: star(inp, s_space),
        lambda inp: capture(inp, 'VALUE', rest_of_line)]))

# [164] C-CHOMPING-INDICATOR
def c_chomping_indicator(inp):
    return peg_alt(inp, [lambda inp: match_cp(inp, 43), lambda inp: match_cp(inp, 45)])

# [163] C-INDENTATION-INDICATOR
def c_indentation_indicator(inp):
    return plus_(inp, ns_dec_digit)

# [162] C-B-BLOCK-HEADER
def c_b_block_header(inp):
    return build(inp, 'HEADER', lambda inp: peg_seq(inp, [
        lambda inp: capture(inp, 'STYLE', lambda inp: peg_alt(inp, [
            lambda inp: match_cp(inp, 124),
            lambda inp: match_cp(inp, 62)])),
        lambda inp: opt(inp, lambda inp: capture(inp, 'MODIFIERS', lambda inp: peg_alt(inp, [
            lambda inp: peg_seq(inp, [c_chomping_indicator, c_indentation_indicator]),
            lambda inp: peg_seq(inp, [c_indentation_indicator, c_chomping_indicator]),
            c_indentation_indicator,
            c_chomping_indicator]))),
        lambda inp: opt(inp, lambda inp: peg_seq(inp, [
            lambda inp: plus_(inp, s_space),
            lambda inp: match_cp(inp, 35),
            rest_of_line])),
        eof_ok]))

# ── API ──

def match_sequence_item(line, meter=None):
    return parse_whole(l_sequence_item, line, meter)

def match_mapping_entry(line, meter=None):
    return parse_whole(l_mapping_entry, line, meter)

def match_anchor(value, meter=None):
    return parse_whole(c_anchor_prefix, value, meter)

def match_block_header(value, meter=None):
    return parse_whole(c_b_block_header, value, meter)

def is_empty_value(value):
    """True for a missing, blank or comment-only value."""
    if value is None:
        return True
    stripped = value.lstrip(' ')
    return stripped == '' or stripped.startswith('#')
