"""Literal (``|``) and folded (``>``) block scalars."""

import re

# a pending fold: the joining space plus any blank lines read since
_RE_PENDING_FOLD = re.compile(r" (\n*)\Z")

LITERAL = '|'
FOLDED = '>'

KEEP = '+'
STRIP = '-'
CLIP = ''


def read_block_scalar(cursor, style, chomping=CLIP, indentation=0):
    """Consume the lines of a block scalar and return its text.

    ``cursor`` sits on the line holding the header. Reading stops at the
    first non-blank line indented less than the scalar, which is pushed back
    onto the cursor. ``indentation`` is the explicit indentation indicator,
    0 when the header has none.
    """
    folded = style == FOLDED
    text = ''

    not_eof = cursor.advance()
    while not_eof and cursor.is_blank():
        text += '\n'
        not_eof = cursor.advance()
    if not not_eof:
        return ''

    indent = cursor.indentation
    if indentation:
        if indent < indentation:
            cursor.retreat()
            return ''
        baseline = indentation
    else:
        if indent == 0:
            cursor.retreat()
            return ''
        baseline = indent

    text += _line_text(cursor.line, indent, baseline, folded)
    previous_indent = indent
    while cursor.advance():
        line = cursor.line
        if cursor.is_blank():
            text += '\n' if folded else line[baseline:] + '\n'
            continue

        indent = cursor.indentation
        if indent < baseline:
            cursor.retreat()
            break
        if folded:
            m = _RE_PENDING_FOLD.search(text)
            if m:
                breaks = m.group(1)
                if previous_indent != indent:
                    joint = '\n' + breaks
                else:
                    joint = breaks or ' '
                text = text[:m.start()] + joint
        previous_indent = indent
        text += _line_text(line, indent, baseline, folded)

    if folded:
        # the last pending fold is the final line break
        text = _RE_PENDING_FOLD.sub(lambda m: '\n' + m.group(1), text)

    if chomping == CLIP:
        if text.endswith('\n'):
            text = text.rstrip('\n') + '\n'
    elif chomping == STRIP:
        text = text.rstrip('\n')
    return text


def _line_text(line, indent, baseline, folded):
    diff = indent - baseline
    # more-indented lines are never folded
    end = ' ' if folded and not diff else '\n'
    return ' ' * diff + line[indent:] + end
