# ════════════════════════════════════════════════════════════════
# peg.py: PEG combinators used to classify YAML lines
# ════════════════════════════════════════════════════════════════
# Every character a rule examines is charged to the input's Meter.
# A rule that runs past the budget fails and leaves a diagnostic
# behind, the way a backtracking regex engine reports its limits.
# ════════════════════════════════════════════════════════════════

STEP_LIMIT = 'step-limit'
BAD_TEXT_UNIT = 'bad-text-unit'

# ── Input ──

class Meter:
    __slots__ = ('limit', 'steps', 'diagnostic')
    def __init__(self, limit=None):
        self.limit = limit; self.steps = 0; self.diagnostic = None

    def charge(self):
        self.steps += 1
        if self.limit is not None and self.steps > self.limit:
            self.diagnostic = STEP_LIMIT
            return False
        return True

    @property
    def exhausted(self):
        return self.diagnostic == STEP_LIMIT


class Input:
    __slots__ = ('src', 'pos', 'meter')
    def __init__(self, src, pos=0, meter=None):
        self.src = src; self.pos = pos
        self.meter = meter if meter is not None else Meter()

def adv(i):
    if i.pos >= len(i.src): return i
    return Input(i.src, i.pos + 1, i.meter)

# ── AST ──

class Node:
    """A named capture produced by `capture`/`build`."""
    __slots__ = ('type', 'text', 'children')
    def __init__(self, type, text=None, children=None):
        self.type = type; self.text = text
        self.children = children if children is not None else []

    def find(self, type):
        if self.type == type: return self
        for c in self.children:
            found = c.find(type)
            if found is not None: return found
        return None

    def text_of(self, type, default=None):
        found = self.find(type)
        return default if found is None else found.text

# ── Result ──

class Result:
    __slots__ = ('failed', 'val', 'rest', 'ast', 'ast_list', 'err')
    def __init__(self, failed=False, val='', rest=None, ast=None, ast_list=None, err=None):
        self.failed = failed; self.val = val; self.rest = rest
        self.ast = ast; self.ast_list = ast_list; self.err = err

def peg_ok(inp): return Result(rest=inp)
def peg_okv(inp, v): return Result(val=v, rest=inp)
def peg_fail(inp, m): return Result(failed=True, rest=inp, err=m)

# ── Combinators ──

def _peek(inp):
    """Code point under the cursor, or None at end of input or when metered out."""
    if not inp.meter.charge(): return None
    if inp.pos >= len(inp.src): return None
    c = ord(inp.src[inp.pos])
    if 0xD800 <= c <= 0xDFFF:
        inp.meter.diagnostic = inp.meter.diagnostic or BAD_TEXT_UNIT
        return None
    return c

def match_cp(inp, cp):
    c = _peek(inp)
    if c is None or c != cp: return peg_fail(inp, 'cp')
    return peg_okv(adv(inp), inp.src[inp.pos])

def match_range(inp, lo, hi):
    c = _peek(inp)
    if c is None or not lo <= c <= hi: return peg_fail(inp, 'rng')
    return peg_okv(adv(inp), inp.src[inp.pos])

def match_none_of(inp, chars):
    c = _peek(inp)
    if c is None or chr(c) in chars: return peg_fail(inp, 'none-of')
    return peg_okv(adv(inp), inp.src[inp.pos])

def match_str(inp, t):
    n = len(t)
    if inp.pos + n > len(inp.src): return peg_fail(inp, 'str')
    cur = inp
    for ch in t:
        r = match_cp(cur, ord(ch))
        if r.failed: return peg_fail(inp, 'str')
        cur = r.rest
    return peg_okv(cur, t)

def merge_asts(dst, r):
    if r.ast: dst.append(r.ast)
    if r.ast_list: dst.extend(r.ast_list)

def peg_seq(inp, fns):
    cur = inp; acc = []; asts = []
    for f in fns:
        r = f(cur)
        if r.failed: return r
        acc.append(r.val or ''); merge_asts(asts, r); cur = r.rest
    res = peg_okv(cur, ''.join(acc))
    if len(asts) == 1: res.ast = asts[0]
    elif len(asts) > 1: res.ast_list = asts
    return res

def peg_alt(inp, fns):
    for f in fns:
        r = f(inp)
        if not r.failed: return r
    return peg_fail(inp, 'alt')

def star(inp, f):
    cur = inp; acc = []; asts = []
    while True:
        r = f(cur)
        if r.failed or r.rest.pos <= cur.pos: break
        acc.append(r.val or ''); merge_asts(asts, r); cur = r.rest
    res = peg_okv(cur, ''.join(acc))
    if asts: res.ast_list = asts
    return res

def plus_(inp, f):
    first = f(inp)
    if first.failed: return first
    rest = star(first.rest, f)
    res = peg_okv(rest.rest, (first.val or '') + (rest.val or ''))
    asts = []
    merge_asts(asts, first); merge_asts(asts, rest)
    if asts: res.ast_list = asts
    return res

def opt(inp, f):
    r = f(inp); return peg_ok(inp) if r.failed else r
def neg(inp, f):
    r = f(inp); return peg_ok(inp) if r.failed else peg_fail(inp, 'neg')
def ahead(inp, f):
    r = f(inp); return r if r.failed else peg_ok(inp)
def eof_ok(inp):
    return peg_ok(inp) if inp.pos >= len(inp.src) else peg_fail(inp, 'eof')

# ── Captures ──

def build(inp, type, f):
    r = f(inp)
    if r.failed: return r
    node = Node(type)
    if r.ast: node.children.append(r.ast)
    if r.ast_list: node.children.extend(r.ast_list)
    r.ast = node; r.ast_list = None; return r

def capture(inp, type, f):
    r = f(inp)
    if r.failed: return r
    r.ast = Node(type, text=r.val); r.ast_list = None; return r

def parse_whole(f, text, meter=None):
    """Run rule `f` over all of `text`; return the root Node or None."""
    r = f(Input(text, 0, meter))
    if r.failed or r.rest.pos != len(text):
        return None
    return r.ast if r.ast is not None else Node('MATCH', text=r.val)
