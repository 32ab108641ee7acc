"""
Contains various utility functions for catalog project code.
"""
import re


FALSE_STRINGS = frozenset(['false', 'f', '0', 'null', 'n', 'no', 'not',
                           'off', ''])


def cast_to_boolean(val, false_strings=FALSE_STRINGS):
    """
    Cast the given value to a boolean. Strings are False if they
    appear (case-insensitively) in `false_strings` and True otherwise;
    anything else uses normal Python truthiness.
    """
    if isinstance(val, str):
        return val.strip().lower() not in false_strings
    return bool(val)


def split_quoted(data, delimiter):
    """
    Split the `data` string on `delimiter`, ignoring delimiters that
    appear inside single- or double-quoted sections. Quote characters
    are kept in the returned parts (so that parts can be split again
    on a different delimiter); use `unquote` to strip them.

    Raises a ValueError if a quoted section is not closed.

    >>> split_quoted('a=1:b="x:y"', ':')
    ['a=1', 'b="x:y"']
    """
    parts, current, quote = [], [], None
    for char in data:
        if quote is not None:
            if char == quote:
                quote = None
            current.append(char)
        elif char in ('"', "'"):
            quote = char
            current.append(char)
        elif char == delimiter:
            parts.append(''.join(current))
            current = []
        else:
            current.append(char)
    if quote is not None:
        raise ValueError('No closing quotation in "{}".'.format(data))
    parts.append(''.join(current))
    return parts


def unquote(data):
    """
    Remove quote characters that delimit quoted sections in `data`.
    Assumes quotes are balanced (see `split_quoted`).
    """
    return re.sub(r'"([^"]*)"|\'([^\']*)\'',
                  lambda m: m.group(1) if m.group(1) is not None
                  else m.group(2), data)


def parse_order_setting(setting, delimiter=':'):
    """
    Parse an order setting into a dict mapping codes to integer ranks.

    `setting` may already be a dict (returned as a new dict with int
    values), a list/tuple of codes (ranked by position), or a string
    of codes separated by `delimiter`. In the string form each element
    is either a bare code, which gets its position as its rank, or
    `code=rank`, which sets the rank explicitly. Empty settings return
    an empty dict.

    >>> parse_order_setting('MAIN:EAST=5:MAIN/REF')
    {'MAIN': 0, 'EAST': 5, 'MAIN/REF': 2}
    """
    if not setting:
        return {}
    if isinstance(setting, dict):
        return {code: int(rank) for code, rank in setting.items()}
    if isinstance(setting, str):
        setting = setting.split(delimiter)
    order = {}
    for i, value in enumerate(setting):
        code, _, rank = value.partition('=')
        code = code.strip()
        if code:
            order[code] = int(rank) if rank.strip() else i
    return order


def natural_key(data):
    """
    Return a key for "natural" ordering of the given string, where runs
    of digits compare numerically: 'v.10' sorts after 'v.9'.
    """
    return [(0, int(part), '') if part.isdecimal() else (1, 0, part)
            for part in re.split(r'(\d+)', data or '') if part]


def natural_compare(a, b):
    """
    Compare strings `a` and `b` using natural ordering. Returns a
    negative number, zero, or a positive number, cmp-style.
    """
    key_a, key_b = natural_key(a), natural_key(b)
    return (key_a > key_b) - (key_a < key_b)


def compare_ranks(rank_a, rank_b):
    """
    Compare two optional ranks, cmp-style. A rank of None means
    "unranked": anything ranked sorts before anything unranked, and two
    unranked values are equal.
    """
    if rank_a is None and rank_b is None:
        return 0
    if rank_a is None:
        return 1
    if rank_b is None:
        return -1
    return (rank_a > rank_b) - (rank_a < rank_b)
