"""
`ruleset` module for the `holdings` app.

This provides the pattern-matching primitives that pickup rules are
built from: `PatternSet` objects, which match values against a set of
(possibly negated) patterns, and the `matches_set` and `matches_items`
predicates that pickup-rule evaluation uses.
"""
import re


class PatternSet(object):
    """
    Match strings (i.e., codes) against a set of regex patterns.

    Each pattern must match a whole value, case-insensitively. Patterns
    are regular expressions, so e.g. `MAIN.*` matches any code starting
    with "MAIN". A pattern starting with `!` is negated.

    Matching works in one of two ways, depending on whether the set
    has any non-negated patterns:

    - If it does, a value list matches when any non-negated pattern
      matches any value. Negated patterns are NOT considered at all.
    - If it doesn't, a value list matches when no negated pattern
      matches any value. (So an empty PatternSet matches anything.)

    For example:

    >>> pset = PatternSet(['!REF', '!RES'])
    >>> pset.matches(['STACKS'])
    True

    >>> pset.matches(['ref'])
    False

    >>> PatternSet(['STACKS', '!REF']).matches(['REF'])
    False

    Raises `re.error` on init if a pattern is not a valid regex.
    """
    def __init__(self, patterns=None):
        self.patterns = tuple(patterns or ())
        self.positive = []
        self.negative = []
        for pattern in self.patterns:
            if pattern.startswith('!'):
                self.negative.append(re.compile(pattern[1:], re.IGNORECASE))
            else:
                self.positive.append(re.compile(pattern, re.IGNORECASE))

    def __bool__(self):
        return bool(self.patterns)

    def __iter__(self):
        return iter(self.patterns)

    def __eq__(self, other):
        if isinstance(other, PatternSet):
            return self.patterns == other.patterns
        return NotImplemented

    def __hash__(self):
        return hash(self.patterns)

    def __repr__(self):
        return 'PatternSet({!r})'.format(list(self.patterns))

    def matches(self, values):
        values = ['' if val is None else str(val) for val in values]
        if self.positive:
            return any(p.fullmatch(val) for p in self.positive
                       for val in values)
        return not any(p.fullmatch(val) for p in self.negative
                       for val in values)


def matches_set(patterns, values):
    """
    True if `values` match the given `patterns`, which may be a
    PatternSet or any iterable of pattern strings. See
    `PatternSet.matches` for the matching rules.
    """
    if not isinstance(patterns, PatternSet):
        patterns = PatternSet(patterns)
    return patterns.matches(values)


def matches_items(libs, locs, policies, copies):
    """
    True if at least one of the `copies` satisfies all of the given
    criteria: its library is one of `libs`, its location matches the
    `locs` patterns, and its circulation policy matches the `policies`
    patterns. Empty criteria are skipped. Libraries must match exactly;
    locations and policies follow `matches_set`.

    Note that this is False for an empty list of copies.
    """
    libs = frozenset(libs or ())
    for copy in copies:
        if libs and copy.library_id not in libs:
            continue
        if locs and not matches_set(locs, [copy.location_id]):
            continue
        if policies and not matches_set(policies, [copy.policy_id]):
            continue
        return True
    return False
