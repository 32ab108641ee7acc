"""
Tests the holdings.ruleset pattern-matching functions.
"""

import re

import pytest

from holdings import ruleset

# FIXTURES / TEST DATA
# Note that, in addition to the fixtures below, we're using these
# fixtures from django/catalog/conftest.py:
#   - make_copy


@pytest.fixture
def copies(make_copy):
    """
    Pytest fixture: two copies at different libraries, locations, and
    with different circulation policies.
    """
    return [make_copy('MAIN', 'STACKS', policy_id='loan'),
            make_copy('EAST', 'REF', policy_id='ref')]


# TESTS

@pytest.mark.parametrize('patterns, values, expected', [
    ([], ['anything'], True),
    ([], [], True),
    (['X'], ['X'], True),
    (['X'], ['Y'], False),
    (['X'], [], False),
    (['x'], ['X'], True),
    (['MAIN.*'], ['MAINREF'], True),
    (['MAIN'], ['MAINREF'], False),
    (['A', 'B'], ['C', 'B'], True),
    (['!X'], ['X'], False),
    (['!X'], ['Y'], True),
    (['!x'], ['X'], False),
    (['!REF', '!RES'], ['STACKS'], True),
    (['!REF', '!RES'], ['REF', 'STACKS'], False),
    (['X', '!Y'], ['Y'], False),
    (['X', '!Y'], ['X'], True),
    (['X', '!X'], ['X'], True),
    (['!REF'], [None], True),
    (['!.*'], [None], False),
])
def test_matchesset(patterns, values, expected):
    """
    `matches_set` should match if any non-negated pattern fully
    matches any value; with only negated patterns, it should match if
    none of them matches any value.
    """
    assert ruleset.matches_set(patterns, values) == expected


def test_matchesset_accepts_patternset():
    """
    `matches_set` should accept a PatternSet as well as a list of
    pattern strings.
    """
    pset = ruleset.PatternSet(['!STAFF'])
    assert ruleset.matches_set(pset, ['ADULT'])
    assert not ruleset.matches_set(pset, ['staff'])


def test_patternset_raises_on_bad_regex():
    """
    Creating a PatternSet with an invalid regular expression should
    raise `re.error`.
    """
    with pytest.raises(re.error):
        ruleset.PatternSet(['MAIN', '!('])


def test_patternset_equality_and_truthiness():
    """
    PatternSets should compare equal if they have the same patterns,
    and be falsy only when they have none.
    """
    assert ruleset.PatternSet(['A', '!B']) == ruleset.PatternSet(('A', '!B'))
    assert ruleset.PatternSet(['A']) != ruleset.PatternSet(['B'])
    assert not ruleset.PatternSet([])
    assert ruleset.PatternSet(['!B'])
    assert list(ruleset.PatternSet(['A', '!B'])) == ['A', '!B']


@pytest.mark.parametrize('libs, locs, policies, expected', [
    ([], [], [], True),
    (['MAIN'], [], [], True),
    (['WEST'], [], [], False),
    (['main'], [], [], False),
    ([], ['REF'], [], True),
    (['MAIN'], ['REF'], [], False),
    (['EAST'], ['REF'], ['ref'], True),
    (['EAST'], ['REF'], ['loan'], False),
    ([], ['!STACKS'], [], True),
    ([], ['!STACKS', '!REF'], [], False),
    ([], [], ['LOAN'], True),
])
def test_matchesitems(libs, locs, policies, expected, copies):
    """
    `matches_items` should be True if one copy satisfies all the given
    criteria, where libraries must match exactly.
    """
    assert ruleset.matches_items(libs, locs, policies, copies) == expected


def test_matchesitems_false_for_no_copies():
    """
    `matches_items` should be False when there are no copies, even
    with no criteria.
    """
    assert not ruleset.matches_items([], [], [], [])
