"""
Tests the holdings.status classifier.
"""

import pytest

from holdings import status
from holdings.exceptions import ClassificationError

# FIXTURES / TEST DATA
# Note that, in addition to the fixtures below, we're using these
# fixtures from holdings.tests.conftest:
#   - classifier


# TESTS

@pytest.mark.parametrize('signals, expected', [
    (['On Shelf'], (True, 'On Shelf')),
    (['Available'], (True, 'Available')),
    (['Item::CheckedOut'], (False, 'Charged')),
    (['On Shelf', 'Item::Held'], (False, 'On Hold')),
    (['On Hold', 'Charged'], (False, 'Charged')),
    (['On Hold', 'Lost', 'Charged'], (False, 'Lost')),
    (['Weird Status'], (False, 'Weird Status')),
    (['Weird Status', 'On Hold'], (False, 'On Hold')),
    (('In Transit', 'On Hold'), (False, 'In Transit')),
    (('On Hold', 'In Transit'), (False, 'On Hold')),
])
def test_classify_picks_most_important_status(signals, expected, classifier):
    """
    `StatusClassifier.classify` should map the signals, pick the status
    with the lowest rank (the first one, on a tie), and report whether
    that status means available.
    """
    assert classifier.classify(signals) == expected


def test_pickstatus_tie_goes_to_first_signal_every_time():
    """
    `StatusClassifier.pick_status` should break ties between statuses
    of equal rank by keeping the first one, on every call.
    """
    classifier = status.StatusClassifier({'A': 5, 'B': 5})
    results = set(classifier.pick_status(['A', 'B']) for _ in range(20))
    assert results == set(['A'])
    assert classifier.pick_status(['B', 'A']) == 'B'


@pytest.mark.parametrize('signals', [[], (), None])
def test_pickstatus_raises_on_empty_signals(signals, classifier):
    """
    `StatusClassifier.pick_status` should raise a ClassificationError
    if there are no signals to pick from.
    """
    with pytest.raises(ClassificationError):
        classifier.pick_status(signals)


def test_getrank_default_for_unranked_status(classifier):
    """
    `StatusClassifier.get_rank` should return the default rank for a
    status that isn't in the rankings table.
    """
    assert classifier.get_rank('Unheard Of') == 32000
    assert classifier.get_rank('Lost') == 1


def test_fromsettings_uses_holdings_settings(settings):
    """
    `StatusClassifier.from_settings` should build a classifier from
    the HOLDINGS_STATUS_* settings.
    """
    settings.HOLDINGS_STATUS_RANKINGS = {'Charged': 1, 'On Hold': 2}
    settings.HOLDINGS_STATUS_MAPPINGS = {'Item::Held': 'On Hold',
                                         'Item::CheckedOut': 'Charged'}
    settings.HOLDINGS_AVAILABLE_STATUSES = ['On Shelf']
    classifier = status.StatusClassifier.from_settings()
    assert classifier.classify(['Item::Held', 'Item::CheckedOut']) == \
        (False, 'Charged')
    assert classifier.classify(['On Shelf']) == (True, 'On Shelf')
