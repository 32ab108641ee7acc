"""
Contains pytest fixtures shared by `holdings` app tests.
"""

import pytest

from holdings import status


@pytest.fixture
def classifier():
    """
    Pytest fixture: a StatusClassifier with a small ranking table,
    where 'On Shelf' and 'Available' mean available.
    """
    return status.StatusClassifier(
        rankings={'Lost': 1, 'Charged': 2, 'On Hold': 3, 'In Transit': 3},
        available_statuses=['On Shelf', 'Available'],
        mappings={'Item::CheckedOut': 'Charged', 'Item::Held': 'On Hold'})
