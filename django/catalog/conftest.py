"""
Contains all shared pytest fixtures and hooks
"""

import pytest

from holdings import records


# General utility fixtures

@pytest.fixture
def make_copy():
    """
    Pytest fixture that returns a factory function for creating
    `CopyRecord` objects. Item IDs are assigned sequentially unless
    you pass `item_id`; status signals default to ['On Shelf'].
    """
    counter = {'next': 1}

    def _make(library_id='MAIN', location_id='STACKS', **kwargs):
        if 'item_id' not in kwargs:
            kwargs['item_id'] = 'i{}'.format(counter['next'])
            counter['next'] += 1
        kwargs.setdefault('status_signals', ['On Shelf'])
        kwargs.setdefault('bib_id', 'b1')
        return records.CopyRecord(library_id=library_id,
                                  location_id=location_id, **kwargs)
    return _make


@pytest.fixture
def make_holding():
    """
    Pytest fixture that returns a factory function for creating
    `HoldingRecord` objects.
    """
    def _make(holding_id, library_id='MAIN', location_id='STACKS', **kwargs):
        kwargs.setdefault('bib_id', 'b1')
        return records.HoldingRecord(holding_id, library_id,
                                     location_id=location_id, **kwargs)
    return _make


@pytest.fixture
def make_entry():
    """
    Pytest fixture that returns a factory function for creating
    `HoldingEntry` objects directly, for ranking tests.
    """
    def _make(sort_key, branch_code='MAIN', location_code='STACKS',
              location_label=None, **kwargs):
        kwargs.setdefault('available', True)
        kwargs.setdefault('status', 'On Shelf')
        return records.HoldingEntry(
            id='b1', item_id='i{}'.format(sort_key), sort_key=sort_key,
            branch_code=branch_code, location_code=location_code,
            location_label=location_label or branch_code, **kwargs)
    return _make


@pytest.fixture
def pickup_catalog():
    """
    Pytest fixture: a small catalog of pickup locations.
    """
    return [
        records.PickupLocation('MAIN', 'Main Library'),
        records.PickupLocation('EAST', 'East Branch'),
        records.PickupLocation('WEST', 'west branch'),
        records.PickupLocation('BOOKMOBILE', 'Bookmobile'),
    ]
