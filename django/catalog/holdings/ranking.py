"""
Contains the holdings ranker, which puts normalized holdings entries
into a stable display order and summarizes them.
"""
import copy
from functools import cmp_to_key

from django.conf import settings

from utils import helpers as h

from .records import SummaryEntry


class HoldingsRanker(object):
    """
    Sort `HoldingEntry` objects for display and append a summary.

    Entries are compared on, in order:

    1. Branch rank. `branch_order` may rank a `branch/location`
       combination or a plain branch; the combination wins if both
       are ranked.
    2. Location rank, from `location_order`.
    3. Location label, case-insensitively.
    4. If `sort_by_enum_chron` is True, enumeration/chronology in
       reverse natural order (newest issue first), with entries that
       have no enumeration last.
    5. `sort_key`, i.e. normalizer output order.

    Ranked entries sort before unranked ones at steps 1 and 2. Order
    settings can be dicts or strings; see
    `utils.helpers.parse_order_setting`.

    Summary options: `single_reservation_queue` reports the longest
    request queue (True) or the sum of all queues (False);
    `count_placeholders` controls whether placeholder entries count
    toward the total; `display_item_hold_counts=False` blanks each
    entry's `requests_placed` once the summary is computed;
    `display_total_hold_count=False` leaves the summary's
    `reservations` unset.
    """
    def __init__(self, branch_order=None, location_order=None,
                 sort_by_enum_chron=True, single_reservation_queue=True,
                 count_placeholders=True, display_item_hold_counts=True,
                 display_total_hold_count=True):
        self.branch_order = h.parse_order_setting(branch_order)
        self.location_order = h.parse_order_setting(location_order)
        self.sort_by_enum_chron = sort_by_enum_chron
        self.single_reservation_queue = single_reservation_queue
        self.count_placeholders = count_placeholders
        self.display_item_hold_counts = display_item_hold_counts
        self.display_total_hold_count = display_total_hold_count

    @classmethod
    def from_settings(cls):
        return cls(
            branch_order=settings.HOLDINGS_BRANCH_ORDER,
            location_order=settings.HOLDINGS_LOCATION_ORDER,
            sort_by_enum_chron=settings.HOLDINGS_SORT_BY_ENUM_CHRON,
            single_reservation_queue=settings.HOLDINGS_SINGLE_RESERVATION_QUEUE,
            count_placeholders=settings.HOLDINGS_COUNT_PLACEHOLDERS,
            display_item_hold_counts=settings.HOLDINGS_DISPLAY_ITEM_HOLD_COUNTS,
            display_total_hold_count=settings.HOLDINGS_DISPLAY_TOTAL_HOLD_COUNT)

    def get_branch_rank(self, entry):
        combined = '{}/{}'.format(entry.branch_code, entry.location_code)
        rank = self.branch_order.get(combined)
        if rank is None:
            rank = self.branch_order.get(entry.branch_code)
        return rank

    def get_location_rank(self, entry):
        return self.location_order.get(entry.location_code)

    def compare(self, a, b):
        """
        Compare two entries, cmp-style. Returns a negative number if
        `a` sorts first, a positive number if `b` does, 0 otherwise.
        """
        result = h.compare_ranks(self.get_branch_rank(a),
                                 self.get_branch_rank(b))
        if not result:
            result = h.compare_ranks(self.get_location_rank(a),
                                     self.get_location_rank(b))
        if not result:
            label_a = (a.location_label or '').lower()
            label_b = (b.location_label or '').lower()
            result = (label_a > label_b) - (label_a < label_b)
        if not result and self.sort_by_enum_chron:
            result = self.compare_enumeration(a.enumeration, b.enumeration)
        if not result:
            result = (a.sort_key > b.sort_key) - (a.sort_key < b.sort_key)
        return result

    @staticmethod
    def compare_enumeration(enum_a, enum_b):
        # Newest first; entries without enumeration go last.
        if enum_a and enum_b:
            return h.natural_compare(enum_b, enum_a)
        if enum_a:
            return -1
        if enum_b:
            return 1
        return 0

    def sort(self, entries):
        """
        Return a new list of the real (non-summary) `entries`, sorted.
        """
        real = [e for e in entries if not e.is_summary]
        return sorted(real, key=cmp_to_key(self.compare))

    def summarize(self, entries):
        """
        Build a `SummaryEntry` for the given entries. Any summary
        entries in the list are ignored.
        """
        available = total = 0
        locations = set()
        request_counts = []
        for entry in entries:
            if entry.is_summary:
                continue
            if entry.available:
                available += 1
            if self.count_placeholders or not entry.is_placeholder:
                total += 1
                locations.add(entry.location_label)
            request_counts.append(entry.requests_placed or 0)

        reservations = None
        if self.display_total_hold_count:
            if self.single_reservation_queue:
                reservations = max(request_counts) if request_counts else 0
            else:
                reservations = sum(request_counts)
        return SummaryEntry(available=available, total=total,
                            locations=len(locations),
                            reservations=reservations)

    def rank(self, entries):
        """
        Sort `entries` and append a summary entry as the last element.
        The summary is always last, even for an empty list. The input
        entries are never modified; if item hold counts are hidden, the
        returned entries are copies with `requests_placed` blanked.
        """
        ranked = self.sort(entries)
        summary = self.summarize(ranked)
        if not self.display_item_hold_counts:
            ranked = [copy.copy(entry) for entry in ranked]
            for entry in ranked:
                entry.requests_placed = None
        ranked.append(summary)
        return ranked
