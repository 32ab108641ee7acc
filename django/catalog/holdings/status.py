"""
Contains the status classifier, which turns the raw status signals a
backend reports for a copy into one availability flag and one display
status.
"""
from django.conf import settings

from .exceptions import ClassificationError


class StatusClassifier(object):
    """
    Pick a single display status from a copy's status signals.

    A copy may carry several independent status flags at once (e.g.
    "In Transit" and "On Hold"), but only one can be displayed. Each
    raw signal is first translated through `mappings` (unmapped signals
    pass through as-is), then the status with the lowest value in
    `rankings` wins. Statuses missing from `rankings` get
    `default_rank`. Ties go to the status that came first.

    A copy is available if its chosen status is one of
    `available_statuses`.

    >>> classifier = StatusClassifier({'Charged': 1, 'On Hold': 2},
    >>>                               available_statuses=['On Shelf'])
    >>> classifier.classify(['On Shelf', 'On Hold'])
    (False, 'On Hold')
    """
    default_rank = 32000

    def __init__(self, rankings=None, available_statuses=None, mappings=None):
        self.rankings = dict(rankings or {})
        self.available_statuses = frozenset(available_statuses or ())
        self.mappings = dict(mappings or {})

    @classmethod
    def from_settings(cls):
        return cls(rankings=settings.HOLDINGS_STATUS_RANKINGS,
                   available_statuses=settings.HOLDINGS_AVAILABLE_STATUSES,
                   mappings=settings.HOLDINGS_STATUS_MAPPINGS)

    def get_rank(self, status):
        return self.rankings.get(status, self.default_rank)

    def map_signal(self, signal):
        return self.mappings.get(signal, signal)

    def pick_status(self, signals):
        """
        Return the most important status from the ordered `signals`.
        Raises a ClassificationError if there are no signals.
        """
        statuses = [self.map_signal(s) for s in signals or ()]
        if not statuses:
            raise ClassificationError(signals)
        best = statuses[0]
        best_rank = self.get_rank(best)
        for status in statuses[1:]:
            rank = self.get_rank(status)
            if rank < best_rank:
                best, best_rank = status, rank
        return best

    def is_available(self, status):
        return status in self.available_statuses

    def classify(self, signals):
        """
        Return an `(available, status)` tuple for the given signals.
        """
        status = self.pick_status(signals)
        return self.is_available(status), status
