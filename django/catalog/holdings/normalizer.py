"""
Contains the holding normalizer, which converts backend copy and
holding records into canonical `HoldingEntry` objects.
"""
import datetime
import logging
from collections import OrderedDict

from dateutil import parser as dateparser
from django.conf import settings

from .exceptions import ClassificationError, NormalizationError
from .records import HoldingEntry, PLACEHOLDER_PREFIX
from .status import StatusClassifier

# set up logger, for debugging
logger = logging.getLogger('catalog.custom')


class ErrorCollector(object):
    """
    A simple `on_error` callback for `HoldingNormalizer.normalize` that
    stores each skipped record along with the error it raised.
    """
    def __init__(self):
        self.errors = []

    def __call__(self, record, error):
        self.errors.append((record, error))

    def __len__(self):
        return len(self.errors)

    @property
    def records(self):
        return [record for record, _ in self.errors]


class HoldingNormalizer(object):
    """
    Turn a list of `CopyRecord` objects (plus, optionally, the
    `HoldingRecord` objects they belong to) into `HoldingEntry`
    objects.

    Copies are dropped if their holding is suppressed or if their
    process type is hidden for their format; `hidden_process_types`
    maps a format (or '*', for all formats) to the process types that
    should be hidden. Each remaining copy gets its availability and
    status from the `classifier`. Holdings that end up with no copies
    (and aren't suppressed) get one placeholder entry each.

    Location labels come from the copy or holding itself, if set;
    otherwise they're looked up by branch in `branch_labels`. If
    `group_by_location` is True, the location's label (from
    `location_labels`) is appended to the branch label.
    """
    def __init__(self, classifier=None, hidden_process_types=None,
                 branch_labels=None, location_labels=None,
                 group_by_location=False):
        self.classifier = classifier or StatusClassifier()
        self.hidden_process_types = {
            fmt: frozenset(ptypes)
            for fmt, ptypes in (hidden_process_types or {}).items()
        }
        self.branch_labels = dict(branch_labels or {})
        self.location_labels = dict(location_labels or {})
        self.group_by_location = group_by_location

    @classmethod
    def from_settings(cls, classifier=None):
        return cls(
            classifier=classifier or StatusClassifier.from_settings(),
            hidden_process_types=settings.HOLDINGS_HIDDEN_PROCESS_TYPES,
            branch_labels=settings.HOLDINGS_BRANCH_LABELS,
            location_labels=settings.HOLDINGS_LOCATION_LABELS,
            group_by_location=settings.HOLDINGS_GROUP_BY_LOCATION)

    def is_hidden(self, copy):
        """
        True if the copy's process type is hidden, either for the
        copy's format or for all formats.
        """
        if not copy.process_type:
            return False
        for fmt in (copy.format, '*'):
            if copy.process_type in self.hidden_process_types.get(fmt, ()):
                return True
        return False

    def get_location_label(self, library_id, location_id, label=None):
        if label:
            return label
        branch_label = self.branch_labels.get(library_id, library_id or '')
        if not self.group_by_location or not location_id:
            return branch_label
        location_label = self.location_labels.get(location_id, location_id)
        return ', '.join(part for part in (branch_label, location_label)
                         if part)

    def parse_due_date(self, record, due_date):
        if not due_date or isinstance(due_date, datetime.date):
            return due_date or None
        try:
            return dateparser.parse(due_date)
        except (ValueError, OverflowError) as e:
            raise NormalizationError(
                record, 'Invalid due date "{}": {}'.format(due_date, e))

    def make_entry(self, copy, sort_key, holding=None):
        """
        Build a `HoldingEntry` for one `copy`. Raises a
        NormalizationError if the copy lacks an ID or a library, or a
        ClassificationError if it has no status signals.
        """
        if copy.item_id is None or copy.item_id == '':
            raise NormalizationError(copy, 'Copy record has no item ID.')
        if not copy.library_id:
            raise NormalizationError(
                copy, 'Copy {} has no library ID.'.format(copy.item_id))

        available, status = self.classifier.classify(copy.status_signals)
        extra = dict(holding.extra) if holding is not None else {}
        extra.update(copy.extra)
        call_number = copy.call_number
        if not call_number and holding is not None:
            call_number = holding.call_number
        label = copy.location_label
        if not label and holding is not None:
            label = holding.location_label

        return HoldingEntry(
            id=copy.bib_id,
            item_id=copy.item_id,
            holding_group_id=copy.holding_group_id,
            available=available,
            status=status,
            location_label=self.get_location_label(copy.library_id,
                                                   copy.location_id, label),
            location_code=copy.location_id,
            branch_code=copy.library_id,
            call_number=call_number or '',
            due_date=self.parse_due_date(copy, copy.due_date),
            requests_placed=int(copy.requests_placed or 0),
            sort_key=sort_key,
            enumeration=copy.enumeration or '',
            barcode=copy.barcode or '',
            extra=extra
        )

    def make_placeholder(self, holding, sort_key):
        """
        Build a placeholder `HoldingEntry` for a holding with no
        copies. Placeholders are never available and carry no call
        number or barcode.
        """
        if holding.holding_id is None or holding.holding_id == '':
            raise NormalizationError(holding, 'Holding record has no ID.')
        if not holding.library_id:
            raise NormalizationError(
                holding, 'Holding {} has no library ID.'
                         ''.format(holding.holding_id))

        return HoldingEntry(
            id=holding.bib_id,
            item_id='{}{}'.format(PLACEHOLDER_PREFIX, holding.holding_id),
            holding_group_id=holding.holding_id,
            available=False,
            status='',
            location_label=self.get_location_label(
                holding.library_id, holding.location_id,
                holding.location_label),
            location_code=holding.location_id,
            branch_code=holding.library_id,
            call_number='',
            barcode='',
            sort_key=sort_key,
            is_placeholder=True,
            extra=holding.extra
        )

    def report_error(self, record, error, on_error=None):
        logger.warning('Skipping {!r}: {}'.format(record, error))
        if on_error is not None:
            on_error(record, error)

    def normalize(self, copies, holdings=None, on_error=None):
        """
        Normalize `copies` (and `holdings`) into a list of
        `HoldingEntry` objects, in input order: copies first, then
        placeholders for holdings without copies. Each entry's
        `sort_key` is its index in the returned list.

        A record that raises a NormalizationError or a
        ClassificationError is skipped; the error is logged and passed
        to `on_error(record, error)`, if provided, and processing
        continues with the next record.
        """
        holdings_by_id = OrderedDict(
            (holding.holding_id, holding) for holding in holdings or ())
        with_copies = set()
        entries = []

        for copy in copies:
            holding = holdings_by_id.get(copy.holding_group_id)
            if holding is not None and holding.suppressed:
                continue
            if self.is_hidden(copy):
                continue
            try:
                entry = self.make_entry(copy, len(entries), holding)
            except (NormalizationError, ClassificationError) as e:
                self.report_error(copy, e, on_error)
                continue
            if holding is not None:
                with_copies.add(holding.holding_id)
            entries.append(entry)

        for holding_id, holding in holdings_by_id.items():
            if holding.suppressed or holding_id in with_copies:
                continue
            try:
                entry = self.make_placeholder(holding, len(entries))
            except NormalizationError as e:
                self.report_error(holding, e, on_error)
                continue
            entries.append(entry)

        return entries
