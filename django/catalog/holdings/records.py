"""
Record classes passed into and out of the `holdings` engine.

`CopyRecord` and `HoldingRecord` are the boundary inputs: per-backend
mapping code turns vendor API payloads into these. `HoldingEntry` and
`SummaryEntry` are what the normalizer and ranker produce for display.
`PatronContext` and `PickupLocation` are the inputs and outputs of
pickup-rule evaluation.
"""
from collections import OrderedDict


# Location label used for the summary entry, chosen so it can't be
# mistaken for a real location.
SUMMARY_LOCATION = '__HOLDINGSSUMMARYLOCATION__'

# Item ID prefix for placeholder entries built from holdings that have
# no copies.
PLACEHOLDER_PREFIX = 'HLD_'


class CopyRecord(object):
    """
    One physical or electronic copy, as reported by a backend.

    `status_signals` is the ordered collection of raw status tokens the
    backend reports for the copy. Duplicates are removed but order is
    kept, since the status classifier breaks ties by order. Pass a list
    or tuple; a plain set has no reliable order.

    `library_id` (the owning branch) and `item_id` are required by the
    normalizer; everything else is optional. `format` and
    `process_type` are only used for hiding copies, `extra` holds any
    pass-through display fields.
    """
    def __init__(self, item_id, library_id, location_id=None, policy_id=None,
                 status_signals=None, holding_group_id=None, enumeration=None,
                 bib_id=None, call_number='', barcode='', due_date=None,
                 requests_placed=0, format=None, process_type=None,
                 location_label=None, extra=None):
        self.item_id = item_id
        self.library_id = library_id
        self.location_id = location_id
        self.policy_id = policy_id
        self.status_signals = tuple(OrderedDict.fromkeys(status_signals or ()))
        self.holding_group_id = holding_group_id
        self.enumeration = enumeration
        self.bib_id = bib_id
        self.call_number = call_number
        self.barcode = barcode
        self.due_date = due_date
        self.requests_placed = requests_placed
        self.format = format
        self.process_type = process_type
        self.location_label = location_label
        self.extra = dict(extra or {})

    def __repr__(self):
        return '<CopyRecord {} ({}/{})>'.format(self.item_id, self.library_id,
                                               self.location_id)


class HoldingRecord(object):
    """
    A holding-level record: the location and call number for a group
    of copies, which may be empty. A `suppressed` holding hides all of
    its copies.
    """
    def __init__(self, holding_id, library_id, location_id=None,
                 call_number='', suppressed=False, bib_id=None,
                 location_label=None, extra=None):
        self.holding_id = holding_id
        self.library_id = library_id
        self.location_id = location_id
        self.call_number = call_number
        self.suppressed = suppressed
        self.bib_id = bib_id
        self.location_label = location_label
        self.extra = dict(extra or {})

    def __repr__(self):
        return '<HoldingRecord {} ({}/{})>'.format(
            self.holding_id, self.library_id, self.location_id)


class HoldingEntry(object):
    """
    A canonical, display-ready holdings entry. Each entry has exactly
    one `available` boolean and one `status` string. `sort_key` is the
    entry's position in normalizer output and is the final tiebreak
    when ranking. Placeholder entries (`is_placeholder`) stand in for
    holdings without copies; the presentation layer should fetch their
    details separately.
    """
    is_summary = False

    def __init__(self, id, item_id, holding_group_id=None, available=False,
                 status='', location_label='', location_code=None,
                 branch_code=None, call_number='', due_date=None,
                 requests_placed=0, sort_key=0, enumeration='', barcode='',
                 is_placeholder=False, extra=None):
        self.id = id
        self.item_id = item_id
        self.holding_group_id = holding_group_id
        self.available = available
        self.status = status
        self.location_label = location_label
        self.location_code = location_code
        self.branch_code = branch_code
        self.call_number = call_number
        self.due_date = due_date
        self.requests_placed = requests_placed
        self.sort_key = sort_key
        self.enumeration = enumeration
        self.barcode = barcode
        self.is_placeholder = is_placeholder
        self.extra = dict(extra or {})

    def __repr__(self):
        return '<HoldingEntry {} {} [{}]>'.format(self.item_id,
                                                  self.location_label,
                                                  self.sort_key)


class SummaryEntry(HoldingEntry):
    """
    A synthetic entry summarizing a list of holdings entries. Here,
    `available` is the number of available copies rather than a
    boolean. `reservations` is None when hold counts aren't displayed.
    """
    is_summary = True

    def __init__(self, available=0, total=0, locations=0, reservations=None):
        super(SummaryEntry, self).__init__(
            None, None, available=available, location_label=SUMMARY_LOCATION,
            call_number=None, sort_key=None)
        self.total = total
        self.locations = locations
        self.reservations = reservations

    def __repr__(self):
        return '<SummaryEntry {}/{} in {} locations>'.format(
            self.available, self.total, self.locations)


class PatronContext(object):
    """
    What pickup-rule evaluation needs to know about the patron: their
    patron group code and their home and work addresses, if any.
    """
    def __init__(self, group=None, home_address=None, work_address=None):
        self.group = group
        self.home_address = home_address
        self.work_address = work_address

    @property
    def has_home_address(self):
        return bool(self.home_address)

    @property
    def has_work_address(self):
        return bool(self.work_address)


class PickupLocation(object):
    """
    A location where a patron may pick up a hold. `is_address` is True
    for the synthetic home and work address entries.
    """
    def __init__(self, location_id, label, is_address=False):
        self.location_id = location_id
        self.label = label
        self.is_address = is_address

    def __eq__(self, other):
        return (isinstance(other, PickupLocation)
                and (self.location_id, self.label, self.is_address)
                == (other.location_id, other.label, other.is_address))

    def __hash__(self):
        return hash((self.location_id, self.label, self.is_address))

    def __repr__(self):
        return '<PickupLocation {} ({})>'.format(self.location_id, self.label)
