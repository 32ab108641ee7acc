"""
Contains pickup rules: parsing them from configuration and evaluating
them to decide where a patron may pick up a requested item.

Rules are configured as strings, one per rule. A rule is a list of
`key=value1,value2` clauses separated by colons:

    level=title:avail=STACKS,MAIN.*:group=!STAFF:pickup=MAIN,EAST:stop

Values containing a colon or comma must be quoted ('a:b' or "a,b").
Surrounding whitespace is ignored. These keys are recognized:

- `level`: hold levels ("copy" or "title") the rule applies to.
- `lib`, `loc`, `policy`: the rule applies if any copy of the item is
  at one of the `lib` libraries, has a location matching `loc`, and
  has a circulation policy matching `policy`.
- `availLib`, `avail`, `availPolicy`: the same, but only available
  copies are considered.
- `unavailLib`, `unavail`, `unavailPolicy`: the same, but only
  unavailable copies are considered.
- `group`: patron groups the rule applies to.
- `pickup`: location IDs the rule makes eligible for pickup.
- `home`, `work`: whether pickup at the patron's home or work address
  is allowed (true/false).
- `stop`: if true, a matching rule ends evaluation.

Libraries must match exactly. Everything else except `pickup` is a
pattern list (see `holdings.ruleset.PatternSet`): case-insensitive
regular expressions, with `!` marking a negated pattern. Any other key
is kept in the rule's `extra` dict but doesn't affect evaluation.
"""
import logging
import re
from collections import OrderedDict, namedtuple
from functools import cmp_to_key

from django.conf import settings

from utils import helpers as h

from .exceptions import ClassificationError, RuleParseError
from .records import PickupLocation
from .ruleset import PatternSet, matches_items
from .status import StatusClassifier

# set up logger, for debugging
logger = logging.getLogger('catalog.custom')

HOME_ADDRESS_ID = '__HOMEADDRESS__'
WORK_ADDRESS_ID = '__WORKADDRESS__'

# Maps rule-string keys to PickupRule fields, in the order they're
# written out by `serialize_rule`.
PATTERN_KEYS = OrderedDict([
    ('level', 'level'),
    ('loc', 'loc'),
    ('policy', 'policy'),
    ('avail', 'avail'),
    ('availPolicy', 'avail_policy'),
    ('unavail', 'unavail'),
    ('unavailPolicy', 'unavail_policy'),
    ('group', 'group'),
])
LIBRARY_KEYS = OrderedDict([
    ('lib', 'lib'),
    ('availLib', 'avail_lib'),
    ('unavailLib', 'unavail_lib'),
])
BOOLEAN_KEYS = ('home', 'work', 'stop')
LIST_KEYS = ('pickup',)

_RULE_FIELDS = ['level', 'lib', 'loc', 'policy', 'avail_lib', 'avail',
                'avail_policy', 'unavail_lib', 'unavail', 'unavail_policy',
                'group', 'pickup', 'home', 'work', 'stop', 'extra']


def _pattern_set(patterns):
    if isinstance(patterns, PatternSet):
        return patterns
    return PatternSet(patterns)


class PickupRule(namedtuple('PickupRule', _RULE_FIELDS)):
    """
    One parsed pickup rule. Pattern fields are PatternSet objects;
    library fields and `pickup` are tuples of strings; `home` and
    `work` are None unless the rule sets them; `extra` holds unknown
    keys from the rule string. Every field is optional.
    """
    __slots__ = ()

    def __new__(cls, level=(), lib=(), loc=(), policy=(), avail_lib=(),
                avail=(), avail_policy=(), unavail_lib=(), unavail=(),
                unavail_policy=(), group=(), pickup=(), home=None, work=None,
                stop=False, extra=None):
        return super(PickupRule, cls).__new__(
            cls, _pattern_set(level), tuple(lib), _pattern_set(loc),
            _pattern_set(policy), tuple(avail_lib), _pattern_set(avail),
            _pattern_set(avail_policy), tuple(unavail_lib),
            _pattern_set(unavail), _pattern_set(unavail_policy),
            _pattern_set(group), tuple(pickup), home, work, bool(stop),
            OrderedDict((k, tuple(v)) for k, v in (extra or {}).items()))

    @property
    def item_criteria(self):
        return self.lib, self.loc, self.policy

    @property
    def available_criteria(self):
        return self.avail_lib, self.avail, self.avail_policy

    @property
    def unavailable_criteria(self):
        return self.unavail_lib, self.unavail, self.unavail_policy


def parse_rule(text):
    """
    Parse one rule string into a PickupRule. Raises a RuleParseError
    if the string is malformed.
    """
    try:
        clauses = h.split_quoted(text, ':')
    except ValueError as e:
        raise RuleParseError(text, str(e))

    values, positions = OrderedDict(), {}
    for pos, clause in enumerate(clauses, 1):
        if not clause.strip():
            continue
        key, sep, raw = clause.partition('=')
        key = key.strip()
        if not key:
            raise RuleParseError(text, 'clause "{}" has no key'.format(clause),
                                 pos)
        if re.search(r'[\s"\']', key):
            raise RuleParseError(text, 'invalid key "{}"'.format(key), pos)
        if not sep:
            if key not in BOOLEAN_KEYS:
                raise RuleParseError(
                    text, 'clause "{}" has no value'.format(clause), pos)
            raw = 'true'
        parsed = [h.unquote(val.strip()) for val in h.split_quoted(raw, ',')]
        values.setdefault(key, []).extend(val for val in parsed if val)
        positions.setdefault(key, pos)

    kwargs, extra = {}, OrderedDict()
    for key, vals in values.items():
        if key in PATTERN_KEYS:
            try:
                kwargs[PATTERN_KEYS[key]] = PatternSet(vals)
            except re.error as e:
                raise RuleParseError(
                    text, 'bad pattern for "{}": {}'.format(key, e),
                    positions[key])
        elif key in LIBRARY_KEYS:
            kwargs[LIBRARY_KEYS[key]] = vals
        elif key in LIST_KEYS:
            kwargs[key] = vals
        elif key in BOOLEAN_KEYS:
            if not vals:
                raise RuleParseError(text, '"{}" needs a value'.format(key),
                                     positions[key])
            kwargs[key] = h.cast_to_boolean(vals[-1])
        else:
            logger.warning('Pickup rule "{}" has unrecognized key "{}".'
                           ''.format(text, key))
            extra[key] = vals
    return PickupRule(extra=extra, **kwargs)


def parse_rules(rule_texts):
    """
    Parse a list of rule strings into a tuple of PickupRules. A single
    string is treated as one rule per line; blank lines are skipped.

    The first malformed rule raises a RuleParseError; the rule set is
    never partially parsed.
    """
    if isinstance(rule_texts, str):
        rule_texts = rule_texts.splitlines()
    return tuple(parse_rule(text) for text in rule_texts if text.strip())


def _quote(value):
    if not re.search(r'[:,"\']|^\s|\s$', value):
        return value
    if '"' not in value:
        return '"{}"'.format(value)
    if "'" not in value:
        return "'{}'".format(value)
    raise ValueError('Value {!r} cannot be quoted.'.format(value))


def serialize_rule(rule):
    """
    Render a PickupRule as a rule string that `parse_rule` turns back
    into an equivalent rule.
    """
    clauses = []
    list_fields = list(PATTERN_KEYS.items()) + list(LIBRARY_KEYS.items())
    list_fields += [(key, key) for key in LIST_KEYS]
    for key, field in list_fields:
        vals = list(getattr(rule, field))
        if vals:
            clauses.append('{}={}'.format(key, ','.join(_quote(v)
                                                         for v in vals)))
    for key, vals in rule.extra.items():
        clauses.append('{}={}'.format(key, ','.join(_quote(v) for v in vals)))
    for key in ('home', 'work'):
        val = getattr(rule, key)
        if val is not None:
            clauses.append('{}={}'.format(key, 'true' if val else 'false'))
    if rule.stop:
        clauses.append('stop')
    return ':'.join(clauses)


class PickupRuleCache(object):
    """
    Cache of parsed rule sets, keyed by the rule strings. Parsed rules
    are immutable, so one cache can be shared freely; create it once
    (e.g. per process) and pass it to `PickupRuleEngine.from_settings`.
    """
    def __init__(self):
        self._rules = {}

    def __len__(self):
        return len(self._rules)

    def get_rules(self, rule_texts):
        if isinstance(rule_texts, str):
            rule_texts = rule_texts.splitlines()
        key = tuple(rule_texts)
        try:
            return self._rules[key]
        except KeyError:
            logger.debug('Parsing {} pickup rules.'.format(len(key)))
            rules = parse_rules(key)
            self._rules[key] = rules
            return rules

    def clear(self):
        self._rules = {}


class PickupEligibility(namedtuple('PickupEligibility',
                                   ['location_ids', 'home', 'work',
                                    'matched'])):
    """
    The outcome of evaluating pickup rules: the set of eligible
    location IDs, whether home and work address pickup are allowed,
    and whether any rule matched at all. If no rule matched,
    `location_ids` is empty: nothing is eligible.
    """
    __slots__ = ()


class PickupRuleEngine(object):
    """
    Evaluate pickup rules for a hold request.

    Rules are evaluated in order. Each matching rule adds its `pickup`
    locations to the eligible set and, if it sets `home` or `work`,
    updates whether address pickup is allowed. A matching `stop` rule
    ends evaluation. If no rule matches, no location is eligible.

    `get_pickup_locations` turns the result into a list of
    `PickupLocation` objects from the location catalog, sorted per
    `location_order` ('default' for alphabetical, an order setting to
    put certain locations first, or None to keep catalog order), minus
    any `excluded_locations`, plus entries for home/work address
    pickup.
    """
    def __init__(self, rules=None, classifier=None, location_order='default',
                 excluded_locations=None, home_label='Home address',
                 work_label='Work address'):
        self.rules = tuple(rules or ())
        self.classifier = classifier or StatusClassifier()
        self.location_order = location_order
        self.excluded_locations = frozenset(excluded_locations or ())
        self.home_label = home_label
        self.work_label = work_label

    @classmethod
    def from_settings(cls, cache=None, classifier=None):
        rule_texts = settings.HOLDINGS_PICKUP_RULES
        if cache is not None:
            rules = cache.get_rules(rule_texts)
        else:
            rules = parse_rules(rule_texts)
        return cls(
            rules=rules,
            classifier=classifier or StatusClassifier.from_settings(),
            location_order=settings.HOLDINGS_PICKUP_LOCATION_ORDER,
            excluded_locations=settings.HOLDINGS_EXCLUDED_PICKUP_LOCATIONS,
            home_label=settings.HOLDINGS_HOME_ADDRESS_LABEL,
            work_label=settings.HOLDINGS_WORK_ADDRESS_LABEL)

    def partition_copies(self, copies, on_error=None):
        """
        Split `copies` into (available, unavailable) lists. A copy
        that can't be classified goes in neither list; its error is
        logged and passed to `on_error(copy, error)`, if provided.
        """
        available, unavailable = [], []
        for copy in copies:
            try:
                is_available, _ = self.classifier.classify(
                    copy.status_signals)
            except ClassificationError as e:
                logger.warning('Skipping {!r}: {}'.format(copy, e))
                if on_error is not None:
                    on_error(copy, e)
                continue
            (available if is_available else unavailable).append(copy)
        return available, unavailable

    def rule_matches(self, rule, copies, available, unavailable, patron,
                     level):
        if rule.level and not rule.level.matches([level]):
            return False
        for criteria, subset in ((rule.item_criteria, copies),
                                 (rule.available_criteria, available),
                                 (rule.unavailable_criteria, unavailable)):
            if any(criteria) and not matches_items(*(criteria + (subset,))):
                return False
        if rule.group and not rule.group.matches([patron.group]):
            return False
        return True

    def evaluate(self, copies, patron, level='copy', on_error=None):
        """
        Evaluate the rules for a request for `copies` (all copies of a
        title, or the one requested copy) at the given hold `level` by
        `patron`. Returns a PickupEligibility.
        """
        copies = list(copies)
        available, unavailable = self.partition_copies(copies, on_error)
        location_ids = None
        home = work = False
        for i, rule in enumerate(self.rules):
            if not self.rule_matches(rule, copies, available, unavailable,
                                     patron, level):
                continue
            logger.debug('Pickup rule {} matched.'.format(i))
            location_ids = (location_ids or set()) | set(rule.pickup)
            if rule.home is not None:
                home = rule.home and patron.has_home_address
            if rule.work is not None:
                work = rule.work and patron.has_work_address
            if rule.stop:
                break
        return PickupEligibility(frozenset(location_ids or ()), home, work,
                                 location_ids is not None)

    def sort_locations(self, locations):
        if not self.location_order:
            return list(locations)
        order = {}
        if self.location_order != 'default':
            order = h.parse_order_setting(self.location_order)

        def compare(a, b):
            result = h.compare_ranks(order.get(a.location_id),
                                     order.get(b.location_id))
            if not result:
                label_a = (a.label or '').lower()
                label_b = (b.label or '').lower()
                result = (label_a > label_b) - (label_a < label_b)
            return result
        return sorted(locations, key=cmp_to_key(compare))

    def get_pickup_locations(self, copies, patron, catalog, level='copy',
                             on_error=None):
        """
        Return the list of PickupLocations, from the `catalog` of all
        pickup locations, where `patron` may pick up a hold on
        `copies`. Home and work address entries, when allowed, come
        last; the work address is left out if it's the same as the home
        address.
        """
        eligibility = self.evaluate(copies, patron, level, on_error)
        locations = self.sort_locations(
            loc for loc in catalog
            if loc.location_id in eligibility.location_ids
            and loc.location_id not in self.excluded_locations
        )
        if eligibility.home:
            locations.append(PickupLocation(HOME_ADDRESS_ID, self.home_label,
                                            is_address=True))
        if eligibility.work and (not eligibility.home
                                 or patron.home_address != patron.work_address):
            locations.append(PickupLocation(WORK_ADDRESS_ID, self.work_label,
                                            is_address=True))
        return locations

    def is_valid_pickup_location(self, location_id, copies, patron, catalog,
                                 level='copy'):
        """
        True if `location_id` is one of the pickup locations offered
        for this request. Use this to check a previously chosen pickup
        location before placing a hold.
        """
        locations = self.get_pickup_locations(copies, patron, catalog, level)
        return any(loc.location_id == location_id for loc in locations)
