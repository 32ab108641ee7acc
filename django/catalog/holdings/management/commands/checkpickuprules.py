"""
Contains the `checkpickuprules` manage.py command.
"""
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from holdings import pickup
from holdings.exceptions import RuleParseError


class Command(BaseCommand):
    """
    Run a `checkpickuprules` command from manage.py.

    Use this to validate pickup rules before deploying them. By default
    it checks the rules in the HOLDINGS_PICKUP_RULES setting; pass one
    or more `--rule` options to check other rule strings instead. Each
    rule is parsed and printed back out in normalized form, one per
    line, numbered in evaluation order. A malformed rule raises a
    CommandError.

    Example:

    python manage.py checkpickuprules --rule "avail=STACKS:pickup=MAIN"
    """
    help = 'Validate pickup rule configuration.'

    def add_arguments(self, parser):
        parser.add_argument('--rule', action='append', dest='rules',
                            help='Rule string to check (repeatable).')

    def handle(self, *args, **options):
        rule_texts = options.get('rules') or settings.HOLDINGS_PICKUP_RULES
        try:
            rules = pickup.parse_rules(rule_texts)
            lines = ['{}: {}'.format(i, pickup.serialize_rule(rule))
                     for i, rule in enumerate(rules, 1)]
        except (RuleParseError, ValueError) as e:
            raise CommandError(str(e))

        for line in lines:
            self.stdout.write(line)
        self.stdout.write('{} pickup rule(s) OK.'.format(len(rules)))
