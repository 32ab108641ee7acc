"""
Exceptions raised by the `holdings` app.
"""


class HoldingsError(Exception):
    pass


class ClassificationError(HoldingsError):
    """
    Raised when a copy has no status signals to classify.
    """
    def __init__(self, signals=None, msg=None):
        self.signals = signals
        msg = msg or 'Cannot classify a copy with no status signals.'
        super(ClassificationError, self).__init__(msg)


class NormalizationError(HoldingsError):
    """
    Raised when a raw copy or holding record is missing required data.
    The offending record is available as `record`.
    """
    def __init__(self, record, msg):
        self.record = record
        super(NormalizationError, self).__init__(msg)


class RuleParseError(HoldingsError):
    """
    Raised when a pickup rule string is malformed. `rule_text` is the
    full rule string that failed to parse; `position`, if known, is the
    1-based number of the clause where parsing failed.
    """
    def __init__(self, rule_text, msg, position=None):
        self.rule_text = rule_text
        self.position = position
        if position is not None:
            msg = 'clause {}: {}'.format(position, msg)
        super(RuleParseError, self).__init__(
            'Invalid pickup rule "{}": {}'.format(rule_text, msg))
