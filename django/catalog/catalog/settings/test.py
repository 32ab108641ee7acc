import os

# Tests don't need a real secret; set one before base.py checks for it.
os.environ.setdefault('SECRET_KEY', 'catalog-test-secret-key')

from .base import *

DEBUG = True
TESTING = True

TIME_ZONE = 'America/Chicago'

ALLOWED_HOSTS += [
    'testserver',
]

HOLDINGS_BRANCH_ORDER = ''
HOLDINGS_LOCATION_ORDER = ''
HOLDINGS_SORT_BY_ENUM_CHRON = True
HOLDINGS_SINGLE_RESERVATION_QUEUE = True
HOLDINGS_COUNT_PLACEHOLDERS = True
HOLDINGS_DISPLAY_ITEM_HOLD_COUNTS = True
HOLDINGS_DISPLAY_TOTAL_HOLD_COUNT = True
HOLDINGS_GROUP_BY_LOCATION = False
HOLDINGS_PICKUP_LOCATION_ORDER = 'default'
HOLDINGS_PICKUP_RULES = [
    'level=title:loc=REF:stop',
    'avail=STACKS:pickup=MAIN,EAST',
]
