# Base Django settings for catalog project.

import os
from unipath import Path

import dotenv

from django.core.exceptions import ImproperlyConfigured


def get_env_variable(var_name, default=None):
    """Get the environment variable or return default value"""
    val = os.environ.get(var_name, default)
    return True if val == 'true' else False if val == 'false' else val


def raise_setting_error(setting):
    raise ImproperlyConfigured('The {} setting is not set.'.format(setting))


# Use dotenv to load env variables from a .env file
dotenv.load_dotenv('{}/.env'.format(Path(__file__).ancestor(1)))

# Check required settings
required = ['SECRET_KEY']

for setting in required:
    if get_env_variable(setting) is None:
        raise_setting_error(setting)


PROJECT_DIR = '{}'.format(Path(__file__).ancestor(3))

# Path to the directory where log files go. Optional; if it's not set,
# only console logging is configured. Be sure this directory exists if
# you set it.
LOG_FILE_DIR = get_env_variable('LOG_FILE_DIR')

ALLOWED_HOSTS = get_env_variable('ALLOWED_HOSTS', '').split(' ')

TIME_ZONE = get_env_variable('TIME_ZONE', 'America/Chicago')

LANGUAGE_CODE = 'en-us'

USE_I18N = True

USE_TZ = True

# Make this unique, and don't share it with anybody.
SECRET_KEY = get_env_variable('SECRET_KEY')

INSTALLED_APPS = (
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'rest_framework',
    'holdings',
)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(levelname)s %(message)s'
        },
        'datetime': {
            'format': '%(asctime)s %(levelname)s %(message)s'
        }
    },
    'handlers': {
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'simple'
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'ERROR',
            'propagate': False,
        },
        'catalog.custom': {
            'handlers': ['console'],
            'level': get_env_variable('CATALOG_LOG_LEVEL', 'INFO'),
        },
    }
}

if LOG_FILE_DIR:
    LOGGING['handlers']['file'] = {
        'level': 'WARNING',
        'class': 'logging.FileHandler',
        'filename': '{}/catalog.log'.format(LOG_FILE_DIR),
        'formatter': 'datetime'
    }
    LOGGING['loggers']['catalog.custom']['handlers'].append('file')

# REST_FRAMEWORK settings
REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': (
        'utils.camel_case.render.CamelCaseJSONRenderer',
    ),
}


# Holdings app settings

# Item status rankings. The lower the value, the more important the
# status. When a copy carries more than one status, the most important
# one is displayed. Statuses not listed here get a rank of 32000.
HOLDINGS_STATUS_RANKINGS = {
    'Charged': 1,
    'On Hold': 2,
}

# Maps raw status tokens coming from a backend to the canonical status
# strings used for ranking and display. Unmapped tokens pass through.
HOLDINGS_STATUS_MAPPINGS = {
    'Item::CheckedOut': 'Charged',
    'Item::Held': 'On Hold',
    'Item::Lost': 'Lost--Library Applied',
    'Item::Transfer': 'In Transit',
    'Item::NotForLoan': 'On Reference Desk',
}

# Canonical statuses that mean a copy is available.
HOLDINGS_AVAILABLE_STATUSES = ('On Shelf', 'Available')

# Process types (per physical format, or '*' for any format) that cause
# a copy to be hidden from display entirely.
HOLDINGS_HIDDEN_PROCESS_TYPES = {}

# Priority order for branches (or branch/location combinations) and for
# locations within branches. Either a dict of code -> rank or a string
# like 'MAIN:EAST=5:MAIN/REF', where a bare code gets its position as
# its rank and `code=rank` sets the rank explicitly.
HOLDINGS_BRANCH_ORDER = get_env_variable('HOLDINGS_BRANCH_ORDER', '')
HOLDINGS_LOCATION_ORDER = get_env_variable('HOLDINGS_LOCATION_ORDER', '')

# Display serial issues newest-first within a location.
HOLDINGS_SORT_BY_ENUM_CHRON = get_env_variable('HOLDINGS_SORT_BY_ENUM_CHRON',
                                               True)

# If True, all copies of a title share one reservation queue, and the
# summary shows the longest queue; otherwise queue lengths are summed.
HOLDINGS_SINGLE_RESERVATION_QUEUE = get_env_variable(
    'HOLDINGS_SINGLE_RESERVATION_QUEUE', True)

# Whether holding placeholders (holdings with no copies) count toward
# the summary total.
HOLDINGS_COUNT_PLACEHOLDERS = get_env_variable('HOLDINGS_COUNT_PLACEHOLDERS',
                                               True)

# Whether each entry keeps its own request count, and whether the
# summary reports a reservation count.
HOLDINGS_DISPLAY_ITEM_HOLD_COUNTS = get_env_variable(
    'HOLDINGS_DISPLAY_ITEM_HOLD_COUNTS', True)
HOLDINGS_DISPLAY_TOTAL_HOLD_COUNT = get_env_variable(
    'HOLDINGS_DISPLAY_TOTAL_HOLD_COUNT', True)

# Location label resolution. With HOLDINGS_GROUP_BY_LOCATION, labels
# combine the branch name and the location name.
HOLDINGS_GROUP_BY_LOCATION = get_env_variable('HOLDINGS_GROUP_BY_LOCATION',
                                              False)
HOLDINGS_BRANCH_LABELS = {}
HOLDINGS_LOCATION_LABELS = {}

# Pickup rules, evaluated in order. See `holdings.pickup` for syntax.
HOLDINGS_PICKUP_RULES = []

# 'default' sorts pickup locations alphabetically; an order setting
# (same syntax as HOLDINGS_BRANCH_ORDER) puts the listed locations
# first; an empty value keeps the order of the location catalog.
HOLDINGS_PICKUP_LOCATION_ORDER = get_env_variable(
    'HOLDINGS_PICKUP_LOCATION_ORDER', 'default')
HOLDINGS_EXCLUDED_PICKUP_LOCATIONS = ()

HOLDINGS_HOME_ADDRESS_LABEL = 'Home address'
HOLDINGS_WORK_ADDRESS_LABEL = 'Work address'

# Is this settings file for testing?
TESTING = False
