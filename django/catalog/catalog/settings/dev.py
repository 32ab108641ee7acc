# MOST of the settings you'll need to set will be in your .env file,
# which is kept out of version control, or your environment variables.

from .base import *

DEBUG = True

# The logging setup from base.py will be used by default, but you can set
# up your own loggers here, if you'd like, to override the default setup.
#
# LOGGING = {}

LOGGING['loggers']['catalog.custom']['level'] = 'DEBUG'
