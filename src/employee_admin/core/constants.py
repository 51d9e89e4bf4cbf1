"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LOG_LIMIT = 100
MAX_LOG_LIMIT = 1000
MAX_STATS_DAYS = 3650
DEFAULT_STATS_DAYS = 30
VERIFICATION_TOKEN_HOURS = 24
MIN_PASSWORD_LENGTH = 6
ANONYMOUS_USERNAME = "Unknown"

# MySQL ER_DUP_ENTRY
MYSQL_DUPLICATE_KEY_ERRNO = 1062
