"""Constants and defaults.

Note: statutory leave numbers live here so the calculator has no magic numbers.
"""

BASE_ANNUAL_LEAVE_DAYS = 15
MAX_BONUS_LEAVE_DAYS = 10
MAX_MONTHLY_LEAVE_DAYS = 11
HALF_DAY_LEAVE = 0.5

BUSINESS_TIMEZONE = "Asia/Seoul"
DATE_FORMAT = "%Y-%m-%d"

DEFAULT_LIST_LIMIT = 200
