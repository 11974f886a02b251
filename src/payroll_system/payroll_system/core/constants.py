"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

# Default salary structure (used only when a caller opts into it)
DEFAULT_WAGE = 50000
DEFAULT_BASIC_RATIO = 0.5
DEFAULT_HRA_RATIO = 0.3
DEFAULT_STD_ALLOWANCE_RATIO = 0.1
DEFAULT_FIXED_ALLOWANCE_RATIO = 0.1
DEFAULT_PF_RATIO_OF_BASIC = 0.12
DEFAULT_PROFESSIONAL_TAX = 200

# Professional tax is charged in full only from this many payable days
PROF_TAX_MIN_PAYABLE_DAYS = 20

LATE_CHECK_IN_THRESHOLD = time(9, 30)

ANNUAL_LEAVE_QUOTA = 12

DEFAULT_HISTORY_LIMIT = 12

# Python weekday(): Monday=0 ... Sunday=6
WEEKEND_WEEKDAYS = frozenset({5, 6})
