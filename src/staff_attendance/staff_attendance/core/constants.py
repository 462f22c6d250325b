"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_LIST_LIMIT = 20
MAX_LIST_LIMIT = 100

# Branch settings used when none are stored (read path only).
DEFAULT_WORK_START_TIME = time(9, 0)
DEFAULT_WORK_END_TIME = time(17, 0)
DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_HALF_DAY_THRESHOLD_HOURS = 4.0

MAX_LATE_THRESHOLD_MINUTES = 120
MAX_HALF_DAY_THRESHOLD_HOURS = 12.0

MAX_REASON_LENGTH = 1000
MAX_REMARKS_LENGTH = 500

REMARKS_SEPARATOR = "; "
REGULARIZED_REMARKS_PREFIX = "Regularized: "
