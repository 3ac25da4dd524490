"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ENTRY_TIME = "08:00"
DEFAULT_EXIT_TIME = "16:00"
DEFAULT_LOG_START_TIME = "08:00"
DEFAULT_LOG_END_TIME = "09:00"

DATE_DISPLAY_FORMAT = "%Y/%m/%d"

DEFAULT_STORE_SLOT = "factory_logs"
DEFAULT_STORE_LATENCY = {"fetch": 0.8, "upsert": 1.0, "remove": 0.6}

SAVED_INDICATOR_SECONDS = 2.0

EXPORT_SHEET_NAME = "گزارش کارکرد"
EXPORT_FILENAME_PREFIX = "Factory_Report_"
