"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.environ.get("WORKLOG_DATA_DIR", str(PROJECT_ROOT / "data")))
TODOS_PATH = DATA_DIR / "todos.json"
TIMECARD_PATH = DATA_DIR / "timecard.json"
PROJECT_DEFINITIONS_PATH = DATA_DIR / "project-definitions.json"
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# TIME CONFIGURATION
# =============================================================================

# Display timezone offset from UTC (JST in the reference deployment)
DISPLAY_UTC_OFFSET_HOURS = int(os.environ.get("DISPLAY_UTC_OFFSET_HOURS", "9"))

CANONICAL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

DEFAULT_ITEM_COLOR = "#9ca3af"  # neutral gray for items without a project
STACK_BAR_BASE_HOURS = 12
DATE_GROUP_DAYS_BACK = 35

EXECUTION_HEADERS = ["Task Code", "Task", "Hours", "Color"]
TIMECARD_HEADERS = ["Type", "Time"]

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

CALENDAR_FETCH_COMMAND = os.environ.get(
    "CALENDAR_FETCH_COMMAND", "node scripts/fetch-calendar-events.mjs"
)
