#!/usr/bin/env python3
"""Create empty todo, timecard and project definition data files."""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import PROJECT_DEFINITIONS_PATH, TIMECARD_PATH, TODOS_PATH
from core.storage import save_text

EMPTY_FILES = {
    TODOS_PATH: "[]",
    TIMECARD_PATH: "{}",
    PROJECT_DEFINITIONS_PATH: "{}",
}


def create_data_files():
    """Create any missing data file; existing files are left untouched."""
    for path, content in EMPTY_FILES.items():
        if path.exists():
            print(f"Exists, skipped: {path}")
            continue
        save_text(path, content)
        print(f"Created: {path}")


if __name__ == "__main__":
    create_data_files()
