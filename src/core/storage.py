"""
JSON file helpers for the command-line scripts.

Writes go to a temporary file in the same directory followed by os.replace,
so a crash never leaves a half-written data file.
"""

import os
import tempfile
from pathlib import Path


def load_text(path: Path, default: str) -> str:
    """File contents, or ``default`` if the file does not exist yet."""
    if not path.exists():
        return default
    return path.read_text(encoding="utf-8")


def save_text(path: Path, text: str) -> None:
    """Atomically replace ``path`` with ``text``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
