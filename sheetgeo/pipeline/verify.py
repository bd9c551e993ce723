"""Dirty-data checks on cached CSV exports."""

from __future__ import annotations

from pathlib import Path

from sheetgeo.common.constants import DIRTY_DATA_MARKERS
from sheetgeo.common.fs import read_text


def verify_clean_data(path: Path) -> str | None:
    """Return a warning for the first dirty-data marker found in ``path``, else None.

    ``#REF!`` is checked before ``Loading``; only one warning is reported.
    """
    text = read_text(path)
    for marker, label in DIRTY_DATA_MARKERS:
        if marker in text:
            return f"{label} found in {path}"
    return None
