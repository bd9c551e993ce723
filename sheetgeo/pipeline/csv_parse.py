"""CSV parsing with per-cell type inference.

Cells are mapped onto a small value variant:

* ``""`` becomes ``None``
* ``true``/``True``/``TRUE`` and the ``false`` spellings become booleans
* integer lexemes become ``int``, other numeric lexemes become ``float``,
  as long as their magnitude is below 2**53
* everything else stays the original string
"""

from __future__ import annotations

import csv
import io
import math
import re

from sheetgeo.common.errors import ParseError
from sheetgeo.common.models import CellValue, Record

EXTRA_FIELDS_KEY = "__parsed_extra"

_TRUE_TOKENS = {"true", "True", "TRUE"}
_FALSE_TOKENS = {"false", "False", "FALSE"}
_INT_RE = re.compile(r"^\s*-?\d+\s*$")
_FLOAT_RE = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")
# Numeric lexemes at or above this magnitude stay text.
_MAX_EXACT_NUMBER = 2**53


def infer_value(raw: str | None) -> CellValue:
    if raw is None or raw == "":
        return None
    if raw in _TRUE_TOKENS:
        return True
    if raw in _FALSE_TOKENS:
        return False
    if _INT_RE.match(raw):
        value = int(raw)
        if abs(value) < _MAX_EXACT_NUMBER:
            return value
        return raw
    if _FLOAT_RE.match(raw):
        value = float(raw)
        if math.isfinite(value) and abs(value) < _MAX_EXACT_NUMBER:
            return value
    return raw


def _typed_row(row: dict) -> Record:
    record: Record = {}
    for key, value in row.items():
        if key == EXTRA_FIELDS_KEY:
            record[key] = [infer_value(v) for v in value]
        else:
            record[key] = infer_value(value)
    return record


def parse_csv(text: str) -> list[Record]:
    """Parse header-first CSV ``text`` into one typed record per data row.

    Short rows are padded with ``None``; surplus cells land under
    ``__parsed_extra``. Blank lines are skipped.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    reader = csv.DictReader(io.StringIO(text, newline=""), restkey=EXTRA_FIELDS_KEY, restval=None)
    try:
        return [_typed_row(row) for row in reader]
    except csv.Error as exc:
        raise ParseError(f"Unreadable CSV at line {reader.line_num}: {exc}") from exc
