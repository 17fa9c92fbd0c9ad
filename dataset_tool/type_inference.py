"""Per-value type inference and the coercion helpers shared by both parsers."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Optional, Union

import pandas as pd

from .models import ColumnType

# Shorter strings ("May", "12/1") are never treated as dates
MIN_DATE_LENGTH = 5

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DIGIT_RE = re.compile(r"[0-9]")
_WORD_START_RE = re.compile(r"\b\w")

Number = Union[int, float]


def to_number(token: Any) -> Optional[Number]:
    """Convert a text token to ``int``/``float`` when the whole token is numeric.

    Empty tokens, ``nan``/``inf`` spellings and ``1_000`` style groupings are
    not numbers, nor are non-ASCII digits. Integer spellings come back as
    ``int``; decimal and exponent spellings stay ``float`` (``"2.0"`` -> ``2.0``).
    """
    if not isinstance(token, str):
        return None
    text = token.strip()
    if not text or "_" in text or not text.isascii():
        return None
    if _INTEGER_RE.fullmatch(text):
        return int(text)
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def is_date(value: Any) -> bool:
    """True when ``value`` parses as a calendar date.

    A bare month or weekday name ("January") is not a date; the text must
    carry a day or year digit.
    """
    if isinstance(value, (datetime, date)):
        return True
    if not isinstance(value, str) or not _DIGIT_RE.search(value):
        return False
    try:
        stamp = pd.Timestamp(value)
    except (ValueError, TypeError, OverflowError):
        return False
    return stamp is not pd.NaT


def infer_column_type(value: Any) -> ColumnType:
    """Guess the column type from a single cell value.

    Dates win over numbers for strings, but only strings longer than
    ``MIN_DATE_LENGTH`` characters are considered dates.
    """
    if value is None or value == "":
        return ColumnType.STRING
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return ColumnType.BOOLEAN
    if isinstance(value, (int, float)):
        return ColumnType.NUMBER
    if isinstance(value, (datetime, date)):
        return ColumnType.DATE
    if not isinstance(value, str):
        return ColumnType.STRING

    if len(value) > MIN_DATE_LENGTH and is_date(value):
        return ColumnType.DATE
    if to_number(value) is not None:
        return ColumnType.NUMBER
    return ColumnType.STRING


def make_label(name: str) -> str:
    """``first_name`` -> ``First Name``; only word-initial letters change."""
    spaced = name.replace("_", " ")
    return _WORD_START_RE.sub(lambda match: match.group(0).upper(), spaced)
