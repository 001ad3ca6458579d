"""
Cell normalization: currency text, item counts, status canonicalization.

Every function here is total. A garbled cell becomes 0 / "unknown" rather
than failing the whole data set.
"""
from __future__ import annotations

import math
import re
from dataclasses import asdict
from typing import Any, Iterable

import pandas as pd

from clientorbit.config import COLUMN_MAP, STATUS_BUCKETS
from clientorbit.data.schemas import CanonicalStatus, ClientRecord


_NON_NUMERIC_RE = re.compile(r"[^\d.\-]")
_DECIMAL_PREFIX_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")
_INTEGER_PREFIX_RE = re.compile(r"\s*([+-]?\d+)")

# item counts land in an int64 column
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


# ---------------------------------------------------------------------------
# Scalar normalizers
# ---------------------------------------------------------------------------

def normalize_currency(text: Any) -> float:
    """"$12,500" → 12500.0. Always returns a finite, non-negative float."""
    if text is None:
        return 0.0
    cleaned = _NON_NUMERIC_RE.sub("", str(text))
    m = _DECIMAL_PREFIX_RE.match(cleaned)
    if not m:
        return 0.0
    try:
        value = float(m.group(0))
    except ValueError:
        return 0.0
    if math.isnan(value) or math.isinf(value) or value < 0:
        return 0.0
    return value


def normalize_integer(text: Any) -> int:
    """Leading integer digits, like "25 units" → 25. Returns 0 on failure.

    Results are clamped to the int64 range.
    """
    if isinstance(text, bool) or text is None:
        return 0
    if isinstance(text, int):
        value = text
    elif isinstance(text, float):
        if math.isnan(text) or math.isinf(text):
            return 0
        value = int(text)
    else:
        m = _INTEGER_PREFIX_RE.match(str(text))
        if not m:
            return 0
        digits = m.group(1)
        if len(digits.lstrip("+-")) > 19:
            return _INT64_MIN if digits.startswith("-") else _INT64_MAX
        value = int(digits)
    return max(_INT64_MIN, min(value, _INT64_MAX))


def normalize_status(text: Any) -> CanonicalStatus:
    """Map free-text status onto a canonical bucket (substring match)."""
    lowered = str(text or "").lower()
    for bucket, keywords in STATUS_BUCKETS:
        if any(kw in lowered for kw in keywords):
            return CanonicalStatus(bucket)
    return CanonicalStatus.UNKNOWN


# ---------------------------------------------------------------------------
# Frame normalization
# ---------------------------------------------------------------------------

def normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Add revenue / items / canonical_status columns to a records frame."""
    df = df.copy()
    if df.empty:
        df["revenue"] = pd.Series(dtype="float64")
        df["items"] = pd.Series(dtype="int64")
        df["canonical_status"] = pd.Series(dtype=object)
        return df

    df["revenue"] = df["total_value"].map(normalize_currency).astype("float64")
    df["items"] = df["item_count"].map(normalize_integer).astype("int64")
    df["canonical_status"] = df["status"].map(lambda s: normalize_status(s).value)
    return df


def records_to_frame(records: Iterable[ClientRecord]) -> pd.DataFrame:
    """Records → DataFrame with one column per attribute, in source order."""
    return pd.DataFrame([asdict(r) for r in records], columns=list(COLUMN_MAP.values()))
