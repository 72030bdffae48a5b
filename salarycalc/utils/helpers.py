"""Shared utility functions — rounding and input sanitisation."""

from __future__ import annotations

import math
import re

# ── Financial helpers ─────────────────────────────────────────────────────

def round_currency(value: float, decimals: int = 2) -> float:
    """Round to *decimals* places (standard banker-friendly rounding)."""
    return round(value, decimals)


def round_half_up(value: float) -> int:
    """Round a non-negative score to the nearest integer, ties upward."""
    return math.floor(value + 0.5)


def monthly(annual: float) -> float:
    return annual / 12


# ── Sanitisation ──────────────────────────────────────────────────────────

_HTML_TAG = re.compile(r"<[^>]*>")
_CITY_DISALLOWED = re.compile(r"[^a-zA-Z\s\-'.,()]")
_COMPANY_DISALLOWED = re.compile(r"[^a-zA-Z0-9\s\-'.,()&]")


def sanitize_city(value: str | None, max_length: int = 100) -> str:
    """Keep letters, spaces and the punctuation found in city names.

    Markup is dropped before the character filter so that ``<b>Pune</b>``
    becomes ``Pune`` rather than ``bPuneb``.
    """
    if not value:
        return ""
    cleaned = _CITY_DISALLOWED.sub("", _HTML_TAG.sub("", value.strip()))
    return cleaned.strip()[:max_length]


def sanitize_company(value: str | None, max_length: int = 200) -> str:
    """Keep letters, digits, spaces and common company-name punctuation."""
    if not value:
        return ""
    cleaned = _COMPANY_DISALLOWED.sub("", _HTML_TAG.sub("", value.strip()))
    return cleaned.strip()[:max_length]
