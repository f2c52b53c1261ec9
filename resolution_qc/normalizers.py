"""
Normalization helpers for comparing values across documents.

Extractors return tax IDs and amounts in whatever form they appear on the
page ("76.123.456-7", "$1.190.000", "1.190.000,50"). The functions here
turn them into canonical forms the rules can compare. None of them raise:
unusable input maps to an empty string or to the NaN sentinel.
"""

import math
import re
import unicodedata
from typing import Any

from .config import AMOUNT_CURRENCY_SYMBOL


# Sentinel for amounts that are missing or cannot be parsed
NOT_A_NUMBER: float = math.nan

# Plain decimal after separators have been normalized: "1190000", "-12.5", ".5"
_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")
_NON_ALPHANUMERIC = re.compile(r"[\W_]+", re.UNICODE)


# ============================================================================
# Tax Identifiers
# ============================================================================

def normalize_tax_id(value: Any) -> str:
    """
    Canonicalize a tax ID for comparison.

    Strips dots, hyphens, whitespace and any other punctuation and lowercases
    the check digit. "76.123.456-K" and "76123456-k" both become "76123456k".
    Missing input gives an empty string, which callers treat as absent.
    """
    if not isinstance(value, str) or not value:
        return ""
    return _NON_ALPHANUMERIC.sub("", value).lower()


def tax_ids_match(left: Any, right: Any) -> bool:
    """Exact match of two tax IDs after normalization; absent IDs never match."""
    normalized_left = normalize_tax_id(left)
    return bool(normalized_left) and normalized_left == normalize_tax_id(right)


# ============================================================================
# Amounts
# ============================================================================

def _strip_currency(text: str) -> str:
    return "".join(
        ch for ch in text
        if not ch.isspace() and unicodedata.category(ch) != "Sc"
    )


def normalize_amount(value: Any) -> float:
    """
    Convert a number or a Chilean-formatted money string to a number.

    Currency symbols and whitespace are removed, dots are treated as thousands
    separators and a decimal comma becomes a decimal point:

        "$1.190.000"   -> 1190000
        "1.190.000,50" -> 1190000.5

    Returns NOT_A_NUMBER when the value is missing or unparseable.
    """
    if isinstance(value, bool):
        return NOT_A_NUMBER

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return value if math.isfinite(value) else NOT_A_NUMBER

    if not isinstance(value, str):
        return NOT_A_NUMBER

    cleaned = _strip_currency(value).replace(".", "").replace(",", ".")
    if not _DECIMAL_PATTERN.match(cleaned):
        return NOT_A_NUMBER

    if "." not in cleaned:
        try:
            return int(cleaned)
        except ValueError:
            # longer than the interpreter's int-string conversion limit
            return NOT_A_NUMBER

    number = float(cleaned)
    return number if math.isfinite(number) else NOT_A_NUMBER


def is_valid_amount(value: float) -> bool:
    """True unless the value is the NaN sentinel."""
    return not (isinstance(value, float) and math.isnan(value))


def format_amount(value: float) -> str:
    """
    Render an amount the way it is printed on Chilean documents.

    Thousands are grouped with dots and decimals use a comma, with at most
    three fraction digits: 1190000 -> "$1.190.000", 1234.5 -> "$1.234,5".
    """
    if isinstance(value, int):
        grouped = f"{value:,}"
    elif value.is_integer():
        grouped = f"{int(value):,}"
    else:
        grouped = f"{value:,.3f}".rstrip("0").rstrip(".")
    body = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{AMOUNT_CURRENCY_SYMBOL}{body}"


# ============================================================================
# Presence
# ============================================================================

def has_value(value: Any) -> bool:
    """A field counts as present unless it is None, blank, or NaN."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, float):
        return not math.isnan(value)
    return True
