"""
Header resolution for the Pump Cavitation Checker.

Maps the column names found in a CSV (French or English, with or
without units) onto the canonical record fields declared in
``constants.HEADER_ALIASES``.  Resolution is per row and per field;
a field with no matching column simply resolves to ``None``.
"""

from typing import Dict, Iterable, Mapping, Optional

from .constants import HEADER_ALIASES


def resolve_value(row: Mapping[str, str], field: str) -> Optional[str]:
    """Return the cell for canonical *field*, trying aliases in order.

    >>> resolve_value({"Flow Rate": "12", "Flow (m3/h)": "15"}, "flow")
    '15'
    """
    for alias in HEADER_ALIASES[field]:
        if alias in row:
            return row[alias]
    return None


def resolve_row(row: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Resolve every canonical field of *row* (``None`` when absent)."""
    return {field: resolve_value(row, field) for field in HEADER_ALIASES}


def find_header(header: Iterable[str], keywords) -> Optional[str]:
    """First header whose lower-cased name contains one of *keywords*.

    *keywords* may be a single string or a sequence of strings.
    """
    if isinstance(keywords, str):
        keywords = (keywords,)
    for name in header:
        low = name.lower()
        if any(kw in low for kw in keywords):
            return name
    return None
