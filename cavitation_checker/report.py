"""
Text formatting for the results table, statistics panel and banners.

Shared by the GUI and the command line so both show identical numbers.
"""

from typing import List

from .constants import TABLE_COLUMNS, STATUS_COLUMN
from .data_model import AnalysisResult, Record


def table_headers() -> List[str]:
    return [header for header, _, _ in TABLE_COLUMNS] + [STATUS_COLUMN]


def format_record_row(record: Record) -> List[str]:
    """Cells for one table row: fixed decimals, then the status label."""
    cells = [
        f"{getattr(record, attr):.{decimals}f}"
        for _, attr, decimals in TABLE_COLUMNS
    ]
    cells.append(record.status)
    return cells


def summary_lines(result: AnalysisResult) -> List[str]:
    lines = [
        f"Total records:    {result.total}",
        f"Safe:             {result.safe_count}",
        f"Cavitation risk:  {result.unsafe_count}",
        f"Risk percentage:  {result.risk_percentage:.1f}%",
    ]
    if result.has_curve:
        lo = result.curve_points[0].flow
        hi = result.curve_points[-1].flow
        lines.append(
            f"NPSHr curve:      {len(result.curve_points)} points "
            f"({lo:g}–{hi:g} m3/h)"
        )
    return lines


def format_table(result: AnalysisResult) -> str:
    """Plain-text table of all records, column widths fitted to content."""
    headers = table_headers()
    rows = [format_record_row(r) for r in result.records]
    widths = [
        max(len(headers[i]), *(len(row[i]) for row in rows)) if rows
        else len(headers[i])
        for i in range(len(headers))
    ]
    out = ["  ".join(h.ljust(w) for h, w in zip(headers, widths))]
    out.append("  ".join("-" * w for w in widths))
    for row in rows:
        out.append("  ".join(c.rjust(w) for c, w in zip(row, widths)))
    return "\n".join(out)


def load_message(result: AnalysisResult, source: str = "") -> str:
    """Success banner for one load attempt."""
    if source:
        return f"Successfully loaded {result.total} records from {source}"
    return f"Successfully loaded {result.total} records"


def error_message(exc: BaseException) -> str:
    """Failure banner for one load attempt."""
    return f"Error reading file: {exc}"
