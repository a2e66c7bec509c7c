"""
CSV parser for the Pump Cavitation Checker.

Turns raw file text into header/row tables.  Handles:

- UTF-8 BOM markers and surrounding whitespace
- Plain layout (one header row, then data rows)
- Sectioned layout, where ``#operating data`` and ``#npshr curve``
  directive lines introduce two independent tables in one file
- Rows whose field count differs from their header (skipped)

Fields are split on bare commas and trimmed.  There is no quoting
support: a literal comma inside a value shifts the columns and the
row is dropped by the field-count check.
"""

import math
import os
import re
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional

from .constants import (
    SECTION_MARKER, SECTION_OPERATING, SECTION_CURVE, KNOWN_SECTIONS,
    LAYOUT_STANDARD, LAYOUT_SECTIONED,
)
from .data_model import SkipReason

# Table name used for diagnostics on plain (non-sectioned) files
STANDARD_TABLE = "data"

# Only CR, LF and CRLF end a row; other Unicode breaks stay in the cell
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class FormatError(ValueError):
    """The input text cannot be analysed as a whole."""


class CurveWarning(UserWarning):
    """A sectioned file carries an NPSHr curve that cannot be used."""


class CsvLine(NamedTuple):
    """One non-blank input line.

    ``section`` holds the lower-cased section name when the line is a
    ``#`` directive, ``None`` for ordinary lines.
    """
    number: int
    fields: List[str]
    section: Optional[str]


# ── Numeric cells ────────────────────────────────────────────────────────

def parse_finite_float(text: Optional[str]) -> Optional[float]:
    """Parse a cell as a finite float, or return ``None``.

    Blank cells, non-numeric text, ``nan`` and ``inf`` all count as
    missing, they are not valid operating data.
    """
    if text is None:
        return None
    s = text.strip()
    if not s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


# ── File access ──────────────────────────────────────────────────────────

def is_csv_path(filepath: str) -> bool:
    """``True`` when *filepath* carries a ``.csv`` extension (any case)."""
    return os.path.splitext(filepath)[1].lower() == '.csv'


def read_csv_file(filepath: str) -> str:
    """Read *filepath* as UTF-8 text (BOM tolerated).

    Raises ``OSError`` (including ``FileNotFoundError``) when the file
    cannot be read; the analysis is never attempted in that case.
    """
    try:
        with open(filepath, 'r', encoding='utf-8-sig') as fh:
            return fh.read()
    except UnicodeDecodeError as exc:
        raise OSError(f"'{filepath}' is not UTF-8 text: {exc.reason}") from exc


# ── Tokenizer ────────────────────────────────────────────────────────────

def _split_fields(line: str) -> List[str]:
    return [f.strip() for f in line.split(',')]


def _section_name(fields: List[str]) -> Optional[str]:
    # Only the first field counts, so "#NPSHr Curve,,," from a
    # spreadsheet export is still recognised.
    first = fields[0]
    if first.startswith(SECTION_MARKER):
        return first[len(SECTION_MARKER):].strip().lower()
    return None


def _iter_lines(lines: List[str]) -> Iterator[CsvLine]:
    for number, raw in enumerate(lines, start=1):
        stripped = raw.strip()
        if not stripped:
            continue
        fields = _split_fields(stripped)
        yield CsvLine(number, fields, _section_name(fields))


def tokenize(text: str) -> Iterator[CsvLine]:
    """Split *text* into trimmed comma-separated lines.

    The structural check runs immediately; the returned iterator is
    lazy and single-pass.

    Raises
    ------
    FormatError
        If fewer than two non-empty lines remain after trimming.
    """
    lines = _LINE_BREAK.split(text.lstrip('\ufeff').strip())
    if sum(1 for line in lines if line.strip()) < 2:
        raise FormatError(
            "CSV file must contain at least a header and one data row"
        )
    return _iter_lines(lines)


# ── Layout detection & section routing ───────────────────────────────────

class SectionTable:
    """Header plus accepted rows for one table of the input.

    The first line fed in becomes the header; later lines are kept only
    when their field count matches it.
    """

    def __init__(self, name: str):
        self.name = name
        self.header: Optional[List[str]] = None
        self.rows: List[Dict[str, str]] = []
        self.line_numbers: List[int] = []

    def __len__(self) -> int:
        return len(self.rows)

    def feed(self, line: CsvLine, diagnostics: Optional[list] = None) -> None:
        if self.header is None:
            self.header = list(line.fields)
            return
        if len(line.fields) != len(self.header):
            if diagnostics is not None:
                diagnostics.append(SkipReason(
                    line.number, self.name,
                    f"expected {len(self.header)} fields, "
                    f"found {len(line.fields)}",
                ))
            return
        self.rows.append(dict(zip(self.header, line.fields)))
        self.line_numbers.append(line.number)


class ParsedLayout(NamedTuple):
    layout: str
    operating: SectionTable
    curve: Optional[SectionTable]


def split_layout(
    lines: Iterable[CsvLine],
    diagnostics: Optional[list] = None,
) -> ParsedLayout:
    """Route tokenized lines into tables.

    Without any ``#`` directive the whole input is one table.  With
    directives, lines are routed to the ``operating data`` and
    ``npshr curve`` tables; anything under another name (or before the
    first directive) is discarded.

    Parameters
    ----------
    lines : iterable of CsvLine
        Output of ``tokenize``.
    diagnostics : list, optional
        Receives a ``SkipReason`` for every discarded line.
    """
    lines = list(lines)

    if not any(line.section is not None for line in lines):
        table = SectionTable(STANDARD_TABLE)
        for line in lines:
            table.feed(line, diagnostics)
        return ParsedLayout(LAYOUT_STANDARD, table, None)

    tables = {name: SectionTable(name) for name in KNOWN_SECTIONS}
    current = None
    for line in lines:
        if line.section is not None:
            current = line.section
            if current not in tables and diagnostics is not None:
                diagnostics.append(SkipReason(
                    line.number, current,
                    "unrecognised section, its lines are ignored",
                ))
            continue
        table = tables.get(current)
        if table is None:
            if current is None and diagnostics is not None:
                diagnostics.append(SkipReason(
                    line.number, "(none)",
                    "line appears before the first section marker",
                ))
            continue
        table.feed(line, diagnostics)

    return ParsedLayout(
        LAYOUT_SECTIONED, tables[SECTION_OPERATING], tables[SECTION_CURVE],
    )
