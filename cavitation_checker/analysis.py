"""
Analysis pipeline for the Pump Cavitation Checker.

``analyze`` runs one complete pass over CSV text:

1. ``csv_parser.tokenize`` / ``split_layout``: lines into tables
2. sectioned files only: ``NpshrCurve`` fills NPSHr for each
   operating row from the reference curve
3. ``normalize_rows``: canonical numeric ``Record`` objects, with
   rows that are not fully numeric dropped
4. ``aggregate``: safe / at-risk tallies

Row-level problems never raise; they are listed in
``AnalysisResult.diagnostics``.  Only whole-file problems raise
``FormatError``.

``AnalysisSession`` owns the "current analysis" for a front end and
replaces it wholesale on every load.
"""

import os
import warnings
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .constants import (
    HEADER_ALIASES, CANONICAL_NPSHR_HEADER, FIELD_TEMPERATURE,
    FIELD_PRESSURE, FIELD_FLOW, FIELD_NPSHR, FIELD_NPSHA,
    LAYOUT_SECTIONED, LAYOUT_STANDARD, SECTION_CURVE,
)
from .csv_parser import (
    FormatError, CurveWarning, STANDARD_TABLE,
    parse_finite_float, read_csv_file, split_layout, tokenize,
)
from .data_model import AnalysisResult, PumpEnvelope, Record, SkipReason
from .header_resolver import resolve_value
from .npshr_curve import NpshrCurve


# ── Curve merge ──────────────────────────────────────────────────────────

def merge_curve(
    rows: Iterable[Mapping[str, str]], curve: NpshrCurve,
) -> List[Dict[str, str]]:
    """Copy *rows*, storing the curve's NPSHr under ``"NPSHr (m)"``.

    The interpolated value takes precedence over any NPSHr column of
    the operating data.  Rows whose flow is not a finite number are
    copied unchanged; normalisation drops them later.
    """
    merged = []
    for row in rows:
        out = dict(row)
        flow = parse_finite_float(resolve_value(row, FIELD_FLOW))
        if flow is not None:
            out[CANONICAL_NPSHR_HEADER] = repr(curve.interpolate(flow))
        merged.append(out)
    return merged


# ── Normalisation & classification ───────────────────────────────────────

def normalize_row(row: Mapping[str, str]) -> Optional[Record]:
    """Build a ``Record`` from *row*, or ``None`` if any field is unusable."""
    values = {}
    for field in HEADER_ALIASES:
        value = parse_finite_float(resolve_value(row, field))
        if value is None:
            return None
        values[field] = value

    return Record(
        temperature=values[FIELD_TEMPERATURE],
        pressure=values[FIELD_PRESSURE],
        flow=values[FIELD_FLOW],
        npsh_required=values[FIELD_NPSHR],
        npsh_available=values[FIELD_NPSHA],
        is_safe=values[FIELD_NPSHA] >= values[FIELD_NPSHR],
    )


def _describe_rejection(row: Mapping[str, str]) -> str:
    problems = []
    for field in HEADER_ALIASES:
        raw = resolve_value(row, field)
        if raw is None:
            problems.append(f"{field} column missing")
        elif parse_finite_float(raw) is None:
            problems.append(f"{field}={raw!r} is not a number")
    return "; ".join(problems)


def normalize_rows(
    rows: Iterable[Mapping[str, str]],
    *,
    line_numbers: Optional[Sequence[int]] = None,
    section: str = STANDARD_TABLE,
    diagnostics: Optional[list] = None,
) -> List[Record]:
    """Normalise and classify *rows*; incomplete rows are dropped whole."""
    rows = list(rows)
    numbers = list(line_numbers) if line_numbers is not None else [None] * len(rows)
    records: List[Record] = []
    for row, number in zip(rows, numbers):
        record = normalize_row(row)
        if record is None:
            if diagnostics is not None:
                diagnostics.append(
                    SkipReason(number, section, _describe_rejection(row))
                )
            continue
        records.append(record)
    return records


# ── Aggregation ──────────────────────────────────────────────────────────

def aggregate(
    records: Iterable[Record],
    *,
    layout: str = LAYOUT_STANDARD,
    curve: Optional[NpshrCurve] = None,
    diagnostics: Iterable[SkipReason] = (),
) -> AnalysisResult:
    """Tally *records* into an ``AnalysisResult``."""
    records = tuple(records)
    safe = 0
    unsafe = 0
    for record in records:
        if record.is_safe:
            safe += 1
        else:
            unsafe += 1
    return AnalysisResult(
        records=records,
        safe_count=safe,
        unsafe_count=unsafe,
        layout=layout,
        curve_points=curve.points if curve is not None else (),
        diagnostics=tuple(diagnostics),
    )


# ── Entry point ──────────────────────────────────────────────────────────

def analyze(text: str, *, strict_curve: bool = False) -> AnalysisResult:
    """Analyse CSV *text* and return the classified record set.

    Parameters
    ----------
    text : str
        Whole file contents.
    strict_curve : bool
        When a sectioned file has curve rows but no usable flow/NPSHr
        columns, raise ``FormatError`` instead of falling back to the
        operating data alone.

    Raises
    ------
    FormatError
        Fewer than two non-empty lines, or (strict mode) an unusable
        curve.

    Warns
    -----
    CurveWarning
        Non-strict fallback when the curve cannot be used.
    """
    diagnostics: List[SkipReason] = []
    parsed = split_layout(tokenize(text), diagnostics)
    operating = parsed.operating
    rows = operating.rows
    curve = None

    if parsed.layout == LAYOUT_SECTIONED and operating.rows and parsed.curve.rows:
        curve = NpshrCurve.from_table(parsed.curve, diagnostics)
        if curve is None:
            message = (
                "NPSHr curve section has no usable flow/NPSHr data; "
                "using operating data only"
            )
            if strict_curve:
                raise FormatError(message)
            diagnostics.append(SkipReason(None, SECTION_CURVE, message))
            warnings.warn(message, CurveWarning, stacklevel=2)
        else:
            rows = merge_curve(rows, curve)

    records = normalize_rows(
        rows,
        line_numbers=operating.line_numbers,
        section=operating.name,
        diagnostics=diagnostics,
    )
    return aggregate(
        records, layout=parsed.layout, curve=curve, diagnostics=diagnostics,
    )


# ── Session state ────────────────────────────────────────────────────────

class AnalysisSession:
    """Current analysis held on behalf of a front end.

    ``result`` is ``None`` until the first successful load.  A failed
    load raises and leaves the previous result in place; a successful
    one replaces it completely.
    """

    def __init__(self, envelope: Optional[PumpEnvelope] = None):
        self.result: Optional[AnalysisResult] = None
        self.source = ""
        self.envelope = envelope

    @property
    def is_loaded(self) -> bool:
        return self.result is not None

    def load_text(
        self, text: str, source: str = "", *, strict_curve: bool = False,
    ) -> AnalysisResult:
        result = analyze(text, strict_curve=strict_curve)
        self.replace(result, source)
        return result

    def load_file(
        self, filepath: str, *, strict_curve: bool = False,
    ) -> AnalysisResult:
        """Read and analyse *filepath*.

        ``OSError`` from reading propagates before any analysis runs.
        """
        text = read_csv_file(filepath)
        return self.load_text(
            text, os.path.basename(filepath), strict_curve=strict_curve,
        )

    def replace(self, result: AnalysisResult, source: str = "") -> None:
        self.result = result
        self.source = source

    def reset(self) -> None:
        """Forget the current analysis (the pump envelope is kept)."""
        self.result = None
        self.source = ""
