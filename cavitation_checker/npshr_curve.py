"""
NPSHr reference curve for the Pump Cavitation Checker.

A vendor NPSHr curve is usually a handful of (flow, NPSHr) points in
no particular order.  ``NpshrCurve`` sorts them by flow and answers
"what NPSH does the pump require at this flow?" by piecewise-linear
interpolation, holding the end values flat outside the curve.

Duplicate flows are kept as given (stable sort).  A query that hits a
duplicated flow exactly returns the first point listed at that flow;
between points, the last point strictly below the query and the first
point at or above it bound the interpolation.
"""

import math
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .constants import CURVE_FLOW_KEYWORDS, CURVE_NPSHR_KEYWORD
from .csv_parser import SectionTable, parse_finite_float
from .data_model import CurvePoint, SkipReason
from .header_resolver import find_header


class NpshrCurve:
    """Sorted NPSHr curve with flat-extrapolated linear interpolation.

    Parameters
    ----------
    points : iterable of CurvePoint or (flow, npshr) pairs
        At least one point; every value must be finite.

    Raises
    ------
    ValueError
        If *points* is empty or contains a non-finite value.
    """

    def __init__(self, points: Iterable[Tuple[float, float]]):
        pts = [CurvePoint(float(f), float(n)) for f, n in points]
        if not pts:
            raise ValueError("An NPSHr curve needs at least one point.")
        flows = np.array([p.flow for p in pts], dtype=float)
        npshr = np.array([p.npsh_required for p in pts], dtype=float)
        if not (np.all(np.isfinite(flows)) and np.all(np.isfinite(npshr))):
            raise ValueError("NPSHr curve points must be finite numbers.")

        order = np.argsort(flows, kind='stable')
        self._flows = flows[order]
        self._npshr = npshr[order]

    # ── Construction from a parsed CSV section ───────────────────────

    @classmethod
    def from_rows(
        cls,
        header: Sequence[str],
        rows: Iterable[Mapping[str, str]],
        *,
        line_numbers: Optional[Sequence[int]] = None,
        section: str = "npshr curve",
        diagnostics: Optional[list] = None,
    ) -> Optional["NpshrCurve"]:
        """Build a curve from raw section rows, or ``None``.

        The flow column is the first header containing a flow keyword
        (``flow`` / ``débit``), the NPSHr column the first containing
        ``npshr`` (both case-insensitive).  Rows without a finite flow
        and NPSHr are skipped.  Returns ``None`` when either column is
        missing or no row survives.
        """
        flow_col = find_header(header, CURVE_FLOW_KEYWORDS)
        npshr_col = find_header(header, CURVE_NPSHR_KEYWORD)
        if flow_col is None or npshr_col is None:
            if diagnostics is not None:
                missing = [
                    name for name, col in (("flow", flow_col),
                                           ("NPSHr", npshr_col))
                    if col is None
                ]
                diagnostics.append(SkipReason(
                    None, section,
                    f"no {' or '.join(missing)} column in curve header "
                    f"{list(header)}",
                ))
            return None

        points: List[CurvePoint] = []
        rows = list(rows)
        numbers = list(line_numbers) if line_numbers is not None else [None] * len(rows)
        for row, number in zip(rows, numbers):
            flow = parse_finite_float(row.get(flow_col))
            npshr = parse_finite_float(row.get(npshr_col))
            if flow is None or npshr is None:
                if diagnostics is not None:
                    diagnostics.append(SkipReason(
                        number, section,
                        f"curve point needs numeric '{flow_col}' and "
                        f"'{npshr_col}'",
                    ))
                continue
            points.append(CurvePoint(flow, npshr))

        if not points:
            return None
        return cls(points)

    @classmethod
    def from_table(
        cls, table: SectionTable, diagnostics: Optional[list] = None,
    ) -> Optional["NpshrCurve"]:
        """Shortcut for ``from_rows`` on a ``SectionTable``."""
        return cls.from_rows(
            table.header or [], table.rows,
            line_numbers=table.line_numbers,
            section=table.name,
            diagnostics=diagnostics,
        )

    # ── Accessors ────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._flows)

    @property
    def points(self) -> Tuple[CurvePoint, ...]:
        return tuple(
            CurvePoint(float(f), float(n))
            for f, n in zip(self._flows, self._npshr)
        )

    @property
    def flow_range(self) -> Tuple[float, float]:
        return float(self._flows[0]), float(self._flows[-1])

    # ── Interpolation ────────────────────────────────────────────────

    def interpolate(self, flow: float) -> float:
        """Required NPSH at *flow*.

        Exact curve flows return their own NPSHr; flows below / above
        the curve return the first / last point's NPSHr.

        Raises ``ValueError`` for a non-finite *flow*.
        """
        f = float(flow)
        if not math.isfinite(f):
            raise ValueError(f"Cannot interpolate at non-finite flow {flow!r}")

        # idx = first point with flow >= f
        idx = int(np.searchsorted(self._flows, f, side='left'))
        n = len(self._flows)

        if idx < n and self._flows[idx] == f:
            return float(self._npshr[idx])
        if idx == 0:
            return float(self._npshr[0])
        if idx == n:
            return float(self._npshr[-1])

        lo_flow, hi_flow = self._flows[idx - 1], self._flows[idx]
        lo, hi = self._npshr[idx - 1], self._npshr[idx]
        return float(lo + (f - lo_flow) * (hi - lo) / (hi_flow - lo_flow))

    __call__ = interpolate
