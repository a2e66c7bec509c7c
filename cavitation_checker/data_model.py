"""
Data model for the Pump Cavitation Checker.

Immutable dataclasses representing one analysis pass over a pump
operating-point CSV.  Records are built once by ``analysis`` and never
mutated; the results table and chart renderers receive them read-only.
A new load replaces the whole ``AnalysisResult``.

Raw rows are plain ``dict`` objects (header -> cell text, in column
order); only accepted, fully numeric rows become ``Record`` objects.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, NamedTuple, Optional, Tuple

from .constants import STATUS_SAFE, STATUS_RISK, LAYOUT_STANDARD


class CurvePoint(NamedTuple):
    """One point of the NPSHr reference curve."""
    flow: float
    npsh_required: float


@dataclass(frozen=True)
class Record:
    """A single classified pump operating point.

    Parameters
    ----------
    temperature : float
        Fluid temperature (°C).
    pressure : float
        Suction pressure (bar).
    flow : float
        Flow rate (m3/h).
    npsh_required : float
        NPSH required (m), either read from the row or interpolated
        from the reference curve.
    npsh_available : float
        NPSH available (m).
    is_safe : bool
        ``npsh_available >= npsh_required``; equality counts as safe.
    """
    temperature: float
    pressure: float
    flow: float
    npsh_required: float
    npsh_available: float
    is_safe: bool

    @property
    def npsh_margin(self) -> float:
        return self.npsh_available - self.npsh_required

    @property
    def status(self) -> str:
        return STATUS_SAFE if self.is_safe else STATUS_RISK


@dataclass(frozen=True)
class SkipReason:
    """Why an input line or row did not become a ``Record``.

    ``line`` is the 1-based line number in the (stripped) input text,
    or ``None`` for conditions that concern a whole section.
    """
    line: Optional[int]
    section: str
    reason: str

    def __str__(self) -> str:
        where = f"line {self.line}" if self.line is not None else "file"
        return f"[{self.section}] {where}: {self.reason}"


@dataclass(frozen=True)
class PumpEnvelope:
    """Pump operating-envelope metadata used to annotate the chart.

    Never consulted by the classification: records are judged only
    on NPSHa vs NPSHr.

    Parameters
    ----------
    pump_type : str
        Pump type designation, e.g. ``"OH2"``.
    rated_flow : float
        Best-efficiency / rated flow (m3/h).
    aor_min, aor_max : float
        Allowable Operating Range bounds (m3/h).
    por_min, por_max : float
        Preferred Operating Range bounds (m3/h).
    rated_npshr : float
        NPSHr at rated flow (m).
    """
    pump_type: str
    rated_flow: float
    aor_min: float
    aor_max: float
    por_min: float
    por_max: float
    rated_npshr: float

    @classmethod
    def from_mapping(cls, data: Dict) -> "PumpEnvelope":
        """Build an envelope from a dict such as ``DEFAULT_ENVELOPE``.

        Raises ``ValueError`` when a numeric entry is missing or not
        a number.
        """
        numeric = {}
        for name in ('rated_flow', 'aor_min', 'aor_max',
                     'por_min', 'por_max', 'rated_npshr'):
            if name not in data:
                raise ValueError(f"Pump envelope is missing '{name}'.")
            try:
                numeric[name] = float(data[name])
            except (TypeError, ValueError):
                raise ValueError(
                    f"Pump envelope value '{name}' is not a number: "
                    f"{data[name]!r}"
                ) from None
        return cls(pump_type=str(data.get('pump_type', '')), **numeric)

    def to_dict(self) -> Dict:
        return asdict(self)

    def validate(self) -> List[str]:
        """Return a list of consistency problems (empty when valid).

        Expected ordering: ``aor_min <= por_min <= rated_flow <=
        por_max <= aor_max``.
        """
        problems = []
        if self.aor_min > self.aor_max:
            problems.append("AOR minimum exceeds AOR maximum.")
        if self.por_min > self.por_max:
            problems.append("POR minimum exceeds POR maximum.")
        if self.por_min < self.aor_min or self.por_max > self.aor_max:
            problems.append("POR must lie inside the AOR.")
        if not (self.por_min <= self.rated_flow <= self.por_max):
            problems.append("Rated flow should lie inside the POR.")
        if self.rated_npshr < 0:
            problems.append("Rated NPSHr cannot be negative.")
        return problems


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis pass.

    Parameters
    ----------
    records : tuple of Record
        Accepted records in input order.
    safe_count, unsafe_count : int
        Tallies over ``records``.
    layout : str
        ``"standard"`` or ``"sectioned"``.
    curve_points : tuple of CurvePoint
        Sorted reference curve used for interpolation; empty when the
        input carried no usable curve.
    diagnostics : tuple of SkipReason
        Lines/rows that were skipped.  Informational only.
    """
    records: Tuple[Record, ...] = ()
    safe_count: int = 0
    unsafe_count: int = 0
    layout: str = LAYOUT_STANDARD
    curve_points: Tuple[CurvePoint, ...] = ()
    diagnostics: Tuple[SkipReason, ...] = field(default=(), compare=False)

    @property
    def total(self) -> int:
        return self.safe_count + self.unsafe_count

    @property
    def risk_percentage(self) -> float:
        """Percentage of records at cavitation risk, one decimal."""
        if self.total == 0:
            return 0.0
        return round(self.unsafe_count / self.total * 100.0, 1)

    @property
    def has_curve(self) -> bool:
        return bool(self.curve_points)
