"""
NPSH chart for the Pump Cavitation Checker.

Plots NPSH available and NPSH required against flow for every
accepted record, highlights the points at cavitation risk, and
overlays the pump operating envelope: Allowable and Preferred
Operating Ranges as shaded bands, rated flow and rated NPSHr as
reference lines.  When the input carried an NPSHr reference curve it
is drawn dashed underneath the record series.
"""

from typing import Optional

import numpy as np
from matplotlib.figure import Figure

from .constants import (
    CHART_PALETTE, DARK_COLORS, EXPORT_TEXT_COLOR, EXPORT_BG_COLOR,
)
from .data_model import AnalysisResult, PumpEnvelope


def render_npsh_chart(
    fig: Figure,
    result: Optional[AnalysisResult],
    envelope: Optional[PumpEnvelope] = None,
    *,
    for_export: bool = False,
) -> None:
    """Render NPSHa / NPSHr vs flow on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    result : AnalysisResult or None
        Current analysis.  ``None`` or an empty record set shows a
        placeholder message.
    envelope : PumpEnvelope, optional
        Operating-envelope annotation.  Omitted when ``None``.
    for_export : bool
        If ``True``, use light-theme colours for the statistics box.
    """
    fig.clf()
    pal = CHART_PALETTE
    ax = fig.add_subplot(111)

    if result is None or not result.records:
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center')
        return

    # Sorted by flow so the lines read left to right; stable for ties
    records = sorted(result.records, key=lambda r: r.flow)
    flow = np.array([r.flow for r in records])
    npsha = np.array([r.npsh_available for r in records])
    npshr = np.array([r.npsh_required for r in records])
    risk = np.array([not r.is_safe for r in records])

    # ── Operating envelope bands (drawn first, behind the data) ──────
    if envelope is not None:
        ax.axvspan(envelope.aor_min, envelope.aor_max,
                   color=pal['aor_fill'], alpha=0.10, zorder=0,
                   label=f"AOR {envelope.aor_min:g}–{envelope.aor_max:g}")
        ax.axvspan(envelope.por_min, envelope.por_max,
                   color=pal['por_fill'], alpha=0.14, zorder=0,
                   label=f"POR {envelope.por_min:g}–{envelope.por_max:g}")
        ax.axvline(envelope.rated_flow, color=pal['rated_line'],
                   linewidth=1.0, linestyle=':', zorder=2,
                   label=f"Rated flow {envelope.rated_flow:g}")
        ax.axhline(envelope.rated_npshr, color=pal['rated_npshr'],
                   linewidth=0.9, linestyle='-.', zorder=2,
                   label=f"Rated NPSHr {envelope.rated_npshr:g} m")

    # ── Reference curve ──────────────────────────────────────────────
    if result.has_curve:
        cx = [p.flow for p in result.curve_points]
        cy = [p.npsh_required for p in result.curve_points]
        ax.plot(cx, cy, color=pal['curve_line'], linewidth=1.0,
                linestyle='--', marker='s', markersize=2.5, zorder=3,
                label='NPSHr curve')

    # ── Record series ────────────────────────────────────────────────
    ax.plot(flow, npsha, color=pal['npsha_line'], linewidth=1.2,
            marker='o', markersize=3, zorder=4, label='NPSHa')
    ax.plot(flow, npshr, color=pal['npshr_line'], linewidth=1.2,
            marker='o', markersize=3, zorder=4, label='NPSHr')

    if risk.any():
        ax.scatter(flow[risk], npsha[risk], s=36, facecolors='none',
                   edgecolors=pal['risk_marker'], linewidths=1.2,
                   zorder=5, label='Cavitation risk')

    # ── Statistics annotation ────────────────────────────────────────
    stats_text = (
        f"Records: {result.total}\n"
        f"Safe: {result.safe_count}\n"
        f"At risk: {result.unsafe_count} ({result.risk_percentage:.1f}%)\n"
        f"Min margin: {np.min(npsha - npshr):.2f} m"
    )
    text_color = EXPORT_TEXT_COLOR if for_export else DARK_COLORS['fg']
    box_color = EXPORT_BG_COLOR if for_export else DARK_COLORS['bg_widget']
    ax.text(
        0.02, 0.95, stats_text,
        transform=ax.transAxes, ha='left', va='top',
        fontsize=6.5, family='monospace',
        color=text_color,
        bbox=dict(
            boxstyle='round,pad=0.4',
            facecolor=box_color,
            edgecolor='#999999',
            alpha=0.9,
        ),
    )

    # ── Labels ───────────────────────────────────────────────────────
    ax.set_xlabel("Flow (m3/h)", fontsize=8)
    ax.set_ylabel("NPSH (m)", fontsize=8)
    title = "NPSH Available vs Required"
    if envelope is not None and envelope.pump_type:
        title += f" — {envelope.pump_type}"
    ax.set_title(title, fontsize=10, fontweight='bold')
    ax.set_ylim(bottom=min(0.0, float(np.min(npsha)), float(np.min(npshr))))

    ax.grid(linewidth=0.4, alpha=0.5)
    ax.legend(loc='upper left', bbox_to_anchor=(1.01, 1.0),
              fontsize=6, framealpha=0.9)

    fig.tight_layout(pad=1.5)
