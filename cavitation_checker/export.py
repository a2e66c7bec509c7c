"""
Export utilities for the Pump Cavitation Checker.

- PNG export of the NPSH chart, switching the figure to a light
  (white background) theme for the file and restoring the dark GUI
  theme afterwards in a ``finally`` block
- clipboard copy through Qt, when Qt is available
- CSV export of the analysed records
"""

import csv
import io
import os
from typing import Dict, List

from matplotlib.figure import Figure

from .constants import (
    EXPORT_DPI, EXPORT_WIDTH_INCHES, CLIPBOARD_DPI,
    PLOT_STYLE_LIGHT, DARK_COLORS, TABLE_COLUMNS, STATUS_COLUMN,
)
from .data_model import AnalysisResult

# Dark-theme foreground colours that must become dark text on white
_DARK_FOREGROUNDS = frozenset((
    DARK_COLORS['fg'], DARK_COLORS['fg_dim'], DARK_COLORS['fg_bright'],
))


# ── Theme switching ──────────────────────────────────────────────────────

def _axes_state(ax) -> Dict:
    state = {
        'facecolor': ax.get_facecolor(),
        'title': ax.title.get_color(),
        'xlabel': ax.xaxis.label.get_color(),
        'ylabel': ax.yaxis.label.get_color(),
        'spines': {name: sp.get_edgecolor() for name, sp in ax.spines.items()},
        'xticklabels': [t.get_color() for t in ax.get_xticklabels()],
        'yticklabels': [t.get_color() for t in ax.get_yticklabels()],
        'gridlines': [ln.get_color()
                      for ln in ax.get_xgridlines() + ax.get_ygridlines()],
        'texts': [t.get_color() for t in ax.texts],
        'text_boxes': [
            t.get_bbox_patch().get_facecolor() if t.get_bbox_patch() else None
            for t in ax.texts
        ],
        'xtick_mark': None,
        'ytick_mark': None,
        'legend': None,
    }
    xticks = ax.xaxis.get_major_ticks()
    if xticks:
        state['xtick_mark'] = xticks[0].tick1line.get_color()
    yticks = ax.yaxis.get_major_ticks()
    if yticks:
        state['ytick_mark'] = yticks[0].tick1line.get_color()

    legend = ax.get_legend()
    if legend is not None:
        frame = legend.get_frame()
        state['legend'] = (
            frame.get_facecolor(),
            frame.get_edgecolor(),
            [t.get_color() for t in legend.get_texts()],
        )
    return state


def _save_figure_state(fig: Figure) -> Dict:
    """Capture every colour that ``_apply_light_theme`` changes."""
    return {
        'fig_facecolor': fig.get_facecolor(),
        'axes': [_axes_state(ax) for ax in fig.get_axes()],
    }


def _apply_light_theme(fig: Figure) -> None:
    light = PLOT_STYLE_LIGHT
    fig.set_facecolor(light['figure.facecolor'])

    for ax in fig.get_axes():
        ax.set_facecolor(light['axes.facecolor'])
        ax.title.set_color(light['text.color'])
        ax.xaxis.label.set_color(light['axes.labelcolor'])
        ax.yaxis.label.set_color(light['axes.labelcolor'])
        for spine in ax.spines.values():
            spine.set_edgecolor(light['axes.edgecolor'])
        ax.tick_params(axis='x', colors=light['xtick.color'],
                       labelcolor=light['xtick.color'])
        ax.tick_params(axis='y', colors=light['ytick.color'],
                       labelcolor=light['ytick.color'])
        for line in ax.get_xgridlines() + ax.get_ygridlines():
            line.set_color(light['grid.color'])

        # Only dark-theme foregrounds are converted; data colours stay
        for text in ax.texts:
            if text.get_color() in _DARK_FOREGROUNDS:
                text.set_color(light['text.color'])
                box = text.get_bbox_patch()
                if box is not None:
                    box.set_facecolor(light['axes.facecolor'])

        legend = ax.get_legend()
        if legend is not None:
            frame = legend.get_frame()
            frame.set_facecolor(light['legend.facecolor'])
            frame.set_edgecolor(light['legend.edgecolor'])
            for text in legend.get_texts():
                text.set_color(light['text.color'])


def _restore_figure_state(fig: Figure, state: Dict) -> None:
    fig.set_facecolor(state['fig_facecolor'])

    for ax, ax_state in zip(fig.get_axes(), state['axes']):
        ax.set_facecolor(ax_state['facecolor'])
        ax.title.set_color(ax_state['title'])
        ax.xaxis.label.set_color(ax_state['xlabel'])
        ax.yaxis.label.set_color(ax_state['ylabel'])
        for name, color in ax_state['spines'].items():
            ax.spines[name].set_edgecolor(color)

        # tick_params sets marks and labels together, labels go after
        if ax_state['xtick_mark'] is not None:
            ax.tick_params(axis='x', colors=ax_state['xtick_mark'])
        if ax_state['ytick_mark'] is not None:
            ax.tick_params(axis='y', colors=ax_state['ytick_mark'])
        for label, color in zip(ax.get_xticklabels(), ax_state['xticklabels']):
            label.set_color(color)
        for label, color in zip(ax.get_yticklabels(), ax_state['yticklabels']):
            label.set_color(color)

        for line, color in zip(ax.get_xgridlines() + ax.get_ygridlines(),
                               ax_state['gridlines']):
            line.set_color(color)

        for text, color, box_color in zip(
            ax.texts, ax_state['texts'], ax_state['text_boxes']
        ):
            text.set_color(color)
            box = text.get_bbox_patch()
            if box is not None and box_color is not None:
                box.set_facecolor(box_color)

        legend = ax.get_legend()
        if legend is not None and ax_state['legend'] is not None:
            face, edge, text_colors = ax_state['legend']
            frame = legend.get_frame()
            frame.set_facecolor(face)
            frame.set_edgecolor(edge)
            for text, color in zip(legend.get_texts(), text_colors):
                text.set_color(color)


# ── PNG / clipboard ──────────────────────────────────────────────────────

def export_png(
    fig: Figure,
    filepath: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> None:
    """Save *fig* as a light-theme PNG.

    The figure is resized to *width_inches* (aspect kept) for the file;
    size and theme are restored afterwards, also on error.  Missing
    parent directories are created.
    """
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    current_w = fig.get_figwidth()
    current_h = fig.get_figheight()
    state = _save_figure_state(fig)
    try:
        scale = width_inches / current_w if current_w > 0 else 1.0
        fig.set_size_inches(width_inches, current_h * scale)
        _apply_light_theme(fig)
        fig.savefig(
            filepath,
            dpi=dpi,
            bbox_inches='tight',
            facecolor=fig.get_facecolor(),
            edgecolor='none',
            pad_inches=0.1,
        )
    finally:
        fig.set_size_inches(current_w, current_h)
        _restore_figure_state(fig, state)


def copy_to_clipboard(fig: Figure, dpi: int = CLIPBOARD_DPI) -> bool:
    """Copy *fig* to the system clipboard as a PNG image.

    Returns ``True`` on success, ``False`` if Qt or a clipboard is
    unavailable.
    """
    try:
        from PySide6.QtWidgets import QApplication
        from PySide6.QtGui import QImage
    except ImportError:
        return False

    buf = io.BytesIO()
    state = _save_figure_state(fig)
    try:
        _apply_light_theme(fig)
        fig.savefig(buf, format='png', dpi=dpi, bbox_inches='tight',
                    facecolor=fig.get_facecolor(), edgecolor='none')
    finally:
        _restore_figure_state(fig, state)

    img = QImage()
    img.loadFromData(buf.getvalue())
    clipboard = QApplication.clipboard()
    if clipboard is None:
        return False
    clipboard.setImage(img)
    return True


# ── Records CSV ──────────────────────────────────────────────────────────

def export_records_csv(result: AnalysisResult, filepath: str) -> str:
    """Write the analysed records of *result* to *filepath*.

    Columns: the canonical English headers, then ``NPSH Margin (m)``
    and ``Status``.  Numbers are written at full precision.  Returns
    the path written.
    """
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    header: List[str] = [h for h, _, _ in TABLE_COLUMNS]
    header += ["NPSH Margin (m)", STATUS_COLUMN]

    with open(filepath, 'w', encoding='utf-8', newline='') as fh:
        writer = csv.writer(fh)
        writer.writerow(header)
        for record in result.records:
            row = [repr(getattr(record, attr)) for _, attr, _ in TABLE_COLUMNS]
            row.append(repr(record.npsh_margin))
            row.append("OK" if record.is_safe else "Cavitation Risk")
            writer.writerow(row)
    return filepath
