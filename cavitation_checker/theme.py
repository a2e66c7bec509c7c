"""
Theme and stylesheet for the Pump Cavitation Checker.

The Qt stylesheet is generated from a rule table: each entry is a
selector and its properties, where a value naming a ``DARK_COLORS``
key is replaced by that colour.  Also holds the banner styles for the
load / clear status line and the matplotlib rcParams helper (dark for
the GUI preview, light for export).
"""

from typing import Dict, List, Tuple

from .constants import DARK_COLORS

_RULES: List[Tuple[str, Dict[str, str]]] = [
    ("QMainWindow, QWidget", {
        'background-color': 'bg', 'color': 'fg', 'font-size': '13px',
    }),
    ("QTabWidget::pane", {
        'border': '1px solid @border', 'background-color': 'bg',
    }),
    ("QTabBar::tab", {
        'background-color': 'bg_alt', 'color': 'fg_dim',
        'padding': '8px 16px', 'border': '1px solid @border',
        'border-bottom': 'none',
        'border-top-left-radius': '4px', 'border-top-right-radius': '4px',
    }),
    ("QTabBar::tab:selected", {
        'background-color': 'bg_widget', 'color': 'accent',
        'border-bottom': '2px solid @accent',
    }),
    ("QGroupBox", {
        'border': '1px solid @border', 'border-radius': '6px',
        'margin-top': '12px', 'padding-top': '16px',
        'font-weight': 'bold', 'color': 'accent',
    }),
    ("QGroupBox::title", {
        'subcontrol-origin': 'margin', 'left': '12px', 'padding': '0 6px',
    }),
    ("QPushButton", {
        'background-color': 'bg_widget', 'color': 'fg',
        'border': '1px solid @border', 'border-radius': '4px',
        'padding': '6px 16px', 'min-height': '24px',
    }),
    ("QPushButton:hover", {
        'background-color': 'selection', 'border-color': 'accent',
    }),
    ("QPushButton:disabled", {
        'background-color': 'bg', 'color': 'fg_dim',
    }),
    ("QLineEdit, QDoubleSpinBox, QComboBox", {
        'background-color': 'bg_input', 'color': 'fg',
        'border': '1px solid @border', 'border-radius': '4px',
        'padding': '4px 8px', 'min-height': '22px',
    }),
    ("QLineEdit:focus, QDoubleSpinBox:focus, QComboBox:focus", {
        'border-color': 'accent',
    }),
    ("QComboBox QAbstractItemView", {
        'background-color': 'bg_widget', 'color': 'fg',
        'selection-background-color': 'selection',
    }),
    ("QCheckBox", {'color': 'fg', 'spacing': '6px'}),
    ("QTableWidget", {
        'background-color': 'bg_widget', 'color': 'fg',
        'gridline-color': 'border', 'border': '1px solid @border',
    }),
    ("QHeaderView::section", {
        'background-color': 'bg_alt', 'color': 'fg',
        'padding': '4px 8px', 'border': '1px solid @border',
        'font-weight': 'bold',
    }),
    ("QPlainTextEdit", {
        'background-color': 'bg_input', 'color': 'fg_dim',
        'border': '1px solid @border', 'font-family': 'monospace',
    }),
    ("QScrollBar:vertical", {
        'background-color': 'bg', 'width': '12px', 'border': 'none',
    }),
    ("QScrollBar::handle:vertical", {
        'background-color': 'border', 'border-radius': '4px',
        'min-height': '20px',
    }),
    ("QStatusBar", {
        'background-color': 'bg_alt', 'color': 'fg_dim',
        'border-top': '1px solid @border',
    }),
    ("QMenuBar, QMenu", {'background-color': 'bg_alt', 'color': 'fg'}),
    ("QMenuBar::item:selected, QMenu::item:selected", {
        'background-color': 'selection',
    }),
    ("QSplitter::handle", {'background-color': 'border'}),
    ("QLabel", {'color': 'fg'}),
]


def _resolve(value: str) -> str:
    if value in DARK_COLORS:
        return DARK_COLORS[value]
    # '@name' inside a compound value, e.g. "1px solid @border"
    return ' '.join(
        DARK_COLORS[part[1:]] if part.startswith('@') else part
        for part in value.split()
    )


def get_dark_stylesheet() -> str:
    """Qt stylesheet for the dark main window."""
    blocks = []
    for selector, props in _RULES:
        body = '\n'.join(
            f"    {name}: {_resolve(value)};" for name, value in props.items()
        )
        blocks.append(f"{selector} {{\n{body}\n}}")
    return '\n'.join(blocks)


def banner_style(kind: str) -> str:
    """Stylesheet for the status banner: ``"success"``, ``"error"`` or ``""``."""
    color = {'success': DARK_COLORS['green'],
             'error': DARK_COLORS['red']}.get(kind)
    if color is None:
        return f"color: {DARK_COLORS['fg_dim']}; font-size: 11px;"
    return (
        f"color: {color}; font-size: 12px; font-weight: bold; "
        f"border: 1px solid {color}; border-radius: 4px; padding: 6px;"
    )


def apply_plot_style(style_dict: dict) -> None:
    """Apply ``PLOT_STYLE_DARK`` or ``PLOT_STYLE_LIGHT`` to rcParams."""
    import matplotlib as mpl
    for key, value in style_dict.items():
        mpl.rcParams[key] = value
