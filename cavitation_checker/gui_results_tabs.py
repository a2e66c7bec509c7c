"""
Results tabs widget (right side) for the Pump Cavitation Checker.

Two tabs:

- Records: summary statistics, the colour-coded records table and the
  list of skipped lines
- NPSH Chart: matplotlib FigureCanvas with a navigation toolbar and
  copy / export buttons
"""

import os

from PySide6.QtWidgets import (
    QTabWidget, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QPushButton, QFileDialog, QMessageBox, QLabel, QTableWidget,
    QTableWidgetItem, QHeaderView, QPlainTextEdit, QAbstractItemView,
)
from PySide6.QtGui import QBrush, QColor
from PySide6.QtCore import Qt

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import (
    FigureCanvasQTAgg as FigureCanvas,
    NavigationToolbar2QT as NavigationToolbar,
)

from .chart_npsh import render_npsh_chart
from .constants import (
    DARK_COLORS, PLOT_STYLE_DARK, ROW_SAFE_BG, ROW_RISK_BG,
    NO_DATA_MESSAGE, NO_VALID_DATA_MESSAGE,
)
from .data_model import AnalysisResult, PumpEnvelope
from .export import export_png, copy_to_clipboard
from .report import table_headers, format_record_row
from .theme import apply_plot_style


class _StatCard(QWidget):
    """Large number with a caption underneath."""

    def __init__(self, caption: str, color: str, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.setSpacing(0)
        self._value = QLabel("0")
        self._value.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._value.setStyleSheet(
            f"color: {color}; font-size: 22px; font-weight: bold;"
        )
        lbl = QLabel(caption)
        lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        lbl.setStyleSheet(f"color: {DARK_COLORS['fg_dim']}; font-size: 11px;")
        layout.addWidget(self._value)
        layout.addWidget(lbl)

    def set_value(self, text: str):
        self._value.setText(text)


class _RecordsTab(QWidget):
    """Statistics cards, records table and skipped-line list."""

    def __init__(self, parent=None):
        super().__init__(parent)
        c = DARK_COLORS
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        # ── Statistics ───────────────────────────────────────────────
        stats = QGridLayout()
        self._card_total = _StatCard("Total records", c['accent'])
        self._card_safe = _StatCard("Safe", c['green'])
        self._card_risk = _StatCard("Cavitation risk", c['red'])
        self._card_pct = _StatCard("Risk percentage", c['yellow'])
        for col, card in enumerate((self._card_total, self._card_safe,
                                    self._card_risk, self._card_pct)):
            stats.addWidget(card, 0, col)
        layout.addLayout(stats)

        # ── Empty-state message ──────────────────────────────────────
        self._lbl_empty = QLabel(NO_DATA_MESSAGE)
        self._lbl_empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._lbl_empty.setStyleSheet(f"color: {c['fg_dim']}; padding: 24px;")
        layout.addWidget(self._lbl_empty)

        # ── Table ────────────────────────────────────────────────────
        headers = table_headers()
        self._table = QTableWidget(0, len(headers))
        self._table.setHorizontalHeaderLabels(headers)
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.setSelectionBehavior(
            QAbstractItemView.SelectionBehavior.SelectRows
        )
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setSectionResizeMode(
            QHeaderView.ResizeMode.Stretch
        )
        layout.addWidget(self._table, 1)

        # ── Skipped lines ────────────────────────────────────────────
        self._lbl_skipped = QLabel("Skipped lines")
        self._lbl_skipped.setStyleSheet(f"color: {c['fg_dim']}; font-size: 11px;")
        self._txt_skipped = QPlainTextEdit()
        self._txt_skipped.setReadOnly(True)
        self._txt_skipped.setMaximumHeight(110)
        layout.addWidget(self._lbl_skipped)
        layout.addWidget(self._txt_skipped)

        self.show_result(None)

    def show_result(self, result):
        records = result.records if result is not None else ()

        self._card_total.set_value(str(result.total if result else 0))
        self._card_safe.set_value(str(result.safe_count if result else 0))
        self._card_risk.set_value(str(result.unsafe_count if result else 0))
        self._card_pct.set_value(
            f"{result.risk_percentage:.1f}%" if result else "0.0%"
        )

        if result is None:
            self._lbl_empty.setText(NO_DATA_MESSAGE)
        elif not records:
            self._lbl_empty.setText(NO_VALID_DATA_MESSAGE)
        self._lbl_empty.setVisible(not records)
        self._table.setVisible(bool(records))

        self._table.setRowCount(len(records))
        safe_brush = QBrush(QColor(ROW_SAFE_BG))
        risk_brush = QBrush(QColor(ROW_RISK_BG))
        for row, record in enumerate(records):
            brush = safe_brush if record.is_safe else risk_brush
            for col, text in enumerate(format_record_row(record)):
                item = QTableWidgetItem(text)
                item.setBackground(brush)
                item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
                self._table.setItem(row, col, item)

        diagnostics = result.diagnostics if result is not None else ()
        self._txt_skipped.setPlainText("\n".join(str(d) for d in diagnostics))
        self._lbl_skipped.setVisible(bool(diagnostics))
        self._txt_skipped.setVisible(bool(diagnostics))


class _ChartTab(QWidget):
    """Chart tab with figure canvas, toolbar, and export buttons."""

    def __init__(self, figsize=(8, 5), parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        # ── Toolbar row ──────────────────────────────────────────────
        toolbar_row = QHBoxLayout()
        toolbar_row.setSpacing(4)

        self._fig = Figure(figsize=figsize)
        self._fig.set_facecolor(DARK_COLORS['bg_alt'])
        self._canvas = FigureCanvas(self._fig)
        self._toolbar = NavigationToolbar(self._canvas, self)

        toolbar_row.addWidget(self._toolbar)
        toolbar_row.addStretch()

        self._btn_copy = QPushButton("Copy to Clipboard")
        self._btn_copy.setFixedHeight(28)
        self._btn_copy.setStyleSheet("font-size: 11px; padding: 2px 8px;")
        self._btn_copy.clicked.connect(lambda *_: self._on_copy())
        toolbar_row.addWidget(self._btn_copy)

        self._btn_export = QPushButton("Export PNG...")
        self._btn_export.setFixedHeight(28)
        self._btn_export.setStyleSheet("font-size: 11px; padding: 2px 8px;")
        self._btn_export.clicked.connect(lambda *_: self.export_dialog())
        toolbar_row.addWidget(self._btn_export)

        layout.addLayout(toolbar_row)
        layout.addWidget(self._canvas, 1)

    @property
    def fig(self) -> Figure:
        return self._fig

    def refresh(self):
        """Redraw the canvas after figure changes."""
        self._canvas.draw_idle()

    def _on_copy(self):
        if copy_to_clipboard(self._fig):
            self.window().statusBar().showMessage(
                "Chart copied to clipboard", 3000
            )
        else:
            QMessageBox.warning(self, "Copy Failed",
                                "Could not copy chart to clipboard.")

    def export_dialog(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Chart as PNG",
            "", "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        try:
            export_png(self._fig, path)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(
                self, "Export Error", f"Failed to export: {exc}"
            )
            return
        self.window().statusBar().showMessage(
            f"Exported to {os.path.basename(path)}", 3000
        )


class ResultsTabsWidget(QTabWidget):
    """Records table and NPSH chart for the current analysis."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._result = None
        self._envelope = None

        self._tab_records = _RecordsTab()
        self._tab_chart = _ChartTab(figsize=(8, 5))

        self.addTab(self._tab_records, "Records")
        self.addTab(self._tab_chart, "NPSH Chart")

        apply_plot_style(PLOT_STYLE_DARK)
        self._render_chart()

    def update_results(self, result, envelope=None) -> None:
        """Show *result* (``None`` clears both tabs).

        Parameters
        ----------
        result : AnalysisResult or None
        envelope : PumpEnvelope, optional
            Operating envelope drawn on the chart.
        """
        self._result = result
        self._envelope = envelope
        self._tab_records.show_result(result)
        self._render_chart()

    def update_envelope(self, envelope: PumpEnvelope) -> None:
        """Re-draw the chart with a new envelope; the table is unaffected."""
        self._envelope = envelope
        self._render_chart()

    def _render_chart(self):
        # Ensure dark style is applied for GUI rendering
        apply_plot_style(PLOT_STYLE_DARK)
        render_npsh_chart(self._tab_chart.fig, self._result, self._envelope)
        self._tab_chart.refresh()

    @property
    def result(self) -> AnalysisResult:
        return self._result

    @property
    def chart_tab(self) -> _ChartTab:
        return self._tab_chart
