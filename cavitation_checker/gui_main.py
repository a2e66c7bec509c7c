"""
Main window for the Pump Cavitation Checker.

Hosts the ConfigPanel (left) and ResultsTabsWidget (right) in a
horizontal splitter, with a menu bar and status bar.
"""

import os

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QScrollArea,
    QFileDialog, QMessageBox,
)
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtCore import Qt

from . import APP_NAME, APP_VERSION
from .constants import NO_VALID_DATA_MESSAGE
from .export import export_records_csv
from .gui_config_panel import ConfigPanel
from .gui_results_tabs import ResultsTabsWidget
from .report import load_message


class CheckerMainWindow(QMainWindow):
    """Main window for the Pump Cavitation Checker."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1100, 720)

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()

        self._results_tabs.update_envelope(self._config_panel.get_envelope())
        self.statusBar().showMessage("Ready, open a CSV file to begin")

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(4, 4, 4, 4)
        main_layout.setSpacing(4)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self._config_panel = ConfigPanel()
        scroll = QScrollArea()
        scroll.setWidget(self._config_panel)
        scroll.setWidgetResizable(True)
        scroll.setMinimumWidth(300)
        scroll.setMaximumWidth(460)

        self._results_tabs = ResultsTabsWidget()

        splitter.addWidget(scroll)
        splitter.addWidget(self._results_tabs)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([340, 760])

        main_layout.addWidget(splitter)

    def _setup_menu(self):
        menubar = self.menuBar()

        # ── File menu ────────────────────────────────────────────────
        file_menu = menubar.addMenu("File")

        act_open = QAction("Open CSV...", self)
        act_open.setShortcut(QKeySequence.StandardKey.Open)
        act_open.triggered.connect(lambda *_: self._config_panel.browse_file())
        file_menu.addAction(act_open)

        act_clear = QAction("Clear Data", self)
        act_clear.triggered.connect(lambda *_: self._config_panel.clear_data())
        file_menu.addAction(act_clear)

        file_menu.addSeparator()

        act_export_chart = QAction("Export Chart...", self)
        act_export_chart.triggered.connect(lambda *_: self._export_chart())
        file_menu.addAction(act_export_chart)

        act_export_csv = QAction("Export Results CSV...", self)
        act_export_csv.triggered.connect(lambda *_: self._export_csv())
        file_menu.addAction(act_export_csv)

        file_menu.addSeparator()

        act_exit = QAction("Exit", self)
        act_exit.triggered.connect(self.close)
        file_menu.addAction(act_exit)

        # ── Examples menu ────────────────────────────────────────────
        examples_menu = menubar.addMenu("Examples")

        act_standard = QAction("Load Standard Example", self)
        act_standard.triggered.connect(
            lambda *_: self._config_panel.load_example('standard')
        )
        examples_menu.addAction(act_standard)

        act_sectioned = QAction("Load Sectioned Example (with NPSHr curve)", self)
        act_sectioned.triggered.connect(
            lambda *_: self._config_panel.load_example('sectioned')
        )
        examples_menu.addAction(act_sectioned)

        # ── Help menu ────────────────────────────────────────────────
        help_menu = menubar.addMenu("Help")

        act_about = QAction("About", self)
        act_about.triggered.connect(lambda *_: self._show_about())
        help_menu.addAction(act_about)

    def _connect_signals(self):
        self._config_panel.analysis_loaded.connect(self._on_analysis_loaded)
        self._config_panel.envelope_changed.connect(self._on_envelope_changed)
        self._config_panel.export_csv_button.clicked.connect(
            lambda *_: self._export_csv()
        )

    # ── Slots ────────────────────────────────────────────────────────

    def _on_analysis_loaded(self, result):
        """Slot: a load succeeded (``result``) or the data was cleared (``None``)."""
        envelope = self._config_panel.get_envelope()
        self._results_tabs.update_results(result, envelope)
        if result is None:
            self.statusBar().showMessage("Data cleared successfully.", 5000)
            return
        if not result.records:
            self.statusBar().showMessage(NO_VALID_DATA_MESSAGE)
            return
        source = self._config_panel.get_config()['source']
        self.statusBar().showMessage(load_message(result, source))

    def _on_envelope_changed(self):
        self._results_tabs.update_envelope(self._config_panel.get_envelope())

    def _export_chart(self):
        if self._results_tabs.result is None:
            QMessageBox.warning(
                self, "Nothing to Export",
                "Load a CSV file before exporting the chart.",
            )
            return
        self._results_tabs.chart_tab.export_dialog()

    def _export_csv(self):
        result = self._config_panel.get_result()
        if result is None or not result.records:
            QMessageBox.warning(
                self, "No Data",
                "There are no analysed records to export.",
            )
            return

        path, _ = QFileDialog.getSaveFileName(
            self, "Export Results as CSV",
            "", "CSV Files (*.csv);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.csv'):
            path += '.csv'
        try:
            export_records_csv(result, path)
        except OSError as exc:
            QMessageBox.critical(
                self, "Export Error", f"Failed to export records:\n\n{exc}",
            )
            return
        self.statusBar().showMessage(
            f"Exported {result.total} records to {os.path.basename(path)}",
            5000,
        )

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Flags pump operating points at cavitation risk, where "
            f"NPSH available is below NPSH required.</p>"
            f"<p>Reads French or English CSV headers, and sectioned "
            f"files carrying a vendor NPSHr curve that is interpolated "
            f"at each operating flow.</p>"
            f"<p>The chart is annotated with the pump's Allowable and "
            f"Preferred Operating Ranges.</p>",
        )
