"""
Configuration panel (left side) for the Pump Cavitation Checker.

CSV file selection, the load / clear status banner, the pump operating
envelope used to annotate the chart, and the action buttons.  The
panel owns the ``AnalysisSession``; every load attempt replaces the
current analysis or leaves it untouched on error.
"""

import os
import tempfile
import warnings

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QGroupBox,
    QLabel, QPushButton, QLineEdit, QComboBox, QCheckBox,
    QDoubleSpinBox, QFileDialog,
)
from PySide6.QtCore import Signal

from .analysis import AnalysisSession
from .constants import (
    DARK_COLORS, DEFAULT_ENVELOPE, PUMP_TYPES, NO_VALID_DATA_MESSAGE,
    INVALID_FILE_MESSAGE,
)
from .csv_parser import FormatError, CurveWarning, is_csv_path
from .data_model import AnalysisResult, PumpEnvelope
from .report import load_message, error_message
from .theme import banner_style


class ConfigPanel(QWidget):
    """Left-side panel: data file, pump envelope and actions."""

    # Signals
    analysis_loaded = Signal(object)  # emits AnalysisResult, or None on clear
    envelope_changed = Signal()

    # (key, label, minimum, maximum, decimals)
    _ENVELOPE_FIELDS = [
        ('rated_flow',  "Rated flow (m3/h):", 0.0, 100000.0, 1),
        ('aor_min',     "AOR min (m3/h):",    0.0, 100000.0, 1),
        ('aor_max',     "AOR max (m3/h):",    0.0, 100000.0, 1),
        ('por_min',     "POR min (m3/h):",    0.0, 100000.0, 1),
        ('por_max',     "POR max (m3/h):",    0.0, 100000.0, 1),
        ('rated_npshr', "Rated NPSHr (m):",   0.0, 1000.0,   2),
    ]

    def __init__(self, parent=None):
        super().__init__(parent)
        self._session = AnalysisSession(PumpEnvelope.from_mapping(DEFAULT_ENVELOPE))
        self._setup_ui()
        self._connect_signals()
        self._update_envelope_status()

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(8)

        # ── Group 1: Data File ───────────────────────────────────────
        grp_file = QGroupBox("Data File")
        file_layout = QVBoxLayout(grp_file)
        file_layout.setSpacing(4)

        row = QHBoxLayout()
        row.setSpacing(4)
        self._edt_file = QLineEdit()
        self._edt_file.setReadOnly(True)
        self._edt_file.setPlaceholderText("No file selected")
        self._edt_file.setStyleSheet("font-size: 11px;")
        self._btn_browse = QPushButton("Browse...")
        self._btn_browse.setFixedWidth(70)
        self._btn_browse.setStyleSheet("font-size: 11px;")
        row.addWidget(self._edt_file, 1)
        row.addWidget(self._btn_browse)
        file_layout.addLayout(row)

        self._chk_strict = QCheckBox("Reject files with an unusable NPSHr curve")
        self._chk_strict.setToolTip(
            "When unchecked, a sectioned file whose curve has no usable\n"
            "flow/NPSHr columns is analysed from its operating data only."
        )
        file_layout.addWidget(self._chk_strict)

        # Status banner
        self._lbl_status = QLabel("")
        self._lbl_status.setStyleSheet(banner_style(""))
        self._lbl_status.setWordWrap(True)
        file_layout.addWidget(self._lbl_status)

        layout.addWidget(grp_file)

        # ── Group 2: Pump Envelope ───────────────────────────────────
        grp_env = QGroupBox("Pump Envelope")
        env_layout = QFormLayout(grp_env)
        env_layout.setSpacing(4)

        self._cmb_pump_type = QComboBox()
        self._cmb_pump_type.addItems(PUMP_TYPES)
        self._cmb_pump_type.setCurrentText(DEFAULT_ENVELOPE['pump_type'])
        env_layout.addRow("Pump type:", self._cmb_pump_type)

        self._env_spins = {}
        for key, label, lo, hi, decimals in self._ENVELOPE_FIELDS:
            spn = QDoubleSpinBox()
            spn.setRange(lo, hi)
            spn.setDecimals(decimals)
            spn.setSingleStep(1.0 if decimals == 1 else 0.1)
            spn.setValue(DEFAULT_ENVELOPE[key])
            env_layout.addRow(label, spn)
            self._env_spins[key] = spn

        self._lbl_envelope = QLabel("")
        self._lbl_envelope.setWordWrap(True)
        self._lbl_envelope.setStyleSheet(
            f"color: {DARK_COLORS['yellow']}; font-size: 11px;"
        )
        env_layout.addRow(self._lbl_envelope)

        layout.addWidget(grp_env)

        # ── Actions ──────────────────────────────────────────────────
        c = DARK_COLORS
        self._btn_export_csv = QPushButton("Export Results CSV...")
        self._btn_export_csv.setStyleSheet(
            f"QPushButton {{ background-color: {c['accent']}; "
            f"color: {c['bg']}; font-weight: bold; "
            f"font-size: 13px; padding: 8px; }}"
            f"QPushButton:hover {{ background-color: {c['accent_hover']}; }}"
            f"QPushButton:disabled {{ background-color: {c['bg']}; "
            f"color: {c['fg_dim']}; }}"
        )
        self._btn_export_csv.setEnabled(False)
        layout.addWidget(self._btn_export_csv)

        self._btn_clear = QPushButton("Clear Data")
        self._btn_clear.setStyleSheet(
            f"QPushButton {{ background-color: {c['surface0']}; "
            f"font-size: 12px; padding: 8px; }}"
            f"QPushButton:hover {{ background-color: {c['overlay0']}; }}"
        )
        layout.addWidget(self._btn_clear)

        self._btn_example = QPushButton("Load Example Data")
        self._btn_example.setToolTip(
            "Generate a sectioned example file (operating data plus\n"
            "NPSHr curve) and load it."
        )
        layout.addWidget(self._btn_example)

        layout.addStretch()

    # ── Signal connections ───────────────────────────────────────────

    def _connect_signals(self):
        self._btn_browse.clicked.connect(lambda *_: self.browse_file())
        self._btn_clear.clicked.connect(lambda *_: self.clear_data())
        self._btn_example.clicked.connect(
            lambda *_: self.load_example('sectioned')
        )

        # Envelope edits: lambdas absorb the value each signal passes
        self._cmb_pump_type.currentTextChanged.connect(
            lambda *_: self._on_envelope_edited()
        )
        for spn in self._env_spins.values():
            spn.valueChanged.connect(lambda *_: self._on_envelope_edited())

    # ── Slot implementations ─────────────────────────────────────────

    def _on_envelope_edited(self):
        self._session.envelope = self.get_envelope()
        self._update_envelope_status()
        self.envelope_changed.emit()

    def _update_envelope_status(self):
        problems = self._session.envelope.validate()
        self._lbl_envelope.setText("\n".join(problems))
        self._lbl_envelope.setVisible(bool(problems))

    def _show_banner(self, text: str, kind: str):
        self._lbl_status.setText(text)
        self._lbl_status.setStyleSheet(banner_style(kind))

    def browse_file(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Select Pump Data CSV File",
            "", "CSV Files (*.csv);;All Files (*)",
        )
        if path:
            self.load_file(path)

    def load_file(self, path: str) -> bool:
        """Analyse *path*; returns ``True`` when the load succeeded.

        On failure the banner shows the error and the previous analysis
        stays current.
        """
        if not is_csv_path(path):
            self._show_banner(INVALID_FILE_MESSAGE, 'error')
            return False

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", CurveWarning)
            try:
                result = self._session.load_file(
                    path, strict_curve=self._chk_strict.isChecked(),
                )
            except (OSError, FormatError) as exc:
                self._show_banner(error_message(exc), 'error')
                return False

        self._edt_file.setText(os.path.basename(path))
        self._edt_file.setToolTip(path)
        self._btn_export_csv.setEnabled(bool(result.records))

        if not result.records:
            self._show_banner(NO_VALID_DATA_MESSAGE, 'error')
        else:
            text = load_message(result, self._session.source)
            notes = [str(w.message) for w in caught]
            if notes:
                text += "\n" + "\n".join(notes)
            self._show_banner(text, 'success')

        self.analysis_loaded.emit(result)
        return True

    def load_example(self, kind: str = 'sectioned'):
        """Generate the example files and load the *kind* one."""
        from .example_data import generate_example_csvs

        example_dir = os.path.join(
            tempfile.gettempdir(), 'cavitation_checker_example'
        )
        paths = generate_example_csvs(example_dir)
        self.load_file(paths[kind])

    def clear_data(self):
        self._session.reset()
        self._edt_file.clear()
        self._edt_file.setToolTip("")
        self._btn_export_csv.setEnabled(False)
        self._show_banner("Data cleared successfully.", 'success')
        self.analysis_loaded.emit(None)

    # ── Public API ───────────────────────────────────────────────────

    def get_config(self) -> dict:
        """Return current options as a plain dict."""
        return {
            'strict_curve': self._chk_strict.isChecked(),
            'envelope': self.get_envelope().to_dict(),
            'source': self._session.source,
        }

    def get_envelope(self) -> PumpEnvelope:
        values = {key: spn.value() for key, spn in self._env_spins.items()}
        values['pump_type'] = self._cmb_pump_type.currentText()
        return PumpEnvelope.from_mapping(values)

    def get_result(self) -> AnalysisResult:
        """Return the current analysis, or ``None``."""
        return self._session.result

    @property
    def export_csv_button(self) -> QPushButton:
        """Access to the Export CSV button for external signal connection."""
        return self._btn_export_csv
