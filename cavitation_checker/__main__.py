"""
Entry point for the Pump Cavitation Checker.

Usage:
    python -m cavitation_checker                 # GUI
    python -m cavitation_checker data.csv [--png chart.png] [--csv out.csv]
        [--envelope-json envelope.json] [--strict-curve] [--verbose]
"""

import argparse
import json
import os
import sys
import traceback
import warnings


def _check_dependencies(gui: bool = True):
    """Verify required packages are installed."""
    missing = []
    if gui:
        try:
            import PySide6  # noqa: F401
        except ImportError:
            missing.append("PySide6")
    try:
        import matplotlib  # noqa: F401
    except ImportError:
        missing.append("matplotlib")
    try:
        import numpy  # noqa: F401
    except ImportError:
        missing.append("numpy")

    if missing:
        print(
            f"Missing required packages: {', '.join(missing)}\n"
            f"Install with: pip install {' '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)


def _exception_hook(exc_type, exc_value, exc_tb):
    """Global exception handler to prevent silent crashes."""
    msg = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print(f"Unhandled exception:\n{msg}", file=sys.stderr)

    # Try to show a dialog if Qt is running
    try:
        from PySide6.QtWidgets import QMessageBox, QApplication
        app = QApplication.instance()
        if app is not None:
            QMessageBox.critical(
                None, "Unhandled Error",
                f"An unexpected error occurred:\n\n"
                f"{exc_type.__name__}: {exc_value}\n\n"
                f"See console for full traceback.",
            )
    except Exception as exc:
        print(f"Could not show error dialog: {exc}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    from . import APP_NAME, APP_VERSION
    ap = argparse.ArgumentParser(
        prog="cavitation-checker",
        description=f"{APP_NAME}: flag pump operating points at "
                    f"cavitation risk (NPSHa < NPSHr).",
    )
    ap.add_argument("csv_file", nargs="?",
                    help="CSV file to analyse; omit to start the GUI")
    ap.add_argument("--png", metavar="OUT", help="export the NPSH chart as PNG")
    ap.add_argument("--csv", metavar="OUT", dest="csv_out",
                    help="export the analysed records as CSV")
    ap.add_argument("--envelope-json", metavar="PATH",
                    help="pump envelope (pump_type, rated_flow, aor_min, "
                         "aor_max, por_min, por_max, rated_npshr)")
    ap.add_argument("--strict-curve", action="store_true",
                    help="fail instead of ignoring an unusable NPSHr curve")
    ap.add_argument("--verbose", action="store_true",
                    help="print skipped lines and rows to stderr")
    ap.add_argument("--version", action="version",
                    version=f"%(prog)s {APP_VERSION}")
    return ap


def _load_envelope(path):
    from .constants import DEFAULT_ENVELOPE
    from .data_model import PumpEnvelope

    if path is None:
        return PumpEnvelope.from_mapping(DEFAULT_ENVELOPE)
    with open(path, 'r', encoding='utf-8') as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError("Pump envelope JSON must be an object.")
    merged = dict(DEFAULT_ENVELOPE)
    merged.update(data)
    return PumpEnvelope.from_mapping(merged)


def run_headless(args) -> int:
    """Analyse ``args.csv_file`` without Qt; returns the exit status."""
    import matplotlib
    matplotlib.use('Agg')
    from matplotlib.figure import Figure

    from .analysis import AnalysisSession
    from .chart_npsh import render_npsh_chart
    from .constants import NO_VALID_DATA_MESSAGE, PLOT_STYLE_LIGHT
    from .csv_parser import FormatError, CurveWarning
    from .export import export_png, export_records_csv
    from .report import error_message, format_table, load_message, summary_lines
    from .theme import apply_plot_style

    try:
        envelope = _load_envelope(args.envelope_json)
    except (OSError, ValueError) as exc:
        print(f"Invalid pump envelope: {exc}", file=sys.stderr)
        return 2
    for problem in envelope.validate():
        print(f"Warning: {problem}", file=sys.stderr)

    session = AnalysisSession(envelope)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", CurveWarning)
        try:
            result = session.load_file(args.csv_file,
                                       strict_curve=args.strict_curve)
        except (OSError, FormatError) as exc:
            print(error_message(exc), file=sys.stderr)
            return 1
    for w in caught:
        print(f"Warning: {w.message}", file=sys.stderr)

    if args.verbose:
        for reason in result.diagnostics:
            print(f"skipped {reason}", file=sys.stderr)

    if not result.records:
        print(NO_VALID_DATA_MESSAGE)
    else:
        print(load_message(result, session.source))
        print()
        print(format_table(result))
        print()
    print("\n".join(summary_lines(result)))

    try:
        if args.png:
            apply_plot_style(PLOT_STYLE_LIGHT)
            fig = Figure(figsize=(8, 5))
            render_npsh_chart(fig, result, envelope, for_export=True)
            export_png(fig, args.png)
            print(f"Chart written to {args.png}")
        if args.csv_out:
            export_records_csv(result, args.csv_out)
            print(f"Records written to {args.csv_out}")
    except OSError as exc:
        print(f"Export failed: {exc}", file=sys.stderr)
        return 1
    return 0


def run_gui():
    """Launch the Pump Cavitation Checker GUI."""
    _check_dependencies()

    # Set exception hook before anything else
    sys.excepthook = _exception_hook

    # Configure matplotlib backend before importing Qt widgets
    os.environ.setdefault("QT_API", "pyside6")
    import matplotlib
    matplotlib.use('QtAgg')

    from PySide6.QtWidgets import QApplication
    from PySide6.QtGui import QFont, QFontDatabase

    from .constants import FONT_FAMILIES
    from .theme import get_dark_stylesheet
    from .gui_main import CheckerMainWindow

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    font = QFont()
    for family in FONT_FAMILIES:
        if QFontDatabase.hasFamily(family):
            font.setFamily(family)
            break
    font.setPointSize(10)
    app.setFont(font)

    app.setStyleSheet(get_dark_stylesheet())

    window = CheckerMainWindow()
    window.show()

    sys.exit(app.exec())


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.csv_file is None:
        run_gui()
        return
    _check_dependencies(gui=False)
    sys.exit(run_headless(args))


if __name__ == "__main__":
    main()
