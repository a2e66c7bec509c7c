"""
Pump Cavitation Checker v1.0.0

Reads pump operating-point CSV files (French or English headers, with
an optional NPSHr reference curve section) and flags every operating
point whose NPSH available falls below the NPSH required.

Results are shown as a colour-coded table and an NPSH vs flow chart
annotated with the pump's operating envelope, and can be exported as
a 600 DPI PNG or a results CSV.
"""

APP_NAME = "Pump Cavitation Checker"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-19"
__version__ = APP_VERSION
