"""
Constants for the Pump Cavitation Checker.

Centralises the header alias table, section names, table formats,
the default pump envelope, colour palettes, font families and the
matplotlib style dicts shared by the GUI preview and PNG export.
"""

from collections import OrderedDict

# ── Canonical record fields ──────────────────────────────────────────────
FIELD_TEMPERATURE = "temperature"
FIELD_PRESSURE = "pressure"
FIELD_FLOW = "flow"
FIELD_NPSHR = "npsh_required"
FIELD_NPSHA = "npsh_available"

# Header spellings per field, checked in order, first one present wins.
# French decorated name, English decorated name, bare English name.
HEADER_ALIASES = OrderedDict([
    (FIELD_TEMPERATURE, ("Température (°C)", "Temperature (°C)", "Temperature")),
    (FIELD_PRESSURE,    ("Pression (bar)", "Pressure (bar)", "Pressure")),
    (FIELD_FLOW,        ("Débit (m3/h)", "Flow (m3/h)", "Flow Rate", "Flow")),
    (FIELD_NPSHR,       ("NPSHr (m)", "NPSHr")),
    (FIELD_NPSHA,       ("NPSHa (m)", "NPSHa")),
])

# Header under which an interpolated NPSHr is merged into operating rows
CANONICAL_NPSHR_HEADER = HEADER_ALIASES[FIELD_NPSHR][0]

# ── Sectioned CSV layout ─────────────────────────────────────────────────
SECTION_MARKER = "#"
SECTION_OPERATING = "operating data"
SECTION_CURVE = "npshr curve"
KNOWN_SECTIONS = (SECTION_OPERATING, SECTION_CURVE)

LAYOUT_STANDARD = "standard"
LAYOUT_SECTIONED = "sectioned"

# Substrings used to find the curve columns (lower-cased header match)
CURVE_FLOW_KEYWORDS = ("flow", "débit", "debit")
CURVE_NPSHR_KEYWORD = "npshr"

# ── Record status labels ─────────────────────────────────────────────────
STATUS_SAFE = "✅ OK"
STATUS_RISK = "⚠️ Cavitation Risk"

# ── Results table: (header, record attribute, decimals) ─────────────────
TABLE_COLUMNS = [
    ("Temperature (°C)", "temperature", 1),
    ("Pressure (bar)",   "pressure", 2),
    ("Flow (m3/h)",      "flow", 1),
    ("NPSHr (m)",        "npsh_required", 2),
    ("NPSHa (m)",        "npsh_available", 2),
]
STATUS_COLUMN = "Status"

NO_DATA_MESSAGE = "No data loaded. Please select a CSV file to analyze."
NO_VALID_DATA_MESSAGE = "No valid data found in the CSV file."
INVALID_FILE_MESSAGE = "Please select a valid CSV file."

# ── Pump envelope defaults ───────────────────────────────────────────────
# API 610 pump type designations offered in the GUI combo box
PUMP_TYPES = [
    "OH1", "OH2", "OH3", "OH4", "OH5", "OH6",
    "BB1", "BB2", "BB3", "BB4", "BB5",
    "VS1", "VS2", "VS3", "VS4", "VS5", "VS6", "VS7",
]

DEFAULT_ENVELOPE = {
    'pump_type':   "OH2",
    'rated_flow':  100.0,
    'aor_min':     50.0,
    'aor_max':     130.0,
    'por_min':     70.0,
    'por_max':     120.0,
    'rated_npshr': 4.0,
}

# ── Font family fallback chain ───────────────────────────────────────────
FONT_FAMILIES = [
    "Segoe UI", "DejaVu Sans", "Liberation Sans", "Noto Sans",
    "Ubuntu", "Helvetica", "Arial", "sans-serif",
]

# ── Dark GUI colour palette ──────────────────────────────────────────────
DARK_COLORS = {
    'bg':           '#1e1e2e',
    'bg_alt':       '#252536',
    'surface0':     '#313244',
    'bg_widget':    '#2a2a3c',
    'bg_input':     '#333348',
    'fg':           '#cdd6f4',
    'fg_dim':       '#9399b2',
    'fg_bright':    '#ffffff',
    'accent':       '#89b4fa',
    'accent_hover': '#74c7ec',
    'green':        '#a6e3a1',
    'yellow':       '#f9e2af',
    'red':          '#f38ba8',
    'border':       '#45475a',
    'overlay0':     '#6c7086',
    'selection':    '#45475a',
}

# ── Chart palette ────────────────────────────────────────────────────────
CHART_PALETTE = {
    'npsha_line':    '#0033A1',   # NPSH available
    'npshr_line':    '#ED7D31',   # NPSH required (records)
    'curve_line':    '#7030A0',   # reference NPSHr curve
    'risk_marker':   '#C00000',
    'safe_marker':   '#70AD47',
    'aor_fill':      '#FFC000',
    'por_fill':      '#70AD47',
    'rated_line':    '#333333',
    'rated_npshr':   '#C00000',
}

# Row tints for the results table (dark GUI)
ROW_SAFE_BG = '#23352a'
ROW_RISK_BG = '#44263a'

# ── Export / light-theme text colours ────────────────────────────────────
EXPORT_TEXT_COLOR = '#333333'
EXPORT_BG_COLOR = '#ffffff'

# ── Export settings ──────────────────────────────────────────────────────
EXPORT_DPI = 600
EXPORT_WIDTH_INCHES = 6.0
CLIPBOARD_DPI = 150

# ── Matplotlib dark-theme style dict (GUI preview) ──────────────────────
PLOT_STYLE_DARK = {
    'figure.facecolor':  DARK_COLORS['bg_alt'],
    'axes.facecolor':    DARK_COLORS['bg_widget'],
    'axes.edgecolor':    DARK_COLORS['border'],
    'axes.labelcolor':   DARK_COLORS['fg'],
    'text.color':        DARK_COLORS['fg'],
    'xtick.color':       DARK_COLORS['fg_dim'],
    'ytick.color':       DARK_COLORS['fg_dim'],
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    9,
    'legend.fontsize':   6.5,
    'grid.color':        DARK_COLORS['border'],
    'legend.facecolor':  DARK_COLORS['bg_widget'],
    'legend.edgecolor':  DARK_COLORS['border'],
}

# ── Matplotlib light-theme style dict (export) ──────────────────────────
PLOT_STYLE_LIGHT = {
    'figure.facecolor':  '#ffffff',
    'axes.facecolor':    '#ffffff',
    'axes.edgecolor':    '#333333',
    'axes.labelcolor':   '#1a1a2e',
    'text.color':        '#1a1a2e',
    'xtick.color':       '#333333',
    'ytick.color':       '#333333',
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    9,
    'legend.fontsize':   6.5,
    'grid.color':        '#cccccc',
    'legend.facecolor':  '#ffffff',
    'legend.edgecolor':  '#999999',
}
