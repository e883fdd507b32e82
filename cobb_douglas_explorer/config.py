from __future__ import annotations

# Capital sampling domain
K_MIN = 1.0
K_MAX = 20.0
K_STEP = 0.2

# Rounding applied to sampled/compared values
OUTPUT_DECIMALS = 2
CAPITAL_DECIMALS = 1

# Parameter defaults and bounds
PARAM_NAMES = ("A", "N", "alpha", "K")
SERIES_PARAM_NAMES = ("A", "N", "alpha")
DEFAULT_PARAMS = {"A": 10.0, "N": 10.0, "alpha": 0.3, "K": 10.0}
PARAM_BOUNDS = {
    "A": {"min": 1.0, "max": 20.0, "step": 0.5},
    "N": {"min": 1.0, "max": 20.0, "step": 0.5},
    "alpha": {"min": 0.01, "max": 0.99, "step": 0.01},
    "K": {"min": 1.0, "max": 20.0, "step": 0.5},
}
PARAM_LABELS = {
    "A": "Total Factor Productivity (A)",
    "N": "Labor (N)",
    "alpha": "Output Elasticity of Capital (α)",
    "K": "Level of Capital (K)",
}
PARAM_SYMBOLS = {"A": "A", "N": "N", "alpha": "α", "K": "K"}

# Fixed reference curve
BASELINE_PARAMS = {"A": 10.0, "N": 10.0, "alpha": 0.25}

# Marker line clears both curves by 10%
MARKER_HEADROOM = 1.1

# UI tokens
UI_BASE_TOKEN = "cobb-douglas-"
DEFAULT_UI_NONCE = "0"
APP_MODE = "dash"

# Interaction log
SCHEMA_VERSION = 1
FUNCTION_TYPE = "cobb_douglas"
RECENT_LOG_CAPACITY = 10
SCHEMA_COLUMNS = [
    "schema_version",
    "session_id",
    "t_server_iso",
    "seq",
    "event",
    "function_type",
    "param_name",
    "old_value",
    "new_value",
    "source",
    "A",
    "N",
    "alpha",
    "K",
    "current_output",
    "baseline_output",
    "elapsed_time_ms",
    "mode",
]

# Plot palette and styles
FIGURE_COLORS = {
    "current": "#4ade80",
    "baseline": "#f59e0b",
    "marker": "#475569",
    "bar": "#4ade80",
    "grid": "#e5e7eb",
}
CURRENT_LINE_STYLE = {"color": FIGURE_COLORS["current"], "width": 2}
BASELINE_LINE_STYLE = {"color": FIGURE_COLORS["baseline"], "width": 2}
MARKER_LINE_STYLE = {"color": FIGURE_COLORS["marker"], "width": 2, "dash": "dash"}
LINE_CHART_HEIGHT = 360
BAR_CHART_HEIGHT = 220

# Trace names
CURRENT_TRACE_NAME = "New production function"
BASELINE_TRACE_NAME = "Baseline"
MARKER_TRACE_NAME = "Current K"
BAR_CATEGORIES = ("Current", "Baseline")

# Logging
LOGGER_NAME = "cobb_douglas_explorer"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
