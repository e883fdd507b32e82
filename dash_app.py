"""Dash layout and callbacks for the Cobb-Douglas explorer."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import dash
from dash import Input, Output, State, dcc, html
import plotly.graph_objects as go

from cobb_douglas_explorer import charts, config, verbal_descriptions
from cobb_douglas_explorer.logger import (
    append_preview_log,
    build_csv_content,
    build_event_record,
    format_preview_message,
    new_session_id,
)
from cobb_douglas_explorer.logging_config import setup_logging
from cobb_douglas_explorer.production import Recomputation
from cobb_douglas_explorer.store import ParameterStore, normalize_param_value, normalize_params

logger = logging.getLogger("cobb_douglas_explorer.dash_app")

_SLIDER_MARKS: Dict[str, Dict[float, str]] = {
    "A": {1.0: "1", 5.0: "5", 10.0: "10", 15.0: "15", 20.0: "20"},
    "N": {1.0: "1", 5.0: "5", 10.0: "10", 15.0: "15", 20.0: "20"},
    "alpha": {0.01: "0.01", 0.25: "0.25", 0.5: "0.5", 0.75: "0.75", 0.99: "0.99"},
    "K": {1.0: "1", 5.0: "5", 10.0: "10", 15.0: "15", 20.0: "20"},
}

_PANEL_STYLE: Dict[str, Any] = {
    "backgroundColor": "#f9fafb",
    "padding": "16px",
    "borderRadius": "6px",
}

_OUTPUT_PANEL_STYLE: Dict[str, Any] = {
    "backgroundColor": "#eff6ff",
    "padding": "16px",
    "borderRadius": "6px",
    "marginTop": "24px",
}

_INSIGHT_PANEL_STYLE: Dict[str, Any] = {
    "backgroundColor": "#fefce8",
    "padding": "16px",
    "borderRadius": "6px",
    "marginTop": "32px",
}

_VIEW_OUTPUT_COUNT = 7
_RESET_OUTPUT_COUNT = 8


def _coerce_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _get_session_id(session_data: Optional[Dict[str, Any]]) -> str:
    if isinstance(session_data, dict):
        raw = session_data.get("session_id")
        if isinstance(raw, str) and raw:
            return raw
    return "unknown"


def _resolve_uirevision_value(ui_store: Optional[Dict[str, Any]]) -> str:
    nonce = config.DEFAULT_UI_NONCE
    if isinstance(ui_store, dict):
        raw = ui_store.get("uirevision_nonce")
        if raw is not None:
            nonce = str(raw)
    return f"{config.UI_BASE_TOKEN}{nonce}"


def _bump_uirevision_store(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    base = dict(data) if isinstance(data, dict) else {}
    raw = base.get("uirevision_nonce", config.DEFAULT_UI_NONCE)
    try:
        nonce_int = int(raw)
    except (TypeError, ValueError):
        try:
            nonce_int = int(float(raw))
        except (TypeError, ValueError):
            nonce_int = int(config.DEFAULT_UI_NONCE)
    base["uirevision_nonce"] = str(nonce_int + 1)
    return base


def _changed_params(previous: Dict[str, float], current: Dict[str, float]) -> List[str]:
    return [name for name in config.PARAM_NAMES if abs(previous[name] - current[name]) >= 1e-9]


def _output_panel_children(params: Dict[str, float], derived: Recomputation) -> List[Any]:
    current_line, baseline_line = verbal_descriptions.output_lines(derived.comparison)
    return [
        html.H4("Output Comparison:", style={"color": "#1e40af", "margin": "0 0 8px"}),
        html.P(current_line, style={"fontWeight": 700, "margin": "0"}),
        html.P(baseline_line, style={"color": "#4b5563", "margin": "0"}),
        html.P(
            verbal_descriptions.current_summary(params),
            style={"fontSize": "0.85rem", "color": "#4b5563", "margin": "8px 0 0"},
        ),
        html.P(
            verbal_descriptions.baseline_summary(params["K"]),
            style={"fontSize": "0.85rem", "color": "#4b5563", "margin": "0"},
        ),
    ]


def _build_figures(store: ParameterStore, uirevision: str) -> Dict[str, go.Figure]:
    params = store.params
    return {
        "line": charts.build_line_figure(store.derived, params["K"], uirevision=uirevision),
        "bar": charts.build_bar_figure(store.derived.comparison, params["K"]),
    }


def _render_view(
    values: Dict[str, Any],
    previous_params: Optional[Dict[str, Any]],
    ui_store_data: Optional[Dict[str, Any]],
    session_data: Optional[Dict[str, Any]],
    records: Optional[List[Dict[str, Any]]],
    log_entries: Optional[List[str]],
    *,
    reset: bool = False,
) -> Dict[str, Any]:
    """Derive everything the page shows from one set of slider values."""
    previous = normalize_params(previous_params)
    store = ParameterStore(previous)
    store.update(values)
    params = store.params
    figures = _build_figures(store, _resolve_uirevision_value(ui_store_data))

    records = list(records) if isinstance(records, list) else []
    log_entries = list(log_entries) if isinstance(log_entries, list) else []
    description = verbal_descriptions.describe_change(None, None, None) if reset else ""
    session_id = _get_session_id(session_data)
    # The reset callback already recorded the jump back to defaults
    changed = [] if reset else _changed_params(previous, params)
    for name in changed:
        record = build_event_record(
            session_id,
            event="param_change",
            params=params,
            comparison=store.derived.comparison,
            param_name=name,
            old_value=previous[name],
            new_value=params[name],
            previous=records[-1] if records else None,
        )
        records.append(record)
        log_entries = append_preview_log(log_entries, format_preview_message(record))
        description = verbal_descriptions.describe_change(name, previous[name], params[name])

    return {
        "line_figure": figures["line"],
        "bar_figure": figures["bar"],
        "output_panel": _output_panel_children(params, store.derived),
        "change_description": description,
        "params": params,
        "records": records,
        "log_entries": log_entries,
    }


def _render_log_lines(log_entries: Any) -> str:
    if not isinstance(log_entries, list) or not log_entries:
        return "Recent changes will appear here."
    lines = [f"- {entry}" for entry in reversed(log_entries)]
    return "\n".join(["Recent changes:", *lines])


def _reset_outputs(
    ui_store_data: Optional[Dict[str, Any]],
    session_data: Optional[Dict[str, Any]],
    records: Optional[List[Dict[str, Any]]],
    log_entries: Optional[List[str]],
) -> Dict[str, Any]:
    store = ParameterStore()
    records = list(records) if isinstance(records, list) else []
    record = build_event_record(
        _get_session_id(session_data),
        event="reset",
        params=store.params,
        comparison=store.derived.comparison,
        source="button",
        previous=records[-1] if records else None,
    )
    records.append(record)
    return {
        "values": store.params,
        "ui_store": _bump_uirevision_store(ui_store_data),
        "records": records,
        "log_entries": append_preview_log(log_entries, format_preview_message(record)),
    }


_INITIAL_STORE = ParameterStore()
_INITIAL_FIGURES = _build_figures(
    _INITIAL_STORE,
    f"{config.UI_BASE_TOKEN}{config.DEFAULT_UI_NONCE}",
)


app = dash.Dash(__name__, title="Cobb-Douglas Production Function")
server = app.server


def _param_control_row(param: str) -> html.Div:
    cfg = config.PARAM_BOUNDS[param]
    slider_id = f"slider-{param}"
    input_id = f"input-{param}"
    symbol = config.PARAM_SYMBOLS[param]
    return html.Div(
        [
            html.Label(config.PARAM_LABELS[param], htmlFor=slider_id, style={"fontWeight": 600}),
            html.Div(
                [
                    html.Div(
                        dcc.Slider(
                            id=slider_id,
                            min=cfg["min"],
                            max=cfg["max"],
                            step=cfg["step"],
                            value=config.DEFAULT_PARAMS[param],
                            marks=_SLIDER_MARKS[param],
                            updatemode="drag",
                            tooltip={"placement": "bottom", "always_visible": False},
                        ),
                        style={"flex": "1"},
                        title=f"Drag to change {symbol} ({cfg['min']:g} to {cfg['max']:g}).",
                    ),
                    html.Div(
                        dcc.Input(
                            id=input_id,
                            type="number",
                            min=cfg["min"],
                            max=cfg["max"],
                            step=cfg["step"],
                            value=config.DEFAULT_PARAMS[param],
                            debounce=True,
                            style={"width": "88px", "marginLeft": "12px", "textAlign": "right"},
                        ),
                        role="group",
                        title=f"Type an exact {symbol} value (step {cfg['step']:g}).",
                        **{"aria-label": f"{config.PARAM_LABELS[param]} (exact value)"},
                    ),
                ],
                style={"display": "flex", "alignItems": "center", "marginTop": "8px"},
            ),
        ],
        style={"marginBottom": "20px"},
    )


def _serve_layout() -> html.Div:
    controls_column = html.Div(
        [
            html.H3("Parameters"),
            *[_param_control_row(name) for name in config.PARAM_NAMES],
            html.Button("Reset parameters", id="btn-reset", n_clicks=0, type="button"),
            html.Div(
                _output_panel_children(_INITIAL_STORE.params, _INITIAL_STORE.derived),
                id="output-panel",
                style=_OUTPUT_PANEL_STYLE,
            ),
            html.P(
                "",
                id="change-description",
                style={"fontStyle": "italic", "color": "#374151", "minHeight": "1.2em"},
                **{"aria-live": "polite"},
            ),
        ],
        style={**_PANEL_STYLE, "flex": "1", "minWidth": "280px"},
    )

    charts_column = html.Div(
        [
            dcc.Graph(
                id="graph-bar",
                figure=_INITIAL_FIGURES["bar"],
                config={"displaylogo": False},
            ),
            html.H3("Production Functions"),
            dcc.Graph(
                id="graph-line",
                figure=_INITIAL_FIGURES["line"],
                config={"displaylogo": False},
            ),
        ],
        style={"flex": "1", "minWidth": "0"},
    )

    insight_section = html.Div(
        [
            html.H3("Economics Insight", style={"color": "#854d0e"}),
            html.P(verbal_descriptions.INSIGHT_INTRO),
            html.P(verbal_descriptions.INSIGHT_LEAD),
            html.Ul([html.Li(point) for point in verbal_descriptions.INSIGHT_POINTS]),
        ],
        style=_INSIGHT_PANEL_STYLE,
    )

    log_section = html.Div(
        [
            html.H3("History"),
            html.Pre(_render_log_lines([]), id="log-display", style={"fontSize": "0.85rem"}),
            html.Button("Download CSV", id="btn-download-csv", n_clicks=0, type="button"),
            dcc.Download(id="download-csv"),
        ],
        style={"marginTop": "32px"},
    )

    return html.Div(
        [
            dcc.Store(id="store-session", data={"session_id": new_session_id()}),
            dcc.Store(id="store-ui", data={"uirevision_nonce": config.DEFAULT_UI_NONCE}),
            dcc.Store(id="store-params", data=dict(config.DEFAULT_PARAMS)),
            dcc.Store(id="store-records", storage_type="memory", data=[]),
            dcc.Store(id="store-recent-log", data=[]),
            html.H1("Cobb-Douglas Production Function", style={"textAlign": "center"}),
            html.H2(verbal_descriptions.EQUATION_TEXT, style={"textAlign": "center"}),
            html.Div(
                [controls_column, charts_column],
                style={"display": "flex", "gap": "24px", "flexWrap": "wrap"},
            ),
            insight_section,
            log_section,
        ],
        style={"maxWidth": "1100px", "margin": "0 auto", "padding": "24px"},
    )


app.layout = _serve_layout


def _register_sync_callback(param: str) -> None:
    @app.callback(
        [
            Output(f"slider-{param}", "value"),
            Output(f"input-{param}", "value"),
        ],
        [
            Input(f"slider-{param}", "value"),
            Input(f"input-{param}", "value"),
        ],
        prevent_initial_call=True,
    )
    def _sync_slider_and_input(slider_value, input_value):
        ctx = dash.callback_context
        trigger_id = ctx.triggered[0]["prop_id"].split(".")[0] if ctx.triggered else ""
        raw = input_value if trigger_id == f"input-{param}" else slider_value
        if _coerce_float(raw) is None:
            return dash.no_update, dash.no_update
        value = normalize_param_value(param, raw)
        return value, value


for _name in config.PARAM_NAMES:
    _register_sync_callback(_name)


@app.callback(
    [
        Output("graph-line", "figure"),
        Output("graph-bar", "figure"),
        Output("output-panel", "children"),
        Output("change-description", "children"),
        Output("store-params", "data"),
        Output("store-records", "data"),
        Output("store-recent-log", "data"),
    ],
    [
        Input("slider-A", "value"),
        Input("slider-N", "value"),
        Input("slider-alpha", "value"),
        Input("slider-K", "value"),
        Input("store-ui", "data"),
    ],
    [
        State("store-params", "data"),
        State("store-session", "data"),
        State("store-records", "data"),
        State("store-recent-log", "data"),
    ],
    prevent_initial_call=True,
)
def _update_view(
    a_value,
    n_value,
    alpha_value,
    k_value,
    ui_store_data,
    params_data,
    session_data,
    records,
    log_entries,
):
    raw = {"A": a_value, "N": n_value, "alpha": alpha_value, "K": k_value}
    if any(_coerce_float(value) is None for value in raw.values()):
        return (dash.no_update,) * _VIEW_OUTPUT_COUNT
    ctx = dash.callback_context
    reset = any(item["prop_id"] == "store-ui.data" for item in ctx.triggered or [])
    view = _render_view(raw, params_data, ui_store_data, session_data, records, log_entries, reset=reset)
    return (
        view["line_figure"],
        view["bar_figure"],
        view["output_panel"],
        view["change_description"],
        view["params"],
        view["records"],
        view["log_entries"],
    )


@app.callback(
    [
        Output("slider-A", "value", allow_duplicate=True),
        Output("slider-N", "value", allow_duplicate=True),
        Output("slider-alpha", "value", allow_duplicate=True),
        Output("slider-K", "value", allow_duplicate=True),
        Output("store-ui", "data"),
        Output("store-records", "data", allow_duplicate=True),
        Output("store-recent-log", "data", allow_duplicate=True),
        Output("change-description", "children", allow_duplicate=True),
    ],
    Input("btn-reset", "n_clicks"),
    State("store-ui", "data"),
    State("store-session", "data"),
    State("store-records", "data"),
    State("store-recent-log", "data"),
    prevent_initial_call=True,
)
def _handle_reset(n_clicks, ui_store_data, session_data, records, log_entries):
    if not n_clicks:
        return (dash.no_update,) * _RESET_OUTPUT_COUNT
    result = _reset_outputs(ui_store_data, session_data, records, log_entries)
    values = result["values"]
    logger.info("Reset requested (session %s)", _get_session_id(session_data))
    return (
        values["A"],
        values["N"],
        values["alpha"],
        values["K"],
        result["ui_store"],
        result["records"],
        result["log_entries"],
        verbal_descriptions.describe_change(None, None, None),
    )


@app.callback(
    Output("log-display", "children"),
    Input("store-recent-log", "data"),
)
def _render_log_display(log_entries):
    return _render_log_lines(log_entries)


@app.callback(
    Output("download-csv", "data"),
    Input("btn-download-csv", "n_clicks"),
    State("store-records", "data"),
    State("store-session", "data"),
    prevent_initial_call=True,
)
def _handle_download_csv(n_clicks, records, session_data):
    if not n_clicks:
        return dash.no_update
    csv_content = build_csv_content(records if isinstance(records, list) else [])
    if not csv_content:
        return dash.no_update
    filename = f"session_{_get_session_id(session_data)}.csv"
    return dcc.send_string(csv_content, filename=filename)


if __name__ == "__main__":
    setup_logging()
    app.run(debug=True)
