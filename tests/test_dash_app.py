from dash import html

import dash_app
from cobb_douglas_explorer import config


def _defaults():
    return dict(config.DEFAULT_PARAMS)


def test_layout_builds():
    layout = dash_app._serve_layout()
    assert isinstance(layout, html.Div)


def test_render_view_records_single_change():
    values = _defaults()
    values["A"] = 12
    view = dash_app._render_view(values, _defaults(), None, {"session_id": "render-single"}, [], [])
    assert view["params"]["A"] == 12.0
    assert len(view["records"]) == 1
    record = view["records"][0]
    assert record["param_name"] == "A"
    assert record["old_value"] == 10.0
    assert record["new_value"] == 12.0
    assert record["session_id"] == "render-single"
    assert "up" in view["change_description"]
    assert view["log_entries"][-1].startswith("#")
    assert list(view["bar_figure"].data[0].y)[0] == 120.0
    assert view["bar_figure"].layout.title.text == "Output Comparison at K = 10.0"


def test_render_view_without_change_records_nothing():
    view = dash_app._render_view(_defaults(), _defaults(), None, None, None, None)
    assert view["records"] == []
    assert view["change_description"] == ""
    assert view["line_figure"].layout.uirevision == "cobb-douglas-0"


def test_render_view_snaps_slider_values():
    values = _defaults()
    values["alpha"] = 1.7
    view = dash_app._render_view(values, _defaults(), None, {"session_id": "render-snap"}, [], [])
    assert view["params"]["alpha"] == 0.99


def test_render_view_after_reset_skips_change_records():
    previous = _defaults()
    previous["K"] = 4.0
    view = dash_app._render_view(
        _defaults(),
        previous,
        {"uirevision_nonce": "1"},
        {"session_id": "render-reset"},
        [],
        [],
        reset=True,
    )
    assert view["records"] == []
    assert view["change_description"].startswith("Parameters reset")
    assert view["line_figure"].layout.uirevision == "cobb-douglas-1"


def test_reset_outputs_bump_uirevision():
    result = dash_app._reset_outputs({"uirevision_nonce": "4"}, {"session_id": "reset"}, [], None)
    assert result["values"] == config.DEFAULT_PARAMS
    assert result["ui_store"] == {"uirevision_nonce": "5"}
    assert result["records"][-1]["event"] == "reset"


def test_bump_uirevision_recovers_from_garbage():
    assert dash_app._bump_uirevision_store(None) == {"uirevision_nonce": "1"}
    assert dash_app._bump_uirevision_store({"uirevision_nonce": "2.0"}) == {"uirevision_nonce": "3"}
    assert dash_app._bump_uirevision_store({"uirevision_nonce": "x"}) == {"uirevision_nonce": "1"}


def test_log_lines_newest_first():
    assert dash_app._render_log_lines([]) == "Recent changes will appear here."
    assert dash_app._render_log_lines(["one", "two"]) == "Recent changes:\n- two\n- one"


def _component_ids(component):
    ids = set()
    if getattr(component, "id", None):
        ids.add(component.id)
    children = getattr(component, "children", None)
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        if hasattr(child, "to_plotly_json"):
            ids |= _component_ids(child)
    return ids


def test_layout_keeps_recent_log_store():
    ids = _component_ids(dash_app._serve_layout())
    assert {"store-recent-log", "store-records", "store-session"} <= ids


def test_sequence_continues_across_callbacks():
    session = {"session_id": "render-sequence"}
    values = _defaults()
    values["A"] = 12
    first = dash_app._render_view(values, _defaults(), None, session, [], [])
    moved = dict(values, K=12)
    second = dash_app._render_view(moved, values, None, session, first["records"], first["log_entries"])
    assert [record["seq"] for record in second["records"]] == [1, 2]
    reset = dash_app._reset_outputs(None, session, second["records"], second["log_entries"])
    assert reset["records"][-1]["seq"] == 3
    assert reset["log_entries"][-1].startswith("#3 reset")
