"""Streamlit UI components."""

from __future__ import annotations

import streamlit as st
import streamlit_shadcn_ui as ui

from . import config
from .production import ComparisonPair
from .store import ParameterStore

_STORE_KEY = "parameter_store"


def get_store() -> ParameterStore:
    if _STORE_KEY not in st.session_state:
        st.session_state[_STORE_KEY] = ParameterStore()
    return st.session_state[_STORE_KEY]


def _sync_from_widget(store: ParameterStore, name: str) -> None:
    store.set(name, st.session_state[f"param_{name}"])


def parameter_sliders(store: ParameterStore) -> None:
    for name in config.PARAM_NAMES:
        cfg = config.PARAM_BOUNDS[name]
        key = f"param_{name}"
        if key not in st.session_state:
            st.session_state[key] = store.get(name)
        st.slider(
            config.PARAM_LABELS[name],
            min_value=cfg["min"],
            max_value=cfg["max"],
            step=cfg["step"],
            format="%.2f",
            key=key,
            on_change=_sync_from_widget,
            args=(store, name),
        )


def reset_sliders(store: ParameterStore) -> None:
    store.reset()
    for name in config.PARAM_NAMES:
        st.session_state[f"param_{name}"] = store.get(name)


def output_cards(comparison: ComparisonPair, K: float) -> None:
    left, right = st.columns(2)
    with left:
        ui.metric_card(
            title="Current",
            content=f"Y = {comparison.current_output:.2f}",
            description=f"at K = {K:.1f}",
            key="card_current",
        )
    with right:
        ui.metric_card(
            title="Baseline",
            content=f"Y = {comparison.baseline_output:.2f}",
            description=(
                f"A={config.BASELINE_PARAMS['A']:g}, N={config.BASELINE_PARAMS['N']:g}, "
                f"α={config.BASELINE_PARAMS['alpha']:g}"
            ),
            key="card_baseline",
        )
