import streamlit as st

from cobb_douglas_explorer import charts, config, verbal_descriptions
from cobb_douglas_explorer.logging_config import setup_logging
from cobb_douglas_explorer.ui_components import (
    get_store,
    output_cards,
    parameter_sliders,
    reset_sliders,
)

setup_logging()

# Wide layout, parameters left and charts right
st.set_page_config(page_title="Cobb-Douglas Production Function", layout="wide")

st.title("Cobb-Douglas Production Function")
st.latex(r"Y = A \times K^{\alpha} \times N^{(1-\alpha)}")

if "graph_nonce" not in st.session_state:
    st.session_state["graph_nonce"] = 0


def _on_reset(store):
    reset_sliders(store)
    st.session_state["graph_nonce"] += 1


store = get_store()

left_col, right_col = st.columns([1, 1], gap="large")

with left_col:
    st.header("Parameters")
    parameter_sliders(store)
    st.button(
        "Reset parameters",
        use_container_width=True,
        on_click=_on_reset,
        args=(store,),
    )

    params = store.params
    derived = store.derived
    st.subheader("Output Comparison")
    output_cards(derived.comparison, params["K"])
    for line in verbal_descriptions.output_lines(derived.comparison):
        st.write(line)
    st.caption(verbal_descriptions.current_summary(params))
    st.caption(verbal_descriptions.baseline_summary(params["K"]))

with right_col:
    st.plotly_chart(
        charts.build_bar_figure(derived.comparison, params["K"]),
        use_container_width=True,
        config={"displaylogo": False},
    )
    st.subheader("Production Functions")
    uirevision = f"{config.UI_BASE_TOKEN}{st.session_state['graph_nonce']}"
    st.plotly_chart(
        charts.build_line_figure(derived, params["K"], uirevision=uirevision),
        use_container_width=True,
        config={"displaylogo": False},
    )

st.divider()

st.header("Economics Insight")
st.markdown(verbal_descriptions.insight_markdown())
