#!/usr/bin/env python3
"""
EM Lab — Interactive Web Frontend

Launch: streamlit run frontend.py
"""

import json

import streamlit as st

# ─── Page Config ────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="EM Lab — Electromagnetics Explorer",
    page_icon="🧲",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ─── Imports (after page config) ────────────────────────────────────────────
from emlab.errors import EngineError
from emlab.topics import TOPIC_REGISTRY, Topic, evaluate, parse_param, result_to_dict
from emlab.visualization.plotly_viz import plot_result

AREA_TITLES = {
    "transmission": "📡 Transmission Lines",
    "propagation": "🌊 Waves & Propagation",
    "vectors": "➗ Vector Calculus",
    "statics": "⚡ Electro- & Magnetostatics",
    "timevarying": "🔁 Time-Varying Fields",
    "antennas": "📶 Antennas",
}


def topic_area(topic: Topic) -> str:
    """Area key from the package that implements the topic."""
    return TOPIC_REGISTRY[topic].function.__module__.split(".")[1]


def parameter_widget(name: str, default):
    """One input per default parameter; non-numeric values are edited as literals."""
    if isinstance(default, bool):
        return st.checkbox(name, value=default)
    if isinstance(default, int):
        return int(st.number_input(name, value=default, step=1))
    if isinstance(default, float):
        return st.number_input(name, value=default, format="%.6g")
    return parse_param(st.text_input(name, value=str(default)))


# ═══════════════════════════════════════════════════════════════════════════════
# SIDEBAR — Topic selection and parameters
# ═══════════════════════════════════════════════════════════════════════════════

with st.sidebar:
    st.title("EM Lab")
    st.caption("Electromagnetics teaching engine")
    st.divider()

    areas = list(AREA_TITLES)
    area = st.selectbox("Area", areas, format_func=AREA_TITLES.get)
    topics = [t for t in Topic if topic_area(t) == area]
    topic = st.selectbox("Topic", topics, format_func=lambda t: t.value.replace("_", " ").title())
    entry = TOPIC_REGISTRY[topic]
    st.caption(entry.description)

    st.subheader("Parameters")
    params = {name: parameter_widget(name, default) for name, default in entry.defaults.items()}

    extra = st.text_area("Extra parameters (key=value per line)", value="")
    for line in extra.splitlines():
        key, sep, value = line.partition("=")
        if sep and key.strip():
            params[key.strip()] = parse_param(value)


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN AREA — Results
# ═══════════════════════════════════════════════════════════════════════════════

st.header(topic.value.replace("_", " ").title())

try:
    result = evaluate(topic, **params)
except EngineError as exc:
    st.error(f"🚫 {exc}")
    st.stop()

flat = result_to_dict(result)
records = flat if isinstance(flat, list) else [flat]

for i, record in enumerate(records):
    if len(records) > 1:
        st.subheader(f"Solution {i + 1}")
    if not isinstance(record, dict):
        st.metric(topic.value, str(record))
        continue

    scalars = {
        k: v for k, v in record.items()
        if not isinstance(v, (list, dict)) or (isinstance(v, dict) and set(v) == {"re", "im"}
                                               and not isinstance(v["re"], list))
    }
    cols = st.columns(4)
    for j, (key, value) in enumerate(scalars.items()):
        with cols[j % 4]:
            if isinstance(value, dict):
                text = f"{value['re']:.4g} {'+' if value['im'] >= 0 else '-'} j{abs(value['im']):.4g}"
            elif isinstance(value, float):
                text = f"{value:.4g}"
            elif value is None:
                text = "—"
            else:
                text = str(value)
            st.metric(key, text)

for fig in plot_result(result):
    st.plotly_chart(fig, use_container_width=True)

with st.expander("Raw result"):
    st.code(json.dumps(flat, indent=2, default=str), language="json")
