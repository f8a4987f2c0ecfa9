import streamlit as st


def init_state():
    defaults = {
        "image": None,         # data-URI of the last captured/uploaded photo
        "analysis": None,      # InterpretedResult of the last analysis
        "error": None,
    }
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v


def reset_analysis():
    st.session_state["analysis"] = None
    st.session_state["error"] = None
