import streamlit as st

from calorie_api.schemas.analyze_schema import InterpretedResult
from calorie_api.utils.display import food_icon, format_confidence, tier_color

_MOBILE_CSS = """
<style>
.block-container{ max-width: 480px !important; }
:root{ --txt:#1f2937; --muted:#6b7280; --border:#e5e7eb; --panel:#f9fafb; --brand:#0f172a; }
.appbar{
  position: sticky; top:0; z-index:50;
  background: var(--brand); color:#e5e7eb;
  padding: 10px 14px; margin: -10px -10px 8px -10px; font-weight:800; font-size:18px; text-align:center;
}
.kcal {font-size: 20px; font-weight: 800; color:#2563eb; margin: 0;}
.badge {border-radius: 999px; padding: 2px 10px; font-size: 12px; font-weight: 700; color: #fff;}
#MainMenu, footer {visibility:hidden;}
</style>
"""


def app_shell(title: str):
    st.markdown(_MOBILE_CSS, unsafe_allow_html=True)
    st.markdown(f"<div class='appbar'>{title}</div>", unsafe_allow_html=True)


def food_card(name: str, kcal, confidence):
    with st.container(border=True):
        c1, c2 = st.columns([3, 2])
        with c1:
            st.markdown(f"### {food_icon(name)} {name}")
            if kcal is not None:
                st.markdown(f"<p class='kcal'>{kcal:g} kcal</p>", unsafe_allow_html=True)
        with c2:
            if confidence is not None:
                st.markdown(
                    f"<span class='badge' style='background:{tier_color(confidence)}'>"
                    f"{format_confidence(confidence)}</span>",
                    unsafe_allow_html=True,
                )


def render_result(result: InterpretedResult):
    if result.parsed:
        st.subheader("🍎 Food Analysis Results")
        for item in result.items:
            food_card(item.food, item.estimated_calories, item.confidence)
        total = sum(i.estimated_calories or 0 for i in result.items)
        st.caption(f"Total: {total:g} kcal")
        with st.expander("Raw model response", expanded=False):
            st.code(result.raw_text)
    elif result.raw_text:
        # parse failed; show whatever the model said
        st.subheader("🤖 Gemini Response")
        st.code(result.raw_text)
    else:
        st.info("The model returned an empty response.")
