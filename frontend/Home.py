import io

import streamlit as st
from PIL import Image, UnidentifiedImageError

from state import init_state, reset_analysis
from ui import app_shell, render_result
from api import analyze_image, health, to_data_uri
from calorie_api.services.result_interpreter import interpret

st.set_page_config(page_title="Calorie Lens", page_icon="🍽️", layout="centered")
init_state()

app_shell("Calorie Lens 🍽️")

status = health()
if "error" in status:
    st.caption(f"🔴 Backend unreachable: {status['error']}")
else:
    st.caption(f"🟢 {status.get('message', 'Backend online')}")

# PIL format -> MIME type sent in the data-URI
MIME_BY_FMT = {
    "JPEG": "image/jpeg", "PNG": "image/png", "BMP": "image/bmp",
    "GIF": "image/gif", "TIFF": "image/tiff", "WEBP": "image/webp",
}

tab_camera, tab_upload = st.tabs(["📷 Camera", "📤 Upload"])
with tab_camera:
    shot = st.camera_input("Take a photo of your meal")
with tab_upload:
    upload = st.file_uploader(
        "Upload a food photo",
        type=["jpg", "jpeg", "png", "bmp", "gif", "tiff", "heic"],
    )

source = shot or upload
if source is not None:
    raw = source.getvalue()
    if not raw:
        st.error("Could not read the selected file.")
        st.stop()

    mime = getattr(source, "type", None) or "image/jpeg"
    try:
        pil = Image.open(io.BytesIO(raw))
        pil.load()
        mime = MIME_BY_FMT.get((pil.format or "").upper(), mime)
        st.image(pil, width=240)
    except UnidentifiedImageError:
        # HEIC and friends: Pillow can't preview them but Gemini can read them
        st.caption(f"Preview unavailable for {mime}")

    image = to_data_uri(raw, mime)
    if image != st.session_state["image"]:
        st.session_state["image"] = image
        reset_analysis()

    if st.button("🔍 Analyze", use_container_width=True):
        reset_analysis()
        with st.spinner("Analyzing..."):
            resp = analyze_image(image)
        if "error" in resp:
            st.session_state["error"] = resp["error"]
        else:
            st.session_state["analysis"] = interpret(resp.get("gemini"))

if st.session_state["error"]:
    st.error(f"Failed to analyze image. Please try again. ({st.session_state['error']})")

if st.session_state["analysis"] is not None:
    render_result(st.session_state["analysis"])
