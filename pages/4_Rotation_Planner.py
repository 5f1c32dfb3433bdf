import streamlit as st

from agrosmart.components import load_css, location_detector, page_header
from agrosmart.services import get_advisory

st.set_page_config(page_title="Rotation Planner · AgroSmart", page_icon="🌱", layout="wide")
load_css()

page_header("Crop Rotation Planner", "Plan your next crop to rebuild soil health and break pest cycles.")

col_form, col_result = st.columns([1, 2])

with col_form:
    location_detector(key="rotation", state_key="rotation_location")
    with st.form("rotation_form"):
        prev_crop = st.text_input("Previous Crop", placeholder="e.g. Corn, Wheat")
        plot_size = st.number_input("Plot Size (Acres)", min_value=0.1, value=10.0, step=0.5)
        location = st.text_input("Location", key="rotation_location", placeholder="Region or City")
        submitted = st.form_submit_button("Generate Plan", type="primary", width="stretch")

    if submitted:
        if not prev_crop.strip() or not location.strip():
            st.error("⚠️ Previous crop and location are required.")
        else:
            with st.spinner("Planning your rotation..."):
                st.session_state.rotation_plan = get_advisory().rotation_advice(
                    prev_crop.strip(), plot_size, location.strip()
                )
            st.session_state.rotation_requested = True

with col_result:
    plan = st.session_state.get("rotation_plan")
    if plan:
        st.markdown(f"### After **{plan.current_crop}**, consider:")
        for suggestion in plan.suggested_next_crops:
            with st.container(border=True):
                st.markdown(f"#### 🌱 {suggestion.crop_name}")
                st.markdown(suggestion.reason)
                for benefit in suggestion.benefits:
                    st.markdown(f"- ✅ {benefit}")
    elif st.session_state.get("rotation_requested"):
        st.warning("Couldn't build a rotation plan right now. Please try again.")
    else:
        st.info("🔄 Enter the crop you just harvested to see what to plant next.")
