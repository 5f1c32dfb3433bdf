import streamlit as st
from datetime import date
from html import escape

from agrosmart.components import DASHBOARD_PAGE, load_css, location_detector, page_header
from agrosmart.forms import CropForm, submit_crop
from agrosmart.services import get_advisory, get_harvest_estimator, get_repository, get_settings

st.set_page_config(page_title="Add Crop · AgroSmart", page_icon="🌱", layout="wide")
load_css()

settings = get_settings()
estimator = get_harvest_estimator()

FORM_KEYS = ["crop_name", "crop_variety", "crop_area", "crop_location", "crop_sowing", "crop_notes"]
MANUAL, SUGGEST = "Manual Entry", "✨ AI Recommendation"

# Start clean after a successful save
if st.session_state.pop("reset_add_form", False):
    for k in FORM_KEYS + ["estimate_inputs", "suggestions"]:
        st.session_state.pop(k, None)
    estimator.set_harvest_date("")

# Keep typed values alive while their widgets are hidden by the mode switch
for k in FORM_KEYS:
    if k in st.session_state:
        st.session_state[k] = st.session_state[k]

st.session_state.setdefault("crop_sowing", date.today())
st.session_state.setdefault("crop_area", 1.0)
st.session_state.setdefault("add_mode", MANUAL)


def apply_suggestion(crop_name: str, variety: str):
    st.session_state.crop_name = crop_name
    st.session_state.crop_variety = variety
    st.session_state.add_mode = MANUAL
    # Force a fresh estimate for the chosen crop
    st.session_state.pop("estimate_inputs", None)
    estimator.set_harvest_date("")


page_header("Register New Crop", "Track performance, get insights, and maximize yield.")

# === LOCATION (shared by both modes) ===
location_detector(key="add", state_key="crop_location")
location = st.text_input("📍 Location", key="crop_location", placeholder="City or District, e.g. Pune, Maharashtra")

mode = st.radio("Mode", [MANUAL, SUGGEST], key="add_mode", horizontal=True, label_visibility="collapsed")

if mode == SUGGEST:
    st.caption("Get AI picks for your location and season, then finish the form with one click.")
    if st.button("Analyze & Suggest", type="primary", disabled=not location.strip()):
        with st.spinner("Looking at seasons, markets and weather..."):
            st.session_state.suggestions = get_advisory().crop_suggestions(
                location.strip(), st.session_state.crop_sowing
            )
        if not st.session_state.suggestions:
            st.warning("No suggestions right now. Try again in a moment or enter a crop manually.")

    suggestions = st.session_state.get("suggestions", [])
    cols = st.columns(3)
    for idx, s in enumerate(suggestions):
        with cols[idx % 3]:
            st.markdown(
                f"""
            <div class="crop-card" style="border-left-color: #7e22ce;">
                <div style="display:flex; justify-content:space-between;">
                    <span class="crop-name">{escape(s.crop_name)}</span>
                    <span class="status-badge">Score: {s.suitability_score:.0f}</span>
                </div>
                <div class="crop-meta" style="color:#7e22ce;">{escape(s.variety)}</div>
                <p style="font-size:14px; margin-top:10px;">{escape(s.reason)}</p>
                <div class="crop-meta">🌾 {escape(s.estimated_yield)} · 📊 {escape(s.market_outlook)}</div>
            </div>
            """,
                unsafe_allow_html=True,
            )
            st.button(
                "Select This Crop",
                key=f"pick_{idx}",
                on_click=apply_suggestion,
                args=(s.crop_name, s.variety),
                width="stretch",
            )
    st.stop()

# === MANUAL ENTRY ===
left, right = st.columns(2)
with left:
    st.markdown("#### 🌱 Crop Information")
    name = st.text_input("Crop Name", key="crop_name", placeholder="e.g. Wheat")
    variety = st.text_input("Variety (Optional)", key="crop_variety")
    area = st.number_input("Total Area (Acres)", key="crop_area", min_value=0.0, step=0.1)
    notes = st.text_area("Notes (Optional)", key="crop_notes", height=80)

with right:
    st.markdown("#### 📅 Timeline")
    sowing = st.date_input("Sowing Date", key="crop_sowing")

    inputs = (name, sowing.isoformat() if sowing else "", location)
    if st.session_state.get("estimate_inputs") != inputs:
        st.session_state.estimate_inputs = inputs
        estimator.inputs_changed(*inputs)

    if estimator.pending:
        with st.spinner("Calculating harvest date..."):
            estimator.wait(timeout=settings.debounce_seconds + settings.request_timeout + 5)

    harvest_date = estimator.harvest_date
    if estimator.pending:
        st.warning("⏳ Still calculating the harvest date...")
    elif harvest_date:
        st.success(f"✅ **Predicted harvest date:** {harvest_date}")
    else:
        st.info("🧮 Type a crop name to calculate the harvest date.")
    st.caption("Auto-calculated from crop type, sowing date and location.")

st.markdown("---")
if st.button(
    "Calculating Dates..." if estimator.pending else "Start Tracking →",
    type="primary",
    disabled=not estimator.ready,
    width="stretch",
):
    form = CropForm(
        name=name,
        variety=variety,
        area=area,
        location=location,
        sowing_date=sowing.isoformat() if sowing else "",
        expected_harvest_date=estimator.harvest_date,
        notes=notes,
    )
    problems = form.errors()
    if problems:
        for p in problems:
            st.error(f"⚠️ {p}")
    else:
        submit_crop(form, get_repository())
        st.session_state.reset_add_form = True
        st.switch_page(DASHBOARD_PAGE)
