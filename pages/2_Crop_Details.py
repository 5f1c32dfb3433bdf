import streamlit as st
from datetime import datetime, timezone
from html import escape

from agrosmart.components import DASHBOARD_PAGE, load_css, severity_badge, weather_card
from agrosmart.services import cached_crop_insights, get_repository, weather_or_placeholder
from agrosmart.timeline import progress
from agrosmart.visualisations import create_progress_gauge

st.set_page_config(page_title="Crop Details · AgroSmart", page_icon="🌱", layout="wide")
load_css()

crop_id = st.query_params.get("id") or st.session_state.get("selected_crop_id")
crop = get_repository().find_by_id(crop_id) if crop_id else None

# Stale or missing link: back to the farm, not an error page
if crop is None:
    st.session_state.pop("selected_crop_id", None)
    st.switch_page(DASHBOARD_PAGE)

st.query_params["id"] = crop.id

if st.button("← Back to Farm"):
    st.switch_page(DASHBOARD_PAGE)

# === HEADER ===
timeline = progress(crop.sowing_date, crop.expected_harvest_date, datetime.now(timezone.utc))

col_info, col_gauge = st.columns([3, 2])
with col_info:
    st.markdown(
        f"""
    <div style="margin-bottom: 10px;">
        <span class="status-badge">🍃 {escape(crop.status.value)}</span>
        <span class="crop-meta">&nbsp; {crop.area:g} Acres</span>
    </div>
    <h1 class="main-title">{escape(crop.name)}</h1>
    <p class="subtitle">{escape(crop.variety or 'Standard Variety')} · {escape(crop.location)}</p>
    """,
        unsafe_allow_html=True,
    )
    c1, c2, c3 = st.columns(3)
    c1.metric("Sown", crop.sowing_date)
    c2.metric("Expected Harvest", crop.expected_harvest_date)
    c3.metric("Harvest In", f"{timeline.days_left} Days")
    if crop.notes:
        st.caption(f"📝 {crop.notes}")

with col_gauge:
    st.plotly_chart(
        create_progress_gauge(timeline.percent, timeline.days_left),
        width="stretch",
        config={"displayModeBar": False},
    )

weather, live = weather_or_placeholder(crop.location)
weather_card(weather, live=live)

# === AI INSIGHTS ===
with st.spinner("🤖 Asking the agronomy advisor..."):
    insights = cached_crop_insights(crop.id, weather.condition, crop, weather)

col_pests, col_ferts = st.columns(2)

with col_pests:
    st.markdown("### 🐛 Pest & Disease Alerts")
    if not insights.pest_alerts:
        # An empty list can also mean the advisor was unreachable
        st.success("✅ No major risks detected for the current conditions.")
    for alert in insights.pest_alerts:
        st.markdown(
            f"""
        <div class="crop-card" style="border-left-color: #dc2626;">
            <div style="display:flex; justify-content:space-between; align-items:center;">
                <span style="font-weight:700;">{escape(alert.pest_name)}</span>
                {severity_badge(alert.severity)}
            </div>
            <p style="font-size:14px; margin:8px 0;">{escape(alert.description)}</p>
            <div class="tip-box">🛡️ <b>Prevention:</b> {escape(alert.prevention)}</div>
        </div>
        """,
            unsafe_allow_html=True,
        )

with col_ferts:
    st.markdown("### 🧪 Fertilizer Schedule")
    if not insights.fertilizer_plan:
        st.info("No fertilizer schedule available right now.")
    for step in insights.fertilizer_plan:
        with st.container(border=True):
            st.markdown(f"**{step.stage}** · {step.fertilizer}")
            st.markdown(f"📦 {step.quantity}")
            st.caption(step.reason)
