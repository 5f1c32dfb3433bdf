import streamlit as st
import pandas as pd
from datetime import datetime, timezone

from agrosmart.components import (
    ADD_CROP_PAGE,
    crop_card,
    load_css,
    open_crop,
    page_header,
    weather_card,
)
from agrosmart.services import (
    cached_daily_tip,
    get_repository,
    get_settings,
    weather_or_placeholder,
)
from agrosmart.timeline import progress

# Page config
st.set_page_config(
    page_title="AgroSmart",
    page_icon="🌱",
    layout="wide",
    initial_sidebar_state="expanded",
)

load_css()
settings = get_settings()

# Sidebar
with st.sidebar:
    st.header("🌱 AgroSmart")
    st.page_link(ADD_CROP_PAGE, label="Add Crop", icon="➕")
    st.markdown("---")
    if not settings.ai_enabled:
        st.info("💡 Set **GOOGLE_API_KEY** in your .env file to unlock AI advice.")

# Crops are loaded fresh on every run; edits made in another tab show up on the next load.
crops = get_repository().load_all()

header_left, header_right = st.columns([3, 1])
with header_left:
    page_header("My Farm", "Track your crops, weather and harvest countdowns.")
with header_right:
    if st.button("➕ Add New Crop", type="primary", width="stretch"):
        st.switch_page(ADD_CROP_PAGE)

# === WEATHER ===
home_location = crops[0].location if crops else ""
weather, live = weather_or_placeholder(home_location)
weather_card(weather, live=live)

# === ACTIVE CROPS ===
st.markdown("### 🌾 Active Crops")

if not crops:
    st.info("👋 **Welcome!** You are not tracking any crops yet.")
    if st.button("Add Your First Crop", type="primary"):
        st.switch_page(ADD_CROP_PAGE)
    st.stop()

# Daily tip for the first crop only, to keep AI calls down
first = crops[0]
tips = {first.id: cached_daily_tip(first.id, weather.condition, first, weather)}

now = datetime.now(timezone.utc)
cols = st.columns(2)
for index, crop in enumerate(crops):
    with cols[index % 2]:
        crop_card(crop, progress(crop.sowing_date, crop.expected_harvest_date, now), tips.get(crop.id))
        if st.button("View details →", key=f"open_{crop.id}"):
            open_crop(crop.id)

# === EXPORT ===
st.markdown("---")
crops_df = pd.DataFrame([c.to_dict() for c in crops])
st.download_button(
    label="📥 Download crop list (CSV)",
    data=crops_df.to_csv(index=False),
    file_name="my_crops.csv",
    mime="text/csv",
)
