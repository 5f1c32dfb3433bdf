"""Shared Streamlit building blocks: styling, cards and small widgets."""

from html import escape

import streamlit as st

from .models import Crop, WeatherData
from .services import get_advisory
from .timeline import CropProgress

DASHBOARD_PAGE = "app.py"
ADD_CROP_PAGE = "pages/1_Add_Crop.py"
CROP_DETAILS_PAGE = "pages/2_Crop_Details.py"

SEVERITY_STYLES = {
    "High": ("status-high", "🔴"),
    "Medium": ("status-medium", "🟠"),
    "Low": ("status-low", "🟢"),
}

TREND_BADGES = {"up": "📈 Up", "down": "📉 Down", "stable": "➖ Stable"}


def trend_delta(trend: str) -> str:
    """Delta text for st.metric; a leading minus points the arrow down."""
    badge = TREND_BADGES.get(trend, trend)
    return f"-{badge}" if trend == "down" else badge


def load_css():
    st.markdown(
        """
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;600;700&display=swap');

    :root {
        --color-green-dark: #166534;
        --color-green-medium: #16a34a;
        --color-green-bg: #f0fdf4;
        --color-gray: #6b7280;
        --color-purple: #7e22ce;
    }

    html, body, [class*="css"] {
        font-family: 'Inter', sans-serif;
    }

    .main-title {
        font-size: 36px;
        font-weight: 700;
        color: var(--color-green-dark);
        margin-bottom: 0;
    }

    .subtitle {
        font-size: 16px;
        color: var(--color-gray);
        margin-bottom: 20px;
    }

    .weather-card {
        background: linear-gradient(135deg, #3b82f6 0%, #1d4ed8 100%);
        color: white;
        border-radius: 20px;
        padding: 24px 28px;
        box-shadow: 0 4px 15px rgba(29, 78, 216, 0.25);
        margin-bottom: 20px;
    }

    .weather-card .temp {
        font-size: 48px;
        font-weight: 700;
        line-height: 1;
    }

    .weather-card .meta {
        font-size: 14px;
        opacity: 0.85;
    }

    .crop-card {
        background: white;
        border-radius: 15px;
        padding: 20px;
        box-shadow: 0 2px 10px rgba(0,0,0,0.08);
        border-left: 5px solid var(--color-green-medium);
        margin: 10px 0;
    }

    .crop-name {
        font-size: 22px;
        font-weight: 700;
        color: #111827;
    }

    .crop-meta {
        font-size: 13px;
        color: var(--color-gray);
    }

    .progress-track {
        background: #f3f4f6;
        border-radius: 10px;
        height: 10px;
        margin: 12px 0 6px 0;
        overflow: hidden;
    }

    .progress-fill {
        background: var(--color-green-medium);
        height: 10px;
    }

    .tip-box {
        background: var(--color-green-bg);
        border-radius: 10px;
        padding: 10px 14px;
        font-size: 14px;
        color: var(--color-green-dark);
        margin-top: 10px;
    }

    .status-badge {
        font-size: 12px;
        font-weight: 600;
        padding: 3px 12px;
        border-radius: 20px;
        background: #dcfce7;
        color: var(--color-green-dark);
    }

    .status-high { color: #b91c1c; background: #fee2e2; }
    .status-medium { color: #c2410c; background: #ffedd5; }
    .status-low { color: var(--color-green-dark); background: #dcfce7; }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    </style>
    """,
        unsafe_allow_html=True,
    )


def page_header(title: str, subtitle: str):
    st.markdown(f'<h1 class="main-title">🌱 {escape(title)}</h1>', unsafe_allow_html=True)
    st.markdown(f'<p class="subtitle">{escape(subtitle)}</p>', unsafe_allow_html=True)


def weather_icon(condition: str) -> str:
    c = condition.lower()
    if "rain" in c or "drizzle" in c or "shower" in c:
        return "🌧️"
    if "storm" in c or "thunder" in c:
        return "⛈️"
    if "fog" in c:
        return "🌫️"
    if "cloud" in c:
        return "⛅"
    if "sun" in c or "clear" in c:
        return "☀️"
    return "☁️"


def weather_card(weather: WeatherData, live: bool = True):
    note = "" if live else " · live weather unavailable"
    st.markdown(
        f"""
    <div class="weather-card">
        <div class="meta">📍 {escape(weather.location)}{note}</div>
        <div style="display:flex; align-items:center; gap:16px; margin:10px 0;">
            <span style="font-size:48px;">{weather_icon(weather.condition)}</span>
            <div>
                <div class="temp">{weather.temperature:.0f}°C</div>
                <div class="meta">{escape(weather.condition)}</div>
            </div>
        </div>
        <div class="meta">💧 Humidity {weather.humidity:.0f}% &nbsp; 🌧️ Rainfall {weather.rainfall:.1f} mm &nbsp; 💨 Wind {weather.wind_speed:.0f} km/h</div>
    </div>
    """,
        unsafe_allow_html=True,
    )


def crop_card(crop: Crop, timeline: CropProgress, tip: str | None = None):
    variety = f" · {escape(crop.variety)}" if crop.variety else ""
    tip_html = f'<div class="tip-box">💡 {escape(tip)}</div>' if tip else ""
    st.markdown(
        f"""
    <div class="crop-card">
        <div style="display:flex; justify-content:space-between; align-items:center;">
            <span class="crop-name">{escape(crop.name)}</span>
            <span class="status-badge">{escape(crop.status.value)}</span>
        </div>
        <div class="crop-meta">📍 {escape(crop.location)}{variety} · {crop.area:g} acres</div>
        <div class="progress-track"><div class="progress-fill" style="width: {timeline.percent:.1f}%;"></div></div>
        <div class="crop-meta">⏳ Harvest countdown: <b>{timeline.days_left} days</b> left (expected {escape(crop.expected_harvest_date)})</div>
        {tip_html}
    </div>
    """,
        unsafe_allow_html=True,
    )


def open_crop(crop_id: str):
    st.session_state.selected_crop_id = crop_id
    st.switch_page(CROP_DETAILS_PAGE)


def severity_badge(severity: str) -> str:
    css, emoji = SEVERITY_STYLES.get(severity, ("status-low", "⚪"))
    return f'<span class="status-badge {css}">{emoji} {escape(severity)} risk</span>'


def location_detector(key: str, state_key: str):
    """
    Fill ``st.session_state[state_key]`` with a place name from coordinates.

    Streamlit has no browser geolocation, so the user pastes the coordinates
    shown by their phone or maps app and the advisory model names the place.
    Call this before the text input keyed *state_key* is drawn.
    """
    with st.expander("📡 Detect location from coordinates"):
        c1, c2 = st.columns(2)
        lat = c1.number_input("Latitude", min_value=-90.0, max_value=90.0, value=18.52, format="%.4f", key=f"{key}_lat")
        lon = c2.number_input("Longitude", min_value=-180.0, max_value=180.0, value=73.86, format="%.4f", key=f"{key}_lon")
        if st.button("Detect Location", key=f"{key}_detect"):
            with st.spinner("Finding your place..."):
                st.session_state[state_key] = get_advisory().reverse_geocode(lat, lon)
