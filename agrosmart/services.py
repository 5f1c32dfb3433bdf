# agrosmart/services.py
# Shared, cached access to settings, storage and gateways for the Streamlit views.
import streamlit as st

from .advisory import AdvisoryGateway
from .config import Settings, configure_logging, load_settings
from .estimation import HarvestDateEstimator
from .insights import CropInsights, fetch_crop_insights
from .models import Crop, WeatherData
from .store import JsonFileCropRepository
from .weather import LocationGateway


@st.cache_resource
def get_settings() -> Settings:
    settings = load_settings()
    configure_logging(settings.log_level)
    return settings


@st.cache_resource
def get_repository() -> JsonFileCropRepository:
    return JsonFileCropRepository(get_settings().data_path)


@st.cache_resource
def get_advisory() -> AdvisoryGateway:
    return AdvisoryGateway.from_settings(get_settings())


@st.cache_resource
def get_location_gateway() -> LocationGateway:
    return LocationGateway(timeout=get_settings().request_timeout)


def get_harvest_estimator() -> HarvestDateEstimator:
    """One estimator per browser session."""
    if "harvest_estimator" not in st.session_state:
        settings = get_settings()
        st.session_state.harvest_estimator = HarvestDateEstimator(
            get_advisory().estimate_harvest_date,
            debounce_seconds=settings.debounce_seconds,
            default_location=settings.default_location,
        )
    return st.session_state.harvest_estimator


@st.cache_data(ttl=1800)  # 30 minutes
def cached_weather(place: str) -> WeatherData | None:
    return get_location_gateway().weather_for_place(place)


def weather_or_placeholder(place: str) -> tuple[WeatherData, bool]:
    """Live weather for *place* and True, or a neutral placeholder and False."""
    weather = cached_weather(place) if place else None
    if weather is None:
        return WeatherData.placeholder(place or "Home Farm"), False
    return weather, True


@st.cache_data(ttl=3600)
def cached_market_prices(location: str):
    return get_advisory().market_prices(location)


@st.cache_data(ttl=3600)
def cached_daily_tip(crop_id: str, condition: str, _crop: Crop, _weather: WeatherData) -> str:
    return get_advisory().daily_tip(_crop, _weather)


@st.cache_data(ttl=1800)
def cached_crop_insights(crop_id: str, condition: str, _crop: Crop, _weather: WeatherData) -> CropInsights:
    return fetch_crop_insights(get_advisory(), _crop, _weather)
