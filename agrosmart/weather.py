import logging

import requests

from .models import Coordinates, WeatherData

logger = logging.getLogger(__name__)

GEOCODING_API = "https://geocoding-api.open-meteo.com/v1/search"
WEATHER_API = "https://api.open-meteo.com/v1/forecast"
CURRENT_VARS = "temperature_2m,relative_humidity_2m,rain,wind_speed_10m,weather_code"


def condition_label(code) -> str:
    """Map a WMO weather interpretation code (Open-Meteo) to a short label."""
    try:
        code = int(code)
    except (TypeError, ValueError):
        return "Cloudy"

    if code == 0:
        return "Clear Sky"
    if 1 <= code <= 3:
        return "Partly Cloudy"
    if code in (45, 48):
        return "Foggy"
    if 51 <= code <= 55:
        return "Drizzle"
    if 61 <= code <= 65:
        return "Rainy"
    if 80 <= code <= 82:
        return "Showers"
    if code >= 95:
        return "Thunderstorm"
    return "Cloudy"


class LocationGateway:
    """Open-Meteo geocoding and current weather (no API key needed)."""

    def __init__(self, session=None, timeout: float = 10.0):
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get_json(self, url: str, params: dict) -> dict:
        r = self.session.get(url, params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def geocode(self, place: str) -> Coordinates | None:
        if not place or not place.strip():
            return None
        try:
            data = self._get_json(GEOCODING_API, {
                "name": place.strip(),
                "count": 1,
                "language": "en",
                "format": "json",
            })
            results = data.get("results") or []
            if not results:
                logger.info("No geocoding match for %r", place)
                return None
            top = results[0]
            region = top.get("admin1") or top.get("country_code") or ""
            name = f"{top['name']}, {region}" if region else str(top["name"])
            return Coordinates(lat=float(top["latitude"]), lon=float(top["longitude"]), display_name=name)
        except Exception as e:
            logger.warning("Error fetching coordinates for %r: %s", place, e)
            return None

    def current_weather(self, lat: float, lon: float, location: str = "") -> WeatherData | None:
        try:
            data = self._get_json(WEATHER_API, {
                "latitude": lat,
                "longitude": lon,
                "current": CURRENT_VARS,
                "timezone": "auto",
            })
            current = data["current"]
            return WeatherData(
                location=location or f"{lat:.2f}, {lon:.2f}",
                temperature=round(float(current["temperature_2m"])),
                humidity=float(current["relative_humidity_2m"]),
                rainfall=float(current.get("rain") or 0.0),
                wind_speed=float(current["wind_speed_10m"]),
                condition=condition_label(current.get("weather_code")),
            )
        except Exception as e:
            logger.warning("Error fetching weather for %s,%s: %s", lat, lon, e)
            return None

    def weather_for_place(self, place: str) -> WeatherData | None:
        coords = self.geocode(place)
        if coords is None:
            return None
        return self.current_weather(coords.lat, coords.lon, location=coords.display_name)
