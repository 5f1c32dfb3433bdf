import pytest
import requests

from agrosmart.weather import GEOCODING_API, WEATHER_API, LocationGateway, condition_label

from conftest import FakeResponse, FakeSession

PUNE = {"results": [{"name": "Pune", "latitude": 18.52, "longitude": 73.86, "admin1": "Maharashtra", "country_code": "IN"}]}
FORECAST = {"current": {
    "temperature_2m": 27.6,
    "relative_humidity_2m": 64,
    "rain": None,
    "wind_speed_10m": 9.4,
    "weather_code": 63,
}}


@pytest.mark.parametrize("code, label", [
    (0, "Clear Sky"),
    (2, "Partly Cloudy"),
    (48, "Foggy"),
    (53, "Drizzle"),
    (65, "Rainy"),
    (81, "Showers"),
    (99, "Thunderstorm"),
    (71, "Cloudy"),
    (None, "Cloudy"),
    ("x", "Cloudy"),
])
def test_condition_label(code, label):
    assert condition_label(code) == label


def test_weather_for_place():
    session = FakeSession({GEOCODING_API: FakeResponse(PUNE), WEATHER_API: FakeResponse(FORECAST)})
    weather = LocationGateway(session=session, timeout=3).weather_for_place("Pune")

    assert weather.location == "Pune, Maharashtra"
    assert weather.temperature == 28
    assert weather.rainfall == 0
    assert weather.condition == "Rainy"
    assert all(timeout == 3 for _, _, timeout in session.calls)
    assert session.calls[1][1]["latitude"] == 18.52


def test_geocode_falls_back_to_country_code():
    payload = {"results": [{"name": "Kathmandu", "latitude": 27.7, "longitude": 85.3, "country_code": "NP"}]}
    coords = LocationGateway(session=FakeSession({GEOCODING_API: FakeResponse(payload)})).geocode("Kathmandu")
    assert coords.display_name == "Kathmandu, NP"


def test_blank_place_makes_no_request():
    session = FakeSession({})
    assert LocationGateway(session=session).geocode("  ") is None
    assert session.calls == []


def test_unknown_place():
    session = FakeSession({GEOCODING_API: FakeResponse({})})
    assert LocationGateway(session=session).weather_for_place("Atlantis") is None
    assert len(session.calls) == 1


@pytest.mark.parametrize("route", [
    FakeResponse({}, status_code=503),
    requests.ConnectionError("offline"),
    FakeResponse(ValueError("not json")),
    FakeResponse({"current": {}}),
])
def test_weather_failures_return_none(route):
    session = FakeSession({GEOCODING_API: FakeResponse(PUNE), WEATHER_API: route})
    assert LocationGateway(session=session).weather_for_place("Pune") is None
