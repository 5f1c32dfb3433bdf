import pytest
import requests
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.runnables import RunnableLambda

from agrosmart.models import Crop, CropStatus, WeatherData


class FakeAdvisor(FakeListChatModel):
    """Chat model double: plain-text replies from ``responses``, structured
    replies looked up by schema class name in ``structured``.  An Exception
    value is raised instead of returned."""

    structured: dict = {}

    def with_structured_output(self, schema, **kwargs):
        value = self.structured.get(schema.__name__)

        def respond(_prompt):
            if isinstance(value, Exception):
                raise value
            return value

        return RunnableLambda(respond)


class BrokenChat(FakeListChatModel):
    def _call(self, *args, **kwargs):
        raise ConnectionError("model unreachable")


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Answers GETs by URL from a dict; records every call."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route


@pytest.fixture
def wheat():
    return Crop(
        id="c1",
        name="Wheat",
        area=2.5,
        location="Pune",
        sowing_date="2024-01-01",
        expected_harvest_date="2024-04-30",
        status=CropStatus.GROWING,
    )


@pytest.fixture
def weather():
    return WeatherData(
        location="Pune, Maharashtra",
        temperature=26,
        humidity=72,
        rainfall=5,
        wind_speed=12,
        condition="Cloudy",
    )
