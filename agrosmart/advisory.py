"""Gemini-backed agronomy advice.

Every operation is a single request with a declared output schema (or plain
text) and a documented fallback.  Nothing here raises to the caller: network
errors, timeouts, missing API keys and responses that do not match the schema
all end in the fallback value.  There are no retries.
"""

import logging
from datetime import date
from typing import List

from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from .config import Settings
from .harvest import fallback_harvest_date
from .models import (
    Crop,
    CropSuggestion,
    CropSuggestionList,
    FertilizerPlan,
    FertilizerRecommendation,
    HarvestEstimate,
    MarketPrice,
    MarketPriceList,
    PestAlert,
    PestAlertList,
    RotationPlan,
    WeatherData,
)

logger = logging.getLogger(__name__)

DEFAULT_TIP = "Keep monitoring your crops closely today."

ADVISOR_SYSTEM = """You are a practical agronomy advisor for small and medium farms in India.
Be specific, use local crop names and Indian units, and keep answers short."""


class AdvisoryUnavailable(RuntimeError):
    """Raised internally when no model client is configured."""


# === PROMPTS ===

PEST_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ADVISOR_SYSTEM),
    ("user", """Analyze pest and disease risks for {crop} in {location}.
Current weather: {temperature}°C, {humidity}% humidity, {rainfall}mm rain.
Return a list of potential pests/diseases with severity, description, and prevention measures."""),
])

FERTILIZER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ADVISOR_SYSTEM),
    ("user", """Suggest a fertilizer schedule for {crop} (Sown: {sowing_date}).
Provide 3-4 key stages (e.g., Basal, Vegetative, Flowering). Include quantity per acre and reasoning."""),
])

ROTATION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ADVISOR_SYSTEM),
    ("user", """I have just harvested {prev_crop} on a {plot_size} acre plot in {location}.
Suggest optimal next crops for rotation to improve soil health and break pest cycles."""),
])

MARKET_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ADVISOR_SYSTEM),
    ("user", """Generate a list of current average market prices for common Indian crops (e.g., Wheat, Rice, Cotton, Onions, Tomatoes, Potatoes, Soybeans) in {location} or the general region.

IMPORTANT:
- Return ONE entry per crop type (e.g., do not list "Nasik Onion" and "Pune Onion" separately, just "Onion" with an average price).
- The 'region' field should be the State name or "All India Average".
- Prices MUST be in Indian Rupee (INR) per Quintal.
- Provide a 6-month price history trend."""),
])

SUGGESTION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ADVISOR_SYSTEM),
    ("user", """Suggest 3 best crops to sow in {location} (India context) around {on_date}.
Consider: Seasons (Kharif/Rabi), profitability in INR, and weather.
Return 3 distinct recommendations with a suitability score from 0 to 100."""),
])

HARVEST_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ADVISOR_SYSTEM),
    ("user", """Calculate the expected harvest date for '{crop}' sown on {sowing_date} in or near '{location}'.
Assume typical Indian growing season duration.
Return the harvest date as YYYY-MM-DD."""),
])

TIP_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ADVISOR_SYSTEM),
    ("user", """Give a short, encouraging, and actionable daily tip for a farmer growing {crop} in {location}.
Weather is {condition}, {temperature}°C. Plain text, max 2 sentences."""),
])

REVERSE_GEOCODE_PROMPT = ChatPromptTemplate.from_messages([
    ("user", "Identify the Indian city/district for: {lat}, {lon}. Return ONLY the name."),
])


def _message_text(message) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        content = "".join(parts)
    return str(content or "").strip()


def coordinate_label(lat: float, lon: float) -> str:
    return f"{lat:.2f}, {lon:.2f}"


class AdvisoryGateway:
    """
    Typed wrapper around a LangChain chat model.

    *llm* is any chat model supporting ``with_structured_output``; ``None``
    means AI is switched off and every call returns its fallback.
    """

    def __init__(self, llm=None):
        self._llm = llm

    @classmethod
    def from_settings(cls, settings: Settings) -> "AdvisoryGateway":
        if not settings.ai_enabled:
            logger.warning("GOOGLE_API_KEY is not set; AI advice will use fallbacks")
            return cls(None)

        llm = ChatGoogleGenerativeAI(
            model=settings.model,
            temperature=0.7,
            google_api_key=settings.google_api_key,
            timeout=settings.request_timeout,
            max_retries=0,
        )
        return cls(llm)

    @property
    def enabled(self) -> bool:
        return self._llm is not None

    # ----- plumbing -----

    def _require_llm(self):
        if self._llm is None:
            raise AdvisoryUnavailable("no model configured")
        return self._llm

    def _structured(self, schema, prompt: ChatPromptTemplate, variables: dict):
        chain = prompt | self._require_llm().with_structured_output(schema)
        result = chain.invoke(variables)
        if result is None:
            raise ValueError(f"empty {schema.__name__} response")
        if not isinstance(result, schema):
            result = schema.model_validate(result)
        return result

    def _text(self, prompt: ChatPromptTemplate, variables: dict) -> str:
        chain = prompt | self._require_llm()
        return _message_text(chain.invoke(variables))

    @staticmethod
    def _log_failure(operation: str, error: Exception) -> None:
        if isinstance(error, AdvisoryUnavailable):
            logger.debug("Skipping %s: %s", operation, error)
        else:
            logger.warning("Error fetching %s: %s", operation, error, exc_info=True)

    # ----- operations -----

    def estimate_harvest_date(self, crop_name: str, sowing_date: str, location: str) -> str:
        """
        Expected harvest date as YYYY-MM-DD.

        Returns "" only when the crop name or sowing date is missing or the
        sowing date is not a date; otherwise the local estimate stands in for
        any failure.
        """
        if not crop_name or not crop_name.strip() or not sowing_date:
            return ""
        try:
            fallback = fallback_harvest_date(crop_name, sowing_date)
        except ValueError:
            logger.warning("Cannot estimate harvest for sowing date %r", sowing_date)
            return ""

        try:
            estimate = self._structured(HarvestEstimate, HARVEST_PROMPT, {
                "crop": crop_name.strip(),
                "sowing_date": sowing_date,
                "location": location or "India",
            })
            return estimate.parsed_date().isoformat()
        except Exception as e:
            self._log_failure("harvest date", e)
            return fallback

    def pest_alerts(self, crop: Crop, weather: WeatherData) -> List[PestAlert]:
        try:
            result = self._structured(PestAlertList, PEST_PROMPT, {
                "crop": crop.name,
                "location": crop.location,
                "temperature": weather.temperature,
                "humidity": weather.humidity,
                "rainfall": weather.rainfall,
            })
            return result.alerts
        except Exception as e:
            self._log_failure("pest alerts", e)
            return []

    def fertilizer_plan(self, crop: Crop) -> List[FertilizerRecommendation]:
        try:
            result = self._structured(FertilizerPlan, FERTILIZER_PROMPT, {
                "crop": crop.name,
                "sowing_date": crop.sowing_date,
            })
            return result.stages
        except Exception as e:
            self._log_failure("fertilizer plan", e)
            return []

    def rotation_advice(self, prev_crop: str, plot_size: float, location: str) -> RotationPlan | None:
        try:
            return self._structured(RotationPlan, ROTATION_PROMPT, {
                "prev_crop": prev_crop,
                "plot_size": plot_size,
                "location": location,
            })
        except Exception as e:
            self._log_failure("rotation advice", e)
            return None

    def market_prices(self, location: str) -> List[MarketPrice]:
        try:
            return self._structured(MarketPriceList, MARKET_PROMPT, {"location": location}).prices
        except Exception as e:
            self._log_failure("market prices", e)
            return []

    def crop_suggestions(self, location: str, on_date: str | date) -> List[CropSuggestion]:
        if isinstance(on_date, date):
            on_date = on_date.isoformat()
        try:
            result = self._structured(CropSuggestionList, SUGGESTION_PROMPT, {
                "location": location,
                "on_date": on_date,
            })
            return result.suggestions
        except Exception as e:
            self._log_failure("crop suggestions", e)
            return []

    def daily_tip(self, crop: Crop, weather: WeatherData) -> str:
        try:
            tip = self._text(TIP_PROMPT, {
                "crop": crop.name,
                "location": crop.location,
                "condition": weather.condition,
                "temperature": weather.temperature,
            })
            return tip or DEFAULT_TIP
        except Exception as e:
            self._log_failure("daily tip", e)
            return DEFAULT_TIP

    def reverse_geocode(self, lat: float, lon: float) -> str:
        try:
            name = self._text(REVERSE_GEOCODE_PROMPT, {"lat": lat, "lon": lon})
            return name or coordinate_label(lat, lon)
        except Exception as e:
            self._log_failure("location name", e)
            return coordinate_label(lat, lon)
