# agrosmart/models.py
import uuid
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


# === CROP RECORDS (persisted) ===


class CropStatus(str, Enum):
    PLANNED = "Planned"
    GROWING = "Growing"
    HARVESTED = "Harvested"


@dataclass
class Crop:
    id: str
    name: str
    area: float  # acres
    location: str
    sowing_date: str  # YYYY-MM-DD
    expected_harvest_date: str  # YYYY-MM-DD
    status: CropStatus = CropStatus.GROWING
    variety: str | None = None
    notes: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialise with the persisted field names."""
        return {
            "id": self.id,
            "name": self.name,
            "variety": self.variety,
            "area": self.area,
            "location": self.location,
            "sowingDate": self.sowing_date,
            "expectedHarvestDate": self.expected_harvest_date,
            "status": self.status.value,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Crop":
        """
        Inverse of ``to_dict``.

        Raises KeyError for missing required fields, ValueError for an unknown
        status, a non-numeric area or a date that is not YYYY-MM-DD, and
        TypeError if *data* is not a mapping or an optional text field is not
        a string.
        """
        if not isinstance(data, dict):
            raise TypeError(f"crop record must be an object, got {type(data).__name__}")

        sowing_date = str(data["sowingDate"])
        harvest_date = str(data["expectedHarvestDate"])
        date.fromisoformat(sowing_date)
        date.fromisoformat(harvest_date)

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            area=float(data["area"]),
            location=str(data["location"]),
            sowing_date=sowing_date,
            expected_harvest_date=harvest_date,
            status=CropStatus(data.get("status", CropStatus.GROWING.value)),
            variety=_optional_text(data, "variety"),
            notes=_optional_text(data, "notes"),
        )


def _optional_text(data: Dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value or None


def new_crop_id() -> str:
    return uuid.uuid4().hex


def new_crop(
    name: str,
    area: float,
    location: str,
    sowing_date: str,
    expected_harvest_date: str,
    variety: str | None = None,
    notes: str | None = None,
) -> Crop:
    """Create a freshly registered crop. New crops always start as Growing."""
    return Crop(
        id=new_crop_id(),
        name=name,
        area=area,
        location=location,
        sowing_date=sowing_date,
        expected_harvest_date=expected_harvest_date,
        status=CropStatus.GROWING,
        variety=variety or None,
        notes=notes or None,
    )


# === WEATHER & LOCATION (ephemeral) ===


@dataclass
class WeatherData:
    location: str
    temperature: float  # °C
    humidity: float  # %
    rainfall: float  # mm
    wind_speed: float  # km/h
    condition: str

    @classmethod
    def placeholder(cls, location: str = "Home Farm") -> "WeatherData":
        return cls(
            location=location,
            temperature=24,
            humidity=65,
            rainfall=0,
            wind_speed=12,
            condition="Partly Cloudy",
        )


@dataclass
class Coordinates:
    lat: float
    lon: float
    display_name: str


# === ADVISORY RESULT SCHEMAS (transient) ===
# These double as the structured-output schemas sent to the model.


class PestAlert(BaseModel):
    pest_name: str = Field(description="Common name of the pest or disease")
    severity: Literal["Low", "Medium", "High"]
    description: str
    prevention: str = Field(description="Practical prevention or control measures")


class PestAlertList(BaseModel):
    alerts: List[PestAlert]


class FertilizerRecommendation(BaseModel):
    stage: str = Field(description="Crop stage, e.g. Basal, Vegetative, Flowering")
    fertilizer: str
    quantity: str = Field(description="Quantity per acre")
    reason: str


class FertilizerPlan(BaseModel):
    stages: List[FertilizerRecommendation]


class RotationSuggestion(BaseModel):
    crop_name: str
    reason: str
    benefits: List[str]


class RotationPlan(BaseModel):
    current_crop: str
    suggested_next_crops: List[RotationSuggestion]


class PricePoint(BaseModel):
    date: str
    price: float


class MarketPrice(BaseModel):
    crop: str
    current_price: float
    unit: str
    trend: Literal["up", "down", "stable"]
    region: str = Field(description="State name or 'All India Average'")
    history: List[PricePoint] = Field(default_factory=list)


class MarketPriceList(BaseModel):
    prices: List[MarketPrice]


class CropSuggestion(BaseModel):
    crop_name: str
    variety: str
    reason: str
    estimated_yield: str
    market_outlook: str
    suitability_score: float = Field(ge=0, le=100)


class CropSuggestionList(BaseModel):
    suggestions: List[CropSuggestion]


class HarvestEstimate(BaseModel):
    harvest_date: str = Field(description="YYYY-MM-DD")
    days_to_maturity: Optional[int] = None

    def parsed_date(self) -> date:
        return date.fromisoformat(self.harvest_date)
