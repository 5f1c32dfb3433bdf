import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List

from .models import Crop, FertilizerRecommendation, PestAlert, WeatherData

logger = logging.getLogger(__name__)


@dataclass
class CropInsights:
    pest_alerts: List[PestAlert] = field(default_factory=list)
    fertilizer_plan: List[FertilizerRecommendation] = field(default_factory=list)


def _result_or_empty(future, label: str) -> list:
    try:
        return future.result()
    except Exception as e:
        logger.warning("%s request failed: %s", label, e)
        return []


def fetch_crop_insights(gateway, crop: Crop, weather: WeatherData) -> CropInsights:
    """
    Request pest alerts and the fertilizer plan side by side and join them.

    A failure in one request leaves the other untouched.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="insights") as pool:
        pests = pool.submit(gateway.pest_alerts, crop, weather)
        ferts = pool.submit(gateway.fertilizer_plan, crop)

        return CropInsights(
            pest_alerts=_result_or_empty(pests, "Pest alert"),
            fertilizer_plan=_result_or_empty(ferts, "Fertilizer plan"),
        )
