from dataclasses import dataclass
from datetime import date
from typing import List

from .models import Crop, new_crop
from .store import CropRepository


@dataclass
class CropForm:
    """Raw Add Crop inputs, as typed by the user."""

    name: str = ""
    variety: str = ""
    area: str | float = ""
    location: str = ""
    sowing_date: str = ""
    expected_harvest_date: str = ""
    notes: str = ""

    def parsed_area(self) -> float | None:
        try:
            return float(self.area)
        except (TypeError, ValueError):
            return None

    def errors(self) -> List[str]:
        """Presence and numeric checks only; dates are not compared."""
        problems = []
        if not self.name.strip():
            problems.append("Crop name is required.")
        if not self.location.strip():
            problems.append("Location is required.")
        area = self.parsed_area()
        if area is None:
            problems.append("Area must be a number (acres).")
        elif area <= 0:
            problems.append("Area must be greater than zero.")
        if not self.sowing_date:
            problems.append("Sowing date is required.")
        else:
            try:
                date.fromisoformat(self.sowing_date)
            except ValueError:
                problems.append("Sowing date must be YYYY-MM-DD.")
        if not self.expected_harvest_date:
            problems.append("Harvest date is still being calculated.")
        return problems

    def to_crop(self) -> Crop:
        problems = self.errors()
        if problems:
            raise ValueError("; ".join(problems))
        return new_crop(
            name=self.name.strip(),
            variety=self.variety.strip(),
            area=self.parsed_area(),
            location=self.location.strip(),
            sowing_date=self.sowing_date,
            expected_harvest_date=self.expected_harvest_date,
            notes=self.notes.strip(),
        )


def submit_crop(form: CropForm, repo: CropRepository) -> Crop:
    """Validate *form*, store the new crop and return it."""
    crop = form.to_crop()
    repo.append(crop)
    return crop
