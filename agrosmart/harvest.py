from datetime import date, timedelta

DEFAULT_MATURITY_DAYS = 120

# Typical sowing-to-harvest days for common Indian field crops.
# Keys are matched as substrings of the lowercased crop name, in this order.
CROP_DURATION_FALLBACK: dict[str, int] = {
    "wheat": 120,
    "rice": 130,
    "paddy": 130,
    "corn": 100,
    "maize": 100,
    "cotton": 160,
    "sugarcane": 365,
    "potato": 90,
    "tomato": 80,
    "onion": 100,
    "soybean": 100,
    "chickpea": 100,
    "groundnut": 110,
    "mustard": 100,
}


def maturity_days(crop_name: str) -> int:
    """Look up typical days to maturity; unknown crops get the default."""
    normalized = (crop_name or "").strip().lower()
    for key, days in CROP_DURATION_FALLBACK.items():
        if key in normalized:
            return days
    return DEFAULT_MATURITY_DAYS


def fallback_harvest_date(crop_name: str, sowing_date: str | date) -> str:
    """Sowing date plus typical maturity days, as YYYY-MM-DD."""
    if isinstance(sowing_date, str):
        sowing_date = date.fromisoformat(sowing_date.strip()[:10])
    return (sowing_date + timedelta(days=maturity_days(crop_name))).isoformat()
