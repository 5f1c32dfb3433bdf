from datetime import date

from agrosmart.harvest import DEFAULT_MATURITY_DAYS, fallback_harvest_date, maturity_days


def test_wheat_is_120_days():
    assert fallback_harvest_date("Wheat", "2024-01-01") == "2024-04-30"


def test_substring_and_case_match():
    assert maturity_days("  Basmati RICE ") == 130
    assert maturity_days("Desi Tomato") == 80
    assert maturity_days("sugarcane (ratoon)") == 365


def test_unknown_crop_defaults_to_120_days():
    assert maturity_days("Dragonfruit") == DEFAULT_MATURITY_DAYS
    assert fallback_harvest_date("Dragonfruit", date(2023, 6, 1)) == "2023-09-29"


def test_empty_name_uses_default():
    assert maturity_days("") == DEFAULT_MATURITY_DAYS
