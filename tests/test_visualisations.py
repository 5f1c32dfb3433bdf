from agrosmart.models import MarketPrice
from agrosmart.visualisations import (
    create_price_bar,
    create_price_history_chart,
    create_progress_gauge,
    market_prices_frame,
    price_history_frame,
)

ONION = MarketPrice(
    crop="Onion", current_price=2400, unit="Quintal", trend="up", region="Maharashtra",
    history=[{"date": "2024-01", "price": 1800}, {"date": "2024-02", "price": 2100}],
)
WHEAT = MarketPrice(crop="Wheat", current_price=2275, unit="Quintal", trend="stable", region="All India Average")


def test_market_frame_one_row_per_crop():
    df = market_prices_frame([ONION, WHEAT])
    assert list(df.columns) == ["Crop", "Price", "Unit", "Trend", "Region"]
    assert df["Crop"].tolist() == ["Onion", "Wheat"]


def test_empty_inputs_keep_columns():
    assert list(market_prices_frame([]).columns) == ["Crop", "Price", "Unit", "Trend", "Region"]
    assert price_history_frame(WHEAT).empty


def test_bar_colours_follow_trend():
    bar = create_price_bar([ONION, WHEAT]).data[0]
    assert list(bar.marker.color) == ["#16a34a", "#9ca3af"]


def test_history_chart_points():
    line = create_price_history_chart(ONION).data[0]
    assert list(line.y) == [1800, 2100]


def test_gauge_value():
    assert create_progress_gauge(42.26, 70).data[0].value == 42.3
