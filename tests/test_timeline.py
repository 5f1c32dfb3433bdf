import math
from datetime import date, datetime, timedelta, timezone

from agrosmart.timeline import DAY_MS, days_remaining, progress, to_epoch_ms


def utc(y, m, d, hour=0):
    return datetime(y, m, d, hour, tzinfo=timezone.utc)


def test_midseason_progress():
    p = progress("2024-01-01", "2024-01-11", utc(2024, 1, 6))
    assert p.percent == 50.0
    assert p.days_left == 5


def test_percent_stays_in_range_and_never_decreases():
    sowing, harvest = date(2024, 1, 1), date(2024, 4, 30)
    last = -1.0
    now = utc(2024, 1, 1)
    while now <= utc(2024, 4, 30):
        p = progress(sowing, harvest, now)
        assert 0 <= p.percent <= 100
        assert p.percent >= last
        last = p.percent
        now += timedelta(hours=13)


def test_equal_dates_do_not_divide_by_zero():
    p = progress("2024-03-01", "2024-03-01", utc(2024, 3, 5))
    assert math.isfinite(p.percent)
    assert p.percent == 100.0
    assert p.days_left == 0


def test_inverted_dates_clamp():
    p = progress("2024-05-01", "2024-03-01", utc(2024, 6, 1))
    assert math.isfinite(p.percent)
    assert 0 <= p.percent <= 100
    assert p.days_left == 0


def test_now_before_sowing():
    p = progress("2024-02-01", "2024-03-01", utc(2024, 1, 1))
    assert p.percent == 0
    assert p.days_left == 60


def test_days_left_never_negative_long_after_harvest():
    assert progress("2020-01-01", "2020-05-01", utc(2030, 1, 1)).days_left == 0
    assert days_remaining("2020-05-01", utc(2030, 1, 1)) == 0


def test_days_left_rounds_partial_days_up():
    assert days_remaining("2024-01-10", utc(2024, 1, 9, hour=1)) == 1


def test_naive_datetime_is_utc():
    assert to_epoch_ms(datetime(2024, 1, 2)) - to_epoch_ms(date(2024, 1, 1)) == DAY_MS
