# tests/unit/test_term_evaluator.py
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo
from banner_control.domain.time_window import TimeWindow
from banner_control.services.window.term_evaluator import current_utc, is_allowed_term

TOKYO = ZoneInfo("Asia/Tokyo")
UTC = ZoneInfo("UTC")

def fixed_now(utc_dt: datetime):
    """now_provider returning the given UTC instant, expressed in the asked zone."""
    def _now(zone):
        return utc_dt.replace(tzinfo=timezone.utc).astimezone(zone)
    return _now

NOW = datetime(2024, 5, 10, 12, 30, 15, 987654)

def test_current_utc_drops_subseconds_and_zone():
    assert current_utc(TOKYO, fixed_now(NOW)) == datetime(2024, 5, 10, 12, 30, 15)
    assert current_utc(UTC, fixed_now(NOW)) == datetime(2024, 5, 10, 12, 30, 15)

def test_current_utc_naive_provider_is_read_in_zone():
    assert current_utc(TOKYO, lambda z: datetime(2024, 5, 10, 21, 30, 15)) == datetime(2024, 5, 10, 12, 30, 15)

def test_bounds_are_inclusive_at_second_granularity():
    now = fixed_now(NOW)
    assert is_allowed_term("2024-05-10 12:30:15", "2024-05-10 12:30:15", TOKYO, now)
    assert is_allowed_term("2024-05-10 12:30:15.0", "2024-05-11 00:00:00", TOKYO, now)
    assert is_allowed_term("2024-05-01 00:00:00", "2024-05-10 12:30:15", TOKYO, now)
    assert not is_allowed_term("2024-05-10 12:30:16", "2024-05-11 00:00:00", TOKYO, now)
    assert not is_allowed_term("2024-05-01 00:00:00", "2024-05-10 12:30:14", TOKYO, now)

def test_window_in_past_or_future():
    now = fixed_now(NOW)
    assert not is_allowed_term("2018-11-01 00:00:00", "2018-11-30 23:59:59", TOKYO, now)
    assert not is_allowed_term("2100-11-01 00:00:00", "2100-11-30 23:59:59", TOKYO, now)

def test_inverted_window_is_never_open():
    now = fixed_now(NOW)
    assert not is_allowed_term(datetime(2024, 5, 11), datetime(2024, 5, 9), UTC, now)
    assert not TimeWindow(datetime(2024, 5, 11), datetime(2024, 5, 9)).contains(datetime(2024, 5, 10))

def test_result_does_not_depend_on_visitor_zone():
    start = NOW - timedelta(hours=1)
    end = NOW + timedelta(hours=1)
    for zone in (TOKYO, UTC, ZoneInfo("America/Los_Angeles"), ZoneInfo("Europe/Berlin")):
        assert is_allowed_term(start, end, zone, fixed_now(NOW))

def test_real_clock_now_window():
    now = datetime.now(timezone.utc).replace(microsecond=0, tzinfo=None)
    assert is_allowed_term(now, now + timedelta(days=365), TOKYO)
