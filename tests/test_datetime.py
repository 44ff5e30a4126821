from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.utils import datetime as platform_time


@pytest.fixture()
def app_timezone(monkeypatch):
    def configure(name: str):
        monkeypatch.setattr(
            platform_time, "get_settings", lambda: SimpleNamespace(app_timezone=name)
        )
        platform_time.get_app_timezone.cache_clear()
        return platform_time.get_app_timezone()

    yield configure
    platform_time.get_app_timezone.cache_clear()


@pytest.mark.parametrize(
    ("name", "offset"),
    [
        ("UTC+05:30", timedelta(hours=5, minutes=30)),
        ("GMT-3", timedelta(hours=-3)),
        ("", timedelta(0)),
        ("Mars/Olympus", timedelta(0)),
    ],
)
def test_platform_timezone_resolution(app_timezone, name, offset):
    tz = app_timezone(name)

    assert datetime(2024, 1, 15, 12, tzinfo=tz).utcoffset() == offset


def test_stored_values_round_trip_as_platform_wall_time(app_timezone):
    app_timezone("UTC+05:30")
    deadline = datetime(2024, 3, 1, 18, 30, tzinfo=timezone.utc)

    stored = platform_time.ensure_app_naive_datetime(deadline)

    assert stored == datetime(2024, 3, 2, 0, 0)
    assert platform_time.ensure_app_timezone(stored) == deadline
    assert platform_time.ensure_app_naive_datetime(None) is None
