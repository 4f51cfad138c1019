"""Unit tests for kernel time – Clock implementations."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from admin_access.kernel.time import FrozenClock, SystemClock


class TestFrozenClock:
    def test_now_is_pinned(self) -> None:
        fixed = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        clock = FrozenClock(fixed)
        assert clock.now() == fixed
        assert clock.now() == fixed

    def test_advance(self) -> None:
        clock = FrozenClock(datetime(2024, 1, 15, tzinfo=UTC))
        clock.advance(hours=2, minutes=5)
        assert clock.now() == datetime(2024, 1, 15, 2, 5, tzinfo=UTC)


class TestSystemClock:
    def test_now_is_aware_utc(self) -> None:
        now = SystemClock().now()
        assert now.tzinfo is UTC
        assert abs(now - datetime.now(UTC)) < timedelta(seconds=5)
