"""Tests for the skip state machine."""

from datetime import datetime

from dupfilter.state import SkipRun, SkipState

T0 = datetime(2024, 1, 1, 12, 0, 0)
T1 = datetime(2024, 1, 1, 12, 0, 1)
T2 = datetime(2024, 1, 1, 12, 0, 2)


class TestSkipState:
    def test_initially_idle(self):
        s = SkipState()
        assert s.active is False
        assert s.skipped_count == 0

    def test_begin(self):
        s = SkipState()
        s.begin(3)
        assert s.active is True
        assert s.period == 3
        assert s.skipped_count == 0

    def test_start_time_set_once(self):
        s = SkipState()
        s.begin(2)
        s.absorb(T0)
        s.absorb(T1)
        assert s.start_time == T0
        assert s.skipped_count == 2

    def test_finish_returns_run(self):
        s = SkipState()
        s.begin(2)
        s.absorb(T0)
        s.absorb(T1)
        run = s.finish(T2)
        assert run == SkipRun(period=2, skipped_count=2, start_time=T0, end_time=T2)
        assert s.active is False
        assert s.skipped_count == 0
        assert s.end_time == T2

    def test_finish_without_absorb(self):
        s = SkipState()
        s.begin(5)
        assert s.finish(T0) is None
        assert s.active is False

    def test_next_run_starts_fresh(self):
        s = SkipState()
        s.begin(1)
        s.absorb(T0)
        s.finish(T1)
        s.begin(2)
        s.absorb(T2)
        assert s.start_time == T2
        assert s.skipped_count == 1

    def test_reset(self):
        s = SkipState()
        s.begin(2)
        s.absorb(T0)
        s.reset()
        assert s == SkipState()
