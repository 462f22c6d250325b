from datetime import datetime, time

from src.staff_attendance.staff_attendance.attendance.factory import LatenessStrategyFactory
from src.staff_attendance.staff_attendance.attendance.strategies.disabled_strategy import DisabledLatenessStrategy
from src.staff_attendance.staff_attendance.attendance.strategies.threshold_strategy import ThresholdLatenessStrategy
from src.staff_attendance.staff_attendance.settings.model import default_settings


def _strategy(start=time(9, 0), threshold=15):
    return ThresholdLatenessStrategy(work_start_time=start, late_threshold_minutes=threshold)


def test_factory_without_settings_disables_lateness():
    strategy = LatenessStrategyFactory().for_settings(None)

    assert isinstance(strategy, DisabledLatenessStrategy)
    decision = strategy.decide(check_in_time=datetime(2025, 3, 10, 23, 59))
    assert decision.is_late is False
    assert decision.late_minutes == 0


def test_factory_with_settings_uses_threshold():
    strategy = LatenessStrategyFactory().for_settings(default_settings(tenant_id=1, branch_id=1))

    assert isinstance(strategy, ThresholdLatenessStrategy)


def test_within_grace_period_is_not_late():
    decision = _strategy().decide(check_in_time=datetime(2025, 3, 10, 9, 14))

    assert decision.is_late is False
    assert decision.late_minutes == 0


def test_exactly_on_threshold_is_not_late():
    decision = _strategy().decide(check_in_time=datetime(2025, 3, 10, 9, 15, 0))

    assert decision.is_late is False


def test_late_minutes_are_measured_from_work_start():
    decision = _strategy().decide(check_in_time=datetime(2025, 3, 10, 9, 16))

    assert decision.is_late is True
    assert decision.late_minutes == 16


def test_late_minutes_round_down_partial_minutes():
    decision = _strategy().decide(check_in_time=datetime(2025, 3, 10, 9, 20, 59))

    assert decision.late_minutes == 20


def test_zero_threshold_is_late_one_second_after_start():
    decision = _strategy(threshold=0).decide(check_in_time=datetime(2025, 3, 10, 9, 0, 1))

    assert decision.is_late is True
    assert decision.late_minutes == 0


def test_work_start_is_anchored_to_the_check_in_day():
    decision = _strategy(start=time(8, 30), threshold=10).decide(check_in_time=datetime(2024, 12, 31, 10, 0))

    assert decision.is_late is True
    assert decision.late_minutes == 90
