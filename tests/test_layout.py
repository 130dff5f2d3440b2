"""Timeline bar geometry and week header tests."""
from __future__ import annotations

from datetime import date

import pytest

from planboard.core.config import PlanboardConfig
from planboard.timeline.layout import DAYS_PER_WEEK, TimelineLayout, compute_bar, week_columns

EPOCH = date(2026, 1, 8)
COLUMN = 100 / 7


class TestComputeBar:

    def test_task_starting_on_epoch(self) -> None:
        bar = compute_bar(date(2026, 1, 8), date(2026, 1, 12))
        assert bar.offset_days == 0
        assert bar.duration_days == 5
        assert bar.left_percent == 0.0
        assert bar.width_percent == pytest.approx(10.204, abs=1e-3)
        assert not bar.clamped

    def test_one_week_later_is_one_column_right(self) -> None:
        bar = compute_bar(date(2026, 1, 15), date(2026, 1, 21))
        assert bar.offset_days == 7
        assert bar.left_percent == pytest.approx(COLUMN)
        assert bar.width_percent == pytest.approx(COLUMN)

    def test_single_day_task_has_positive_width(self) -> None:
        bar = compute_bar(date(2026, 2, 1), date(2026, 2, 1))
        assert bar.duration_days == 1
        assert bar.width_percent == pytest.approx(COLUMN / DAYS_PER_WEEK)

    def test_percentages_are_not_rounded(self) -> None:
        bar = compute_bar(date(2026, 1, 9), date(2026, 1, 9))
        assert bar.left_percent == (1 / 7) * (100 / 7)

    def test_start_before_epoch_clamps_left_only(self) -> None:
        bar = compute_bar(date(2026, 1, 1), date(2026, 1, 10))
        assert bar.offset_days == -7
        assert bar.left_percent == 0.0
        assert bar.duration_days == 10
        assert bar.width_percent == pytest.approx(10 / 7 * COLUMN)
        assert bar.clamped

    def test_task_past_viewport_is_not_trimmed(self) -> None:
        bar = compute_bar(date(2026, 2, 24), date(2026, 3, 10))
        assert bar.left_percent + bar.width_percent > 100

    def test_custom_epoch_and_weeks(self) -> None:
        bar = compute_bar(date(2026, 3, 8), date(2026, 3, 14), epoch=date(2026, 3, 1), weeks=4)
        assert bar.left_percent == pytest.approx(25.0)
        assert bar.width_percent == pytest.approx(25.0)

    def test_zero_weeks_rejected(self) -> None:
        with pytest.raises(ValueError, match="weeks"):
            compute_bar(EPOCH, EPOCH, weeks=0)

    def test_geometry_is_frozen(self) -> None:
        bar = compute_bar(EPOCH, EPOCH)
        with pytest.raises(Exception):
            bar.left_percent = 5.0  # type: ignore[misc]


class TestWeekColumns:

    def test_default_viewport_labels(self) -> None:
        assert week_columns() == [
            "W2 08-14 JAN",
            "W3 15-21 JAN",
            "W4 22-28 JAN",
            "W5 29 JAN-04 FEB",
            "W6 05-11 FEB",
            "W7 12-18 FEB",
            "W8 19-25 FEB",
        ]

    def test_label_count_follows_weeks(self) -> None:
        assert len(week_columns(EPOCH, 3)) == 3

    def test_year_boundary(self) -> None:
        assert week_columns(date(2025, 12, 29), 1) == ["W1 29 DEC-04 JAN"]


class TestTimelineLayout:

    def test_from_config(self) -> None:
        config = PlanboardConfig(
            snapshot_backend="memory",
            timeline_epoch=date(2026, 3, 2),
            timeline_weeks=4,
        )
        layout = TimelineLayout.from_config(config)
        assert layout.epoch == date(2026, 3, 2)
        assert layout.weeks == 4
        assert len(layout.columns) == 4

    def test_bar_uses_task_dates(self, task_factory) -> None:
        layout = TimelineLayout()
        task = task_factory(1, start_date=date(2026, 1, 15), end_date=date(2026, 1, 21))
        assert layout.bar(task) == compute_bar(task.start_date, task.end_date)

    def test_invalid_weeks(self) -> None:
        with pytest.raises(ValueError):
            TimelineLayout(weeks=0)

    def test_repr(self) -> None:
        assert repr(TimelineLayout()) == "TimelineLayout(epoch=2026-01-08, weeks=7)"
