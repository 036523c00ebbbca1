"""Read models for the garage schedule presentation layer."""

from .schedule_stats import (
    DayAnalytics,
    DaySummary,
    RangeAnalytics,
    ScheduleAggregator,
    SectionStats,
)

__all__ = [
    "DayAnalytics",
    "DaySummary",
    "RangeAnalytics",
    "ScheduleAggregator",
    "SectionStats",
]
