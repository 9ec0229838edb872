"""Service module exports."""

from . import dates, forms, habits, profile, schedule, stats, tracking

__all__ = [
    "dates",
    "forms",
    "habits",
    "profile",
    "schedule",
    "stats",
    "tracking",
]
