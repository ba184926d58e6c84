"""Compliance calculation engine."""

from hourtracker.engine.dates import (
    current_compliance_cycle,
    day_key,
    elapsed_progress,
    is_same_day,
    is_today,
    parse_day_key,
    parse_timestamp,
)
from hourtracker.engine.guard import validate_entry, validate_mutation
from hourtracker.engine.progress import aggregate

__all__ = [
    "aggregate",
    "current_compliance_cycle",
    "day_key",
    "elapsed_progress",
    "is_same_day",
    "is_today",
    "parse_day_key",
    "parse_timestamp",
    "validate_entry",
    "validate_mutation",
]
