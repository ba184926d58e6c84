"""Compliance progress aggregation.

Walks a day-keyed entry collection and produces a ComplianceSnapshot.
Aggregation never raises: entries that cannot be interpreted are left
out of the buckets they cannot be placed in.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Iterator, Optional, Union

from pydantic import ValidationError

from hourtracker.engine import classifier
from hourtracker.engine.dates import current_compliance_cycle, elapsed_progress, parse_timestamp
from hourtracker.models import ComplianceSnapshot, DayKeyedEntries, Entry
from hourtracker.models.requirement import ELAPSED_TARGET_DAYS


def iter_entries(entries: DayKeyedEntries) -> Iterator[Entry]:
    """Flatten a day-keyed collection, skipping anything that is not a usable entry.

    Plain dicts are accepted and validated into Entry objects. A dict whose
    occurred_at is missing or not a string still counts, with no timestamp.
    Entries with non-finite hours are skipped.
    """
    if not isinstance(entries, Mapping):
        return
    for day_entries in entries.values():
        if not isinstance(day_entries, (list, tuple)):
            continue
        for item in day_entries:
            if isinstance(item, dict):
                occurred_at = item.get("occurred_at")
                if isinstance(occurred_at, datetime):
                    item = {**item, "occurred_at": occurred_at.isoformat()}
                elif not isinstance(occurred_at, str):
                    item = {**item, "occurred_at": ""}
                try:
                    item = Entry.model_validate(item)
                except ValidationError:
                    continue
            if not isinstance(item, Entry):
                continue
            if not math.isfinite(item.hours):
                continue
            yield item


def aggregate(
    entries: DayKeyedEntries,
    training_start_date: Union[None, str, date] = None,
    now: Optional[datetime] = None,
) -> ComplianceSnapshot:
    """Calculate the compliance snapshot for a set of entries.

    Args:
        entries: Day-keyed entry collection.
        training_start_date: Optional training start date (YYYY-MM-DD).
        now: Current moment (defaults to the system clock). Selects the
            active CE cycle and drives elapsed-time progress.

    Returns:
        ComplianceSnapshot with every bucket total. CE totals only include
        entries inside the active compliance cycle.
    """
    cycle = current_compliance_cycle(now)

    total_clinical = 0.0
    direct_contact = 0.0
    relational = 0.0
    supervision = 0.0
    review_method = 0.0
    ce_cycle = 0.0
    ce_by_category = {
        "ethics-law-tech": 0.0,
        "suicide-prevention": 0.0,
        "mft-specific": 0.0,
    }
    non_interactive = 0.0

    for entry in iter_entries(entries):
        hours = entry.hours

        if classifier.is_clinical(entry):
            total_clinical += hours
        if classifier.is_direct_contact(entry):
            direct_contact += hours
        if classifier.is_relational(entry):
            relational += hours

        if classifier.is_supervision(entry):
            supervision += hours
            if classifier.has_review_method(entry):
                review_method += hours

        if classifier.is_continuing_education(entry):
            occurred = parse_timestamp(entry.occurred_at)
            if occurred is None or not cycle.contains(occurred):
                continue
            ce_cycle += hours
            bucket = classifier.ce_bucket(entry)
            if bucket in ce_by_category:
                ce_by_category[bucket] += hours
            if classifier.is_non_interactive(entry):
                non_interactive += hours

    elapsed = elapsed_progress(training_start_date, ELAPSED_TARGET_DAYS, now=now)

    return ComplianceSnapshot(
        total_clinical_hours=total_clinical,
        direct_contact_hours=direct_contact,
        relational_hours=relational,
        total_supervision_hours=supervision,
        review_method_hours=review_method,
        ce_cycle_hours=ce_cycle,
        ethics_law_tech_hours=ce_by_category["ethics-law-tech"],
        suicide_prevention_hours=ce_by_category["suicide-prevention"],
        mft_specific_hours=ce_by_category["mft-specific"],
        non_interactive_hours=non_interactive,
        time_progress=elapsed.progress_percent,
        time_remaining=elapsed.remaining_days,
        cycle=cycle,
    )
