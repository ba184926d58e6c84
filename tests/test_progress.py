"""Property-based tests for compliance progress aggregation.

**Feature: hour-tracker**
"""

from datetime import datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hourtracker.engine.progress import aggregate, iter_entries
from hourtracker.models import Entry

NOW = datetime(2024, 1, 15, 10, 0)
IN_CYCLE = "2024-01-10T09:00:00"
BEFORE_CYCLE = "2023-09-15T09:00:00"
AFTER_CYCLE = "2025-10-02T09:00:00"


def ce(hours: float, ce_category: str, delivery_format: str, occurred_at: str = IN_CYCLE) -> Entry:
    return Entry(
        category="continuing-education",
        subtype="workshop",
        hours=hours,
        occurred_at=occurred_at,
        ce_category=ce_category,
        delivery_format=delivery_format,
    )


def clinical(subtype: str, hours: float) -> Entry:
    return Entry(category="clinical", subtype=subtype, hours=hours, occurred_at=IN_CYCLE)


def supervision(hours: float, audio: bool = False, video: bool = False) -> Entry:
    return Entry(category="supervision", subtype="individual", hours=hours,
                 occurred_at=IN_CYCLE, reviewed_audio=audio, reviewed_video=video)


@st.composite
def entry_strategy(draw):
    """Generate random entries across all categories."""
    category = draw(st.sampled_from(["clinical", "supervision", "continuing-education"]))
    subtype = draw(st.sampled_from(
        ["individual", "family", "couple", "assessment", "consultation",
         "documentation", "group", "workshop"]
    ))
    occurred = draw(st.datetimes(min_value=datetime(2022, 1, 1), max_value=datetime(2026, 12, 31)))
    return Entry(
        category=category,
        subtype=subtype,
        hours=draw(st.floats(min_value=0.25, max_value=12, allow_nan=False)),
        occurred_at=occurred.isoformat(),
        reviewed_audio=draw(st.booleans()),
        reviewed_video=draw(st.booleans()),
        ce_category=draw(st.sampled_from(
            ["general", "ethics-law-tech", "suicide-prevention", "mft-specific"]
        )),
        delivery_format=draw(st.sampled_from(
            ["in-person", "online-interactive", "online-non-interactive"]
        )),
    )


day_keyed_entries = st.dictionaries(
    keys=st.dates(min_value=datetime(2022, 1, 1).date(), max_value=datetime(2026, 12, 31).date())
    .map(lambda d: d.isoformat()),
    values=st.lists(entry_strategy(), min_size=1, max_size=4),
    max_size=8,
)


class TestEmptyCollection:
    """
    **Feature: hour-tracker, Property 7: Empty Snapshot**

    *For any* empty collection, every total and percentage is 0 and the
    elapsed time remaining is the full 730 days.
    """

    @pytest.mark.parametrize("empty", [{}, None, {"2024-01-10": []}])
    def test_empty_snapshot(self, empty):
        snapshot = aggregate(empty, now=NOW)
        data = snapshot.model_dump(exclude={"cycle", "time_remaining"})
        assert all(value == 0 for value in data.values())
        assert snapshot.time_remaining == 730


class TestClinicalAggregation:
    """
    **Feature: hour-tracker, Property 8: Clinical Totals**

    *For any* clinical entry, direct contact subtypes add to total and
    direct contact, and family/couple add to relational as well.
    """

    def test_buckets(self):
        entries = {
            "2024-01-08": [clinical("individual", 1.0), clinical("family", 2.0)],
            "2024-01-09": [clinical("couple", 1.5), clinical("assessment", 0.5)],
            "2024-01-10": [clinical("documentation", 3.0)],
        }
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.total_clinical_hours == pytest.approx(5.0)
        assert snapshot.direct_contact_hours == pytest.approx(4.5)
        assert snapshot.relational_hours == pytest.approx(3.5)
        assert snapshot.clinical_progress == pytest.approx(5.0 / 3000 * 100)
        assert snapshot.endorsement_progress == pytest.approx(5.0 / 4000 * 100)

    def test_session_aliases_match_clinical(self):
        snapshot = aggregate({"2024-01-08": [clinical("individual", 30.0)]}, now=NOW)
        assert snapshot.total_session_hours == snapshot.total_clinical_hours
        assert snapshot.session_progress == snapshot.clinical_progress
        dumped = snapshot.model_dump()
        assert dumped["total_session_hours"] == 30.0

    def test_clinical_hours_ignore_cycle(self):
        old = Entry(category="clinical", subtype="individual", hours=2,
                    occurred_at="2019-05-01T09:00:00")
        snapshot = aggregate({"2019-05-01": [old]}, now=NOW)
        assert snapshot.total_clinical_hours == 2

    def test_negative_hours_are_summed(self):
        entries = {"2024-01-08": [clinical("individual", 3.0), clinical("individual", -1.0)]}
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.total_clinical_hours == pytest.approx(2.0)


class TestSupervisionAggregation:
    """Supervision totals and the review-method subset."""

    def test_review_method_subset(self):
        entries = {
            "2024-01-08": [supervision(1.0), supervision(2.0, audio=True)],
            "2024-01-09": [supervision(1.5, video=True), supervision(0.5, audio=True, video=True)],
        }
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.total_supervision_hours == pytest.approx(5.0)
        assert snapshot.review_method_hours == pytest.approx(4.0)
        assert snapshot.supervision_progress == pytest.approx(5.0)
        assert snapshot.review_method_progress == pytest.approx(16.0)


class TestCEAggregation:
    """
    **Feature: hour-tracker, Property 9: CE Cycle Filtering**

    *For any* CE entry outside the active cycle, no CE bucket changes.
    """

    def test_three_entry_scenario(self):
        entries = {
            "2024-01-10": [
                ce(4.0, "general", "in-person"),
                ce(2.0, "ethics-law-tech", "online-interactive"),
                ce(1.0, "suicide-prevention", "online-non-interactive"),
            ]
        }
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.ce_cycle_hours == pytest.approx(7.0)
        assert snapshot.ce_progress == pytest.approx(17.5)
        assert snapshot.ethics_law_tech_hours == pytest.approx(2.0)
        assert snapshot.suicide_prevention_hours == pytest.approx(1.0)
        assert snapshot.general_ce_hours == pytest.approx(4.0)
        assert snapshot.non_interactive_hours == pytest.approx(1.0)

    @pytest.mark.parametrize("occurred_at", [BEFORE_CYCLE, AFTER_CYCLE])
    def test_out_of_cycle_entries_ignored(self, occurred_at: str):
        entries = {"2023-09-15": [
            ce(5.0, "general", "online-non-interactive", occurred_at),
            ce(3.0, "mft-specific", "in-person", occurred_at),
        ]}
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.ce_cycle_hours == 0
        assert snapshot.mft_specific_hours == 0
        assert snapshot.non_interactive_hours == 0
        assert snapshot.general_ce_hours == 0

    def test_cycle_boundary_days_included(self):
        entries = {"2023-10-01": [
            ce(1.0, "general", "in-person", "2023-10-01T00:00:00"),
            ce(1.0, "general", "in-person", "2025-09-30T23:00:00"),
        ]}
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.ce_cycle_hours == pytest.approx(2.0)

    def test_malformed_timestamp_does_not_raise(self):
        entries = {"2024-01-10": [
            ce(2.0, "general", "in-person", "not-a-timestamp"),
            clinical("individual", 1.0).model_copy(update={"occurred_at": "garbage"}),
        ]}
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.ce_cycle_hours == 0
        assert snapshot.total_clinical_hours == 1.0

    def test_ethics_mft_passes_through(self):
        snapshot = aggregate({"2024-01-10": [ce(3.0, "ethics-law-tech", "in-person")]}, now=NOW)
        assert snapshot.ethics_law_tech_mft_hours == snapshot.ethics_law_tech_hours == 3.0

    def test_general_residual_never_negative(self):
        entries = {"2024-01-10": [ce(-2.0, "general", "in-person"),
                                  ce(1.0, "mft-specific", "in-person")]}
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.general_ce_hours == 0

    @given(day_keyed_entries)
    @settings(max_examples=100)
    def test_residual_identity(self, entries):
        snapshot = aggregate(entries, now=NOW)
        expected = max(
            0.0,
            snapshot.ce_cycle_hours
            - snapshot.ethics_law_tech_hours
            - snapshot.suicide_prevention_hours
            - snapshot.mft_specific_hours,
        )
        assert snapshot.general_ce_hours == expected


class TestAggregationIdempotence:
    """
    **Feature: hour-tracker, Property 10: Idempotence**

    *For any* collection, aggregating twice yields identical snapshots.
    """

    @given(day_keyed_entries)
    @settings(max_examples=100)
    def test_idempotent(self, entries):
        first = aggregate(entries, training_start_date="2023-07-15", now=NOW)
        second = aggregate(entries, training_start_date="2023-07-15", now=NOW)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    @given(day_keyed_entries)
    @settings(max_examples=50)
    def test_totals_are_consistent(self, entries):
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.direct_contact_hours <= snapshot.total_clinical_hours + 1e-9
        assert snapshot.relational_hours <= snapshot.direct_contact_hours + 1e-9
        assert snapshot.review_method_hours <= snapshot.total_supervision_hours + 1e-9
        assert snapshot.non_interactive_hours <= snapshot.ce_cycle_hours + 1e-9


class TestTolerantInput:
    """Anything that is not a usable entry is skipped, never raised on."""

    def test_skips_junk(self):
        entries = {
            "2024-01-08": "not a list",
            "2024-01-09": [None, 42, {"category": "unknown"}, clinical("individual", 1.0)],
            "2024-01-10": [{"category": "session", "subtype": "family", "hours": 2,
                            "occurred_at": IN_CYCLE}],
        }
        snapshot = aggregate(entries, now=NOW)
        assert snapshot.total_clinical_hours == pytest.approx(3.0)
        assert snapshot.relational_hours == pytest.approx(2.0)

    def test_non_finite_hours_skipped(self):
        entries = {"2024-01-08": [clinical("individual", float("nan")),
                                  clinical("individual", float("inf")),
                                  clinical("individual", 1.0)]}
        assert len(list(iter_entries(entries))) == 1
        assert aggregate(entries, now=NOW).total_clinical_hours == 1.0

    @pytest.mark.parametrize("collection", [
        [clinical("individual", 1.0)],
        (clinical("family", 2.0),),
        "2024-01-08",
        42,
        None,
    ])
    def test_collection_that_is_not_a_mapping(self, collection):
        assert list(iter_entries(collection)) == []
        snapshot = aggregate(collection, now=NOW)
        assert snapshot.total_clinical_hours == 0
        assert snapshot.ce_cycle_hours == 0

    @pytest.mark.parametrize("occurred_at", [None, 20240110, ["2024-01-10"], "missing"])
    def test_dict_without_usable_timestamp_still_counts(self, occurred_at):
        raw = {"category": "clinical", "subtype": "family", "hours": 2}
        if occurred_at != "missing":
            raw["occurred_at"] = occurred_at
        course = {"category": "continuing-education", "subtype": "course", "hours": 3,
                  "ce_category": "general", "delivery_format": "in-person",
                  "occurred_at": occurred_at}

        snapshot = aggregate({"2024-01-10": [raw, course]}, now=NOW)
        assert snapshot.total_clinical_hours == pytest.approx(2.0)
        assert snapshot.relational_hours == pytest.approx(2.0)
        # No timestamp, so the course cannot be placed in the CE cycle
        assert snapshot.ce_cycle_hours == 0

    def test_dict_with_datetime_timestamp(self):
        course = {"category": "continuing-education", "subtype": "course", "hours": 3,
                  "ce_category": "general", "delivery_format": "in-person",
                  "occurred_at": datetime(2024, 1, 10, 9, 0)}
        assert aggregate({"2024-01-10": [course]}, now=NOW).ce_cycle_hours == pytest.approx(3.0)


class TestRequirementsTable:
    """Requirement rows derived from a snapshot."""

    def test_rows_and_remaining(self):
        entries = {"2024-01-10": [
            supervision(30.0, video=True),
            ce(16.0, "general", "online-non-interactive"),
        ]}
        statuses = {s.key: s for s in aggregate(entries, now=NOW).requirements()}
        assert len(statuses) == 12
        assert statuses["review-method"].met
        assert statuses["review-method"].remaining == 0
        assert statuses["supervision"].remaining == pytest.approx(70.0)
        assert not statuses["supervision"].met
        assert statuses["non-interactive"].is_cap
        assert not statuses["non-interactive"].met
        assert statuses["general-ce"].remaining == pytest.approx(1.0)
