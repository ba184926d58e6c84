"""Entry classification into regulatory buckets.

Pure predicates over a single Entry. An entry may belong to several
buckets (a family therapy session is clinical, direct contact and
relational at once).
"""

from typing import Optional

from hourtracker.models import Entry
from hourtracker.models.requirement import general_ce_residual  # noqa: F401

DIRECT_CONTACT_SUBTYPES = frozenset({"individual", "family", "couple"})
RELATIONAL_SUBTYPES = frozenset({"family", "couple"})
# Count toward total clinical hours but not direct contact
OTHER_CLINICAL_SUBTYPES = frozenset({"assessment", "consultation"})

NON_INTERACTIVE_FORMAT = "online-non-interactive"


def is_direct_contact(entry: Entry) -> bool:
    """Check whether a clinical entry is individual, family or couple therapy."""
    return entry.category == "clinical" and entry.subtype in DIRECT_CONTACT_SUBTYPES


def is_relational(entry: Entry) -> bool:
    """Check whether an entry is family or couple therapy."""
    return entry.category == "clinical" and entry.subtype in RELATIONAL_SUBTYPES


def is_clinical(entry: Entry) -> bool:
    """Check whether an entry counts toward total clinical hours.

    Documentation and other administrative subtypes are excluded.
    """
    return is_direct_contact(entry) or (
        entry.category == "clinical" and entry.subtype in OTHER_CLINICAL_SUBTYPES
    )


def is_supervision(entry: Entry) -> bool:
    return entry.category == "supervision"


def has_review_method(entry: Entry) -> bool:
    """Check whether a supervision entry was reviewed by audio or video."""
    return is_supervision(entry) and (entry.reviewed_audio or entry.reviewed_video)


def is_continuing_education(entry: Entry) -> bool:
    return entry.category == "continuing-education"


def ce_bucket(entry: Entry) -> Optional[str]:
    """Get the CE category an entry counts toward, or None for non-CE entries."""
    if not is_continuing_education(entry):
        return None
    return entry.ce_category


def is_non_interactive(entry: Entry) -> bool:
    """Check whether a CE entry was delivered online without interaction."""
    return is_continuing_education(entry) and entry.delivery_format == NON_INTERACTIVE_FORMAT
