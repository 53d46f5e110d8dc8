"""
Break row detection.

A row is rendered as a single merged break cell when every day (or every
class, in the substitution view) carries the same non-empty subject at that
time and the subject is a break name. This module is the only place the rule
lives; the grid builder and the PDF exporter both go through classify_row.
"""
from typing import Iterable, Optional, Sequence, Set
from models.schemas import ScheduleSlot, FixedBreak, RowType, RowClassification
from config import settings


def break_names(breaks: Iterable[FixedBreak]) -> Set[str]:
    """Names of the configured fixed breaks."""
    return {b.name for b in breaks}


def is_break_name(subject: str, known_break_names: Iterable[str]) -> bool:
    """True if the subject is a configured break or one of the fallback names."""
    return subject in set(known_break_names) or subject in settings.fallback_break_names


def classify_row(
    time_label: str,
    row_slots: Sequence[Optional[ScheduleSlot]],
    known_break_names: Iterable[str] = (),
) -> RowClassification:
    """
    Classify one row of a grid.

    Args:
        time_label: The row's time label (informational)
        row_slots: One entry per day (or per class); None where there is no slot
        known_break_names: Names of the configured fixed breaks

    Returns:
        RowClassification with row_type BREAK and the shared subject as label,
        or a NORMAL classification
    """
    if not row_slots or row_slots[0] is None:
        return RowClassification()

    first_subject = row_slots[0].subject
    if not first_subject:
        return RowClassification()

    consistent = all(slot is not None and slot.subject == first_subject for slot in row_slots)
    if consistent and is_break_name(first_subject, known_break_names):
        return RowClassification(row_type=RowType.BREAK, label=first_subject)

    return RowClassification()
