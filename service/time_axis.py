"""
Time axis normalization.

Every grid in the application (class view, substitution view, PDF export) is
indexed by the same ordered list of time labels. Labels are compared as plain
strings on the part before the first "-", which orders zero-padded 24-hour
"HH:MM-HH:MM" labels chronologically. Labels in any other format still sort
deterministically, just not necessarily by clock time.
"""
from typing import Iterable, List, Optional, Tuple
from models.schemas import ScheduleSlot, DaySchedule, ClassSchedule, Timetable


def start_key(time_label: str) -> Tuple[str, str]:
    """Sort key for a time label: its start part, then the full label for ties."""
    return time_label.split("-", 1)[0].strip(), time_label


def normalize_axis(schedules: Iterable[DaySchedule]) -> List[str]:
    """
    Collect the distinct time labels of the given day schedules in start order.

    Labels are deduplicated by exact string equality; overlapping ranges with
    different labels stay separate rows.
    """
    labels = set()
    for day_schedule in schedules:
        for slot in day_schedule or []:
            labels.add(slot.time)
    return sorted(labels, key=start_key)


def class_axis(class_schedule: Optional[ClassSchedule], days: Iterable[str]) -> List[str]:
    """Time axis of one class across the selected days."""
    if not class_schedule:
        return []
    return normalize_axis(class_schedule.get(day, []) for day in days)


def day_axis(timetable: Timetable, day: str) -> List[str]:
    """Time axis of one day across every class of the timetable."""
    return normalize_axis(schedule.get(day, []) for schedule in timetable.values())


def slot_at(day_schedule: Optional[DaySchedule], time_label: str) -> Optional[ScheduleSlot]:
    """First slot of a day schedule with the given time label, if any."""
    for slot in day_schedule or []:
        if slot.time == time_label:
            return slot
    return None
