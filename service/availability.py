"""
Substitution availability.

For one day, walks the shared time axis of all classes and splits the teacher
directory into busy teachers (with the class and subject they are teaching)
and teachers available for substitution.
"""
from typing import Dict, Iterable, List, Optional, Sequence
from models.schemas import (
    Timetable, Teacher, ScheduleSlot, AvailabilityRow, AvailabilityStatus,
    TeacherStatus, BusyConflict
)
from service.time_axis import day_axis, slot_at
from service.breaks import classify_row
from service.teacher_resolver import TeacherResolver, default_resolver
from config import settings
import logging

logger = logging.getLogger(__name__)


def compute_availability(
    timetable: Timetable,
    day: str,
    directory: Sequence[Teacher],
    known_break_names: Iterable[str] = (),
    resolver: Optional[TeacherResolver] = None,
) -> List[AvailabilityRow]:
    """
    Compute teacher availability for every time slot of a day.

    Args:
        timetable: Snapshot of the whole timetable (class -> day -> slots)
        day: The day to inspect
        directory: Ordered teacher directory
        known_break_names: Names of the configured fixed breaks
        resolver: Teacher label resolver, defaults to the ordered-strategy resolver

    Returns:
        One AvailabilityRow per time label, each with one entry per teacher
        in directory order
    """
    resolver = resolver or default_resolver
    known_break_names = set(known_break_names)
    rows = []

    for time_label in day_axis(timetable, day):
        class_slots = _slots_at(timetable, day, time_label)

        classification = classify_row(
            time_label,
            [slot for _, slot in class_slots],
            known_break_names,
        )

        busy: Dict[str, ScheduleSlot] = {}
        busy_class: Dict[str, str] = {}
        seen_in: Dict[str, List[str]] = {}

        for class_name, slot in class_slots:
            if slot is None or slot.teacher.strip() in ("", settings.no_teacher_label):
                continue
            teacher = resolver.resolve(slot.teacher, directory)
            if teacher is None:
                continue
            # Last class wins if a teacher shows up twice in the same slot
            busy[teacher.id] = slot
            busy_class[teacher.id] = class_name
            seen_in.setdefault(teacher.id, [])
            if class_name not in seen_in[teacher.id]:
                seen_in[teacher.id].append(class_name)

        conflicts = []
        for teacher_id, class_names in seen_in.items():
            if len(class_names) > 1:
                logger.warning(
                    f"Teacher {teacher_id} is scheduled in {len(class_names)} classes "
                    f"on {day} at {time_label}: {', '.join(class_names)}"
                )
                conflicts.append(BusyConflict(teacher_id=teacher_id, time=time_label, class_names=class_names))

        break_label = classification.label if classification.is_break else None
        entries = []
        for teacher in directory:
            if teacher.id in busy:
                entries.append(TeacherStatus(
                    teacher=teacher,
                    status=AvailabilityStatus.BUSY,
                    class_name=busy_class[teacher.id],
                    subject=busy[teacher.id].subject,
                    break_label=break_label
                ))
            else:
                entries.append(TeacherStatus(
                    teacher=teacher,
                    status=AvailabilityStatus.AVAILABLE,
                    break_label=break_label
                ))

        rows.append(AvailabilityRow(
            time=time_label,
            row_type=classification.row_type,
            break_label=break_label,
            entries=entries,
            conflicts=conflicts
        ))

    return rows


def available_teachers(row: AvailabilityRow) -> List[Teacher]:
    """Teachers free for substitution in a row."""
    return [e.teacher for e in row.entries if e.status == AvailabilityStatus.AVAILABLE]


def _slots_at(timetable: Timetable, day: str, time_label: str):
    """(class name, slot or None) for every class that has a schedule for the day."""
    return [
        (class_name, slot_at(schedule[day], time_label))
        for class_name, schedule in timetable.items()
        if day in schedule
    ]
