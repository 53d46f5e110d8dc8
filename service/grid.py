"""
Class grid construction.

Turns one class's sparse schedule into time-ordered rows of day cells, with
break rows merged into a single labelled cell. Both the JSON grid endpoint and
the PDF exporter render from this structure.
"""
from typing import Iterable, List, Optional, Sequence
from models.schemas import ClassGrid, ClassSchedule, GridCell, GridRow, Timetable
from service.time_axis import class_axis, slot_at
from service.breaks import classify_row


def build_class_grid(
    class_name: str,
    class_schedule: Optional[ClassSchedule],
    days: Sequence[str],
    known_break_names: Iterable[str] = (),
) -> ClassGrid:
    """Build the grid for one class over the given days."""
    class_schedule = class_schedule or {}
    known_break_names = set(known_break_names)
    rows: List[GridRow] = []

    for time_label in class_axis(class_schedule, days):
        slots = [slot_at(class_schedule.get(day), time_label) for day in days]
        classification = classify_row(time_label, slots, known_break_names)

        if classification.is_break:
            rows.append(GridRow(time=time_label, row_type=classification.row_type, label=classification.label))
            continue

        cells = [
            GridCell(day=day, slot=slot, draggable=bool(slot and slot.subject))
            for day, slot in zip(days, slots)
        ]
        rows.append(GridRow(time=time_label, row_type=classification.row_type, cells=cells))

    return ClassGrid(class_name=class_name, days=list(days), rows=rows)


def build_timetable_grid(
    timetable: Timetable,
    class_name: str,
    days: Sequence[str],
    known_break_names: Iterable[str] = (),
) -> Optional[ClassGrid]:
    """Grid for a class of the timetable, or None if the class is unknown."""
    if class_name not in timetable:
        return None
    return build_class_grid(class_name, timetable[class_name], days, known_break_names)
