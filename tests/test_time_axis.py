"""
Tests for time axis normalization.
"""
from models.schemas import ScheduleSlot
from service.time_axis import normalize_axis, class_axis, day_axis, slot_at, start_key
from sample_data import get_timetable, DAYS


def test_axis_sorted_and_deduplicated():
    """Labels from several days are merged, deduplicated and ordered by start."""
    monday = [ScheduleSlot(time="10:15-10:30"), ScheduleSlot(time="09:00-09:45")]
    tuesday = [ScheduleSlot(time="09:00-09:45"), ScheduleSlot(time="08:15-09:00")]

    axis = normalize_axis([monday, tuesday])

    assert axis == ["08:15-09:00", "09:00-09:45", "10:15-10:30"]
    assert len(axis) == len(set(axis))


def test_axis_strictly_ascending_by_start():
    timetable = get_timetable()
    axis = day_axis(timetable, "Monday")

    starts = [start_key(t)[0] for t in axis]
    assert starts == sorted(starts)
    assert len(set(starts)) == len(starts)


def test_overlapping_labels_are_not_merged():
    """Different labels stay separate even when the ranges overlap."""
    slots = [ScheduleSlot(time="09:00-10:30"), ScheduleSlot(time="09:00-09:45")]
    assert normalize_axis([slots]) == ["09:00-09:45", "09:00-10:30"]


def test_empty_scope():
    assert normalize_axis([]) == []
    assert normalize_axis([[]]) == []
    assert class_axis(None, DAYS) == []
    assert day_axis({}, "Monday") == []


def test_day_axis_spans_all_classes():
    """Grade VII contributes 10:30 which Grade VI never uses on Monday."""
    axis = day_axis(get_timetable(), "Monday")
    assert axis == ["09:00-09:45", "09:45-10:15", "10:15-10:30", "10:30-11:15"]


def test_class_axis_ignores_unselected_days():
    timetable = get_timetable()
    assert class_axis(timetable["Grade VII"], ["Tuesday"]) == ["09:00-09:45", "10:15-10:30"]


def test_missing_day_is_no_slots():
    assert day_axis(get_timetable(), "Saturday") == []


def test_slot_at_keeps_first_duplicate():
    day = [
        ScheduleSlot(time="09:00-09:45", subject="Math"),
        ScheduleSlot(time="09:00-09:45", subject="Art"),
    ]
    assert slot_at(day, "09:00-09:45").subject == "Math"
    assert slot_at(day, "11:00-11:45") is None
    assert slot_at(None, "09:00-09:45") is None
