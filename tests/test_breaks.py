"""
Tests for break row classification.
"""
from models.schemas import ScheduleSlot, FixedBreak, RowType
from service.breaks import classify_row, break_names, is_break_name


def lunch():
    return ScheduleSlot(time="10:15-10:30", subject="Lunch", teacher="N/A")


def test_consistent_fallback_break_name():
    result = classify_row("10:15-10:30", [lunch() for _ in range(5)])
    assert result.row_type == RowType.BREAK
    assert result.label == "Lunch"


def test_single_disagreeing_day_is_normal():
    slots = [lunch(), lunch(), ScheduleSlot(time="10:15-10:30", subject="Math", teacher="Mrs. Sharma")]
    assert classify_row("10:15-10:30", slots).row_type == RowType.NORMAL


def test_missing_day_is_normal():
    assert classify_row("10:15-10:30", [lunch(), None, lunch()]).row_type == RowType.NORMAL


def test_missing_first_day_is_normal():
    assert classify_row("10:15-10:30", [None, lunch()]).row_type == RowType.NORMAL


def test_empty_row_is_normal():
    assert classify_row("10:15-10:30", []).row_type == RowType.NORMAL


def test_empty_subject_is_normal():
    empty = ScheduleSlot(time="10:15-10:30", subject="")
    assert classify_row("10:15-10:30", [empty, empty]).row_type == RowType.NORMAL


def test_consistent_academic_subject_is_normal():
    """Same subject every day is not enough; it must be a break name."""
    maths = ScheduleSlot(time="08:00-09:30", subject="Main Lesson", teacher="Mr. Mehta")
    assert classify_row("08:00-09:30", [maths, maths, maths]).row_type == RowType.NORMAL


def test_configured_break_name():
    snack = ScheduleSlot(time="11:00-11:15", subject="Snack Time", teacher="N/A")
    breaks = [FixedBreak(name="Snack Time", start_time="11:00", end_time="11:15")]

    result = classify_row("11:00-11:15", [snack, snack], break_names(breaks))

    assert result.is_break
    assert result.label == "Snack Time"
    assert classify_row("11:00-11:15", [snack, snack]).row_type == RowType.NORMAL


def test_fallback_vocabulary():
    for name in ["Break", "Lunch", "Recess", "Assembly"]:
        assert is_break_name(name, [])
    assert not is_break_name("lunch", [])
