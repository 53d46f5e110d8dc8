"""
Tests for the session relocation protocol.
"""
import json
from models.schemas import MoveIntent
from service.relocation import propose_move, apply_move, DragSession, DragState
from service.time_axis import slot_at
from sample_data import get_timetable


def payload(class_name="Grade VI", day="Monday", time="09:00-09:45"):
    return json.dumps({"className": class_name, "day": day, "time": time})


def test_propose_move():
    intent = propose_move("Grade VI", payload(), "Tuesday", "09:45-10:15")
    assert intent == MoveIntent(
        class_name="Grade VI",
        from_day="Monday",
        from_time="09:00-09:45",
        to_day="Tuesday",
        to_time="09:45-10:15"
    )


def test_same_cell_still_yields_intent():
    intent = propose_move("Grade VI", payload(), "Monday", "09:00-09:45")
    assert intent is not None
    assert (intent.from_day, intent.from_time) == (intent.to_day, intent.to_time)


def test_cross_class_is_rejected():
    assert propose_move("Grade VII", payload(class_name="Grade VI"), "Monday", "10:30-11:15") is None


def test_malformed_payloads_are_rejected():
    assert propose_move("Grade VI", "not json", "Monday", "09:00-09:45") is None
    assert propose_move("Grade VI", "[1, 2]", "Monday", "09:00-09:45") is None
    assert propose_move("Grade VI", {"className": "Grade VI"}, "Monday", "09:00-09:45") is None
    assert propose_move("Grade VI", None, "Monday", "09:00-09:45") is None


def test_dict_payload_with_snake_case_keys():
    data = {"class_name": "Grade VI", "day": "Monday", "time": "09:00-09:45"}
    assert propose_move("Grade VI", data, "Monday", "09:45-10:15") is not None


def test_drag_session_drop():
    session = DragSession("Grade VI")
    assert session.state == DragState.IDLE

    session.start("Monday", "09:00-09:45")
    assert session.state == DragState.DRAGGING

    session.hover("Tuesday", "09:00-09:45")
    session.hover("Tuesday", "09:00-09:45")
    assert session.state == DragState.HOVERING
    assert session.target == {"day": "Tuesday", "time": "09:00-09:45"}

    intent = session.drop("Tuesday", "09:00-09:45")

    assert intent.from_day == "Monday"
    assert intent.to_day == "Tuesday"
    assert session.state == DragState.IDLE
    assert session.last_outcome == DragState.DROPPED
    assert session.last_intent == intent


def test_drag_session_second_drop_is_ignored():
    session = DragSession("Grade VI")
    session.start("Monday", "09:00-09:45")
    assert session.drop("Tuesday", "09:00-09:45") is not None
    assert session.drop("Tuesday", "09:45-10:15") is None
    assert session.last_intent.to_time == "09:00-09:45"


def test_drag_session_leave_and_cancel():
    session = DragSession("Grade VI")
    session.start("Monday", "09:00-09:45")
    session.hover("Monday", "09:45-10:15")
    session.leave()
    assert session.state == DragState.DRAGGING
    assert session.target is None

    session.cancel()
    assert session.state == DragState.IDLE
    assert session.last_outcome == DragState.CANCELLED
    assert session.drop("Monday", "09:45-10:15") is None


def test_drag_session_malformed_payload_cancels():
    session = DragSession("Grade VI")
    session.start("Monday", "09:00-09:45")
    assert session.drop("Monday", "09:45-10:15", payload="{broken") is None
    assert session.last_outcome == DragState.CANCELLED
    assert session.state == DragState.IDLE


def test_drag_session_cross_class_payload_cancels():
    session = DragSession("Grade VII")
    session.start("Monday", "09:00-09:45")
    assert session.drop("Monday", "10:30-11:15", payload=payload(class_name="Grade VI")) is None
    assert session.last_outcome == DragState.CANCELLED


def test_hover_without_drag_is_ignored():
    session = DragSession("Grade VI")
    session.hover("Monday", "09:00-09:45")
    assert session.state == DragState.IDLE


def test_apply_move_swaps_occupied_cells():
    timetable = get_timetable()
    intent = MoveIntent(class_name="Grade VI", from_day="Monday", from_time="09:00-09:45",
                        to_day="Tuesday", to_time="09:00-09:45")

    updated = apply_move(timetable, intent)

    assert slot_at(updated["Grade VI"]["Tuesday"], "09:00-09:45").subject == "Math"
    assert slot_at(updated["Grade VI"]["Tuesday"], "09:00-09:45").teacher == "Mrs. Sharma"
    assert slot_at(updated["Grade VI"]["Monday"], "09:00-09:45").subject == "Hindi"
    # input untouched
    assert slot_at(timetable["Grade VI"]["Monday"], "09:00-09:45").subject == "Math"


def test_apply_move_into_missing_cell():
    timetable = get_timetable()
    intent = MoveIntent(class_name="Grade VII", from_day="Tuesday", from_time="09:00-09:45",
                        to_day="Tuesday", to_time="10:30-11:15")

    updated = apply_move(timetable, intent)

    moved = slot_at(updated["Grade VII"]["Tuesday"], "10:30-11:15")
    assert moved.subject == "Math"
    assert slot_at(updated["Grade VII"]["Tuesday"], "09:00-09:45").subject == ""


def test_apply_move_noops():
    timetable = get_timetable()
    same_cell = MoveIntent(class_name="Grade VI", from_day="Monday", from_time="09:00-09:45",
                           to_day="Monday", to_time="09:00-09:45")
    empty_source = MoveIntent(class_name="Grade VI", from_day="Monday", from_time="12:00-12:45",
                              to_day="Monday", to_time="09:00-09:45")
    unknown_class = MoveIntent(class_name="Grade X", from_day="Monday", from_time="09:00-09:45",
                               to_day="Monday", to_time="09:45-10:15")

    for intent in (same_cell, empty_source, unknown_class):
        assert apply_move(timetable, intent) == timetable
