"""
Session relocation.

Dragging a cell of a class grid onto another cell produces a MoveIntent. The
engine only captures what the user asked for; apply_move is the owning
layer's helper that turns an intent into a new timetable snapshot.
"""
from enum import Enum
from typing import Any, Dict, Optional
from models.schemas import MoveIntent, ScheduleSlot, Timetable
from service.time_axis import slot_at
import copy
import json
import logging

logger = logging.getLogger(__name__)

Payload = Any


def _parse_payload(payload: Payload) -> Optional[Dict[str, str]]:
    """Decode a drag payload into {class_name, day, time}, or None if malformed."""
    try:
        data = json.loads(payload) if isinstance(payload, (str, bytes)) else payload
        if not isinstance(data, dict):
            return None
        class_name = data.get("class_name", data.get("className"))
        day = data.get("day")
        time_label = data.get("time")
        if not all(isinstance(v, str) for v in (class_name, day, time_label)):
            return None
        return {"class_name": class_name, "day": day, "time": time_label}
    except (ValueError, TypeError) as e:
        logger.debug(f"Failed to parse drag payload: {e}")
        return None


def propose_move(displayed_class: str, payload: Payload, to_day: str, to_time: str) -> Optional[MoveIntent]:
    """
    Turn a drop on (to_day, to_time) into a MoveIntent.

    Returns None when the payload is malformed or was dragged from a class
    other than the one displayed. Nothing else is checked: the destination
    may be occupied, the source may be empty and same-cell moves still
    produce an intent.
    """
    origin = _parse_payload(payload)
    if origin is None:
        return None
    if origin["class_name"] != displayed_class:
        logger.debug(f"Ignoring drop of '{origin['class_name']}' cell onto '{displayed_class}' grid")
        return None

    return MoveIntent(
        class_name=displayed_class,
        from_day=origin["day"],
        from_time=origin["time"],
        to_day=to_day,
        to_time=to_time
    )


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING = "hovering"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


class DragSession:
    """
    Drag-and-drop state for one rendered class grid.

    Idle -> Dragging(origin) -> Hovering(target)* -> Dropped | Cancelled.
    Both terminal states are reported through last_outcome and return the
    session to Idle. The payload created by start() is consumed by the first
    drop; later drops without a new start() are ignored.
    """

    def __init__(self, displayed_class: str):
        self.displayed_class = displayed_class
        self.state = DragState.IDLE
        self.origin: Optional[Dict[str, str]] = None
        self.target: Optional[Dict[str, str]] = None
        self.last_outcome: Optional[DragState] = None
        self.last_intent: Optional[MoveIntent] = None
        self._payload: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.state in (DragState.DRAGGING, DragState.HOVERING)

    def start(self, day: str, time_label: str) -> str:
        """Begin dragging the cell at (day, time) and return the carried payload."""
        self.origin = {"class_name": self.displayed_class, "day": day, "time": time_label}
        self.target = None
        self._payload = json.dumps(self.origin)
        self.state = DragState.DRAGGING
        return self._payload

    def hover(self, day: str, time_label: str):
        if not self.active:
            return
        self.target = {"day": day, "time": time_label}
        self.state = DragState.HOVERING

    def leave(self):
        if not self.active:
            return
        self.target = None
        self.state = DragState.DRAGGING

    def drop(self, day: str, time_label: str, payload: Payload = None) -> Optional[MoveIntent]:
        """
        Drop onto (day, time).

        The payload defaults to the one created by start(); an explicit
        payload stands in for data carried by the drag event itself.
        """
        if not self.active:
            return None
        carried = payload if payload is not None else self._payload
        self._payload = None

        intent = propose_move(self.displayed_class, carried, day, time_label)
        self._finish(DragState.DROPPED if intent else DragState.CANCELLED, intent)
        return intent

    def cancel(self):
        """Drag ended outside any cell."""
        if self.active:
            self._payload = None
            self._finish(DragState.CANCELLED, None)

    def _finish(self, outcome: DragState, intent: Optional[MoveIntent]):
        self.last_outcome = outcome
        self.last_intent = intent
        self.origin = None
        self.target = None
        self.state = DragState.IDLE


def apply_move(timetable: Timetable, intent: MoveIntent) -> Timetable:
    """
    Return a copy of the timetable with the intent applied.

    The source session (subject and teacher) goes to the destination cell. If
    the destination already holds a session the two are swapped; otherwise the
    source cell is left empty. Empty sources and unknown classes leave the
    copy unchanged. The input timetable is never modified.
    """
    updated = copy.deepcopy(timetable)
    schedule = updated.get(intent.class_name)
    if schedule is None:
        logger.info(f"Move ignored, class '{intent.class_name}' not in timetable")
        return updated

    source = slot_at(schedule.get(intent.from_day), intent.from_time)
    if source is None or not source.subject:
        return updated
    if (intent.from_day, intent.from_time) == (intent.to_day, intent.to_time):
        return updated

    target = slot_at(schedule.get(intent.to_day), intent.to_time)
    if target is None:
        target = ScheduleSlot(time=intent.to_time)
        schedule.setdefault(intent.to_day, []).append(target)

    source.subject, target.subject = target.subject, source.subject
    source.teacher, target.teacher = target.teacher, source.teacher

    logger.info(
        f"Moved {target.subject} of {intent.class_name} from "
        f"{intent.from_day} {intent.from_time} to {intent.to_day} {intent.to_time}"
    )
    return updated
