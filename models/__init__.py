"""
Data models and Pydantic schemas for the timetable API.
"""
from .schemas import (
    TimeWindow,
    Teacher,
    SubjectRequirement,
    ClassInfo,
    FixedBreak,
    SchoolHours,
    TimetableInputs,
    ScheduleSlot,
    DaySchedule,
    ClassSchedule,
    Timetable,
    RowType,
    RowClassification,
    AvailabilityStatus,
    TeacherStatus,
    BusyConflict,
    AvailabilityRow,
    MoveIntent,
    GridCell,
    GridRow,
    ClassGrid,
    AxisRequest,
    GridRequest,
    AvailabilityRequest,
    ResolveTeacherRequest,
    MoveRequest,
    ApplyMoveRequest,
    ModifyRequest,
    AxisResponse,
    AvailabilityResponse,
    ResolveTeacherResponse,
    MoveResponse,
    TimetableResponse,
    ErrorMessage
)

__all__ = [
    "TimeWindow",
    "Teacher",
    "SubjectRequirement",
    "ClassInfo",
    "FixedBreak",
    "SchoolHours",
    "TimetableInputs",
    "ScheduleSlot",
    "DaySchedule",
    "ClassSchedule",
    "Timetable",
    "RowType",
    "RowClassification",
    "AvailabilityStatus",
    "TeacherStatus",
    "BusyConflict",
    "AvailabilityRow",
    "MoveIntent",
    "GridCell",
    "GridRow",
    "ClassGrid",
    "AxisRequest",
    "GridRequest",
    "AvailabilityRequest",
    "ResolveTeacherRequest",
    "MoveRequest",
    "ApplyMoveRequest",
    "ModifyRequest",
    "AxisResponse",
    "AvailabilityResponse",
    "ResolveTeacherResponse",
    "MoveResponse",
    "TimetableResponse",
    "ErrorMessage"
]
