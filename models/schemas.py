from pydantic import BaseModel, Field, field_validator
from typing import List, Dict, Optional, Any
from enum import Enum


# ===========================
# Teacher Models
# ===========================

class TimeWindow(BaseModel):
    """Start/end pair in HH:MM format"""
    start: str
    end: str


class Teacher(BaseModel):
    id: str
    name: str
    subjects: List[str] = []
    availability: Dict[str, TimeWindow] = {}  # day -> window override


# ===========================
# Class Models
# ===========================

class SubjectRequirement(BaseModel):
    """Weekly requirement for one subject of one class (generation context only)"""
    name: str
    sessions_per_week: int = Field(gt=0, alias="sessionsPerWeek")
    requires_lab: bool = Field(default=False, alias="requiresLab")
    double_period: bool = Field(default=False, alias="doublePeriod")
    teacher_id: Optional[str] = Field(default=None, alias="teacherId")

    class Config:
        populate_by_name = True


class ClassInfo(BaseModel):
    id: str
    name: str
    subjects: List[SubjectRequirement] = []


# ===========================
# Break / Hours Configuration
# ===========================

class FixedBreak(BaseModel):
    """Configured break; only the name is used when classifying rows"""
    id: Optional[str] = None
    name: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    class Config:
        populate_by_name = True


class SchoolHours(BaseModel):
    start: str
    end: str


class TimetableInputs(BaseModel):
    """Everything the generation service needs to build a timetable"""
    teachers: List[Teacher]
    classes: List[ClassInfo]
    session_duration: int = Field(default=45, gt=0, alias="sessionDuration")
    days: List[str] = []
    school_hours: SchoolHours = Field(alias="schoolHours")
    breaks: List[FixedBreak] = []
    constraints: str = ""

    class Config:
        populate_by_name = True


# ===========================
# Timetable Models
# ===========================

class ScheduleSlot(BaseModel):
    """One cell: time label, subject (empty means no session), teacher ("N/A" means none)"""
    time: str
    subject: str = ""
    teacher: str = ""

    @field_validator("subject", "teacher", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value


DaySchedule = List[ScheduleSlot]
ClassSchedule = Dict[str, DaySchedule]
Timetable = Dict[str, ClassSchedule]


# ===========================
# Engine Result Models
# ===========================

class RowType(str, Enum):
    NORMAL = "normal"
    BREAK = "break"


class RowClassification(BaseModel):
    row_type: RowType = RowType.NORMAL
    label: Optional[str] = None

    @property
    def is_break(self) -> bool:
        return self.row_type == RowType.BREAK


class AvailabilityStatus(str, Enum):
    AVAILABLE = "Available"
    BUSY = "Busy"


class TeacherStatus(BaseModel):
    teacher: Teacher
    status: AvailabilityStatus
    class_name: Optional[str] = None
    subject: Optional[str] = None
    break_label: Optional[str] = None


class BusyConflict(BaseModel):
    """A teacher resolved as busy in more than one class at the same time"""
    teacher_id: str
    time: str
    class_names: List[str]


class AvailabilityRow(BaseModel):
    time: str
    row_type: RowType = RowType.NORMAL
    break_label: Optional[str] = None
    entries: List[TeacherStatus] = []
    conflicts: List[BusyConflict] = []


class MoveIntent(BaseModel):
    class_name: str
    from_day: str
    from_time: str
    to_day: str
    to_time: str


class GridCell(BaseModel):
    day: str
    slot: Optional[ScheduleSlot] = None
    draggable: bool = False


class GridRow(BaseModel):
    time: str
    row_type: RowType = RowType.NORMAL
    label: Optional[str] = None
    cells: List[GridCell] = []  # empty for merged break rows


class ClassGrid(BaseModel):
    class_name: str
    days: List[str]
    rows: List[GridRow]


# ===========================
# Request Schemas
# ===========================

class AxisRequest(BaseModel):
    """Either a single day across all classes, or one class across its days"""
    timetable: Timetable
    day: Optional[str] = None
    class_name: Optional[str] = None
    days: List[str] = []


class GridRequest(BaseModel):
    timetable: Timetable
    class_name: str
    days: List[str] = []
    breaks: List[FixedBreak] = []


class AvailabilityRequest(BaseModel):
    timetable: Timetable
    day: str
    teachers: List[Teacher]
    breaks: List[FixedBreak] = []


class ResolveTeacherRequest(BaseModel):
    label: str
    teachers: List[Teacher]


class MoveRequest(BaseModel):
    """Drop event: the grid currently shown, the drag payload and the target cell"""
    displayed_class: str
    payload: Any = None  # anything the drag carried; malformed values are ignored
    to_day: str
    to_time: str


class ApplyMoveRequest(BaseModel):
    timetable: Timetable
    intent: MoveIntent


class ModifyRequest(BaseModel):
    timetable: Timetable
    request: str = Field(min_length=1)
    inputs: TimetableInputs


# ===========================
# Response Schemas
# ===========================

class AxisResponse(BaseModel):
    times: List[str]


class AvailabilityResponse(BaseModel):
    day: str
    rows: List[AvailabilityRow]


class ResolveTeacherResponse(BaseModel):
    teacher: Optional[Teacher] = None


class MoveResponse(BaseModel):
    accepted: bool
    intent: Optional[MoveIntent] = None


class TimetableResponse(BaseModel):
    timetable: Timetable


class ErrorMessage(BaseModel):
    """Error or warning message"""
    title: str
    message: str
