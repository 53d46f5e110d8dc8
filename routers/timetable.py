from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from models.schemas import (
    AxisRequest, AxisResponse, GridRequest, ClassGrid, AvailabilityRequest,
    AvailabilityResponse, ResolveTeacherRequest, ResolveTeacherResponse,
    MoveRequest, MoveResponse, ApplyMoveRequest, TimetableInputs,
    TimetableResponse, ModifyRequest, ErrorMessage
)
from service.time_axis import class_axis, day_axis
from service.breaks import break_names
from service.grid import build_timetable_grid
from service.availability import compute_availability
from service.teacher_resolver import resolve
from service.relocation import propose_move, apply_move
from service.pdf_export import export_class_grid_pdf, export_filename
from service.gemini_client import GeminiClient, GenerationError, MissingApiKeyError, get_gemini_client
from config import settings
import logging

logger = logging.getLogger(__name__)

# Create a router instance
router = APIRouter()


def _days_or_default(days):
    return days or list(settings.default_days)


def _class_grid_or_404(request: GridRequest) -> ClassGrid:
    grid = build_timetable_grid(
        request.timetable,
        request.class_name,
        _days_or_default(request.days),
        break_names(request.breaks)
    )
    if grid is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class '{request.class_name}' not found in timetable")
    return grid


def _generation_failure(exc: GenerationError) -> HTTPException:
    if isinstance(exc, MissingApiKeyError):
        code, title = status.HTTP_503_SERVICE_UNAVAILABLE, "Generation Unavailable"
    else:
        code, title = status.HTTP_502_BAD_GATEWAY, "Generation Failed"
    return HTTPException(status_code=code, detail=ErrorMessage(title=title, message=str(exc)).model_dump())


@router.post("/timetable/axis", response_model=AxisResponse)
async def timetable_axis(request: AxisRequest):
    """
    Ordered time labels.

    With `class_name`, the axis of that class over `days`; otherwise the axis
    of `day` across every class.
    """
    if request.class_name is not None:
        times = class_axis(request.timetable.get(request.class_name), _days_or_default(request.days))
    elif request.day is not None:
        times = day_axis(request.timetable, request.day)
    else:
        times = []
    return AxisResponse(times=times)


@router.post("/timetable/grid", response_model=ClassGrid)
async def timetable_grid(request: GridRequest):
    """Class grid with break rows merged, as shown on screen."""
    return _class_grid_or_404(request)


@router.post("/timetable/availability", response_model=AvailabilityResponse)
async def teacher_availability(request: AvailabilityRequest):
    """Busy and available teachers for every time slot of a day."""
    rows = compute_availability(
        request.timetable,
        request.day,
        request.teachers,
        break_names(request.breaks)
    )
    return AvailabilityResponse(day=request.day, rows=rows)


@router.post("/timetable/resolve-teacher", response_model=ResolveTeacherResponse)
async def resolve_teacher(request: ResolveTeacherRequest):
    """Match a free-text teacher label against the directory."""
    return ResolveTeacherResponse(teacher=resolve(request.label, request.teachers))


@router.post("/timetable/move", response_model=MoveResponse)
async def propose_session_move(request: MoveRequest):
    """
    Capture a drag-and-drop relocation.

    Cross-class and malformed drops are not errors: they come back with
    `accepted: false`.
    """
    intent = propose_move(request.displayed_class, request.payload, request.to_day, request.to_time)
    return MoveResponse(accepted=intent is not None, intent=intent)


@router.post("/timetable/move/apply", response_model=TimetableResponse)
async def apply_session_move(request: ApplyMoveRequest):
    """Apply a move intent and return the updated timetable."""
    return TimetableResponse(timetable=apply_move(request.timetable, request.intent))


@router.post("/timetable/export/pdf")
async def export_pdf(request: GridRequest):
    """Download the class grid as a PDF."""
    grid = _class_grid_or_404(request)
    content = export_class_grid_pdf(grid)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(grid.class_name)}"'}
    )


@router.post("/timetable/generate", response_model=TimetableResponse)
async def generate_timetable(inputs: TimetableInputs, client: GeminiClient = Depends(get_gemini_client)):
    """Generate a new timetable with the language model."""
    try:
        timetable = await client.generate_timetable(inputs)
    except GenerationError as e:
        logger.error(f"Timetable generation failed: {e}")
        raise _generation_failure(e)
    return TimetableResponse(timetable=timetable)


@router.post("/timetable/modify", response_model=TimetableResponse)
async def modify_timetable(request: ModifyRequest, client: GeminiClient = Depends(get_gemini_client)):
    """Apply a free-text modification request to an existing timetable."""
    try:
        timetable = await client.modify_timetable(request.timetable, request.request, request.inputs)
    except GenerationError as e:
        logger.error(f"Timetable modification failed: {e}")
        raise _generation_failure(e)
    return TimetableResponse(timetable=timetable)
