"""
Gemini generation client.

Builds the timetable prompt and a response schema tailored to the requested
classes and days, and calls the Gemini generateContent REST endpoint. The
returned JSON is validated into a Timetable; anything else is reported as a
GenerationError.
"""
from typing import Any, Dict, List, Optional
from pydantic import ValidationError
from models.schemas import Timetable, TimetableInputs, TimetableResponse
from config import settings
import asyncio
import json
import logging
import httpx

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """The generation service failed or returned something unusable."""


class MissingApiKeyError(GenerationError):
    """No API key is configured for the generation service."""


GENERATION_INSTRUCTION = """You are an expert school-timetable planner. Your task is to generate a complete, conflict-free school timetable.

CRITICAL RULES:
1. **Session Counts**: You MUST schedule EXACTLY the number of sessions requested for each subject. Count them carefully.
2. **Teacher Conflicts**: No teacher can teach two classes at the same time.
3. **Teacher Assignment**: If a specific teacher is provided for a subject, you MUST use that teacher. Otherwise use a teacher from the teacher list who teaches that subject.
4. **Class Conflicts**: No class can have two subjects at the same time.
5. **Time Slots**: Create time slots starting from the school start time, labelled "HH:MM-HH:MM" in 24-hour format. You can combine slots for double periods.
6. **Fixed Breaks**: You MUST include the defined fixed breaks at their specific start and end times for EVERY class and EVERY day. The subject for these slots is the break name and the teacher is "N/A".
7. **Days**: Only schedule on the provided days.
8. **Double Periods**: If a subject prefers a double period, schedule consecutive slots or a longer time slot for it.

Optimization:
- Distribute sessions evenly across the week.
- Do not schedule academic classes during break times.
"""

MODIFICATION_INSTRUCTION = """You are an expert school-timetable planner. Modify the timetable based on the user request.
- Maintain all original constraints (no teacher overlaps, correct session counts, fixed breaks) unless the user explicitly asks to change them.
- If moving a class, ensure the new slot is valid and doesn't create a conflict.
- Return the full updated timetable JSON.
"""


def schedule_days(inputs: TimetableInputs) -> List[str]:
    return inputs.days or list(settings.default_days)


def build_response_schema(inputs: TimetableInputs) -> Dict[str, Any]:
    """Response schema requiring every class and, per class, every day."""
    days = schedule_days(inputs)
    slot_schema = {
        "type": "OBJECT",
        "properties": {
            "time": {"type": "STRING"},
            "subject": {"type": "STRING"},
            "teacher": {"type": "STRING"},
        },
        "required": ["time", "subject", "teacher"],
    }
    day_properties = {day: {"type": "ARRAY", "items": slot_schema} for day in days}
    class_properties = {
        cls.name: {
            "type": "OBJECT",
            "description": f"Schedule for {cls.name}",
            "properties": day_properties,
            "required": list(days),
        }
        for cls in inputs.classes
    }
    return {
        "type": "OBJECT",
        "properties": {
            "timetable": {
                "type": "OBJECT",
                "description": "The complete timetable, with class names as keys.",
                "properties": class_properties,
                "required": [cls.name for cls in inputs.classes],
            }
        },
        "required": ["timetable"],
    }


def build_generation_prompt(inputs: TimetableInputs) -> str:
    teachers_by_id = {t.id: t for t in inputs.teachers}

    requirement_lines = ["Detailed Requirements per Class:"]
    for cls in inputs.classes:
        requirement_lines.append(f"Class '{cls.name}':")
        for sub in cls.subjects:
            teacher = teachers_by_id.get(sub.teacher_id) if sub.teacher_id else None
            teacher_info = f"{teacher.name} (ID: {teacher.id})" if teacher else "Any available teacher"
            double = " (Double Period Preferred)" if sub.double_period else ""
            requirement_lines.append(
                f'  - Subject: "{sub.name}" needs {sub.sessions_per_week} sessions/week{double}. Teacher: {teacher_info}.'
            )

    if inputs.breaks:
        break_list = "\n".join(f"- {b.name}: {b.start_time} to {b.end_time}" for b in inputs.breaks)
    else:
        break_list = "No fixed breaks."

    return f"""School Information:
- Days: {', '.join(schedule_days(inputs))}
- Hours: {inputs.school_hours.start} to {inputs.school_hours.end}
- Session Duration: {inputs.session_duration} minutes (Approximate. Use this as a base but adjust for breaks or double periods)

Fixed Breaks (MUST be included for all classes at these exact times):
{break_list}

{chr(10).join(requirement_lines)}

Constraints: {inputs.constraints or 'None'}

Full Input JSON: {inputs.model_dump_json(by_alias=True)}

Generate the timetable JSON matching the schema.
- Ensure every single session count is met exactly.
- Ensure breaks are exactly at the times specified.
- Fill the rest of the time with classes according to session duration.
"""


def build_modification_prompt(timetable: Timetable, request: str, inputs: TimetableInputs) -> str:
    current = TimetableResponse(timetable=timetable).model_dump_json()
    return f"""Original Inputs: {inputs.model_dump_json(by_alias=True)}
Current Timetable: {current}
User Request: "{request}"

Update the timetable.
"""


def parse_timetable(text: str) -> Timetable:
    """Validate the model's JSON text into a Timetable."""
    try:
        return TimetableResponse.model_validate_json(text.strip()).timetable
    except ValidationError as e:
        raise GenerationError(f"Generation service returned an invalid timetable: {e.error_count()} error(s)") from e


class GeminiClient:
    """
    Thin async client for the Gemini generateContent endpoint.

    Rate-limit (429) and server (5xx) responses, timeouts and connection
    errors are retried with exponential backoff; every other failure raises
    GenerationError immediately.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_backoff_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self.timeout_seconds = timeout_seconds or settings.gemini_timeout_seconds
        self.max_retries = max(1, max_retries or settings.gemini_max_retries)
        self.retry_backoff_seconds = retry_backoff_seconds
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate_timetable(self, inputs: TimetableInputs) -> Timetable:
        """Ask the model for a fresh timetable."""
        text = await self.generate_content(
            build_generation_prompt(inputs),
            GENERATION_INSTRUCTION,
            build_response_schema(inputs),
        )
        return parse_timetable(text)

    async def modify_timetable(self, timetable: Timetable, request: str, inputs: TimetableInputs) -> Timetable:
        """Ask the model to apply a free-text change to an existing timetable."""
        text = await self.generate_content(
            build_modification_prompt(timetable, request, inputs),
            MODIFICATION_INSTRUCTION,
            build_response_schema(inputs),
        )
        return parse_timetable(text)

    async def generate_content(self, prompt: str, system_instruction: str, response_schema: Dict[str, Any]) -> str:
        """Send one JSON-mode request and return the concatenated response text."""
        if not self.api_key:
            raise MissingApiKeyError("GEMINI_API_KEY is not configured")

        body = {
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        logger.info(f"Calling {self.model} (payload {len(json.dumps(body))} chars)")

        async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self.transport) as client:
            for attempt in range(self.max_retries):
                try:
                    response = await client.post(self.endpoint, headers=headers, json=body)
                except httpx.TransportError as e:
                    # Timeouts and connection failures
                    if attempt < self.max_retries - 1:
                        wait_time = (2 ** attempt) * self.retry_backoff_seconds
                        logger.warning(
                            f"Generation request failed ({e.__class__.__name__}), retrying in {wait_time}s "
                            f"(attempt {attempt + 1}/{self.max_retries})"
                        )
                        await asyncio.sleep(wait_time)
                        continue
                    logger.error(f"Generation request failed: {e}")
                    raise GenerationError(f"Could not reach the generation service: {e}") from e
                except httpx.HTTPError as e:
                    logger.error(f"Generation request failed: {e}")
                    raise GenerationError(f"Could not reach the generation service: {e}") from e

                if response.status_code == 429 or response.status_code >= 500:
                    if attempt < self.max_retries - 1:
                        wait_time = (2 ** attempt) * self.retry_backoff_seconds
                        logger.warning(
                            f"Generation service returned {response.status_code}, retrying in {wait_time}s "
                            f"(attempt {attempt + 1}/{self.max_retries})"
                        )
                        await asyncio.sleep(wait_time)
                        continue
                    raise GenerationError(f"Generation service unavailable ({response.status_code}) after {self.max_retries} attempts")

                if response.status_code != 200:
                    logger.error(f"Generation service error {response.status_code}: {response.text}")
                    raise GenerationError(f"Generation service rejected the request ({response.status_code})")

                return self._extract_text(response)

    def _extract_text(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
            parts = payload["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GenerationError("Generation service returned an unexpected response shape") from e
        if not text.strip():
            raise GenerationError("Generation service returned an empty response")
        return text


def get_gemini_client() -> GeminiClient:
    """FastAPI dependency; override in tests."""
    return GeminiClient()
