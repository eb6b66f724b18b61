"""Turn untrusted AI output into validated plan fragments.

Every parser returns a ``SlotResult``: either ``value`` (the domain object)
or ``error`` (a human-readable reason). Nothing here raises on bad input.
"""
import json
import re
from json import JSONDecodeError
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from wellness.domain.Exercise import Exercise
from wellness.domain.Meal import Meal
from wellness.domain.Quote import Quote
from wellness.utilities.constants import MEAL_SLOTS, WORKOUT_LENGTH


class SlotResult(NamedTuple):
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# === Schemas ===
class QuoteSchema(BaseModel):
    text: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)

    @field_validator('text', 'author', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class ExerciseSchema(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    duration: str = ""
    sets: Optional[str] = None
    reps: Optional[str] = None

    @field_validator('duration', 'sets', 'reps', mode='before')
    @classmethod
    def numbers_to_text(cls, v):
        """Models often emit 3 instead of "3"; these are display strings."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class WorkoutSchema(BaseModel):
    workout: List[ExerciseSchema]

    @field_validator('workout')
    @classmethod
    def exactly_seven(cls, v):
        if len(v) != WORKOUT_LENGTH:
            raise ValueError(f'workout must contain exactly {WORKOUT_LENGTH} exercises, got {len(v)}')
        return v


class MealSchema(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    calories: int = Field(..., gt=0)
    ingredients: List[str] = Field(..., min_length=1)
    instructions: List[str] = Field(..., min_length=1)

    @field_validator('ingredients', 'instructions')
    @classmethod
    def drop_blank_lines(cls, v):
        cleaned = [item.strip() for item in v if item and item.strip()]
        if not cleaned:
            raise ValueError('must contain at least one non-empty entry')
        return cleaned


class MealsSchema(BaseModel):
    breakfast: MealSchema
    lunch: MealSchema
    dinner: MealSchema


# === Text Cleaning Helpers ===
def strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\s*\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text.strip())
    return text.strip()


def remove_trailing_commas(text: str) -> str:
    """Remove trailing commas before a closing brace/bracket so json.loads succeeds."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if escape:
            escape = False
            continue
        if in_string:
            if ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            if start is None:
                start = i
            stack.append(ch)
        elif ch in "}]":
            if not stack:
                continue
            opening = stack.pop()
            if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                return None
            if not stack and start is not None:
                return text[start:i + 1]
    return None


def load_json_payload(text: Optional[str]) -> SlotResult:
    """Best-effort decode of model output into JSON data."""
    raw = (text or "").strip()
    if not raw:
        return SlotResult(error="empty response")
    try:
        return SlotResult(value=json.loads(raw))
    except JSONDecodeError:
        pass

    cleaned = remove_trailing_commas(strip_code_fences(raw))
    candidate = extract_json_by_balancing(cleaned)
    if candidate is None:
        return SlotResult(error="no JSON object found in response")
    try:
        return SlotResult(value=json.loads(remove_trailing_commas(candidate)))
    except JSONDecodeError as e:
        return SlotResult(error=f"invalid JSON: {e}")


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
    return "; ".join(parts)


# === Slot parsers ===
def parse_quote(text: Optional[str]) -> SlotResult:
    payload = load_json_payload(text)
    if not payload.ok:
        return payload
    data = payload.value
    if isinstance(data, dict) and isinstance(data.get("quote"), dict):
        data = data["quote"]
    try:
        quote = QuoteSchema.model_validate(data)
    except ValidationError as e:
        return SlotResult(error=f"quote: {_describe(e)}")
    return SlotResult(value=Quote(quote.text, quote.author))


def parse_workout(text: Optional[str]) -> SlotResult:
    payload = load_json_payload(text)
    if not payload.ok:
        return payload
    data = payload.value
    if isinstance(data, list):
        data = {"workout": data}
    try:
        workout = WorkoutSchema.model_validate(data)
    except ValidationError as e:
        return SlotResult(error=f"workout: {_describe(e)}")
    return SlotResult(value=[Exercise.from_dict(e.model_dump(exclude_none=True)) for e in workout.workout])


def parse_meals(text: Optional[str]) -> SlotResult:
    payload = load_json_payload(text)
    if not payload.ok:
        return payload
    data = payload.value
    if isinstance(data, dict) and isinstance(data.get("meals"), dict):
        data = data["meals"]
    try:
        meals = MealsSchema.model_validate(data)
    except ValidationError as e:
        return SlotResult(error=f"meals: {_describe(e)}")
    result: Dict[str, Meal] = {
        slot: Meal.from_dict(getattr(meals, slot).model_dump()) for slot in MEAL_SLOTS
    }
    return SlotResult(value=result)
