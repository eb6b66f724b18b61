"""
Input validation schemas using Pydantic for request bodies and query parameters.
"""
import re
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from wellness.domain.errors import PlanValidationError
from wellness.utilities.constants import DATE_FORMAT, MONTH_FORMAT

DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
MONTH_PATTERN = re.compile(r'^\d{4}-\d{2}$')


def parse_plan_date(value: str) -> str:
    """Validate a YYYY-MM-DD date key and return it normalized."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value.strip()):
        raise PlanValidationError(f"Invalid date '{value}'. Expected YYYY-MM-DD format")
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date().isoformat()
    except ValueError:
        raise PlanValidationError(f"Invalid date '{value}'. No such calendar day")


def parse_month_key(value: str) -> str:
    if not isinstance(value, str) or not MONTH_PATTERN.match(value.strip()):
        raise PlanValidationError("Invalid month key. Use format YYYY-MM")
    try:
        datetime.strptime(value.strip(), MONTH_FORMAT)
    except ValueError:
        raise PlanValidationError("Invalid month key. Use format YYYY-MM")
    return value.strip()


def date_key(value: date) -> str:
    return value.strftime(DATE_FORMAT)


class GeneratePlanInput(BaseModel):
    """Schema for the admin generate-plan body."""
    date: str = Field(..., description="Plan date (YYYY-MM-DD)")
    force: bool = False

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        try:
            return parse_plan_date(v)
        except PlanValidationError as e:
            raise ValueError(str(e))


class MonthlyPlanInput(BaseModel):
    """Schema for the admin generate-monthly-plan body."""
    monthKey: str = Field(..., description="Month key (YYYY-MM)")

    @field_validator('monthKey')
    @classmethod
    def validate_month_key(cls, v):
        try:
            return parse_month_key(v)
        except PlanValidationError as e:
            raise ValueError(str(e))


class CleanupInput(BaseModel):
    """Schema for the retention cleanup body."""
    days: Optional[int] = Field(None, ge=1, le=3650, description="Defaults to the configured retention window")
