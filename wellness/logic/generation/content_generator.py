import logging
from datetime import datetime
from typing import Callable, Optional

from openai import OpenAI
from pydantic import ValidationError

from wellness.domain.Plan import DailyPlan
from wellness.domain.errors import GenerationError, StoreError
from wellness.infra.Monthly_Repository import MonthlyPlanRepository, month_key_for
from wellness.logic.generation import fallback
from wellness.logic.generation.parsing import (
    MealsSchema,
    SlotResult,
    WorkoutSchema,
    parse_meals,
    parse_quote,
    parse_workout,
)
from wellness.utilities.constants import (
    DATE_FORMAT,
    DEFAULT_OPENAI_MODEL,
    MEAL_JSON_FORMAT,
    MEALS_PROMPT_TEMPLATE,
    QUOTE_JSON_FORMAT,
    QUOTE_PROMPT_TEMPLATE,
    WORKOUT_JSON_FORMAT,
    WORKOUT_PROMPT_TEMPLATE,
)

logger = logging.getLogger(__name__)


# === Helper: Get OpenAI Client ===
def get_openai_client(api_key: Optional[str]) -> Optional[OpenAI]:
    """Return an OpenAI client if an API key is set, otherwise None."""
    if not api_key:
        return None
    return OpenAI(api_key=api_key)


class ContentGenerator:
    """Builds a DailyPlan from three independent AI generations: quote, workout, meals.

    A slot whose call fails or whose output does not validate is replaced by
    its static default, so a partially failing model still yields a full plan.
    ``generate`` raises GenerationError only when nothing could be generated.

    With a MonthlyPlanRepository attached, the workout and meals are generated
    once per month and reused; the quote is always generated per day.
    """

    def __init__(self, client=None, model: str = DEFAULT_OPENAI_MODEL,
                 monthly_store: Optional[MonthlyPlanRepository] = None):
        self.client = client
        self.model = model
        self.monthly_store = monthly_store

    @classmethod
    def from_settings(cls, settings, monthly_store: Optional[MonthlyPlanRepository] = None) -> "ContentGenerator":
        return cls(
            client=get_openai_client(settings.openai_api_key),
            model=settings.openai_model,
            monthly_store=monthly_store,
        )

    @property
    def configured(self) -> bool:
        return self.client is not None

    def generate(self, plan_date: str) -> DailyPlan:
        if self.client is None:
            raise GenerationError("OPENAI_API_KEY not set, cannot generate content")

        day = _parse_day(plan_date)
        slots = failed = 0

        quote_result = self._generate_slot(
            "quote",
            QUOTE_PROMPT_TEMPLATE.format(weekday=day.strftime("%A"), date=plan_date) + QUOTE_JSON_FORMAT,
            parse_quote,
        )
        slots += 1
        failed += not quote_result.ok
        quote = quote_result.value if quote_result.ok else fallback.fallback_quote(plan_date)

        cached = self._load_month(plan_date)
        if cached is not None:
            workout, meals = cached
            # cached slots count as generated content
            slots += 2
        else:
            period = day.strftime("%B %Y") if self.monthly_store else f"{day.strftime('%A')}, {plan_date}"
            workout_result = self._generate_slot(
                "workout", WORKOUT_PROMPT_TEMPLATE.format(period=period) + WORKOUT_JSON_FORMAT, parse_workout
            )
            meals_result = self._generate_slot(
                "meals", MEALS_PROMPT_TEMPLATE.format(period=period) + MEAL_JSON_FORMAT, parse_meals
            )
            slots += 2
            failed += (not workout_result.ok) + (not meals_result.ok)
            workout = workout_result.value if workout_result.ok else fallback.fallback_workout()
            meals = meals_result.value if meals_result.ok else fallback.fallback_meals()
            if workout_result.ok and meals_result.ok:
                self._save_month(plan_date, workout, meals)

        if failed == slots:
            raise GenerationError(f"All {slots} generations failed for {plan_date}")
        if failed:
            logger.warning("Plan for %s uses static content for %d of %d slots", plan_date, failed, slots)
        return DailyPlan(date=plan_date, quote=quote, workout=workout, meals=meals)

    def generate_month(self, month_key: str):
        """Generate and store the shared workout and meals for month_key (YYYY-MM)."""
        if self.client is None:
            raise GenerationError("OPENAI_API_KEY not set, cannot generate content")
        if self.monthly_store is None:
            raise GenerationError("Monthly plan storage is not enabled")
        period = datetime.strptime(month_key + "-01", DATE_FORMAT).strftime("%B %Y")
        workout_result = self._generate_slot(
            "workout", WORKOUT_PROMPT_TEMPLATE.format(period=period) + WORKOUT_JSON_FORMAT, parse_workout
        )
        meals_result = self._generate_slot(
            "meals", MEALS_PROMPT_TEMPLATE.format(period=period) + MEAL_JSON_FORMAT, parse_meals
        )
        if not (workout_result.ok and meals_result.ok):
            raise GenerationError(
                f"Monthly generation failed for {month_key}: "
                f"{workout_result.error or ''} {meals_result.error or ''}".strip()
            )
        self.monthly_store.save(month_key, workout_result.value, meals_result.value)
        return workout_result.value, meals_result.value

    def _generate_slot(self, name: str, prompt: str, parser: Callable[[str], SlotResult]) -> SlotResult:
        try:
            response = self.client.responses.create(model=self.model, input=prompt)
        except Exception as e:  # network, auth and rate-limit errors all degrade this slot
            logger.warning("AI %s generation failed: %s", name, e)
            return SlotResult(error=str(e))
        result = parser(getattr(response, "output_text", None))
        if not result.ok:
            logger.warning("AI %s output rejected: %s", name, result.error)
        return result

    def _load_month(self, plan_date: str):
        if self.monthly_store is None:
            return None
        month_key = month_key_for(plan_date)
        try:
            cached = self.monthly_store.get(month_key)
        except StoreError:
            logger.exception("Could not read monthly plan for %s", plan_date)
            return None
        if cached is None:
            return None
        workout, meals = cached
        try:
            WorkoutSchema.model_validate({"workout": [e.to_dict() for e in workout]})
            MealsSchema.model_validate({slot: meal.to_dict() for slot, meal in meals.items()})
        except ValidationError as e:
            logger.warning("Ignoring invalid monthly plan for %s: %s", month_key, e)
            return None
        return cached

    def _save_month(self, plan_date: str, workout, meals) -> None:
        if self.monthly_store is None:
            return
        try:
            self.monthly_store.save(month_key_for(plan_date), workout, meals)
        except StoreError:
            logger.exception("Could not save monthly plan for %s", plan_date)


def _parse_day(plan_date: str):
    try:
        return datetime.strptime(plan_date, DATE_FORMAT)
    except (TypeError, ValueError):
        raise GenerationError(f"Invalid plan date: {plan_date!r}")
