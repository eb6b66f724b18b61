"""Plan domain entity: one calendar day's quote, workout and three meals."""
import json
from typing import Dict, List, Optional

from wellness.domain.Exercise import Exercise
from wellness.domain.Meal import Meal
from wellness.domain.Quote import Quote
from wellness.utilities.constants import MEAL_SLOTS


class DailyPlan:
    def __init__(self, date: str, quote: Optional[Quote] = None,
                 workout: Optional[List[Exercise]] = None, meals: Optional[Dict[str, Meal]] = None):
        self.date = date
        self.quote = quote or Quote()
        self.workout = workout[:] if workout else []
        meals = meals or {}
        # fixed record: every slot is always present
        self.meals = {slot: meals.get(slot) or Meal() for slot in MEAL_SLOTS}

    def __str__(self) -> str:
        return (f"Plan {self.date} - {self.quote} - {len(self.workout)} exercises - "
                f"Meals: {', '.join(self.meals[slot].name for slot in MEAL_SLOTS)}")

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, DailyPlan):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def breakfast(self) -> Meal:
        return self.meals["breakfast"]

    @property
    def lunch(self) -> Meal:
        return self.meals["lunch"]

    @property
    def dinner(self) -> Meal:
        return self.meals["dinner"]

    def total_calories(self) -> int:
        return sum(meal.calories for meal in self.meals.values())

    def with_date(self, date: str) -> "DailyPlan":
        """Return a copy of this plan keyed to another date."""
        return DailyPlan.from_dict({**self.to_dict(), "date": date})

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        meals = d.get("meals") if isinstance(d.get("meals"), dict) else {}
        workout = d.get("workout") if isinstance(d.get("workout"), list) else []
        return DailyPlan(
            date=str(d.get("date", "")),
            quote=Quote.from_dict(d.get("quote") or {}),
            workout=[Exercise.from_dict(e) for e in workout],
            meals={slot: Meal.from_dict(meals.get(slot) or {}) for slot in MEAL_SLOTS},
        )

    def to_dict(self):
        return {
            "date": self.date,
            "quote": self.quote.to_dict(),
            "workout": [exercise.to_dict() for exercise in self.workout],
            "meals": {slot: self.meals[slot].to_dict() for slot in MEAL_SLOTS},
        }

    def workout_json(self) -> str:
        return json.dumps([e.to_dict() for e in self.workout], ensure_ascii=False)

    def meals_json(self) -> str:
        return json.dumps({slot: self.meals[slot].to_dict() for slot in MEAL_SLOTS}, ensure_ascii=False)
