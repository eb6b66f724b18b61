import logging
import threading
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from wellness.domain.Exercise import Exercise
from wellness.domain.Meal import Meal
from wellness.domain.errors import StoreError
from wellness.infra.json_storage import atomic_write_json, load_json_object
from wellness.infra.paths import MONTHLY_PLAN_FILE
from wellness.utilities.constants import MEAL_SLOTS, MONTHLY_RETENTION_MONTHS

logger = logging.getLogger(__name__)


def month_key_for(plan_date: str) -> str:
    return plan_date[:7]


def _months_back(today: date, months: int) -> str:
    index = today.year * 12 + (today.month - 1) - months
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


class MonthlyPlanRepository:
    """Workout and meals shared by every day of a month, keyed by YYYY-MM."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else MONTHLY_PLAN_FILE
        self._lock = threading.Lock()

    def get(self, month_key: str) -> Optional[Tuple[List[Exercise], Dict[str, Meal]]]:
        entry = load_json_object(self.path).get(month_key)
        if not entry:
            return None
        if not isinstance(entry, dict):
            raise StoreError(f"Corrupt monthly plan entry for {month_key} in {self.path.name}")
        workout = [Exercise.from_dict(e) for e in entry.get("workout") or [] if isinstance(e, dict)]
        meals_data = entry.get("meals") if isinstance(entry.get("meals"), dict) else {}
        meals = {slot: Meal.from_dict(meals_data.get(slot) or {}) for slot in MEAL_SLOTS}
        return workout, meals

    def save(self, month_key: str, workout: List[Exercise], meals: Dict[str, Meal]) -> None:
        with self._lock:
            plans = load_json_object(self.path)
            plans[month_key] = {
                "workout": [e.to_dict() for e in workout],
                "meals": {slot: meals[slot].to_dict() for slot in MEAL_SLOTS},
            }
            atomic_write_json(self.path, plans)
        logger.info("Saved monthly plan for %s", month_key)

    def exists(self, month_key: str) -> bool:
        return month_key in load_json_object(self.path)

    def cleanup(self, keep_months: int = MONTHLY_RETENTION_MONTHS, today: Optional[date] = None) -> int:
        """Drop monthly plans older than keep_months; return how many were removed."""
        cutoff = _months_back(today or date.today(), keep_months)
        with self._lock:
            plans = load_json_object(self.path)
            kept = {key: plan for key, plan in plans.items() if key >= cutoff}
            removed = len(plans) - len(kept)
            if removed:
                atomic_write_json(self.path, kept)
        logger.info("Cleaned up %d monthly plans older than %s", removed, cutoff)
        return removed
