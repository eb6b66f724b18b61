import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from wellness.domain.Plan import DailyPlan
from wellness.domain.errors import StoreError
from wellness.infra.json_storage import atomic_write_json, load_json_object
from wellness.infra.paths import PLAN_FILE

logger = logging.getLogger(__name__)


class PlanStore(ABC):
    """Persists one DailyPlan per date key (YYYY-MM-DD).

    Implementations raise StoreError on read/write faults. ``upsert`` replaces
    the stored plan wholesale; there is never more than one plan per date.
    """

    @abstractmethod
    def get(self, plan_date: str) -> Optional[DailyPlan]:
        ...

    @abstractmethod
    def upsert(self, plan: DailyPlan) -> None:
        ...

    @abstractmethod
    def delete_older_than(self, cutoff_date: str) -> int:
        """Delete every plan dated strictly before cutoff_date; return the count."""

    @abstractmethod
    def delete(self, plan_date: str) -> bool:
        ...

    @abstractmethod
    def list_plans(self) -> List[DailyPlan]:
        """All stored plans, newest first."""

    def exists(self, plan_date: str) -> bool:
        return self.get(plan_date) is not None


class JsonPlanRepository(PlanStore):
    """Plan store backed by a local JSON file: {"YYYY-MM-DD": plan_dict}."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else PLAN_FILE
        self._lock = threading.Lock()

    def get(self, plan_date: str) -> Optional[DailyPlan]:
        store = load_json_object(self.path)
        data = store.get(plan_date)
        if data is None:
            return None
        return self._entry_to_plan(plan_date, data)

    def _entry_to_plan(self, plan_date: str, data) -> DailyPlan:
        if not isinstance(data, dict):
            raise StoreError(f"Corrupt plan entry for {plan_date} in {self.path.name}")
        return DailyPlan.from_dict({**data, "date": plan_date})

    def upsert(self, plan: DailyPlan) -> None:
        with self._lock:
            store = load_json_object(self.path)
            store[plan.date] = plan.to_dict()
            atomic_write_json(self.path, store)
        logger.info("Plan saved to %s for %s", self.path.name, plan.date)

    def delete_older_than(self, cutoff_date: str) -> int:
        with self._lock:
            store = load_json_object(self.path)
            # ISO date keys sort chronologically as strings
            stale = [key for key in store if key < cutoff_date]
            if not stale:
                return 0
            for key in stale:
                del store[key]
            atomic_write_json(self.path, store)
        logger.info("Cleaned up %d old plans before %s", len(stale), cutoff_date)
        return len(stale)

    def delete(self, plan_date: str) -> bool:
        with self._lock:
            store = load_json_object(self.path)
            if plan_date not in store:
                return False
            del store[plan_date]
            atomic_write_json(self.path, store)
        return True

    def list_plans(self) -> List[DailyPlan]:
        store = load_json_object(self.path)
        return [self._entry_to_plan(key, store[key]) for key in sorted(store, reverse=True)]
