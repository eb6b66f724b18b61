"""Plan resolution: decide between the plan store and the content generator.

Decision order for ``PlanResolver.resolve``:

1. A specific date other than today is a read-only store lookup. No
   generation, no write; ``None`` when nothing is stored.
2. Today's plan:
   a. force refresh: always generate, persist only in PERSISTENT mode;
   b. otherwise read the store first and return a hit as is;
   c. on a miss, generate, then persist only in PERSISTENT mode.
3. A failing generator is replaced by the static fallback plan for the
   requested date; callers always receive a complete plan.

Store reads that fail count as misses and store writes that fail are logged;
neither reaches the caller.
"""
import logging
from datetime import date
from typing import Callable, Optional

from wellness.domain.Plan import DailyPlan
from wellness.domain.errors import GenerationError, StoreError
from wellness.infra.Plan_Repository import PlanStore
from wellness.logic.generation.fallback import fallback_plan
from wellness.utilities.config import StoreMode
from wellness.utilities.validators import date_key

logger = logging.getLogger(__name__)

SOURCE_STORE = "store"
SOURCE_GENERATED = "generated"
SOURCE_FALLBACK = "fallback"


class Resolution:
    """A resolved plan and where it came from."""

    def __init__(self, plan: DailyPlan, source: str, persisted: bool = False):
        self.plan = plan
        self.source = source
        self.persisted = persisted

    def __repr__(self) -> str:
        return f"Resolution({self.plan.date}, source={self.source}, persisted={self.persisted})"

    @property
    def is_fresh(self) -> bool:
        return self.source != SOURCE_STORE


class PlanResolver:
    def __init__(self, store: PlanStore, generator, mode: StoreMode = StoreMode.PERSISTENT,
                 clock: Optional[Callable[[], date]] = None):
        self.store = store
        self.generator = generator
        self.mode = mode
        self._clock = clock or date.today

    @property
    def can_persist(self) -> bool:
        return self.mode == StoreMode.PERSISTENT

    def today(self) -> str:
        return date_key(self._clock())

    def resolve(self, plan_date: Optional[str] = None, force_refresh: bool = False) -> Optional[Resolution]:
        today = self.today()
        if plan_date and plan_date != today:
            plan = self._read(plan_date)
            return Resolution(plan, SOURCE_STORE) if plan is not None else None

        if force_refresh:
            logger.info("Force refresh: generating fresh plan for %s", today)
            return self._generate_and_store(today)

        plan = self._read(today)
        if plan is not None:
            logger.info("Found existing plan for %s", today)
            return Resolution(plan, SOURCE_STORE)

        logger.info("No plan stored for %s, generating (mode=%s)", today, self.mode.value)
        return self._generate_and_store(today)

    def generate_plan(self, plan_date: str) -> Resolution:
        """Generate a plan for plan_date, falling back to static content; never touches the store."""
        try:
            plan = self.generator.generate(plan_date)
        except GenerationError as e:
            logger.warning("Generation failed for %s, using fallback plan: %s", plan_date, e)
            return Resolution(fallback_plan(plan_date), SOURCE_FALLBACK)
        except Exception:
            logger.exception("Unexpected generator error for %s, using fallback plan", plan_date)
            return Resolution(fallback_plan(plan_date), SOURCE_FALLBACK)
        if plan.date != plan_date:
            plan = plan.with_date(plan_date)
        return Resolution(plan, SOURCE_GENERATED)

    def _generate_and_store(self, plan_date: str) -> Resolution:
        resolution = self.generate_plan(plan_date)
        if self.can_persist:
            resolution.persisted = self._write(resolution.plan)
        else:
            logger.info("Ephemeral mode: not persisting plan for %s", plan_date)
        return resolution

    def _read(self, plan_date: str) -> Optional[DailyPlan]:
        try:
            return self.store.get(plan_date)
        except StoreError:
            logger.exception("Error fetching plan for %s, treating as not found", plan_date)
            return None

    def _write(self, plan: DailyPlan) -> bool:
        try:
            self.store.upsert(plan)
            return True
        except StoreError:
            logger.exception("Error saving plan for %s, returning it unsaved", plan.date)
            return False
