import json
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Column, DateTime, Integer, String, Text, delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from wellness.domain.Plan import DailyPlan
from wellness.domain.errors import StoreError
from wellness.infra.Plan_Repository import PlanStore
from wellness.infra.database import Base, build_session_factory

logger = logging.getLogger(__name__)


def _utcnow():
    return datetime.now(timezone.utc)


class DailyPlanRow(Base):
    __tablename__ = "daily_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String(10), unique=True, nullable=False, index=True)
    quote_text = Column(Text, nullable=False)
    quote_author = Column(Text, nullable=False)
    workout = Column(Text, nullable=False)  # JSON-encoded list of exercises
    meals = Column(Text, nullable=False)  # JSON-encoded {breakfast, lunch, dinner}
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)


def plan_to_row_values(plan: DailyPlan) -> dict:
    return {
        "date": plan.date,
        "quote_text": plan.quote.text,
        "quote_author": plan.quote.author,
        "workout": plan.workout_json(),
        "meals": plan.meals_json(),
    }


def row_to_plan(row: DailyPlanRow) -> DailyPlan:
    try:
        workout = json.loads(row.workout)
        meals = json.loads(row.meals)
    except (TypeError, json.JSONDecodeError) as e:
        raise StoreError(f"Corrupt plan row for {row.date}: {e}") from e
    return DailyPlan.from_dict({
        "date": row.date,
        "quote": {"text": row.quote_text, "author": row.quote_author},
        "workout": workout,
        "meals": meals,
    })


class SqlPlanRepository(PlanStore):
    """Plan store backed by a relational table through the SQLAlchemy ORM."""

    def __init__(self, engine: Engine, create_tables: bool = True):
        self.engine = engine
        self._session_factory = build_session_factory(engine)
        if create_tables:
            Base.metadata.create_all(engine)

    def get(self, plan_date: str) -> Optional[DailyPlan]:
        try:
            with self._session_factory() as session:
                row = session.execute(
                    select(DailyPlanRow).where(DailyPlanRow.date == plan_date)
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StoreError(f"Error fetching plan for {plan_date}: {e}") from e
        return row_to_plan(row) if row is not None else None

    def upsert(self, plan: DailyPlan) -> None:
        values = plan_to_row_values(plan)
        try:
            with self._session_factory.begin() as session:
                session.execute(self._upsert_statement(values))
        except SQLAlchemyError as e:
            raise StoreError(f"Error saving plan for {plan.date}: {e}") from e
        logger.info("Plan saved to database for %s", plan.date)

    def _upsert_statement(self, values: dict):
        dialect = self.engine.dialect.name
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            raise StoreError(f"Upsert is not supported on the '{dialect}' dialect")
        updates = {k: v for k, v in values.items() if k != "date"}
        updates["updated_at"] = _utcnow()
        stmt = insert(DailyPlanRow).values(**values, created_at=_utcnow(), updated_at=_utcnow())
        return stmt.on_conflict_do_update(index_elements=[DailyPlanRow.date], set_=updates)

    def delete_older_than(self, cutoff_date: str) -> int:
        try:
            with self._session_factory.begin() as session:
                result = session.execute(delete(DailyPlanRow).where(DailyPlanRow.date < cutoff_date))
                count = result.rowcount or 0
        except SQLAlchemyError as e:
            raise StoreError(f"Error cleaning up plans before {cutoff_date}: {e}") from e
        if count:
            logger.info("Cleaned up %d old plans before %s", count, cutoff_date)
        return count

    def delete(self, plan_date: str) -> bool:
        try:
            with self._session_factory.begin() as session:
                result = session.execute(delete(DailyPlanRow).where(DailyPlanRow.date == plan_date))
                return bool(result.rowcount)
        except SQLAlchemyError as e:
            raise StoreError(f"Error deleting plan for {plan_date}: {e}") from e

    def list_plans(self) -> List[DailyPlan]:
        try:
            with self._session_factory() as session:
                rows = session.execute(select(DailyPlanRow).order_by(DailyPlanRow.date.desc())).scalars().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Error listing plans: {e}") from e
        return [row_to_plan(row) for row in rows]
