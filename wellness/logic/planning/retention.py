import logging
from datetime import date, timedelta

from wellness.infra.Plan_Repository import PlanStore
from wellness.utilities.constants import DEFAULT_RETENTION_DAYS
from wellness.utilities.validators import date_key

logger = logging.getLogger(__name__)


def retention_cutoff(today: date, days: int = DEFAULT_RETENTION_DAYS) -> str:
    return date_key(today - timedelta(days=days))


def purge_old_plans(store: PlanStore, today: date, days: int = DEFAULT_RETENTION_DAYS) -> int:
    """Delete plans older than the retention window. StoreError propagates to the caller."""
    cutoff = retention_cutoff(today, days)
    count = store.delete_older_than(cutoff)
    logger.info("Retention cleanup removed %d plans dated before %s", count, cutoff)
    return count
