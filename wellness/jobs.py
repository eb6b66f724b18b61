"""Command line entry points for scheduled work.

    python -m wellness.jobs daily      # email today's plan, then purge old plans
    python -m wellness.jobs cleanup    # purge plans past the retention window
    python -m wellness.jobs monthly    # pre-generate this month and the next two
"""
import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import List, Optional

from wellness.api.dependencies import WellnessServices
from wellness.domain.errors import WellnessError
from wellness.infra.Monthly_Repository import MonthlyPlanRepository
from wellness.infra.paths import MONTHLY_PLAN_FILE_NAME
from wellness.logic.delivery.daily_job import run_daily_job
from wellness.logic.planning.retention import purge_old_plans
from wellness.utilities.config import LOG_LEVEL, Settings

logger = logging.getLogger("wellness_jobs")

MONTHS_AHEAD = 3


def upcoming_month_keys(today: date, count: int = MONTHS_AHEAD) -> List[str]:
    keys = []
    year, month = today.year, today.month
    for _ in range(count):
        keys.append(f"{year:04d}-{month:02d}")
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return keys


def run_daily(services: WellnessServices) -> int:
    sender = services.email_sender()
    recipients = services.settings.recipients()
    report = asyncio.run(run_daily_job(services.resolver, sender, recipients, services.settings.retention_days))
    logger.info("Daily job report: %s", report.to_dict())
    return 0 if report.emails_failed == 0 else 1


def run_cleanup(services: WellnessServices, days: Optional[int] = None) -> int:
    today = date.fromisoformat(services.resolver.today())
    removed = purge_old_plans(services.store, today, days if days is not None else services.settings.retention_days)
    if services.monthly_store is not None:
        removed += services.monthly_store.cleanup(today=today)
    logger.info("Cleanup removed %d entries", removed)
    return 0


def run_monthly(services: WellnessServices) -> int:
    generator = services.generator
    if generator.monthly_store is None:
        # explicit request for monthly plans enables the store for this run
        generator.monthly_store = MonthlyPlanRepository(services.settings.data_dir / MONTHLY_PLAN_FILE_NAME)
    failures = 0
    for month_key in upcoming_month_keys(date.fromisoformat(services.resolver.today())):
        if generator.monthly_store.exists(month_key):
            logger.info("Monthly plan for %s already exists, skipping", month_key)
            continue
        try:
            generator.generate_month(month_key)
            logger.info("Generated monthly plan for %s", month_key)
        except WellnessError as e:
            failures += 1
            logger.error("Monthly plan for %s failed: %s", month_key, e)
    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="wellness.jobs", description="Daily wellness scheduled jobs")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("daily", help="Email today's plan to all recipients")
    cleanup = sub.add_parser("cleanup", help="Delete plans older than the retention window")
    cleanup.add_argument("--days", type=int, default=None, help="Retention window in days")
    sub.add_parser("monthly", help="Pre-generate monthly workout and meal plans")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    services = WellnessServices.from_settings(Settings())
    try:
        if args.command == "daily":
            return run_daily(services)
        if args.command == "cleanup":
            return run_cleanup(services, args.days)
        return run_monthly(services)
    except WellnessError as e:
        logger.error("%s job failed: %s", args.command, e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
