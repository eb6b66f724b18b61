"""Scheduled delivery: resolve today's plan, render it, email it, purge old plans."""
import asyncio
import logging
from datetime import datetime
from typing import List

from wellness.domain.errors import StoreError
from wellness.infra.pdf_utils import render_plan_pdf
from wellness.logic.delivery.email_content import email_subject, pdf_filename, render_email_html
from wellness.logic.planning.resolution import PlanResolver
from wellness.logic.planning.retention import purge_old_plans
from wellness.utilities.constants import DATE_FORMAT, DEFAULT_RETENTION_DAYS

logger = logging.getLogger(__name__)


class DailyJobReport:
    def __init__(self, plan_date: str, source: str, emails_sent: int, emails_failed: int, plans_purged: int):
        self.plan_date = plan_date
        self.source = source
        self.emails_sent = emails_sent
        self.emails_failed = emails_failed
        self.plans_purged = plans_purged

    def to_dict(self):
        return {
            "success": True,
            "message": "Daily plan processing complete",
            "planDate": self.plan_date,
            "planSource": self.source,
            "emailsSent": self.emails_sent,
            "emailsFailed": self.emails_failed,
            "plansPurged": self.plans_purged,
        }


async def run_daily_job(resolver: PlanResolver, sender, recipients: List[str],
                        retention_days: int = DEFAULT_RETENTION_DAYS) -> DailyJobReport:
    """Run the steps in order; only the email fan-out is concurrent."""
    resolution = await asyncio.to_thread(resolver.resolve)
    plan = resolution.plan
    logger.info("Daily job using %s plan for %s", resolution.source, plan.date)

    logger.info("Generating PDF...")
    pdf_bytes = await asyncio.to_thread(render_plan_pdf, plan)

    logger.info("Sending emails to %d recipients...", len(recipients))
    delivery = await sender.send_many(
        recipients,
        email_subject(plan),
        render_email_html(plan),
        attachments={pdf_filename(plan): pdf_bytes},
    )

    purged = 0
    if resolver.can_persist:
        today = datetime.strptime(resolver.today(), DATE_FORMAT).date()
        try:
            purged = await asyncio.to_thread(purge_old_plans, resolver.store, today, retention_days)
        except StoreError:
            logger.exception("Retention cleanup failed")

    return DailyJobReport(plan.date, resolution.source, delivery.sent_count, delivery.failed_count, purged)
