import logging

from fastapi import APIRouter, Depends, HTTPException

from wellness.api.dependencies import WellnessServices, get_services, require_cron
from wellness.logic.delivery.daily_job import run_daily_job

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/cron/daily-plan", dependencies=[Depends(require_cron)])
@router.post("/cron/daily-job", dependencies=[Depends(require_cron)])
async def daily_plan_cron(services: WellnessServices = Depends(get_services)):
    # Configuration problems surface as 500 before any work starts
    sender = services.email_sender()
    recipients = services.settings.recipients()

    logger.info("Starting daily plan cron job")
    try:
        report = await run_daily_job(services.resolver, sender, recipients, services.settings.retention_days)
    except Exception as e:
        logger.exception("Daily plan cron job failed")
        raise HTTPException(status_code=500, detail=f"Daily job failed: {e}")
    logger.info("Daily job done: %d sent, %d failed", report.emails_sent, report.emails_failed)
    return report.to_dict()


@router.get("/api/cron/daily-plan")
def daily_plan_cron_info():
    return {
        "message": "Daily plan cron endpoint",
        "method": "POST",
        "auth": "Authorization: Bearer <CRON_SECRET>",
        "description": "Resolves today's plan, emails it as a PDF to all recipients and purges old plans",
    }
