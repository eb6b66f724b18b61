import logging
from datetime import date as _date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from wellness.api.dependencies import WellnessServices, get_services, require_admin
from wellness.domain.errors import GenerationError, StoreError
from wellness.logic.planning.retention import purge_old_plans
from wellness.utilities.validators import CleanupInput, GeneratePlanInput, MonthlyPlanInput, parse_plan_date

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/api/admin/generate-plan")
@router.post("/admin/generate-plan")
def generate_plan(payload: GeneratePlanInput, services: WellnessServices = Depends(get_services)):
    store = services.store
    if not payload.force:
        try:
            exists = store.exists(payload.date)
        except StoreError as e:
            logger.exception("Could not check for an existing plan for %s", payload.date)
            raise HTTPException(status_code=500, detail=f"Failed to check existing plan: {e}")
        if exists:
            raise HTTPException(status_code=409, detail="Plan already exists for this date. Use force=true to overwrite.")

    logger.info("Generating plan for %s (force=%s)", payload.date, payload.force)
    resolution = services.resolver.generate_plan(payload.date)
    try:
        store.upsert(resolution.plan)
    except StoreError as e:
        logger.exception("Failed to save generated plan for %s", payload.date)
        raise HTTPException(status_code=500, detail=f"Failed to save plan: {e}")

    return {
        "success": True,
        "message": f"Plan generated and saved for {payload.date}",
        "source": resolution.source,
        "plan": resolution.plan.to_dict(),
    }


@router.get("/api/admin/generate-plan")
def plan_exists(date: str = Query(..., description="YYYY-MM-DD"),
                services: WellnessServices = Depends(get_services)):
    plan_date = parse_plan_date(date)
    return {"date": plan_date, "exists": services.store.exists(plan_date)}


@router.post("/api/admin/generate-monthly-plan")
def generate_monthly_plan(payload: MonthlyPlanInput, services: WellnessServices = Depends(get_services)):
    if services.generator.monthly_store is None:
        raise HTTPException(status_code=400, detail="Monthly plans are disabled. Set MONTHLY_PLANS=true to enable them.")
    logger.info("Admin requested monthly plan generation for %s", payload.monthKey)
    try:
        workout, meals = services.generator.generate_month(payload.monthKey)
    except GenerationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {
        "success": True,
        "message": f"Monthly plan generated for {payload.monthKey}",
        "monthKey": payload.monthKey,
        "plan": {
            "workout": [e.to_dict() for e in workout],
            "meals": {slot: meal.to_dict() for slot, meal in meals.items()},
        },
    }


@router.post("/api/admin/cleanup")
def cleanup_plans(payload: Optional[CleanupInput] = None, services: WellnessServices = Depends(get_services)):
    days = payload.days if payload and payload.days is not None else services.settings.retention_days
    today = _date.fromisoformat(services.resolver.today())
    try:
        removed = purge_old_plans(services.store, today, days)
        monthly_removed = services.monthly_store.cleanup(today=today) if services.monthly_store else 0
    except StoreError as e:
        logger.exception("Retention cleanup failed")
        raise HTTPException(status_code=500, detail=f"Cleanup failed: {e}")
    return {"success": True, "days": days, "plansRemoved": removed, "monthlyPlansRemoved": monthly_removed}


@router.post("/api/clear-today")
def clear_today(services: WellnessServices = Depends(get_services)):
    today = services.resolver.today()
    try:
        deleted = services.store.delete(today)
    except StoreError as e:
        logger.exception("Failed to clear plan for %s", today)
        raise HTTPException(status_code=500, detail=str(e))
    logger.info("Cleared plan for %s (deleted=%s)", today, deleted)
    return {"success": True, "message": f"Cleared plan for {today}", "date": today, "deleted": deleted}
