from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from wellness.api.dependencies import WellnessServices, get_services
from wellness.infra.pdf_utils import render_plan_pdf
from wellness.logic.delivery.email_content import pdf_filename
from wellness.logic.planning.resolution import Resolution
from wellness.utilities.constants import NO_CACHE_HEADERS
from wellness.utilities.validators import parse_plan_date

router = APIRouter()


def _resolve_or_404(services: WellnessServices, date: Optional[str], refresh: bool = False) -> Resolution:
    plan_date = parse_plan_date(date) if date else None
    resolution = services.resolver.resolve(plan_date, force_refresh=refresh)
    if resolution is None:
        raise HTTPException(status_code=404, detail="No plan found for the specified date")
    return resolution


def _plan_response(services: WellnessServices, resolution: Resolution, refresh: bool) -> JSONResponse:
    body = resolution.plan.to_dict()
    body["_metadata"] = {
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "environment": services.settings.environment,
        "storeMode": services.resolver.mode.value,
        "source": resolution.source,
        "persisted": resolution.persisted,
        "isFreshContent": resolution.is_fresh,
        "forceRefresh": refresh,
    }
    return JSONResponse(content=body, headers=NO_CACHE_HEADERS)


# -------------------- Plan of the day --------------------
@router.get("/api/daily-plan")
@router.get("/plan")
def daily_plan(date: Optional[str] = Query(default=None, description="YYYY-MM-DD; omit for today"),
               refresh: bool = Query(default=False),
               services: WellnessServices = Depends(get_services)):
    resolution = _resolve_or_404(services, date, refresh)
    return _plan_response(services, resolution, refresh)


@router.get("/api/force-refresh")
def force_refresh(services: WellnessServices = Depends(get_services)):
    resolution = services.resolver.resolve(force_refresh=True)
    response = _plan_response(services, resolution, True)
    response.headers["X-Force-Refresh"] = "true"
    return response


@router.get("/api/daily-plan/pdf")
def daily_plan_pdf(date: Optional[str] = Query(default=None),
                   services: WellnessServices = Depends(get_services)):
    plan = _resolve_or_404(services, date).plan
    pdf_bytes = render_plan_pdf(plan)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf_filename(plan)}"'},
    )
