from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from wellness.api.dependencies import WellnessServices, get_services
from wellness.infra.paths import TEMPLATES_DIR
from wellness.logic.delivery.email_content import display_date

router = APIRouter()

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


# -------------------- UI PAGES --------------------
@router.get("/", response_class=HTMLResponse)
def dashboard(request: Request, is_premium: Optional[str] = Query(default=None),
              services: WellnessServices = Depends(get_services)):
    if (is_premium or "").lower() != "true":
        return templates.TemplateResponse(request, "locked.html", {})

    resolution = services.resolver.resolve()
    plan = resolution.plan
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "plan": plan,
            "display_date": display_date(plan.date),
            "source": resolution.source,
            "total_calories": plan.total_calories(),
        },
    )


# -------------------- Diagnostics --------------------
@router.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/api/debug")
def debug_info(services: WellnessServices = Depends(get_services)):
    settings = services.settings
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "today": services.resolver.today(),
        "environment": settings.environment,
        "serverless": settings.serverless,
        "store": {
            "backend": settings.store_backend.value,
            "mode": settings.store_mode.value,
            "monthlyPlans": services.monthly_store is not None,
        },
        "openai": {
            "configured": services.generator.configured,
            "keyLength": len(settings.openai_api_key or ""),
            "model": settings.openai_model,
        },
        "email": {
            "configured": bool(settings.resend_api_key),
            "recipients": len(settings.recipient_emails),
        },
    }
