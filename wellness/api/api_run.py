from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wellness.api.dependencies import WellnessServices
from wellness.domain.errors import AuthError, ConfigurationError, PlanValidationError, StoreError

# Routers
from wellness.api.routes import admin, cron, pages, plans
from dotenv import load_dotenv
load_dotenv()

# Logging
logger = logging.getLogger("wellness_app")


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PlanValidationError)
    async def _plan_validation(request: Request, exc: PlanValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": _validation_message(exc)})

    @app.exception_handler(AuthError)
    async def _auth(request: Request, exc: AuthError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(ConfigurationError)
    async def _configuration(request: Request, exc: ConfigurationError):
        logger.error("Configuration error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(StoreError)
    async def _store(request: Request, exc: StoreError):
        logger.error("Store error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": f"Plan store error: {exc}"})


def create_app(services: Optional[WellnessServices] = None) -> FastAPI:
    """Build the application; services are created on first request unless given."""
    app = FastAPI(title="Daily Wellness Plan API")
    if services is not None:
        app.state.services = services

    _register_error_handlers(app)

    # Include routers
    app.include_router(plans.router)
    app.include_router(admin.router)
    app.include_router(cron.router)
    app.include_router(pages.router)
    return app


app = create_app()
