"""Constructed-once services shared by the routers, with FastAPI dependency helpers."""
import logging
import secrets
from typing import Optional

from fastapi import Header, Request

from wellness.domain.errors import AuthError, ConfigurationError
from wellness.infra.Monthly_Repository import MonthlyPlanRepository
from wellness.infra.Plan_Repository import JsonPlanRepository, PlanStore
from wellness.infra.Sql_Plan_Repository import SqlPlanRepository
from wellness.infra.Supabase_Plan_Repository import SupabasePlanRepository
from wellness.infra.database import build_engine
from wellness.infra.email_sender import ResendEmailSender
from wellness.infra.paths import MONTHLY_PLAN_FILE_NAME, PLAN_FILE_NAME
from wellness.logic.generation.content_generator import ContentGenerator
from wellness.logic.planning.resolution import PlanResolver
from wellness.utilities.config import Settings, StoreBackend

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> PlanStore:
    if settings.store_backend == StoreBackend.SQL:
        url = settings.database_url or f"sqlite:///{settings.data_dir / 'wellness.db'}"
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return SqlPlanRepository(build_engine(url))
    if settings.store_backend == StoreBackend.SUPABASE:
        return SupabasePlanRepository(settings.require("supabase_url"), settings.require("supabase_key"))
    return JsonPlanRepository(settings.data_dir / PLAN_FILE_NAME)


class WellnessServices:
    """Everything a request handler needs, built once per process."""

    def __init__(self, settings: Settings, store: PlanStore, generator: ContentGenerator,
                 resolver: Optional[PlanResolver] = None,
                 monthly_store: Optional[MonthlyPlanRepository] = None,
                 email_sender=None):
        self.settings = settings
        self.store = store
        self.generator = generator
        self.resolver = resolver or PlanResolver(store, generator, settings.store_mode)
        self.monthly_store = monthly_store
        self._email_sender = email_sender

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "WellnessServices":
        settings = settings or Settings()
        store = build_store(settings)
        monthly_store = None
        if settings.monthly_plans:
            monthly_store = MonthlyPlanRepository(settings.data_dir / MONTHLY_PLAN_FILE_NAME)
        generator = ContentGenerator.from_settings(settings, monthly_store=monthly_store)
        logger.info(
            "Services ready: store=%s mode=%s monthly=%s ai=%s",
            settings.store_backend.value, settings.store_mode.value,
            monthly_store is not None, generator.configured,
        )
        return cls(settings, store, generator, monthly_store=monthly_store)

    def email_sender(self):
        """The configured sender; raises ConfigurationError when no email API key is set."""
        if self._email_sender is None:
            self._email_sender = ResendEmailSender(
                self.settings.require("resend_api_key"), self.settings.email_from
            )
        return self._email_sender


def get_services(request: Request) -> WellnessServices:
    services = getattr(request.app.state, "services", None)
    if services is None:
        services = WellnessServices.from_settings()
        request.app.state.services = services
    return services


def _check_bearer(expected: Optional[str], setting_name: str, authorization: Optional[str]) -> None:
    if not expected:
        raise ConfigurationError(f"{setting_name} is not configured")
    supplied = authorization or ""
    if not secrets.compare_digest(supplied.encode(), f"Bearer {expected}".encode()):
        raise AuthError("Unauthorized")


def require_admin(request: Request, authorization: Optional[str] = Header(default=None)) -> None:
    _check_bearer(get_services(request).settings.admin_secret, "ADMIN_SECRET", authorization)


def require_cron(request: Request, authorization: Optional[str] = Header(default=None)) -> None:
    _check_bearer(get_services(request).settings.cron_secret, "CRON_SECRET", authorization)