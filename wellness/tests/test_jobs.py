from datetime import date

import pytest

from wellness.api.dependencies import WellnessServices, build_store
from wellness.infra.Plan_Repository import JsonPlanRepository
from wellness.infra.Sql_Plan_Repository import SqlPlanRepository
from wellness.domain.errors import ConfigurationError
from wellness.jobs import run_cleanup, run_monthly, upcoming_month_keys
from wellness.logic.generation.content_generator import ContentGenerator
from wellness.logic.planning.resolution import PlanResolver
from wellness.utilities.config import Settings, StoreBackend, StoreMode
from wellness.tests.fakes import TODAY, FakeOpenAI, MemoryStore, make_plan


def test_upcoming_month_keys_wrap_year():
    assert upcoming_month_keys(date(2025, 11, 20)) == ["2025-11", "2025-12", "2026-01"]


def test_run_cleanup_removes_old_plans():
    settings = Settings(environ={})
    store = MemoryStore()
    for day in ("2024-01-01", "2025-03-09"):
        store.upsert(make_plan(day))
    generator = ContentGenerator(client=None)
    services = WellnessServices(settings, store, generator,
                                resolver=PlanResolver(store, generator, clock=lambda: TODAY))

    assert run_cleanup(services) == 0
    assert list(store.plans) == ["2025-03-09"]


def test_run_monthly_generates_missing_months(tmp_path):
    settings = Settings(environ={"DATA_DIR": str(tmp_path)})
    store = MemoryStore()
    client = FakeOpenAI()
    generator = ContentGenerator(client=client)
    services = WellnessServices(settings, store, generator,
                                resolver=PlanResolver(store, generator, clock=lambda: TODAY))

    assert run_monthly(services) == 0
    assert generator.monthly_store.exists("2025-05")
    assert client.responses.calls.count("workout") == 3

    # already generated months are skipped
    assert run_monthly(services) == 0
    assert client.responses.calls.count("workout") == 3


def test_settings_defaults():
    settings = Settings(environ={})
    assert settings.store_backend == StoreBackend.FILE
    assert settings.store_mode == StoreMode.PERSISTENT
    assert settings.openai_model == "gpt-4o-mini"


def test_serverless_file_store_is_ephemeral():
    settings = Settings(environ={"VERCEL": "1"})
    assert settings.store_mode == StoreMode.EPHEMERAL
    assert settings.environment == "production"


def test_database_url_fallbacks_select_sql():
    settings = Settings(environ={"POSTGRES_URL": "postgres://u:p@db/app"})
    assert settings.database_url == "postgres://u:p@db/app"
    assert settings.store_backend == StoreBackend.SQL


def test_unknown_override_rejected():
    with pytest.raises(TypeError):
        Settings(environ={}, not_a_setting=1)


def test_build_store_backends(tmp_path):
    assert isinstance(build_store(Settings(environ={"DATA_DIR": str(tmp_path)})), JsonPlanRepository)
    sql = build_store(Settings(environ={"PLAN_STORE": "sql", "DATA_DIR": str(tmp_path)}))
    assert isinstance(sql, SqlPlanRepository)
    with pytest.raises(ConfigurationError):
        build_store(Settings(environ={"PLAN_STORE": "supabase"}))
