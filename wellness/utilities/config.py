"""Configuration management for the Daily Wellness service."""
import os
from enum import Enum
from pathlib import Path
from typing import Final, List, Optional

from dotenv import load_dotenv

from wellness.domain.errors import ConfigurationError
from wellness.utilities.constants import DEFAULT_OPENAI_MODEL, DEFAULT_RETENTION_DAYS

# Load environment variables from .env file if it exists
BASE_DIR: Final[Path] = Path(__file__).parent.parent
env_path = BASE_DIR.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# File Paths
DATA_DIR: Final[Path] = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'data')))
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()


class StoreMode(str, Enum):
    """Whether writes to the plan store are viable in this deployment."""
    PERSISTENT = "persistent"
    EPHEMERAL = "ephemeral"


class StoreBackend(str, Enum):
    FILE = "file"
    SQL = "sql"
    SUPABASE = "supabase"


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def _database_url(environ) -> Optional[str]:
    # Hosted Postgres add-ons expose their own variable names
    for key in ("DATABASE_URL", "POSTGRES_URL", "PRISMA_DATABASE_URL"):
        if environ.get(key):
            return environ[key]
    return None


class Settings:
    """Environment-driven settings, read once and passed to the services that need them."""

    def __init__(self, environ=None, **overrides):
        env = dict(os.environ if environ is None else environ)

        self.openai_api_key = env.get("OPENAI_API_KEY") or None
        self.openai_model = env.get("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
        self.resend_api_key = env.get("RESEND_API_KEY") or None
        self.email_from = env.get("EMAIL_FROM", "Daily Wellness <noreply@example.com>")
        self.admin_secret = env.get("ADMIN_SECRET") or None
        self.cron_secret = env.get("CRON_SECRET") or None
        self.recipient_emails = [e.strip() for e in env.get("RECIPIENT_EMAILS", "").split(",") if e.strip()]

        self.database_url = _database_url(env)
        self.supabase_url = env.get("SUPABASE_URL") or None
        self.supabase_key = env.get("SUPABASE_KEY") or None
        default_backend = StoreBackend.SQL if self.database_url else StoreBackend.FILE
        self.store_backend = StoreBackend(env.get("PLAN_STORE", default_backend.value).lower())

        self.serverless = _flag(env.get("VERCEL"))
        self.environment = env.get("APP_ENV", "production" if self.serverless else "development")
        mode = env.get("STORE_MODE")
        if mode:
            self.store_mode = StoreMode(mode.lower())
        elif self.serverless and self.store_backend == StoreBackend.FILE:
            # A serverless filesystem does not survive the request
            self.store_mode = StoreMode.EPHEMERAL
        else:
            self.store_mode = StoreMode.PERSISTENT

        self.data_dir = Path(env.get("DATA_DIR", str(DATA_DIR)))
        self.retention_days = int(env.get("RETENTION_DAYS", DEFAULT_RETENTION_DAYS))
        self.monthly_plans = _flag(env.get("MONTHLY_PLANS"))

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    def require(self, name: str) -> str:
        """Return a required setting or raise ConfigurationError naming the env variable."""
        value = getattr(self, name)
        if not value:
            raise ConfigurationError(f"{name.upper()} is not configured")
        return value

    def recipients(self) -> List[str]:
        if not self.recipient_emails:
            raise ConfigurationError("RECIPIENT_EMAILS is not configured")
        return list(self.recipient_emails)
