"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for AuthGate happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. jwt_secret -> JWT_SECRET, master_password -> MASTER_PASSWORD).

  @model_validator(mode="after"): Runs cross-field validation after all fields
      are resolved. There are no hardcoded fallbacks for the signing secret or
      the master password: a missing value is a startup failure.

Security notes:
  [S1] JWT_SECRET shorter than 32 chars is rejected outright.
  [S2] MASTER_PASSWORD has no default in any mode.
  [S3] DEBUG=true generates a throwaway JWT_SECRET; tokens die on restart.

Layer rule: core/ is the kernel. This module may not import from api/, web/,
or auth/.
"""

import logging
import secrets
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("authgate.config")

OWNER_ROLE = "owner"
DEFAULT_PERMISSIONS = ["read", "write"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Environment variable name mapping: field names are uppercased automatically.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # ------------------------------------------------------------------
    # Secrets -- empty string means "not configured"; the validator decides.
    # ------------------------------------------------------------------

    jwt_secret: str = ""
    master_password: str = ""

    # ------------------------------------------------------------------
    # Session cookie
    # ------------------------------------------------------------------

    cookie_name: str = "auth_session"
    # Leading dot shares the cookie across subdomains, e.g. ".fly.dev".
    cookie_domain: str = ""
    token_expire_days: int = 30

    # ------------------------------------------------------------------
    # Identity of the single master password holder
    # ------------------------------------------------------------------

    owner_id: str = "inacio"
    owner_name: str = "Inacio"

    # ------------------------------------------------------------------
    # Status page links (label -> URL). JSON object when set from env.
    # ------------------------------------------------------------------

    linked_apps: dict[str, str] = {
        "Reminders": "https://reminders-app.fly.dev",
        "ClassQuizzes": "https://classquizzes.fly.dev",
    }

    @property
    def token_expire_seconds(self) -> int:
        return self.token_expire_days * 24 * 60 * 60

    @property
    def login_url(self) -> str:
        """Absolute login URL consuming apps send unauthenticated users to."""
        if not self.cookie_domain:
            return "/login"
        return f"https://auth.{self.cookie_domain.lstrip('.')}/login"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_secrets(self) -> "Settings":
        """Fail fast on missing or weak secrets [S1][S2][S3]."""
        if not self.jwt_secret:
            if self.debug:
                self.jwt_secret = secrets.token_hex(32)
                logger.warning("WARNING: Using auto-generated JWT_SECRET. Tokens will not survive a restart.")
            else:
                raise ValueError(
                    "JWT_SECRET is required in production mode. "
                    "Set JWT_SECRET in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
        if len(self.jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters.")
        if not self.master_password:
            raise ValueError("MASTER_PASSWORD is required. Set it in your environment or .env file.")
        if self.token_expire_days <= 0:
            raise ValueError("TOKEN_EXPIRE_DAYS must be positive.")
        if not self.cookie_domain:
            logger.warning("COOKIE_DOMAIN is not set; the session cookie will be host-only.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
