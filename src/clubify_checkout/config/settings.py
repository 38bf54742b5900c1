"""
SDK settings for Clubify Checkout.

Values are read from the environment (prefix ``CLUBIFY_CHECKOUT_``) or an
optional ``.env`` file, and can be overridden by passing keyword arguments.
"""
from enum import Enum
from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..__version__ import __version__


class Environment(str, Enum):
    """Remote environments exposed by the platform."""
    SANDBOX = "sandbox"
    PRODUCTION = "production"


class CacheBackend(str, Enum):
    """Supported cache backends."""
    MEMORY = "memory"
    REDIS = "redis"


ENVIRONMENT_URLS: Dict[str, str] = {
    Environment.SANDBOX.value: "https://sandbox.svelve.com/api/v1",
    Environment.PRODUCTION.value: "https://checkout.svelve.com/api/v1",
}


class ClubifySettings(BaseSettings):
    """Runtime configuration shared by every module of the SDK."""

    model_config = SettingsConfigDict(
        env_prefix="CLUBIFY_CHECKOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials and tenancy
    api_key: Optional[SecretStr] = Field(default=None)
    api_secret: Optional[SecretStr] = Field(default=None)
    tenant_id: Optional[str] = Field(default=None)
    organization_id: Optional[str] = Field(default=None)

    # Remote API
    environment: Environment = Field(default=Environment.SANDBOX)
    base_url: Optional[str] = Field(default=None)
    timeout: float = Field(default=30.0, gt=0)
    connect_timeout: float = Field(default=10.0, gt=0)
    user_agent: str = Field(default=f"ClubifyCheckoutSDK-Python/{__version__}")

    # Cache
    cache_enabled: bool = Field(default=True)
    cache_backend: CacheBackend = Field(default=CacheBackend.MEMORY)
    redis_url: str = Field(default="redis://localhost:6379/0")
    cache_prefix: str = Field(default="clubify_checkout")
    cache_max_entries: int = Field(default=1000, gt=0)
    cache_ttl_find: int = Field(default=300, ge=0)  # 5 minutes
    cache_ttl_list: int = Field(default=180, ge=0)  # 3 minutes
    cache_ttl_search: int = Field(default=180, ge=0)
    cache_ttl_stats: int = Field(default=600, ge=0)  # 10 minutes
    cache_ttl_history: int = Field(default=900, ge=0)  # 15 minutes
    cache_ttl_entity: int = Field(default=3600, ge=0)  # 1 hour, cache default

    # Behaviour
    events_enabled: bool = Field(default=True)
    slug_max_attempts: int = Field(default=100, ge=1)
    debug: bool = Field(default=False)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value:
            return value.rstrip("/")
        return value

    @property
    def api_base_url(self) -> str:
        """Base URL for the configured environment unless overridden."""
        return self.base_url or ENVIRONMENT_URLS[self.environment.value]

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def cache_namespace(self) -> str:
        """Key prefix isolating cached data per tenant."""
        return f"{self.cache_prefix}:{self.tenant_id or 'default'}"

    def default_headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key.get_secret_value()}"
        if self.tenant_id:
            headers["X-Tenant-Id"] = self.tenant_id
        if self.organization_id:
            headers["X-Organization-Id"] = self.organization_id
        return headers


@lru_cache()
def get_settings() -> ClubifySettings:
    """Get cached settings built from the environment."""
    return ClubifySettings()
