"""Client configuration models using Pydantic."""

import os
from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

PROVIDER_DOMAIN = "foxholeservices.com"
DEFAULT_USER_AGENT = "foxhole-war-api/0.1.0"

ENV_PREFIX = "FOXHOLE_WAR_API_"


class Shard(str, Enum):
    """Independently hosted game world instances."""

    LIVE_1 = "live"
    LIVE_2 = "live-2"

    @property
    def base_url(self) -> str:
        """API base URL for this shard."""
        return f"https://war-service-{self.value}.{PROVIDER_DOMAIN}/api"


class ClientConfig(BaseModel):
    """War API client configuration.

    The shard and base URL are fixed for the lifetime of a client built
    from this config; build a new client to target another shard.
    """

    model_config = ConfigDict(frozen=True)

    shard: Shard = Field(default=Shard.LIVE_1, description="Target shard")
    timeout: float = Field(
        default=30.0, gt=0, description="Request timeout in seconds"
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Override for the shard base URL (mirrors, test servers)",
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: Optional[str]) -> Optional[str]:
        """Require an http(s) scheme and strip the trailing slash."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    def resolved_base_url(self) -> str:
        """Base URL requests are built against."""
        return self.base_url or self.shard.base_url

    @classmethod
    def from_env(cls, base: Optional["ClientConfig"] = None) -> "ClientConfig":
        """Create configuration from environment variables.

        Environment variables:
        - FOXHOLE_WAR_API_SHARD: ``live`` or ``live-2``
        - FOXHOLE_WAR_API_TIMEOUT: Request timeout in seconds
        - FOXHOLE_WAR_API_BASE_URL: Base URL override
        - FOXHOLE_WAR_API_USER_AGENT: User-Agent header

        Set variables override ``base`` (e.g. a config loaded from YAML);
        unset variables keep its values, or the defaults without one.

        Args:
            base: Configuration to layer the environment over

        Returns:
            ClientConfig instance
        """
        values = base.model_dump() if base else {}
        for field_name in ("shard", "timeout", "base_url", "user_agent"):
            raw = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
            if raw:
                values[field_name] = raw

        return cls(**values)


def load_client_config(path: str | Path) -> ClientConfig:
    """Load client configuration from YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated ClientConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Client config not found: {config_path}")

    with open(config_path) as f:
        config_data = yaml.safe_load(f)

    if config_data is None:
        return ClientConfig()

    if not isinstance(config_data, dict):
        raise ValueError(f"Client config must be a mapping: {config_path}")

    return ClientConfig(**config_data)
