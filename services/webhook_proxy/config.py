"""
Webhook proxy configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from pydantic import Field
from services.common.core.config import BaseAppConfig

from .models.hook_data import BodyEncoding


class WebhookProxyConfig(BaseAppConfig):
    """
    Configuration management for the webhook proxy.
    """

    # Server settings
    BIND_ADDR: str = Field(default="0.0.0.0:8080", description="Listen address")

    # Path settings
    PROVIDERS_CONFIG_PATH: str = Field(
        default="config/providers.yml", description="Provider definition file path"
    )

    # Delivery
    DELIVERY_TIMEOUT: float = Field(default=10.0, description="Delivery timeout (seconds)")

    # Body convention for providers that do not declare one
    DEFAULT_BODY_ENCODING: BodyEncoding = Field(
        default=BodyEncoding.JSON, description="Fallback body encoding"
    )

    # FastAPI settings
    root_path: str = Field(default="", description="API root path (for proxy)")

    @property
    def host(self) -> str:
        return self.BIND_ADDR.rsplit(":", 1)[0]

    @property
    def port(self) -> int:
        return int(self.BIND_ADDR.rsplit(":", 1)[1])


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = WebhookProxyConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
