import logging

import httpx

from .config import BaseAppConfig

logger = logging.getLogger(__name__)

USER_AGENT = "webhook-proxy/1.0"


class HttpClientFactory:
    """
    HTTP Client Factory for outbound deliveries.
    """

    def __init__(self, config: BaseAppConfig):
        self.config = config

    def create_async_client(self, **kwargs) -> httpx.AsyncClient:
        """
        Create an httpx.AsyncClient with configured SSL verification.

        Args:
            **kwargs: Additional arguments for httpx.AsyncClient
        """
        verify = kwargs.pop("verify", None)

        # If verify is not explicitly provided, use config default
        if verify is None:
            verify = self.config.VERIFY_SSL
        if not verify:
            logger.warning("SSL verification disabled for outbound deliveries (VERIFY_SSL=False)")

        if "limits" not in kwargs:
            kwargs["limits"] = httpx.Limits(max_keepalive_connections=20, max_connections=100)
        headers = {"User-Agent": USER_AGENT}
        headers.update(kwargs.pop("headers", None) or {})

        return httpx.AsyncClient(verify=verify, headers=headers, **kwargs)
