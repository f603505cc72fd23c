"""
Service layer package.

Provider registry, delivery adapters and the webhook handler.
"""

from .delivery import DeliveryAdapter, WebhookDeliveryAdapter
from .handler import WebhookHandler, WebhookService
from .normalizers import CanonicalNormalizer, Normalizer, Provider, ProviderRegistry, default_registry

__all__ = [
    "CanonicalNormalizer",
    "DeliveryAdapter",
    "Normalizer",
    "Provider",
    "ProviderRegistry",
    "WebhookDeliveryAdapter",
    "WebhookHandler",
    "WebhookService",
    "default_registry",
]
