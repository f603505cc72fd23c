"""
Provider normalizers and registry.

A provider is a webhook source: it pairs a normalizer (message bytes ->
CanonicalMessage) with the body encoding its producers use. Providers and
named outputs are loaded from providers.yml.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Protocol
import yaml
import logging
import os
import string

from pydantic import ValidationError

from ..core.exceptions import MalformedPayloadError, ProviderNotFoundError
from ..models.hook_data import BodyEncoding
from ..models.message import CanonicalMessage

logger = logging.getLogger("webhook_proxy.normalizers")


class Normalizer(Protocol):
    def normalize(self, body: bytes) -> CanonicalMessage: ...


class CanonicalNormalizer:
    """Accepts the canonical message JSON as is."""

    name = "canonical"

    def normalize(self, body: bytes) -> CanonicalMessage:
        try:
            return CanonicalMessage.model_validate_json(body)
        except ValidationError as e:
            raise MalformedPayloadError(self.name, f"{e.error_count()} validation error(s)") from e


BUILTIN_NORMALIZERS = {
    CanonicalNormalizer.name: CanonicalNormalizer,
}


@dataclass(frozen=True)
class Provider:
    name: str
    normalizer: Normalizer
    body_encoding: BodyEncoding


class ProviderRegistry:
    def __init__(
        self,
        config_path: Optional[str] = None,
        default_body_encoding: BodyEncoding = BodyEncoding.JSON,
    ):
        self._providers: Dict[str, Provider] = {}
        self._outputs: Dict[str, str] = {}
        self.config_path = config_path
        self.default_body_encoding = default_body_encoding

    def register(
        self,
        name: str,
        normalizer: Normalizer,
        body_encoding: Optional[BodyEncoding] = None,
    ) -> Provider:
        provider = Provider(
            name=name,
            normalizer=normalizer,
            body_encoding=body_encoding or self.default_body_encoding,
        )
        self._providers[name] = provider
        return provider

    def get(self, name: str) -> Provider:
        """
        Raises:
            ProviderNotFoundError: no provider registered under name
        """
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFoundError(name)
        return provider

    def names(self):
        return sorted(self._providers)

    @property
    def outputs(self) -> Dict[str, str]:
        """Named output adapter -> destination URL."""
        return dict(self._outputs)

    def load_providers_config(self) -> Dict[str, Provider]:
        """
        Load providers.yml and register its providers and outputs.

        Unknown normalizers and body encodings are skipped with a warning.

        Returns:
            Dict of provider name -> Provider
        """
        if not self.config_path:
            return dict(self._providers)

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                # Substitute environment variables using string.Template.
                template = string.Template(f.read())
                content = template.safe_substitute(os.environ)
                cfg = yaml.safe_load(content) or {}

        except FileNotFoundError:
            logger.warning(f"Providers config not found at {self.config_path}")
            return dict(self._providers)

        except yaml.YAMLError as e:
            logger.error(f"Error parsing providers config: {e}")
            return dict(self._providers)

        for name, entry in (cfg.get("providers") or {}).items():
            entry = entry or {}
            normalizer_key = entry.get("normalizer", name)
            normalizer_cls = BUILTIN_NORMALIZERS.get(normalizer_key)
            if normalizer_cls is None:
                logger.warning(
                    f"Skipping provider {name}: unknown normalizer {normalizer_key}",
                    extra={"provider": name},
                )
                continue
            try:
                encoding = BodyEncoding(entry.get("body_encoding", self.default_body_encoding))
            except ValueError:
                logger.warning(
                    f"Skipping provider {name}: unknown body encoding {entry.get('body_encoding')}",
                    extra={"provider": name},
                )
                continue
            self.register(name, normalizer_cls(), encoding)

        for name, entry in (cfg.get("outputs") or {}).items():
            url = (entry or {}).get("url", "").strip()
            # unresolved ${VAR} placeholders leave the output disabled
            if url and "${" not in url:
                self._outputs[name] = url

        logger.info(
            f"Loaded {len(self._providers)} providers and {len(self._outputs)} outputs "
            f"from {self.config_path}"
        )
        return dict(self._providers)


def default_registry(
    config_path: Optional[str] = None,
    default_body_encoding: BodyEncoding = BodyEncoding.JSON,
) -> ProviderRegistry:
    """Registry with the built-in canonical provider, plus providers.yml entries."""
    registry = ProviderRegistry(config_path, default_body_encoding)
    registry.register(CanonicalNormalizer.name, CanonicalNormalizer(), BodyEncoding.JSON)
    registry.load_providers_config()
    return registry
