"""Ordered provider registry with a single active backend"""

from typing import Optional

from vibecoder.config import Settings
from vibecoder.providers.base import (
    AIProvider, AIRequest, AIResponse, ProviderConfig, ProviderConfigError, ProviderNotConfiguredError,
)
from vibecoder.providers.mock import MockProvider
from vibecoder.util.logger import get_logger


logger = get_logger(__name__)

PROVIDER_KINDS: dict[str, type[AIProvider]] = {
    "mock": MockProvider,
}
DEFAULT_MODEL = "mock-model-v1"


class ProviderManager:
    def __init__(self) -> None:
        self.providers: list[AIProvider] = []
        self.active_index: Optional[int] = None

    def add_provider(self, provider: AIProvider) -> None:
        """Append a provider; the first one added becomes active."""
        self.providers.append(provider)
        if self.active_index is None:
            self.active_index = 0

    def set_active(self, index: int) -> None:
        if not 0 <= index < len(self.providers):
            raise ProviderConfigError("Provider index out of bounds")
        self.active_index = index

    @property
    def active(self) -> Optional[AIProvider]:
        if self.active_index is None:
            return None
        return self.providers[self.active_index]

    def list_providers(self) -> list[str]:
        return [p.name for p in self.providers]

    def send(self, request: AIRequest) -> AIResponse:
        """Send request to the active provider."""
        provider = self.active
        if provider is None:
            raise ProviderNotConfiguredError("No active provider")
        logger.info("Sending request to %s", provider.name)
        return provider.send_request(request)


def build_manager(settings: Settings) -> ProviderManager:
    """Create and configure providers from settings; fall back to a single mock backend."""
    manager = ProviderManager()
    for entry in settings.providers:
        if not entry.enabled:
            continue
        cls = PROVIDER_KINDS.get(entry.kind)
        if cls is None:
            raise ProviderConfigError(f"Unknown provider kind '{entry.kind}' for '{entry.name}'")
        provider = cls(entry.name)
        provider.configure(ProviderConfig(
            name=entry.name,
            model=entry.model,
            api_key=entry.api_key,
            api_endpoint=entry.api_endpoint,
        ))
        manager.add_provider(provider)

    if not manager.providers:
        provider = MockProvider()
        provider.configure(ProviderConfig(name=provider.name, model=DEFAULT_MODEL))
        manager.add_provider(provider)
    return manager
