"""Backend abstraction: request/response models, errors, and the provider interface"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field


class AIRequest(BaseModel):
    prompt:      str
    context:     Optional[str] = None
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens:  Optional[int] = Field(default=None, ge=1)


class AIResponse(BaseModel):
    content:     str
    model:       str
    tokens_used: Optional[int] = None


class ProviderConfig(BaseModel):
    name:         str
    model:        str
    api_key:      Optional[str] = None
    api_endpoint: Optional[str] = None


class ProviderError(Exception):
    """Base class for backend failures."""


class ProviderNotConfiguredError(ProviderError):
    def __init__(self, message: str = "Provider not configured"):
        super().__init__(message)


class ProviderApiError(ProviderError):
    def __init__(self, message: str):
        super().__init__(f"API error: {message}")


class ProviderNetworkError(ProviderError):
    def __init__(self, message: str):
        super().__init__(f"Network error: {message}")


class InvalidResponseError(ProviderError):
    def __init__(self, message: str):
        super().__init__(f"Invalid response: {message}")


class ProviderConfigError(ProviderError):
    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")


class AIProvider(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def configure(self, config: ProviderConfig) -> None:
        raise NotImplementedError

    @abstractmethod
    def send_request(self, request: AIRequest) -> AIResponse:
        """Return the backend's response, or raise a ProviderError."""
        raise NotImplementedError

    @abstractmethod
    def is_ready(self) -> bool:
        raise NotImplementedError
