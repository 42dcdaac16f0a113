"""Plugin interface, metadata, capabilities and errors"""

from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel


class PluginMetadata(BaseModel):
    name:        str
    version:     str
    description: str
    author:      str


class PluginCapability(str, Enum):
    pre_processor = "pre_processor"
    post_processor = "post_processor"
    code_formatter = "code_formatter"
    custom_command = "custom_command"


class PluginError(Exception):
    """Base class for plugin pipeline failures."""


class PluginInitError(PluginError):
    def __init__(self, message: str):
        super().__init__(f"Plugin initialization failed: {message}")


class PluginProcessingError(PluginError):
    def __init__(self, message: str):
        super().__init__(f"Plugin processing error: {message}")


class PluginNotFoundError(PluginError):
    def __init__(self, name: str):
        super().__init__(f"Plugin not found: {name}")
        self.name = name


class Plugin(ABC):
    """A text transform applied before the prompt is sent and/or after the response arrives."""

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        raise NotImplementedError

    @property
    @abstractmethod
    def capabilities(self) -> list[PluginCapability]:
        raise NotImplementedError

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the plugin; raise PluginInitError on failure."""
        raise NotImplementedError

    def pre_process(self, text: str) -> str:
        return text

    def post_process(self, text: str) -> str:
        return text
