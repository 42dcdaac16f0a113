"""Ordered plugin registry running pre/post transforms with short-circuit on error"""

from typing import Iterable, Optional

from vibecoder.plugins.base import Plugin, PluginMetadata, PluginNotFoundError
from vibecoder.plugins.samples import AVAILABLE_PLUGINS
from vibecoder.util.logger import get_logger


logger = get_logger(__name__)


class PluginRegistry:
    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}    # insertion order is run order

    def register(self, plugin: Plugin) -> None:
        """Initialize and store a plugin under its metadata name.

        Re-registering a name replaces the plugin but keeps its run position.
        PluginInitError from initialize() propagates and nothing is stored.
        """
        plugin.initialize()
        name = plugin.metadata.name
        self._plugins[name] = plugin
        logger.debug("Registered plugin %s", name)

    def get(self, name: str) -> Optional[Plugin]:
        return self._plugins.get(name)

    def remove(self, name: str) -> Plugin:
        if name not in self._plugins:
            raise PluginNotFoundError(name)
        return self._plugins.pop(name)

    def list_plugins(self) -> list[PluginMetadata]:
        return [p.metadata for p in self._plugins.values()]

    def __len__(self) -> int:
        return len(self._plugins)

    def pre_process_all(self, text: str) -> str:
        """Run every plugin's pre_process in registration order; the first PluginError propagates."""
        result = text
        for name, plugin in self._plugins.items():
            result = plugin.pre_process(result)
            logger.debug("pre_process: %s", name)
        return result

    def post_process_all(self, text: str) -> str:
        """Run every plugin's post_process in registration order; the first PluginError propagates."""
        result = text
        for name, plugin in self._plugins.items():
            result = plugin.post_process(result)
            logger.debug("post_process: %s", name)
        return result


def build_registry(names: Iterable[str]) -> PluginRegistry:
    """Register the named built-in plugins in the given order."""
    registry = PluginRegistry()
    for name in names:
        cls = AVAILABLE_PLUGINS.get(name)
        if cls is None:
            raise PluginNotFoundError(name)
        registry.register(cls())
    return registry
