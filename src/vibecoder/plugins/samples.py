"""Sample plugins shipped with the console"""

from vibecoder.plugins.base import (
    Plugin, PluginCapability, PluginMetadata, PluginProcessingError,
)


FORMATTER_MARKER = "// Formatted by Code Formatter Plugin"


class UppercasePlugin(Plugin):
    """Converts prompt text to uppercase."""

    def __init__(self) -> None:
        self.enabled = False

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="uppercase",
            version="0.1.0",
            description="Converts input text to uppercase",
            author="Vibe Coder Team",
        )

    @property
    def capabilities(self) -> list[PluginCapability]:
        return [PluginCapability.pre_processor]

    def initialize(self) -> None:
        self.enabled = True

    def pre_process(self, text: str) -> str:
        if not self.enabled:
            raise PluginProcessingError("Plugin not initialized")
        return text.upper()


class CodeFormatterPlugin(Plugin):
    """Adds a marker line at the top of each fenced code block in responses."""

    def __init__(self) -> None:
        self.enabled = False

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="code-formatter",
            version="0.1.0",
            description="Adds syntax highlighting hints to code blocks",
            author="Vibe Coder Team",
        )

    @property
    def capabilities(self) -> list[PluginCapability]:
        return [PluginCapability.post_processor, PluginCapability.code_formatter]

    def initialize(self) -> None:
        self.enabled = True

    def post_process(self, text: str) -> str:
        if not self.enabled:
            raise PluginProcessingError("Plugin not initialized")
        lines = []
        in_fence = False
        for line in text.split("\n"):
            lines.append(line)
            if line.lstrip().startswith("```"):
                if not in_fence:
                    lines.append(FORMATTER_MARKER)
                in_fence = not in_fence
        return "\n".join(lines)


AVAILABLE_PLUGINS: dict[str, type[Plugin]] = {
    "uppercase": UppercasePlugin,
    "code-formatter": CodeFormatterPlugin,
}
