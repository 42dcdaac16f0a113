"""Mock backend returning a canned markdown response"""

from typing import Optional

from vibecoder.providers.base import (
    AIProvider, AIRequest, AIResponse, ProviderConfig, ProviderNotConfiguredError,
)
from vibecoder.util.logger import get_logger


logger = get_logger(__name__)

MOCK_TOKENS_USED = 150

RESPONSE_TEMPLATE = """\
# AI Response

You asked: {prompt}

## Code Example

```python
def hello_world():
    print("Hello from Vibe Coder!")
```

## Explanation

This is a mock response demonstrating the parsing capabilities.
"""


class MockProvider(AIProvider):
    def __init__(self, name: str = "Mock Provider"):
        self._name = name
        self.config: Optional[ProviderConfig] = None

    @property
    def name(self) -> str:
        return self._name

    def configure(self, config: ProviderConfig) -> None:
        self.config = config
        logger.debug("Configured %s with model %s", self._name, config.model)

    def is_ready(self) -> bool:
        return self.config is not None

    def send_request(self, request: AIRequest) -> AIResponse:
        if not self.is_ready():
            raise ProviderNotConfiguredError()
        return AIResponse(
            content=RESPONSE_TEMPLATE.format(prompt=request.prompt),
            model=self.config.model,
            tokens_used=MOCK_TOKENS_USED,
        )
