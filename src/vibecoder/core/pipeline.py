"""Pipeline step functions: prompt -> plugins -> backend -> plugins -> parsed blocks"""

from dataclasses import dataclass
from typing import Optional

from sqlmodel import Session

from vibecoder.core.models import ParsedResponse
from vibecoder.core.parse import DEFAULT_PRESET, parse_response
from vibecoder.crud.sessions import save_entry
from vibecoder.plugins.registry import PluginRegistry
from vibecoder.providers.base import AIRequest, AIResponse
from vibecoder.providers.manager import ProviderManager
from vibecoder.session.history import SessionEntry, SessionHistory
from vibecoder.util.logger import get_logger


logger = get_logger(__name__)


@dataclass
class Interaction:
    """Everything produced by one prompt round-trip."""
    request:  AIRequest
    response: AIResponse
    content:  str                # response text after post-processing
    parsed:   ParsedResponse
    entry:    SessionEntry


def run_ask(
    prompt: str,
    manager: ProviderManager,
    registry: PluginRegistry,
    context: Optional[str] = None,
    temperature: float = 0.7,
    max_tokens: Optional[int] = None,
    parser_config: str = DEFAULT_PRESET,
    history: Optional[SessionHistory] = None,
    ) -> Interaction:
    """Run one prompt through the plugin pipeline and the active backend.

    PluginError and ProviderError propagate unchanged; nothing is recorded
    in history unless the whole round-trip succeeds.
    """
    processed = registry.pre_process_all(prompt)
    request = AIRequest(prompt=processed, context=context, temperature=temperature, max_tokens=max_tokens)
    response = manager.send(request)
    content = registry.post_process_all(response.content)
    parsed = parse_response(content, parser_config)
    logger.info("Parsed %d block(s) from %s", len(parsed), response.model)

    entry = SessionEntry(
        user_prompt=prompt,
        ai_response=content,
        provider=manager.active.name,
        model=response.model,
        tokens_used=response.tokens_used,
    )
    if history is not None:
        history.add(entry)
    return Interaction(request=request, response=response, content=content, parsed=parsed, entry=entry)


def run_record(engine, entry: SessionEntry, max_history: int) -> None:
    """Persist one session entry, pruning the stored history to max_history."""
    with Session(engine) as session:
        save_entry(session, entry, max_history)
        session.commit()
