"""Unit tests for core/pipeline.py"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from vibecoder.core.models import CodeBlock, Title
from vibecoder.core.pipeline import run_ask, run_record
from vibecoder.crud import tables  # noqa: F401
from vibecoder.crud.sessions import list_entries
from vibecoder.plugins.base import PluginProcessingError
from vibecoder.plugins.registry import PluginRegistry
from vibecoder.plugins.samples import FORMATTER_MARKER, CodeFormatterPlugin, UppercasePlugin
from vibecoder.providers.base import AIResponse, ProviderConfig, ProviderNotConfiguredError
from vibecoder.providers.manager import ProviderManager
from vibecoder.providers.mock import MockProvider
from vibecoder.session.history import SessionHistory


class RecordingProvider(MockProvider):
    """Mock backend that remembers every request it receives."""

    def __init__(self):
        super().__init__("Recorder")
        self.requests = []
        self.configure(ProviderConfig(name="Recorder", model="rec-1"))

    def send_request(self, request):
        self.requests.append(request)
        return AIResponse(content="# Done\n\n```sh\nls\n```", model="rec-1", tokens_used=3)


class FailingPlugin(UppercasePlugin):
    def pre_process(self, text: str) -> str:
        raise PluginProcessingError("boom")


@pytest.fixture(name="provider")
def provider_fixture():
    return RecordingProvider()


@pytest.fixture(name="manager")
def manager_fixture(provider):
    m = ProviderManager()
    m.add_provider(provider)
    return m


def test_run_ask_parses_response(manager):
    interaction = run_ask("list files", manager, PluginRegistry())
    assert interaction.parsed.blocks == (Title(level=1, text="Done"), CodeBlock(language="sh", code="ls"))
    assert interaction.entry.provider == "Recorder"
    assert interaction.entry.model == "rec-1"
    assert interaction.entry.tokens_used == 3


def test_run_ask_forwards_request_options(manager, provider):
    run_ask("p", manager, PluginRegistry(), context="ctx", temperature=0.2, max_tokens=50)
    request = provider.requests[0]
    assert (request.context, request.temperature, request.max_tokens) == ("ctx", 0.2, 50)


def test_pre_processors_change_request_not_entry(manager, provider):
    """The backend sees the processed prompt; history keeps what the user typed."""
    registry = PluginRegistry()
    registry.register(UppercasePlugin())
    interaction = run_ask("hello", manager, registry)
    assert provider.requests[0].prompt == "HELLO"
    assert interaction.entry.user_prompt == "hello"


def test_post_processors_feed_parser(manager):
    registry = PluginRegistry()
    registry.register(CodeFormatterPlugin())
    interaction = run_ask("x", manager, registry)
    assert FORMATTER_MARKER in interaction.content
    assert interaction.entry.ai_response == interaction.content
    assert interaction.parsed.code_blocks() == [("sh", f"{FORMATTER_MARKER}\nls")]


def test_plugin_failure_skips_backend_and_history(manager, provider):
    registry = PluginRegistry()
    registry.register(FailingPlugin())
    history = SessionHistory(10)
    with pytest.raises(PluginProcessingError, match="boom"):
        run_ask("x", manager, registry, history=history)
    assert provider.requests == []
    assert len(history) == 0


def test_unconfigured_provider_propagates():
    manager = ProviderManager()
    manager.add_provider(MockProvider())
    history = SessionHistory(10)
    with pytest.raises(ProviderNotConfiguredError):
        run_ask("x", manager, PluginRegistry(), history=history)
    assert len(history) == 0


def test_success_adds_to_history(manager):
    history = SessionHistory(10)
    interaction = run_ask("x", manager, PluginRegistry(), history=history)
    assert history.entries() == [interaction.entry]


def test_run_record_commits(manager, tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path}/history.db")
    SQLModel.metadata.create_all(engine)
    interaction = run_ask("x", manager, PluginRegistry())
    run_record(engine, interaction.entry, max_history=10)
    with Session(engine) as session:
        assert [e.id for e in list_entries(session)] == [interaction.entry.id]
