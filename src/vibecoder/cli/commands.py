"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from vibecoder.config import Settings, load_config
from vibecoder.core.export import write_export
from vibecoder.core.models import CodeBlock, ListBlock, Paragraph, ParsedResponse, Quote, Title
from vibecoder.core.parse import parse_file
from vibecoder.core.pipeline import run_ask, run_record
from vibecoder.crud.database import init_db, make_engine
from vibecoder.crud.sessions import list_entries, search_entries
from vibecoder.plugins.base import PluginError
from vibecoder.plugins.registry import build_registry
from vibecoder.plugins.samples import AVAILABLE_PLUGINS
from vibecoder.providers.base import ProviderError
from vibecoder.providers.manager import build_manager
from vibecoder.util.logger import configure_logging, get_logger


logger = get_logger(__name__)

PREVIEW_WIDTH = 60


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    logger.debug("%s: %s", msg, cause)
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _render_block(block) -> str:
    if isinstance(block, Title):
        return f"{'#' * block.level} {block.text}"
    if isinstance(block, Paragraph):
        return block.text
    if isinstance(block, CodeBlock):
        return f"```{block.language or ''}\n{block.code}\n```"
    if isinstance(block, ListBlock):
        return "\n".join(f"  - {item}" for item in block.items)
    if isinstance(block, Quote):
        return "\n".join(f"> {line}" if line else ">" for line in block.text.splitlines())
    return ""


def _echo_parsed(parsed: ParsedResponse, as_json: bool) -> None:
    if as_json:
        typer.echo(parsed.model_dump_json(indent=2))
        return
    typer.echo("\n\n".join(_render_block(b) for b in parsed.blocks))


def _preview(text: str) -> str:
    line = " ".join(text.split())
    return line if len(line) <= PREVIEW_WIDTH else line[:PREVIEW_WIDTH - 3] + "..."


def main_callback(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR")] = None,
    ):
    """Configure logging before any command runs."""
    settings = _settings(overrides={"log_level": log_level})
    configure_logging(settings.log_level)


def parse_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file to parse")],
    as_json: Annotated[bool, typer.Option("--json", help="Print blocks as JSON")] = False,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Parse a markdown file into titles, paragraphs, code blocks, lists and quotes."""
    settings = _settings(overrides={"parser_config": parser})
    parsed = parse_file(path, settings.parser_config)
    _echo_parsed(parsed, as_json)


def ask_cmd(
    prompt: Annotated[str, typer.Argument(help="Prompt to send to the active provider")],
    context: Annotated[Optional[str], typer.Option("--context", help="Extra context for the request")] = None,
    temperature: Annotated[Optional[float], typer.Option("--temperature", help="Sampling temperature (0-2)")] = None,
    max_tokens: Annotated[Optional[int], typer.Option("--max-tokens", help="Response token budget")] = None,
    provider: Annotated[Optional[int], typer.Option("--provider", help="Index of the provider to use")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print parsed blocks as JSON")] = False,
    no_save: Annotated[bool, typer.Option("--no-save", help="Do not record this interaction")] = False,
    ):
    """Send a prompt through the plugin pipeline and print the parsed response."""
    settings = _settings(overrides={"temperature": temperature, "max_tokens": max_tokens})
    try:
        manager = build_manager(settings)
        registry = build_registry(settings.plugins)
        if provider is not None:
            manager.set_active(provider)
    except (PluginError, ProviderError) as e:
        _fail("Setup failed", e)

    try:
        interaction = run_ask(
            prompt, manager, registry,
            context=context,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            parser_config=settings.parser_config,
        )
    except PluginError as e:
        _fail("Plugin pipeline failed", e)
    except ProviderError as e:
        _fail("Request failed", e)

    _echo_parsed(interaction.parsed, as_json)

    if settings.auto_save and not no_save:
        engine = make_engine(settings.db_url)
        init_db(engine)
        try:
            run_record(engine, interaction.entry, settings.max_history)
        except SQLAlchemyError as e:
            _fail("Saving history failed", e)


def history_cmd(
    search: Annotated[Optional[str], typer.Option("--search", help="Only entries containing this text")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", min=1, help="Show only the most recent N entries")] = None,
    ):
    """List recorded interactions, oldest first."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        entries = search_entries(session, search) if search else list_entries(session)
    if limit:
        entries = entries[-limit:]
    if not entries:
        typer.echo("No session history found.")
        raise typer.Exit(1)
    for e in entries:
        typer.echo(f"{e.timestamp:%Y-%m-%d %H:%M:%S}  {e.id[:8]}  [{e.provider}]  {_preview(e.user_prompt)}")


def export_cmd(
    fmt: Annotated[Optional[str], typer.Option("--format", help="md, json, txt or html")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    name: Annotated[str, typer.Option("--name", help="Export file name (without extension)")] = "session",
    ):
    """Write the recorded session history to a file."""
    settings = _settings(overrides={"export_format": fmt, "output_dir": out})
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        entries = list_entries(session, limit=settings.max_history)
    if not entries:
        typer.echo("No session history to export.")
        raise typer.Exit(1)

    try:
        path = write_export(entries, Path(settings.output_dir), settings.export_format, name)
    except (OSError, ValueError) as e:
        _fail("Export failed", e)
    typer.echo(f"Exported {len(entries)} interaction(s) to {path}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the history database. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        SQLModel.metadata.drop_all(engine)
        typer.echo("Existing data cleared.")
    init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def plugins_cmd():
    """List built-in plugins; enabled ones are marked with '*' in run order."""
    settings = _settings()
    for name, cls in AVAILABLE_PLUGINS.items():
        meta = cls().metadata
        marker = "*" if name in settings.plugins else " "
        typer.echo(f"{marker} {name:<16} {meta.version:<8} {meta.description}")


def providers_cmd():
    """List configured providers; the active one is marked with '*'."""
    settings = _settings()
    try:
        manager = build_manager(settings)
    except ProviderError as e:
        _fail("Setup failed", e)
    for i, name in enumerate(manager.list_providers()):
        marker = "*" if i == manager.active_index else " "
        typer.echo(f"{marker} {i}  {name}")
