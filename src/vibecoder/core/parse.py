"""Markdown text to ParsedResponse: markdown-it tokenization plus block accumulation"""

from pathlib import Path

from markdown_it import MarkdownIt

from vibecoder.core.accumulate import accumulate
from vibecoder.core.models import ParsedResponse
from vibecoder.core.tokens import iter_events


DEFAULT_PRESET = 'gfm-like'


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def parse_response(markdown: str, parser_config: str = DEFAULT_PRESET) -> ParsedResponse:
    """Parse a markdown-formatted response into titles, paragraphs, code, lists and quotes."""
    tokens = _make_parser(parser_config).parse(markdown)
    return accumulate(iter_events(tokens))


def parse_file(path: Path, parser_config: str = DEFAULT_PRESET) -> ParsedResponse:
    """Parse a single UTF-8 markdown file."""
    return parse_response(path.read_text(encoding='utf-8'), parser_config)
