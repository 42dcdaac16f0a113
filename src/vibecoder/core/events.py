"""Markup event alphabet consumed by the block accumulator"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ScopeKind(str, Enum):
    """Structural regions of a document that open and close"""
    heading = "heading"
    paragraph = "paragraph"
    code_block = "code_block"
    list = "list"
    item = "item"
    block_quote = "block_quote"


@dataclass(frozen=True)
class StartScope:
    kind:     ScopeKind
    level:    Optional[int] = None    # heading level (1-6); None for other scopes
    info:     str = ""                # fenced code info string
    indented: bool = False            # indented code block (never carries a language)


@dataclass(frozen=True)
class EndScope:
    kind: ScopeKind


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class InlineCode:
    code: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Other:
    """Decorative marker (emphasis, link, table, rule, ...) with no structural meaning."""
    name: str


Event = Union[StartScope, EndScope, Text, InlineCode, SoftBreak, HardBreak, Other]
