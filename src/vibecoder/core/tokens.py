"""markdown-it token stream to markup event sequence"""

from typing import Iterable, Iterator

from markdown_it.token import Token

from vibecoder.core.events import (
    EndScope, Event, HardBreak, InlineCode, Other, ScopeKind, SoftBreak, StartScope, Text,
)


SCOPE_MAP: dict[str, ScopeKind] = {
    'heading':      ScopeKind.heading,
    'paragraph':    ScopeKind.paragraph,
    'bullet_list':  ScopeKind.list,
    'ordered_list': ScopeKind.list,
    'list_item':    ScopeKind.item,
    'blockquote':   ScopeKind.block_quote,
}


def heading_level(token: Token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def _scope_name(token: Token) -> str:
    """Strip the _open/_close suffix from a nesting token type."""
    return token.type.rsplit('_', 1)[0]


def _inline_events(children: Iterable[Token]) -> Iterator[Event]:
    for child in children:
        if child.type == 'text':
            if child.content:
                yield Text(child.content)
        elif child.type == 'code_inline':
            yield InlineCode(child.content)
        elif child.type == 'softbreak':
            yield SoftBreak()
        elif child.type == 'hardbreak':
            yield HardBreak()
        elif child.type == 'image':
            yield Other(child.type)
            yield from _inline_events(child.children or [])
        else:
            yield Other(child.type)


def _code_events(token: Token, indented: bool) -> Iterator[Event]:
    yield StartScope(ScopeKind.code_block, info='' if indented else token.info, indented=indented)
    yield Text(token.content)
    yield EndScope(ScopeKind.code_block)


def iter_events(tokens: Iterable[Token]) -> Iterator[Event]:
    """Yield markup events for a flat markdown-it block token stream."""
    for tok in tokens:
        if tok.type == 'inline':
            yield from _inline_events(tok.children or [])
        elif tok.type == 'fence':
            yield from _code_events(tok, indented=False)
        elif tok.type == 'code_block':
            yield from _code_events(tok, indented=True)
        elif tok.nesting != 0 and _scope_name(tok) in SCOPE_MAP:
            kind = SCOPE_MAP[_scope_name(tok)]
            if tok.nesting == 1:
                yield StartScope(kind, level=heading_level(tok))
            else:
                yield EndScope(kind)
        else:
            yield Other(tok.type)
