"""Block accumulator: fold a markup event sequence into a ParsedResponse

Scopes are tracked as an explicit stack of frames, each owning its own text
buffer. Text-bearing events only ever touch the frame on top of the stack,
so a paragraph nested in a list item or quote cannot clobber its parent.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from vibecoder.core.events import (
    EndScope, Event, HardBreak, InlineCode, ScopeKind, SoftBreak, StartScope, Text,
)
from vibecoder.core.models import CodeBlock, ContentBlock, ListBlock, Paragraph, ParsedResponse, Quote, Title
from vibecoder.util.logger import get_logger


logger = get_logger(__name__)

TEXT_SCOPES = frozenset({
    ScopeKind.heading,
    ScopeKind.paragraph,
    ScopeKind.code_block,
    ScopeKind.item,
    ScopeKind.block_quote,
})

# Containers that absorb the text of paragraphs nested inside them.
MERGE_SEPARATORS: dict[ScopeKind, str] = {
    ScopeKind.item:        " ",
    ScopeKind.block_quote: "\n\n",
}


@dataclass
class _Frame:
    kind:     ScopeKind
    text:     str = ""
    level:    int = 1
    language: Optional[str] = None
    items:    list[str] = field(default_factory=list)


def _language(event: StartScope) -> Optional[str]:
    """Trimmed info string for fenced blocks; None when blank or indented."""
    if event.indented:
        return None
    return event.info.strip() or None


def _clamp_level(level: Optional[int]) -> int:
    return min(max(level or 1, 1), 6)


class _Accumulator:
    """One-shot state for a single accumulation pass."""

    def __init__(self) -> None:
        self.stack: list[_Frame] = []
        self.blocks: list[ContentBlock] = []

    # --- helpers ---

    def _top(self) -> Optional[_Frame]:
        return self.stack[-1] if self.stack else None

    def _nearest(self, kinds) -> Optional[_Frame]:
        for frame in reversed(self.stack):
            if frame.kind in kinds:
                return frame
        return None

    def _append(self, text: str) -> None:
        frame = self._top()
        if frame is not None and frame.kind in TEXT_SCOPES:
            frame.text += text

    # --- scope transitions ---

    def start(self, event: StartScope) -> None:
        frame = _Frame(kind=event.kind)
        if event.kind == ScopeKind.heading:
            frame.level = _clamp_level(event.level)
        elif event.kind == ScopeKind.code_block:
            frame.language = _language(event)
        self.stack.append(frame)

    def end(self, event: EndScope) -> None:
        index = next(
            (i for i in range(len(self.stack) - 1, -1, -1) if self.stack[i].kind == event.kind),
            None,
        )
        if index is None:
            return
        abandoned = self.stack[index + 1:]
        if abandoned:
            logger.debug("Dropping unterminated scopes: %s", [f.kind.value for f in abandoned])
        del self.stack[index + 1:]
        self._close(self.stack.pop())

    def _close(self, frame: _Frame) -> None:
        text = frame.text.strip()

        if frame.kind == ScopeKind.heading:
            if text:
                self.blocks.append(Title(level=frame.level, text=text))

        elif frame.kind == ScopeKind.paragraph:
            if not text:
                return
            container = self._nearest(MERGE_SEPARATORS)
            if container is None:
                self.blocks.append(Paragraph(text=text))
            else:
                if container.text.strip():
                    container.text += MERGE_SEPARATORS[container.kind]
                container.text += text

        elif frame.kind == ScopeKind.code_block:
            code = frame.text.rstrip()
            if code.strip():
                self.blocks.append(CodeBlock(language=frame.language, code=code))

        elif frame.kind == ScopeKind.list:
            if frame.items:
                self.blocks.append(ListBlock(items=tuple(frame.items)))

        elif frame.kind == ScopeKind.item:
            parent = self._nearest({ScopeKind.list})
            if parent is None:
                logger.debug("Dropping list item outside of a list: %r", text)
            elif text:
                parent.items.append(text)

        elif frame.kind == ScopeKind.block_quote:
            if text:
                self.blocks.append(Quote(text=text))

    # --- inline events ---

    def text(self, event: Text) -> None:
        self._append(event.text)

    def inline_code(self, event: InlineCode) -> None:
        self._append(f"`{event.code}`")

    def line_break(self) -> None:
        frame = self._top()
        if frame is None or frame.kind not in TEXT_SCOPES:
            return
        if frame.kind == ScopeKind.code_block:
            frame.text += "\n"
        elif frame.text:
            frame.text += " "

    def feed(self, event: Event) -> None:
        if isinstance(event, StartScope):
            self.start(event)
        elif isinstance(event, EndScope):
            self.end(event)
        elif isinstance(event, Text):
            self.text(event)
        elif isinstance(event, InlineCode):
            self.inline_code(event)
        elif isinstance(event, (SoftBreak, HardBreak)):
            self.line_break()
        # anything else is a decorative marker: dropped

    def finish(self) -> ParsedResponse:
        if self.stack:
            logger.debug("Abandoning unterminated scopes: %s", [f.kind.value for f in self.stack])
        return ParsedResponse(blocks=tuple(self.blocks))


def accumulate(events: Iterable[Event]) -> ParsedResponse:
    """Fold events into a ParsedResponse in a single forward pass.

    Total function: never raises on malformed input. Scopes left open when
    the sequence ends are dropped without emitting a block, as are end
    events with no matching open scope.
    """
    acc = _Accumulator()
    for event in events:
        acc.feed(event)
    return acc.finish()
