"""Renderer-ready content blocks and the parsed response container"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Title(BaseModel):
    """A heading."""
    model_config = ConfigDict(frozen=True)
    type:  Literal["title"] = "title"
    level: int = Field(..., ge=1, le=6)
    text:  str = Field(..., min_length=1)


class Paragraph(BaseModel):
    """A block of prose."""
    model_config = ConfigDict(frozen=True)
    type: Literal["paragraph"] = "paragraph"
    text: str = Field(..., min_length=1)


class CodeBlock(BaseModel):
    """Fenced or indented code; language is None for indented or untagged blocks."""
    model_config = ConfigDict(frozen=True)
    type:     Literal["code"] = "code"
    language: Optional[str] = None
    code:     str = Field(..., min_length=1)


class ListBlock(BaseModel):
    """A flat (non-nested) list."""
    model_config = ConfigDict(frozen=True)
    type:  Literal["list"] = "list"
    items: tuple[str, ...] = Field(..., min_length=1)


class Quote(BaseModel):
    """A block quote."""
    model_config = ConfigDict(frozen=True)
    type: Literal["quote"] = "quote"
    text: str = Field(..., min_length=1)


ContentBlock = Annotated[
    Union[Title, Paragraph, CodeBlock, ListBlock, Quote],
    Field(discriminator="type"),
]


class ParsedResponse(BaseModel):
    """Ordered blocks in emission order; an immutable value once built."""
    model_config = ConfigDict(frozen=True)
    blocks: tuple[ContentBlock, ...] = ()

    def titles(self) -> list[tuple[int, str]]:
        """Return (level, text) for every Title, in block order."""
        return [(b.level, b.text) for b in self.blocks if isinstance(b, Title)]

    def code_blocks(self) -> list[tuple[Optional[str], str]]:
        """Return (language, code) for every CodeBlock, in block order."""
        return [(b.language, b.code) for b in self.blocks if isinstance(b, CodeBlock)]

    def __len__(self) -> int:
        return len(self.blocks)
