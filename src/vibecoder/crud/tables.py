"""Database table definitions for persisted session entries"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel


class SessionRecord(SQLModel, table=True):
    """A stored prompt/response interaction"""
    __tablename__ = "session_entries"
    id: str = Field(..., primary_key=True)
    timestamp: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False, index=True))
    user_prompt: str = Field(..., sa_column=Column(Text, nullable=False))
    ai_response: str = Field(..., sa_column=Column(Text, nullable=False))
    provider: str = Field(..., nullable=False)
    model: Optional[str] = Field(default=None)
    tokens_used: Optional[int] = Field(default=None)
