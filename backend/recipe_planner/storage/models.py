from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import Column, DateTime, JSON
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Recipe(SQLModel, table=True):
    __tablename__ = "recipes"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=200)
    ingredients: list[str] = Field(sa_column=Column(JSON, nullable=False))
    instructions: str = ""
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class WeeklyPlanRecord(SQLModel, table=True):
    """Stored plan. plan_data is opaque to the store."""

    __tablename__ = "weekly_plans"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=200)
    plan_data: dict[str, Any] = Field(sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class LLMCallLog(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    prompt_name: str
    prompt_version: str
    model: str
    input_payload: str
    output_payload: str
    latency_ms: int
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
