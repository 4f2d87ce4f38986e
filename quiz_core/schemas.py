from __future__ import annotations

from datetime import datetime, timezone
from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, Field, field_validator, model_validator


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_epoch_ms(value: datetime) -> int:
    """Convert a timestamp to Unix epoch milliseconds, the on-disk encoding."""
    return int(_ensure_utc(value).timestamp() * 1000)


TBaseSchema = TypeVar("TBaseSchema", bound="BaseSchema")


class BaseSchema(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    def to_dict(self) -> dict[str, object]:
        return self.model_dump()

    @classmethod
    def from_json(cls: type[TBaseSchema], data: str) -> TBaseSchema:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[TBaseSchema], data: Mapping[str, object]) -> TBaseSchema:
        return cls.model_validate(data)


class Comment(BaseSchema):
    content: str
    offset: int
    created_at: datetime = Field(default_factory=_utcnow)

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value: datetime) -> datetime:
        return _ensure_utc(value)


class Player(BaseSchema):
    """A leaderboard row.

    ``rank`` is 1-based with 0 meaning unranked. ``correct_rate`` is the
    fraction of correct votes in [0, 1], not a percentage.
    """

    id: str
    name: str
    score: int = 0
    rank: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    incorrect_count: int = Field(default=0, ge=0)
    correct_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    created_at: datetime = Field(default_factory=_utcnow)

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value: datetime) -> datetime:
        return _ensure_utc(value)


class PlayerVote(BaseSchema):
    player_id: str
    question_id: int
    option_id: int
    time: datetime = Field(default_factory=_utcnow)
    is_answer: bool

    @field_validator("time")
    @classmethod
    def time_utc(cls, value: datetime) -> datetime:
        return _ensure_utc(value)


class OptionConfig(BaseSchema):
    id: int
    text: str


class QuestionConfig(BaseSchema):
    """A question bank entry as it appears in the game configuration."""

    id: int
    text: str
    options: list[OptionConfig] = Field(default_factory=list)
    answers: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def answers_name_options(self) -> "QuestionConfig":
        option_ids = [option.id for option in self.options]
        if len(set(option_ids)) != len(option_ids):
            raise ValueError(f"question {self.id} has duplicate option ids")
        unknown = [answer for answer in self.answers if answer not in option_ids]
        if unknown:
            raise ValueError(f"question {self.id} answers reference unknown options: {unknown}")
        return self

    def is_answer(self, option_id: int) -> bool:
        return option_id in self.answers
