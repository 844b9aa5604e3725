"""
Fact request / response schemas.

POST /fact        → CreateFactRequest → FactResponse
GET  /fact        → list[FactResponse]
PUT  /fact/{id}   → UpdateFactRequest → FactResponse

JSON keys are camelCase on the wire (`createdAt`).
"""
from __future__ import annotations

import re
from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from app.models.fact import Fact, ZERO_TIME

_RFC3339_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?(Z|[+-][0-9]{2}:[0-9]{2})"
)


class _QuestionAnswer(BaseModel):
    question: str = Field(examples=["what is the capital of Peru?"])
    answer: str = Field(examples=["Lima"])

    @field_validator("question", "answer")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class CreateFactRequest(_QuestionAnswer):
    """A new fact; the server assigns its ID."""

    def to_fact(self) -> Fact:
        return Fact(question=self.question, answer=self.answer)


class UpdateFactRequest(_QuestionAnswer):
    """Full replacement of a fact. The ID always comes from the path."""
    model_config = ConfigDict(populate_by_name=True)

    created_at: AwareDatetime = Field(
        default=ZERO_TIME,
        alias="createdAt",
        description="RFC 3339 timestamp. Defaults to 0001-01-01T00:00:00Z.",
    )

    @field_validator("created_at", mode="before")
    @classmethod
    def rfc3339(cls, value):
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not _RFC3339_RE.fullmatch(value):
            raise ValueError("must be an RFC 3339 timestamp")
        return value

    def to_fact(self, fact_id: int) -> Fact:
        return Fact(id=fact_id, question=self.question, answer=self.answer, created_at=self.created_at)


class FactResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    question: str
    answer: str
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_fact(cls, fact: Fact) -> FactResponse:
        return cls(id=fact.id, question=fact.question, answer=fact.answer, created_at=fact.created_at)
