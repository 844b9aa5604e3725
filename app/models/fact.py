from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

# The zero value of a fact timestamp, serialized as 0001-01-01T00:00:00Z.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass
class Fact:
    """A trivia question and its answer.

    An `id` of 0 asks the repository to assign one on insert.
    """
    id: int = 0
    question: str = ""
    answer: str = ""
    created_at: datetime = field(default=ZERO_TIME)

    def copy(self, **changes) -> Fact:
        return dataclasses.replace(self, **changes)


class FactRecord(Base):
    __tablename__ = "facts"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    # Insertion order; stays put when the row is updated.
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
