"""
SQLAlchemy-backed fact store.

Mirrors the in-memory store: IDs are allocated by scanning upward from a
counter past IDs already in the table, and `find_all` returns facts in
insertion order via the `position` column. Writes are serialized inside the
process with the same readers/writer lock the in-memory store uses, so ID
allocation and the existence check run without interleaving.
"""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.errors import FactAlreadyExistsError, FactNotFoundError
from app.db.base import Base, make_session_factory
from app.models.fact import Fact, FactRecord
from app.repositories.inmem import ReadWriteLock


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_fact(row: FactRecord) -> Fact:
    return Fact(
        id=row.id,
        question=row.question,
        answer=row.answer,
        # SQLite drops the offset; values are always written as UTC.
        created_at=_to_utc(row.created_at),
    )


class SQLFactRepository:
    def __init__(self, engine: Engine, session_factory: sessionmaker | None = None) -> None:
        self._engine = engine
        self._session_factory = session_factory or make_session_factory(engine)
        self._lock = ReadWriteLock()
        self._counter = 0
        Base.metadata.create_all(bind=engine, tables=[FactRecord.__table__])

    def _session(self) -> Session:
        return self._session_factory()

    def insert(self, fact: Fact) -> None:
        with self._lock.write(), self._session() as db:
            if fact.id > 0:
                if db.get(FactRecord, fact.id) is not None:
                    raise FactAlreadyExistsError(fact.id)
                new_id = fact.id
            else:
                new_id = self._next_id(db)
            position = (db.scalar(select(func.max(FactRecord.position))) or 0) + 1
            db.add(FactRecord(
                id=new_id,
                position=position,
                question=fact.question,
                answer=fact.answer,
                created_at=_to_utc(fact.created_at),
            ))
            db.commit()
            fact.id = new_id

    def _next_id(self, db: Session) -> int:
        self._counter += 1
        while db.get(FactRecord, self._counter) is not None:
            self._counter += 1
        return self._counter

    def find_all(self) -> list[Fact]:
        with self._lock.read(), self._session() as db:
            rows = db.scalars(select(FactRecord).order_by(FactRecord.position)).all()
            return [_to_fact(r) for r in rows]

    def find_by_id(self, fact_id: int) -> Fact:
        with self._lock.read(), self._session() as db:
            row = db.get(FactRecord, fact_id)
            if row is None:
                raise FactNotFoundError(fact_id)
            return _to_fact(row)

    def update(self, fact: Fact) -> None:
        with self._lock.write(), self._session() as db:
            row = db.get(FactRecord, fact.id)
            if row is None:
                raise FactNotFoundError(fact.id)
            row.question = fact.question
            row.answer = fact.answer
            row.created_at = _to_utc(fact.created_at)
            db.commit()

    def delete_by_id(self, fact_id: int) -> None:
        with self._lock.write(), self._session() as db:
            result = db.execute(delete(FactRecord).where(FactRecord.id == fact_id))
            if result.rowcount == 0:
                db.rollback()
                raise FactNotFoundError(fact_id)
            db.commit()
