"""
Process-local fact store.

Facts live in an ordered list alongside a set of IDs in use. Readers share a
lock; writers hold it exclusively. `update` and `delete_by_id` scan the list,
so mutations cost O(n) in the number of stored facts.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from app.core.errors import FactAlreadyExistsError, FactNotFoundError
from app.models.fact import Fact


class ReadWriteLock:
    """Many concurrent readers or one writer, never both.

    Waiting writers block new readers so a steady stream of reads cannot
    starve a write.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class InMemoryFactRepository:
    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._facts: list[Fact] = []
        self._used_ids: set[int] = set()
        self._counter = 0

    def insert(self, fact: Fact) -> None:
        with self._lock.write():
            if fact.id > 0:
                if fact.id in self._used_ids:
                    raise FactAlreadyExistsError(fact.id)
            else:
                fact.id = self._next_id()
            self._used_ids.add(fact.id)
            self._facts.append(fact.copy())

    def _next_id(self) -> int:
        self._counter += 1
        while self._counter in self._used_ids:
            self._counter += 1
        return self._counter

    def find_all(self) -> list[Fact]:
        with self._lock.read():
            return [f.copy() for f in self._facts]

    def find_by_id(self, fact_id: int) -> Fact:
        with self._lock.read():
            for f in self._facts:
                if f.id == fact_id:
                    return f.copy()
        raise FactNotFoundError(fact_id)

    def update(self, fact: Fact) -> None:
        with self._lock.write():
            for i, f in enumerate(self._facts):
                if f.id == fact.id:
                    self._facts[i] = fact.copy()
                    return
        raise FactNotFoundError(fact.id)

    def delete_by_id(self, fact_id: int) -> None:
        with self._lock.write():
            for i, f in enumerate(self._facts):
                if f.id == fact_id:
                    del self._facts[i]
                    self._used_ids.discard(fact_id)
                    return
        raise FactNotFoundError(fact_id)
