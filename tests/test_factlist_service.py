"""
Unit tests for FactListService (no HTTP layer).
"""
from datetime import datetime, timezone

import pytest

from app.core.errors import (
    FactAlreadyExistsError,
    FactNotFoundError,
    FactServiceError,
)
from app.models.fact import Fact, ZERO_TIME
from app.services.factlist import FactListService


class BrokenRepository:
    """Every call fails the way an unreachable store would."""

    def __init__(self, exc=None):
        self.exc = exc or ConnectionError("store unreachable")

    def insert(self, fact):
        raise self.exc

    def find_all(self):
        raise self.exc

    def find_by_id(self, fact_id):
        raise self.exc

    def update(self, fact):
        raise self.exc

    def delete_by_id(self, fact_id):
        raise self.exc


class TestSave:
    def test_assigns_positive_id(self, service):
        fact = Fact(question="what is your github username?", answer="markhaur")
        saved = service.save(fact)
        assert saved.id > 0
        assert saved.question == fact.question
        assert saved.answer == fact.answer
        assert saved.created_at == ZERO_TIME

    def test_does_not_mutate_argument(self, service):
        fact = Fact(question="q", answer="a")
        service.save(fact)
        assert fact.id == 0

    def test_collision_is_wrapped(self, service):
        service.save(Fact(id=1, question="q", answer="a"))
        with pytest.raises(FactServiceError) as exc_info:
            service.save(Fact(id=1, question="q", answer="a"))
        assert exc_info.value.message == "could not save fact: fact already exists"
        assert isinstance(exc_info.value.cause, FactAlreadyExistsError)
        assert exc_info.value.http_status == 500

    def test_repository_failure_is_wrapped(self):
        with pytest.raises(FactServiceError, match="could not save fact: store unreachable"):
            FactListService(BrokenRepository()).save(Fact(question="q", answer="a"))


class TestList:
    def test_lists_in_save_order(self, service):
        expected = [
            Fact(question="what is your github username?", answer="markhaur"),
            Fact(question="what's your favourite language?", answer="Python"),
            Fact(question="what's the name of current project?", answer="trivia"),
        ]
        for fact in expected:
            service.save(fact)
        got = service.list()
        assert [(f.question, f.answer) for f in got] == [(f.question, f.answer) for f in expected]
        assert all(f.id > 0 for f in got)

    def test_empty(self, service):
        assert service.list() == []

    def test_repository_failure_is_wrapped(self):
        with pytest.raises(FactServiceError, match="could not list all facts"):
            FactListService(BrokenRepository()).list()


class TestUpdate:
    def test_existing_is_replaced(self, service):
        saved = service.save(Fact(question="old", answer="old"))
        ts = datetime(2023, 3, 14, 15, 9, 26, tzinfo=timezone.utc)
        fact, created = service.update(Fact(id=saved.id, question="new", answer="new", created_at=ts))
        assert created is False
        assert fact == Fact(id=saved.id, question="new", answer="new", created_at=ts)
        assert service.list() == [fact]

    def test_missing_is_created_with_given_id(self, service):
        fact, created = service.update(Fact(id=1337, question="q", answer="a"))
        assert created is True
        assert fact.id == 1337
        assert [f.id for f in service.list()] == [1337]

    def test_second_update_of_created_fact_is_not_a_create(self, service):
        service.update(Fact(id=5, question="q", answer="a"))
        _, created = service.update(Fact(id=5, question="q2", answer="a2"))
        assert created is False

    def test_update_failure_is_wrapped(self):
        with pytest.raises(FactServiceError, match="could not update fact"):
            FactListService(BrokenRepository()).update(Fact(id=1, question="q", answer="a"))

    def test_failed_fallback_insert_is_wrapped(self):
        class RacingRepository:
            """Another writer claims the ID between update and insert."""

            def update(self, fact):
                raise FactNotFoundError(fact.id)

            def insert(self, fact):
                raise FactAlreadyExistsError(fact.id)

        with pytest.raises(FactServiceError, match="could not create fact: fact already exists"):
            FactListService(RacingRepository()).update(Fact(id=3, question="q", answer="a"))


class TestRemove:
    def test_remove(self, service):
        fact = service.save(Fact(question="q", answer="a"))
        service.remove(fact.id)
        assert service.list() == []

    def test_not_found_passes_through_unwrapped(self, service):
        with pytest.raises(FactNotFoundError):
            service.remove(404)

    def test_other_failures_are_wrapped(self):
        with pytest.raises(FactServiceError, match="could not remove fact"):
            FactListService(BrokenRepository()).remove(1)
