"""
Fact list application service.

Rules:
- The repository owns the facts; this layer only orchestrates calls.
- Repository failures leave this layer wrapped in FactServiceError, except
  FactNotFoundError from `remove`, which passes through so the transport can
  answer 404.
- `update` is update-or-create: a miss falls back to an insert that keeps the
  caller's ID. The two repository calls are separate lock acquisitions, so a
  concurrent insert of the same ID can slip in between them; the fallback
  then fails with a wrapped "already exists".

Public API
----------
FactListService(repository)       .save / .list / .update / .remove
LoggingMiddleware(logger)         -> Middleware
chain(service, *middlewares)      -> Service
"""
from __future__ import annotations

import time
from typing import Callable, Protocol

from app.core.errors import FactNotFoundError, FactServiceError
from app.models.fact import Fact
from app.repositories.base import FactRepository


class Service(Protocol):
    def save(self, fact: Fact) -> Fact: ...

    def list(self) -> list[Fact]: ...

    def update(self, fact: Fact) -> tuple[Fact, bool]: ...

    def remove(self, fact_id: int) -> None: ...


Middleware = Callable[[Service], Service]


class FactListService:
    def __init__(self, repository: FactRepository):
        self.repository = repository

    def save(self, fact: Fact) -> Fact:
        fact = fact.copy()
        try:
            self.repository.insert(fact)
        except Exception as exc:
            raise FactServiceError("save fact", exc) from exc
        return fact

    def list(self) -> list[Fact]:
        try:
            return self.repository.find_all()
        except Exception as exc:
            raise FactServiceError("list all facts", exc) from exc

    def update(self, fact: Fact) -> tuple[Fact, bool]:
        """Return the stored fact and whether it had to be created."""
        fact = fact.copy()
        try:
            self.repository.update(fact)
        except FactNotFoundError:
            try:
                self.repository.insert(fact)
            except Exception as exc:
                raise FactServiceError("create fact", exc) from exc
            return fact, True
        except Exception as exc:
            raise FactServiceError("update fact", exc) from exc
        return fact, False

    def remove(self, fact_id: int) -> None:
        try:
            self.repository.delete_by_id(fact_id)
        except FactNotFoundError:
            raise
        except Exception as exc:
            raise FactServiceError("remove fact", exc) from exc


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class LoggingService:
    """Logs every call made to the wrapped service; never changes results."""

    def __init__(self, logger, service: Service):
        self.logger = logger
        self.service = service

    def _log(self, method: str, begin: float, err: Exception | None, **fields) -> None:
        self.logger.info(
            "service call",
            method=method,
            **fields,
            took=round(time.perf_counter() - begin, 6),
            err=str(err) if err is not None else None,
        )

    def save(self, fact: Fact) -> Fact:
        begin, err = time.perf_counter(), None
        try:
            return self.service.save(fact)
        except Exception as exc:
            err = exc
            raise
        finally:
            self._log("save", begin, err, question=fact.question)

    def list(self) -> list[Fact]:
        begin, err = time.perf_counter(), None
        try:
            return self.service.list()
        except Exception as exc:
            err = exc
            raise
        finally:
            self._log("list", begin, err)

    def update(self, fact: Fact) -> tuple[Fact, bool]:
        begin, err = time.perf_counter(), None
        try:
            return self.service.update(fact)
        except Exception as exc:
            err = exc
            raise
        finally:
            self._log("update", begin, err, id=fact.id, question=fact.question)

    def remove(self, fact_id: int) -> None:
        begin, err = time.perf_counter(), None
        try:
            return self.service.remove(fact_id)
        except Exception as exc:
            err = exc
            raise
        finally:
            self._log("remove", begin, err, id=fact_id)


class LoggingMiddleware:
    """Middleware wrapping a service in LoggingService."""

    def __init__(self, logger):
        self.logger = logger

    def __call__(self, service: Service) -> Service:
        return LoggingService(self.logger, service)


def chain(service: Service, *middlewares: Middleware) -> Service:
    """Wrap `service` so the first middleware listed is the outermost."""
    for middleware in reversed(middlewares):
        service = middleware(service)
    return service
