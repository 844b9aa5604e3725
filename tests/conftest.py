"""
Shared pytest fixtures.

Every test gets a fresh store. The SQL backend runs on an in-memory SQLite
database so no external database is required.
"""
import pytest
import structlog
from fastapi.testclient import TestClient
from structlog.testing import CapturingLogger

from app.core.config import Settings
from app.db.base import make_engine
from app.main import create_app
from app.repositories import InMemoryFactRepository, SQLFactRepository
from app.services.factlist import FactListService


def _passthrough(logger, method_name, event_dict):
    return event_dict


def make_logger():
    """A structlog logger that records calls instead of writing them."""
    capture = CapturingLogger()
    logger = structlog.wrap_logger(capture, processors=[_passthrough], wrapper_class=structlog.BoundLogger)
    return logger, capture


@pytest.fixture(params=["inmem", "sql"])
def repository(request):
    if request.param == "inmem":
        return InMemoryFactRepository()
    return SQLFactRepository(make_engine("sqlite://"))


@pytest.fixture()
def inmem_repository():
    return InMemoryFactRepository()


@pytest.fixture()
def service(inmem_repository):
    return FactListService(inmem_repository)


@pytest.fixture()
def captured():
    return make_logger()


@pytest.fixture()
def app(inmem_repository, captured):
    logger, _ = captured
    return create_app(settings=Settings(), repository=inmem_repository, logger=logger)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
