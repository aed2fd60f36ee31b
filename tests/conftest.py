import pytest
from fastapi.testclient import TestClient

from interview_prep.api import deps
from interview_prep.main import app
from interview_prep.services.applications import InMemoryApplicationRepository

from .fakes import FakeLLM, FakeObjectStore


@pytest.fixture
def store():
    return FakeObjectStore()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def repo():
    return InMemoryApplicationRepository()


@pytest.fixture
def client(store, llm, repo):
    app.dependency_overrides[deps.get_object_store] = lambda: store
    app.dependency_overrides[deps.get_llm_client] = lambda: llm
    app.dependency_overrides[deps.get_application_repository] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
