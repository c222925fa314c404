"""
Configuración y fixtures de los tests.
"""
import os
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Entorno de test: sin latencia simulada
os.environ["MOCK_DELAY_MS"] = "0"
os.environ["MOCK_IMPORT_DELAY_MS"] = "0"
os.environ["REPORT_GENERATION_DELAY_MS"] = "0"
os.environ["JWT_SECRET"] = "test-jwt-secret-for-testing-only"
os.environ["LOG_LEVEL"] = "WARNING"

from mhsurvey.core.security import token_for  # noqa: E402
from mhsurvey.db.store import MemoryStore, build_store  # noqa: E402
from mhsurvey.main import create_app  # noqa: E402
from mhsurvey.models.user import User  # noqa: E402

ADMIN_EMAIL = "admin@empresa.com"
MANAGER_EMAIL = "gerente@empresa.com"
EMPLOYEE_EMAIL = "funcionario@empresa.com"


@pytest.fixture
def store() -> MemoryStore:
    """Store nuevo con los datos de ejemplo para cada test"""
    return build_store()


@pytest.fixture
def empty_store() -> MemoryStore:
    return build_store(seed=False)


@pytest.fixture
def app(store: MemoryStore):
    return create_app(store)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_user(store: MemoryStore) -> User:
    return store.accounts[ADMIN_EMAIL].user


@pytest.fixture
def manager_user(store: MemoryStore) -> User:
    return store.accounts[MANAGER_EMAIL].user


@pytest.fixture
def employee_user(store: MemoryStore) -> User:
    return store.accounts[EMPLOYEE_EMAIL].user


def _headers(user: User) -> dict:
    return {"Authorization": f"Bearer {token_for(user)}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return _headers(admin_user)


@pytest.fixture
def manager_headers(manager_user: User) -> dict:
    return _headers(manager_user)


@pytest.fixture
def employee_headers(employee_user: User) -> dict:
    return _headers(employee_user)


@pytest.fixture
def allow_outside_hours(store: MemoryStore) -> None:
    """Permite responder questionarios a cualquier hora en company-1"""
    current = store.settings["company-1"]
    store.settings["company-1"] = current.model_copy(update={"allow_outside_hours": True})
