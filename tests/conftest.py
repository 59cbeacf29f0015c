from typing import Callable, Dict

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cyclestore.core.settings import Settings
from cyclestore.db.session import Database
from cyclestore.main import create_app
from cyclestore.services.users import create_user


DEFAULT_PASSWORD = "secretpass"


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret",
        api_prefix="/api",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI):
    # Entering the client runs the lifespan, which opens app.state.database
    with TestClient(app) as c:
        yield c


@pytest.fixture
def database(app: FastAPI, client: TestClient) -> Database:
    return app.state.database


@pytest.fixture
def make_user(database: Database) -> Callable[..., int]:
    """Provision an account directly in the store and return its id."""

    def _make_user(email: str, name: str = "Tester", role: str = "user", password: str = DEFAULT_PASSWORD) -> int:
        db = database.session()
        try:
            return create_user(db, email, password, name, role).id
        finally:
            db.close()

    return _make_user


@pytest.fixture
def login(client: TestClient) -> Callable[..., Dict[str, str]]:
    """Log in through the API and return ready-to-use Authorization headers."""

    def _login(email: str, password: str = DEFAULT_PASSWORD) -> Dict[str, str]:
        r = client.post("/api/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return bearer(r.json()["token"])

    return _login
