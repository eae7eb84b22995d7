import os

# Avant tout import de l'app : pas d'écho SQL, pas de seed au démarrage
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.core.config import DEFAULT_SEED_PATH
from app.db.session import build_engine, get_session, init_db
from app.db.seed import load_seed_baseline, seed_all
from app.db.repositories.roles import RoleRepository
from app.db.repositories.users import UserRepository
from app.features.users.admin import UserAdminService
from app.features.users.services import UserService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "12345678"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(scope="session")
def baseline():
    return load_seed_baseline(DEFAULT_SEED_PATH)


@pytest.fixture
def seeded_session(session, baseline):
    seed_all(session, baseline)
    return session


@pytest.fixture
def user_service(session):
    return UserService(UserRepository(session), RoleRepository(session))


@pytest.fixture
def admin_service(session, user_service):
    return UserAdminService(users=user_service, role_repo=RoleRepository(session))


# -----------------------------
# HTTP
# -----------------------------
@pytest.fixture
def api_app(engine):
    from app.main import app

    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_engine(engine, baseline):
    with Session(engine) as session:
        seed_all(session, baseline)
    return engine


@pytest.fixture
def client(api_app, seeded_engine):
    return TestClient(api_app)


def sign_in(client: TestClient, username: str, password: str) -> dict:
    resp = client.post("/api/auth/sign-in", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def register(client: TestClient, username: str, password: str = "secret123", **extra) -> dict:
    body = {"username": username, "email": f"{username}@example.com", "password": password, **extra}
    resp = client.post("/api/users", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def admin_headers(client):
    return sign_in(client, ADMIN_USERNAME, ADMIN_PASSWORD)
