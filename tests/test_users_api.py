import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.api.v1.dependencies import get_current_caller, get_user_admin_service
from app.db.models.users import User
from app.features.users.admin import Caller
from app.security.password import verify_password

from conftest import ADMIN_PASSWORD, register, sign_in


def _stored_hash(engine, username):
    with Session(engine) as session:
        return session.exec(select(User).where(User.username == username)).one().hashed_password


def _admin_id(client, headers):
    return client.get("/api/users/email/admin@gmail.com", headers=headers).json()["id"]


# -----------------------------
# Création
# -----------------------------
def test_register_returns_201_without_password(client, seeded_engine):
    body = register(client, "alice")

    assert body["username"] == "alice"
    assert body["avatarUrl"] == "/resources/static/images/avatars/default-avatar.jpg"
    assert body["role"]["roleName"] == "ROLE_USER"
    assert "password" not in body and "hashedPassword" not in body
    assert _stored_hash(seeded_engine, "alice") != "secret123"


@pytest.mark.parametrize("password", ["", None])
def test_register_without_password_is_400(client, password):
    resp = client.post("/api/users", json={"username": "x", "email": "x@example.com", "password": password})
    assert resp.status_code == 400


def test_register_with_role_name(client):
    body = register(client, "boss", role={"roleName": "ROLE_ADMIN"})
    assert body["role"]["roleName"] == "ROLE_ADMIN"


def test_register_with_unknown_role_is_500(client):
    resp = client.post(
        "/api/users",
        json={"username": "x", "email": "x@example.com", "password": "abcdef", "role": {"roleName": "ROLE_GHOST"}},
    )
    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("Error processing request")


def test_register_duplicate_is_409(client):
    register(client, "alice")
    resp = client.post("/api/users", json={"username": "alice", "email": "a2@example.com", "password": "abcdef"})
    assert resp.status_code == 409


# -----------------------------
# Lectures
# -----------------------------
def test_reads_require_authentication(client):
    assert client.get("/api/users").status_code == 401
    assert client.get("/api/users/1").status_code == 401
    assert client.get("/api/users", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_any_authenticated_user_can_read(client):
    register(client, "alice")
    headers = sign_in(client, "alice", "secret123")

    users = client.get("/api/users", headers=headers).json()
    assert [u["username"] for u in users] == ["admin", "alice"]

    by_email = client.get("/api/users/email/alice@example.com", headers=headers)
    assert by_email.status_code == 200
    assert client.get(f"/api/users/{by_email.json()['id']}", headers=headers).status_code == 200


def test_reads_not_found(client, admin_headers):
    assert client.get("/api/users/email/ghost@example.com", headers=admin_headers).status_code == 404
    assert client.get("/api/users/9999", headers=admin_headers).status_code == 404


# -----------------------------
# Rôle
# -----------------------------
def test_update_role_forbidden_for_non_admin(client):
    alice = register(client, "alice")
    headers = sign_in(client, "alice", "secret123")

    resp = client.put(f"/api/users/{alice['id']}/role", json={"roleName": "ROLE_ADMIN"}, headers=headers)

    assert resp.status_code == 403
    assert client.get(f"/api/users/{alice['id']}", headers=headers).json()["role"]["roleName"] == "ROLE_USER"


def test_update_role_as_admin(client, admin_headers):
    alice = register(client, "alice")

    assert client.put(f"/api/users/{alice['id']}/role", json={}, headers=admin_headers).status_code == 400
    assert client.put(
        f"/api/users/{alice['id']}/role", json={"roleName": "ROLE_GHOST"}, headers=admin_headers
    ).status_code == 404
    assert client.put("/api/users/9999/role", json={"roleName": "ROLE_ADMIN"}, headers=admin_headers).status_code == 404

    resp = client.put(f"/api/users/{alice['id']}/role", json={"roleName": "ROLE_ADMIN"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["role"]["roleName"] == "ROLE_ADMIN"


def test_promoted_user_gains_admin_authority(client, admin_headers):
    alice = register(client, "alice")
    bob = register(client, "bob")
    client.put(f"/api/users/{alice['id']}/role", json={"roleName": "ROLE_ADMIN"}, headers=admin_headers)

    alice_headers = sign_in(client, "alice", "secret123")
    assert client.delete(f"/api/users/{bob['id']}", headers=alice_headers).status_code == 200


# -----------------------------
# Suppression
# -----------------------------
def test_delete_forbidden_for_non_admin(client):
    alice = register(client, "alice")
    bob = register(client, "bob")
    headers = sign_in(client, "alice", "secret123")

    assert client.delete(f"/api/users/{bob['id']}", headers=headers).status_code == 403


def test_delete_admin_account_always_forbidden(client, admin_headers):
    admin_id = _admin_id(client, admin_headers)

    resp = client.delete(f"/api/users/{admin_id}", headers=admin_headers)

    assert resp.status_code == 403
    assert client.get(f"/api/users/{admin_id}", headers=admin_headers).status_code == 200


def test_delete_as_admin(client, admin_headers):
    bob = register(client, "bob")

    resp = client.delete(f"/api/users/{bob['id']}", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json() == {"message": "User deleted successfully"}
    assert client.get(f"/api/users/{bob['id']}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/users/{bob['id']}", headers=admin_headers).status_code == 404


# -----------------------------
# Mot de passe
# -----------------------------
def test_change_own_password(client):
    alice = register(client, "alice")
    headers = sign_in(client, "alice", "secret123")

    resp = client.put(
        f"/api/users/{alice['id']}/password",
        json={"currentPassword": "secret123", "newPassword": "n3w-secret"},
        headers=headers,
    )

    assert resp.status_code == 200
    sign_in(client, "alice", "n3w-secret")
    old = client.post("/api/auth/sign-in", json={"username": "alice", "password": "secret123"})
    assert old.status_code == 401


def test_change_someone_else_password_is_forbidden(client, seeded_engine):
    register(client, "alice")
    bob = register(client, "bob")
    headers = sign_in(client, "alice", "secret123")
    before = _stored_hash(seeded_engine, "bob")

    resp = client.put(
        f"/api/users/{bob['id']}/password",
        json={"currentPassword": "secret123", "newPassword": "hacked!!"},
        headers=headers,
    )

    assert resp.status_code == 403
    assert _stored_hash(seeded_engine, "bob") == before


@pytest.mark.parametrize(
    "body",
    [
        {"newPassword": "abcdef"},
        {"currentPassword": "secret123"},
        {"currentPassword": "secret123", "newPassword": "abc"},
        {"currentPassword": "wrong-one", "newPassword": "abcdef"},
    ],
)
def test_change_password_bad_requests(client, seeded_engine, body):
    alice = register(client, "alice")
    headers = sign_in(client, "alice", "secret123")

    resp = client.put(f"/api/users/{alice['id']}/password", json=body, headers=headers)

    assert resp.status_code == 400
    assert verify_password("secret123", _stored_hash(seeded_engine, "alice"))


def test_admin_changes_other_password(client, admin_headers):
    bob = register(client, "bob")

    resp = client.put(
        f"/api/users/{bob['id']}/password",
        json={"currentPassword": "secret123", "newPassword": "reset-by-admin"},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    sign_in(client, "bob", "reset-by-admin")


def test_admin_changes_password_of_missing_user(client, admin_headers):
    resp = client.put(
        "/api/users/9999/password",
        json={"currentPassword": ADMIN_PASSWORD, "newPassword": "abcdef"},
        headers=admin_headers,
    )
    assert resp.status_code == 404


# -----------------------------
# Profil
# -----------------------------
def test_profile_update(client, admin_headers):
    alice = register(client, "alice")
    bob = register(client, "bob")
    headers = sign_in(client, "alice", "secret123")

    resp = client.patch(f"/api/users/{alice['id']}", json={"avatarUrl": "/me.png"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["avatarUrl"] == "/me.png"

    assert client.patch(f"/api/users/{bob['id']}", json={"avatarUrl": "/x.png"}, headers=headers).status_code == 403
    assert client.patch(f"/api/users/{bob['id']}", json={"email": "b@x.org"}, headers=admin_headers).status_code == 200


# -----------------------------
# Filet de sécurité
# -----------------------------
class _ExplodingAdminService:
    def list_users(self):
        raise RuntimeError("boom")


def test_unexpected_error_becomes_500_with_message(api_app, seeded_engine):
    api_app.dependency_overrides[get_user_admin_service] = lambda: _ExplodingAdminService()
    api_app.dependency_overrides[get_current_caller] = lambda: Caller(user_id=1, username="admin", is_admin=True)

    client = TestClient(api_app, raise_server_exceptions=False)
    resp = client.get("/api/users")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Error processing request: boom"}


def test_profile_update_to_taken_email_is_409(client, seeded_engine):
    register(client, "alice")
    bob = register(client, "bob")
    headers = sign_in(client, "bob", "secret123")

    resp = client.patch(f"/api/users/{bob['id']}", json={"email": "alice@example.com"}, headers=headers)

    assert resp.status_code == 409
    assert "SQL" not in resp.json()["detail"]
    with Session(seeded_engine) as session:
        assert session.exec(select(User).where(User.username == "bob")).one().email == "bob@example.com"

    same = client.patch(f"/api/users/{bob['id']}", json={"email": "bob@example.com"}, headers=headers)
    assert same.status_code == 200
