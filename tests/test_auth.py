import datetime as dt

import pytest

from cyclestore.core.errors import ValidationError
from cyclestore.models.user import User
from cyclestore.schemas.auth import Identity
from cyclestore.services.users import create_user
from cyclestore.security.jwt_tokens import issue_token, verify_token


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_login_returns_token_and_user(client, make_user, settings):
    user_id = make_user("a@b.com", name="Ana", password="secret")

    r = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret"})
    assert r.status_code == 200
    body = r.json()
    assert body["error"] is False
    assert body["message"] == "Login exitoso"
    assert body["user"] == {"id": user_id, "email": "a@b.com", "name": "Ana", "role": "user"}
    assert verify_token(body["token"], settings).id == user_id


def test_login_wrong_password_is_401(client, make_user):
    make_user("a@b.com", password="secret")
    r = client.post("/api/auth/login", json={"email": "a@b.com", "password": "not-it"})
    assert r.status_code == 401
    assert r.json() == {"error": True, "message": "Credenciales invalidas"}


def test_login_unknown_email_gives_same_answer(client):
    r = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
    assert r.status_code == 401
    assert r.json() == {"error": True, "message": "Credenciales invalidas"}


def test_login_requires_both_fields(client):
    r = client.post("/api/auth/login", json={"email": "a@b.com"})
    assert r.status_code == 400
    assert r.json() == {"error": True, "message": "Email y password son requeridos"}


def test_login_rejects_malformed_email(client):
    r = client.post("/api/auth/login", json={"email": "not-an-email", "password": "secret"})
    assert r.status_code == 400
    assert r.json()["message"] == "Formato de email invalido"


def test_every_provisionable_address_can_log_in(client, make_user, database):
    make_user("Admin@Taller", password="secretpass")
    r = client.post("/api/auth/login", json={"email": " admin@taller ", "password": "secretpass"})
    assert r.status_code == 200
    assert r.json()["user"]["email"] == "admin@taller"

    db = database.session()
    try:
        with pytest.raises(ValidationError) as ei:
            create_user(db, "admin@biciros.local", "secretpass", "Ana")
        assert ei.value.message == "Formato de email invalido"
        assert db.query(User).filter(User.email == "admin@biciros.local").first() is None
    finally:
        db.close()

    r = client.post("/api/auth/login", json={"email": "admin@biciros.local", "password": "secretpass"})
    assert r.status_code == 400
    assert r.json()["message"] == "Formato de email invalido"


def test_login_with_non_json_body_is_400(client):
    r = client.post("/api/auth/login", content=b"email=a", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] is True


def test_me_returns_stored_profile(client, make_user, login):
    user_id = make_user("me@example.com", name="Me Myself")
    r = client.get("/api/auth/me", headers=login("me@example.com"))
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["id"] == user_id
    assert user["name"] == "Me Myself"
    assert user["role"] == "user"
    assert "created_at" in user
    assert "password_hash" not in user


def test_me_without_header(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json() == {"error": True, "message": "Token de acceso no proporcionado"}
    assert r.headers["www-authenticate"] == "Bearer"


def test_me_with_wrong_scheme(client):
    r = client.get("/api/auth/me", headers={"Authorization": "Token abc"})
    assert r.status_code == 401
    assert r.json()["message"] == "Formato de token invalido"


def test_me_with_expired_token(client, make_user, settings):
    user_id = make_user("old@example.com")
    identity = Identity(id=user_id, email="old@example.com", name="Tester", role="user")
    token = issue_token(identity, settings, expires_delta=dt.timedelta(minutes=-1))
    r = client.get("/api/auth/me", headers=bearer(token))
    assert r.status_code == 401
    assert r.json()["message"] == "Token expirado"


def test_me_with_forged_token(client, make_user, settings):
    user_id = make_user("victim@example.com")
    forged = settings.model_copy(update={"jwt_secret": "attacker-secret"})
    identity = Identity(id=user_id, email="victim@example.com", name="Tester", role="admin")
    r = client.get("/api/auth/me", headers=bearer(issue_token(identity, forged)))
    assert r.status_code == 401
    assert r.json()["message"] == "Token invalido"


def test_me_after_account_removed_is_404(client, make_user, settings):
    identity = Identity(id=999, email="gone@example.com", name="Gone", role="user")
    r = client.get("/api/auth/me", headers=bearer(issue_token(identity, settings)))
    assert r.status_code == 404
    assert r.json()["message"] == "Usuario no encontrado"


def test_role_change_applies_only_to_new_tokens(client, make_user, login):
    make_user("admin@example.com", role="admin")
    user_id = make_user("promoted@example.com")
    admin_headers = login("admin@example.com")
    old_headers = login("promoted@example.com")

    r = client.put(f"/api/users/{user_id}/role", headers=admin_headers, json={"role": "admin"})
    assert r.status_code == 200

    # The earlier token still carries role=user until it expires
    assert client.get("/api/users", headers=old_headers).status_code == 403
    assert client.get("/api/users", headers=login("promoted@example.com")).status_code == 200
