import pytest
from sqlalchemy import update

from daily_report.core import security
from daily_report.core.config import settings
from daily_report.db import models
from daily_report.main import create_app


def _signup(client, employee_number="E200", name="Bob Builder", password="hunter22"):
    return client.post(
        "/api/auth/signup",
        json={"employee_number": employee_number, "employee_name": name, "password": password},
    )


def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "message" in r.json()


def test_setup_check_and_super_admin_creation(client, db):
    r = client.get("/api/setup/check")
    assert r.json() == {"can_setup": True, "has_admin": False}

    r = client.post("/api/setup", json={"employee_number": "A001", "employee_name": "Root", "password": "rootpw1"})
    assert r.status_code == 201
    body = r.json()
    assert body["user"]["role"] == "ADMIN"
    assert body["user"]["is_super_admin"] is True
    assert body["token"]
    assert settings.AUTH_COOKIE_NAME in r.cookies

    # auto-login
    assert client.get("/api/auth/me").json()["user"]["employee_number"] == "A001"

    assert client.get("/api/setup/check").json() == {"can_setup": False, "has_admin": True}
    r = client.post("/api/setup", json={"employee_number": "A002", "employee_name": "Second", "password": "rootpw2"})
    assert r.status_code == 403
    assert r.json()["error"] == "Setup has already been completed"


def test_setup_rejects_short_password(client):
    r = client.post("/api/setup", json={"employee_number": "A001", "employee_name": "Root", "password": "123"})
    assert r.status_code == 400
    assert "password" in r.json()["error"]


def test_signup_requires_invitation(client):
    r = _signup(client)
    assert r.status_code == 403


def test_signup_consumes_invitation_once(client, db, admin):
    db.add(models.InvitationCode(employee_number="E200", created_by=admin.id))
    db.commit()

    r = _signup(client)
    assert r.status_code == 201
    assert r.json()["user"]["role"] == "USER"
    user_id = r.json()["user"]["id"]

    db.expire_all()
    code = db.query(models.InvitationCode).filter_by(employee_number="E200").one()
    assert code.is_used is True
    assert code.used_by == user_id
    assert code.used_at is not None

    r = _signup(client, name="Impostor")
    assert r.status_code == 409


def test_signup_missing_field_is_400(client):
    r = client.post("/api/auth/signup", json={"employee_number": "E200", "password": "hunter22"})
    assert r.status_code == 400
    assert "employee_name" in r.json()["error"]


def test_login_sets_cookie_and_me_works(client, user, login_as):
    r = login_as(client, user.employee_number)
    assert r.json()["user"]["employee_name"] == "Alice Example"
    assert settings.AUTH_COOKIE_NAME in r.cookies

    r = client.get("/api/auth/me")
    assert r.status_code == 200
    assert r.json()["user"]["role"] == "USER"


def test_login_with_bad_password_is_401(client, user):
    r = client.post("/api/auth/login", json={"employee_number": user.employee_number, "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid employee number or password"}


def test_login_unknown_user_is_401(client):
    r = client.post("/api/auth/login", json={"employee_number": "nobody", "password": "whatever"})
    assert r.status_code == 401


def test_bearer_header_is_accepted(make_client, user, login_as):
    token = login_as(make_client(), user.employee_number).json()["token"]
    r = make_client().get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200


def test_garbage_token_is_401(client):
    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["error"] == "Authentication required"


def test_logout_clears_cookie(user_client):
    r = user_client.post("/api/auth/logout")
    assert r.status_code == 200
    assert user_client.get("/api/auth/me").status_code == 401


def test_logout_anonymous_is_ok(client):
    assert client.post("/api/auth/logout").status_code == 200


def test_admin_login_and_logout_are_audited(client, db, admin, login_as):
    login_as(client, admin.employee_number)
    client.post("/api/auth/logout")

    actions = [log.action_type for log in db.query(models.AdminLog).order_by(models.AdminLog.id)]
    assert actions == ["LOGIN", "LOGOUT"]


def test_role_is_read_from_database(client, db, user, login_as):
    login_as(client, user.employee_number)
    assert client.get("/api/admin/users").status_code == 403

    db_user = db.get(models.User, user.id)
    db_user.role = models.ROLE_ADMIN
    db.commit()

    assert client.get("/api/admin/users").status_code == 200


def test_deleted_user_token_is_rejected(user_client, db, user):
    db.delete(db.get(models.User, user.id))
    db.commit()
    assert user_client.get("/api/auth/me").status_code == 401


def test_signup_loses_invitation_to_concurrent_claim(client, db, admin, monkeypatch):
    db.add(models.InvitationCode(employee_number="E200", created_by=admin.id))
    db.commit()
    hash_password = security.get_password_hash

    def hash_after_other_claim(password):
        # another signup takes the code after this request has looked it up
        db.execute(
            update(models.InvitationCode).where(models.InvitationCode.employee_number == "E200").values(is_used=True)
        )
        db.commit()
        return hash_password(password)

    monkeypatch.setattr(security, "get_password_hash", hash_after_other_claim)

    r = _signup(client)
    assert r.status_code == 409
    assert r.json() == {"error": "This invitation has already been used"}
    assert settings.AUTH_COOKIE_NAME not in r.cookies

    db.expire_all()
    assert db.query(models.User).filter_by(employee_number="E200").count() == 0
    assert db.query(models.InvitationCode).filter_by(employee_number="E200").one().used_by is None


def test_auth_cookie_flags(client, user, login_as):
    cookie = login_as(client, user.employee_number).headers["set-cookie"].lower()
    assert "httponly" in cookie
    assert "samesite=lax" in cookie
    assert "path=/" in cookie
    assert f"max-age={settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60}" in cookie
    assert "secure" not in cookie

    cleared = client.post("/api/auth/logout").headers["set-cookie"].lower()
    assert "max-age=0" in cleared
    assert "httponly" in cleared


def test_expired_token_is_401(client, user, monkeypatch):
    monkeypatch.setattr(settings, "ACCESS_TOKEN_EXPIRE_MINUTES", -5)
    token = security.create_access_token(user)

    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json() == {"error": "Authentication required"}


def test_production_refuses_default_jwt_secret(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    with pytest.raises(RuntimeError):
        create_app()

    monkeypatch.setattr(settings, "JWT_SECRET_KEY", "a-long-random-secret")
    assert create_app().title == "Daily Report API"
