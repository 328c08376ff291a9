import pytest
from fastapi.testclient import TestClient

from daily_report.core import security
from daily_report.db import models, session
from daily_report.main import app

DEFAULT_PASSWORD = "secret-pw"


@pytest.fixture()
def db_sessionmaker(tmp_path):
    engine = session.build_engine(f"sqlite:///{tmp_path/'test.db'}")
    session.init_db(engine)
    yield session.build_sessionmaker(engine)
    engine.dispose()


@pytest.fixture()
def db(db_sessionmaker):
    s = db_sessionmaker()
    yield s
    s.close()


@pytest.fixture()
def make_client(db_sessionmaker):
    def _get_db():
        s = db_sessionmaker()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[session.get_db] = _get_db
    yield lambda: TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client):
    return make_client()


@pytest.fixture()
def create_user(db):
    def _create(employee_number, employee_name=None, role=models.ROLE_USER, is_super_admin=False,
                password=DEFAULT_PASSWORD):
        user = models.User(
            employee_number=employee_number,
            employee_name=employee_name or f"Employee {employee_number}",
            hashed_password=security.get_password_hash(password),
            role=role,
            is_super_admin=is_super_admin,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _create


def login(client, employee_number, password=DEFAULT_PASSWORD):
    r = client.post("/api/auth/login", json={"employee_number": employee_number, "password": password})
    assert r.status_code == 200, r.text
    return r


@pytest.fixture()
def user(create_user):
    return create_user("E100", "Alice Example")


@pytest.fixture()
def admin(create_user):
    return create_user("A001", "Root Admin", role=models.ROLE_ADMIN, is_super_admin=True)


@pytest.fixture()
def user_client(make_client, user):
    c = make_client()
    login(c, user.employee_number)
    return c


@pytest.fixture()
def admin_client(make_client, admin):
    c = make_client()
    login(c, admin.employee_number)
    return c


@pytest.fixture()
def login_as():
    return login
