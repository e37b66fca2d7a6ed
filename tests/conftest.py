import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("ADMIN_EMAILS", "admin@umshado.test")
os.environ.setdefault("SUPABASE_URL", "https://auth.umshado.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from umshado.auth.dependencies import get_current_user  # noqa: E402
from umshado.db import DatabaseManager, build_engine, get_db  # noqa: E402
from umshado.exceptions import AuthError  # noqa: E402
from umshado.main import create_app  # noqa: E402
from umshado.schemas.auth import AuthUser  # noqa: E402

pytest_plugins = [
    "tests.fixtures.directory_fixtures",
    "tests.fixtures.quote_fixtures",
    "tests.fixtures.beta_request_fixtures",
]


@pytest.fixture(scope="function")
def db_manager():
    manager = DatabaseManager(build_engine("sqlite://"))
    manager.create_all()
    yield manager
    manager.dispose()


@pytest.fixture(scope="function")
def db(db_manager):
    with db_manager.db_session() as session:
        yield session


@pytest.fixture(scope="function")
def auth_state():
    """Mutable holder for the user the test client is signed in as."""
    return {"user": None}


@pytest.fixture(scope="function")
def login_as(auth_state):
    """Sign the test client in as ``user_id``."""

    def _login(user_id, email=None):
        auth_state["user"] = AuthUser(id=user_id, email=email)
        return auth_state["user"]

    return _login


@pytest.fixture(scope="function")
def client(db, db_manager, auth_state):
    """Client with db override and a switchable signed-in user."""
    app = create_app(testing=True, db_manager=db_manager)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    def override_get_current_user() -> AuthUser:
        if auth_state["user"] is None:
            raise AuthError("Unauthorized")
        return auth_state["user"]

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
