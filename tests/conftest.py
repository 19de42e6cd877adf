import os
import tempfile

# Configure the application before it is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_CREATE_ALL"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "local"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "accessguard-test-logs")

from typing import Callable, Dict  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from accessguard.api import deps as api_deps  # noqa: E402
from accessguard.db.base import Base  # noqa: E402
from accessguard.db.seed import seed_database  # noqa: E402
from accessguard.db.session import get_db, get_session_factory  # noqa: E402
from accessguard.main import app  # noqa: E402
from accessguard.models import AuditRecord, User  # noqa: E402

API = "/api/v1"

# -----------------------------------------------------------------------------
# Database Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="function")
def db_engine():
    """
    In-memory SQLite engine shared by every connection of one test.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def seeded(db_session):
    """Default resources, permissions, roles and one user per role."""
    seed_database(db_session)
    return db_session


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------


def _override_dependencies(db_session, session_factory):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[api_deps.get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory


@pytest.fixture(scope="function")
def client(db_session, session_factory):
    """
    TestClient bound to the test database. Audit writes use their own
    sessions from the test session factory.
    """
    _override_dependencies(db_session, session_factory)

    # Using 'with' context manager to trigger lifespan events (startup/shutdown)
    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def lenient_client(db_session, session_factory):
    """Like ``client`` but returns 500 responses instead of raising."""
    _override_dependencies(db_session, session_factory)

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def login(client) -> Callable[[str, str], Dict[str, str]]:
    """Log in and return the Authorization header for the account."""

    def _login(username: str, password: str) -> Dict[str, str]:
        resp = client.post(
            f"{API}/auth/login", json={"username": username, "password": password}
        )
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login


@pytest.fixture(scope="function")
def admin_headers(seeded, login):
    return login("admin", "Admin@123")


@pytest.fixture(scope="function")
def manager_headers(seeded, login):
    return login("manager", "Manager@123")


@pytest.fixture(scope="function")
def employee_headers(seeded, login):
    return login("employee", "Employee@123")


@pytest.fixture(scope="function")
def audit_records(db_session):
    """Return the stored audit records, optionally filtered by action."""

    def _records(action=None):
        db_session.expire_all()
        query = db_session.query(AuditRecord)
        if action is not None:
            query = query.filter(AuditRecord.action == action)
        return query.order_by(AuditRecord.timestamp).all()

    return _records


@pytest.fixture(scope="function")
def user_by_name(db_session):
    def _user(username: str) -> User:
        return db_session.query(User).filter(User.username == username).one()

    return _user
