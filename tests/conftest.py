import inspect
import os

# The engine and settings are built at import time; seed the environment
# before anything from rental_api is imported.
os.environ["ENV_NAME"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret-0123456789abcdef0123"
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
os.environ.pop("RESEND_API_KEY", None)

from dataclasses import dataclass, field  # noqa: E402
from unittest.mock import patch  # noqa: E402

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

import rental_api.models  # noqa: E402, F401
from rental_api.account import store  # noqa: E402
from rental_api.account.models import Account, AccountRole  # noqa: E402
from rental_api.core.security import create_session_token  # noqa: E402
from rental_api.core.settings import ResetDelivery, Settings, get_settings  # noqa: E402
from rental_api.db.engine import enable_sqlite_foreign_keys, get_session  # noqa: E402
from rental_api.main import app  # noqa: E402

TEST_PASSWORD = "secret123"


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


@dataclass
class SentEmail:
    kind: str
    to: str
    secret: str
    expires_minutes: int


@dataclass
class Outbox:
    """Captures transactional email so tests can read issued codes."""

    messages: list[SentEmail] = field(default_factory=list)

    def last(self, kind: str | None = None) -> SentEmail:
        matching = [m for m in self.messages if kind is None or m.kind == kind]
        assert matching, f"no {kind or 'email'} sent"
        return matching[-1]

    def recorder(self, kind: str):
        def record(to_email: str, secret: str, *, expires_minutes: int) -> None:
            self.messages.append(SentEmail(kind, to_email, secret, expires_minutes))

        return record


@pytest.fixture(name="outbox")
def outbox_fixture():
    """Replace outbound email with an in-memory outbox."""
    outbox = Outbox()
    with (
        patch(
            "rental_api.auth.service.send_verification_code_email",
            outbox.recorder("verify"),
        ),
        patch(
            "rental_api.auth.service.send_password_reset_code_email",
            outbox.recorder("reset_code"),
        ),
        patch(
            "rental_api.auth.service.send_password_reset_link_email",
            outbox.recorder("reset_link"),
        ),
    ):
        yield outbox


@pytest.fixture(name="session")
def session_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    """Settings with verification required and code-based resets."""
    return Settings(
        ENV_NAME="test",
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-jwt-secret-0123456789abcdef0123",
        SESSION_SECRET_KEY="test-session-secret",
        REQUIRE_EMAIL_VERIFICATION=True,
        RESET_DELIVERY=ResetDelivery.code,
    )


@pytest.fixture(name="test_account")
def test_account_fixture(session: Session) -> Account:
    """A verified standard account."""
    return store.create_account(
        session,
        "renter@example.com",
        TEST_PASSWORD,
        email_verified=True,
        username="Renter",
    )


@pytest.fixture(name="unverified_account")
def unverified_account_fixture(session: Session) -> Account:
    return store.create_account(session, "pending@example.com", TEST_PASSWORD)


@pytest.fixture(name="admin_account")
def admin_account_fixture(session: Session) -> Account:
    return store.create_account(
        session,
        "admin@example.com",
        TEST_PASSWORD,
        role=AccountRole.admin,
        email_verified=True,
    )


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(settings: Settings):
    """Build an Authorization header for an account."""

    def make(account: Account) -> dict[str, str]:
        token = create_session_token(account.id, settings)
        return {"Authorization": f"Bearer {token}"}

    return make


@pytest.fixture(name="client")
def client_fixture(session: Session, settings: Settings):
    """Create a test client backed by the in-memory database."""

    def get_session_override():
        return session

    def get_settings_override():
        return settings

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_settings] = get_settings_override

    client = TestClient(app, raise_server_exceptions=False)
    yield client

    app.dependency_overrides.clear()
