"""Pytest configuration and fixtures."""

import os
import sys
import tempfile
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

# Keep uploads out of the working tree and email delivery disabled
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="taskboard-uploads-"))
os.environ["SMTP_HOST"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password import BcryptPasswordHasher
from infrastructure.database.models import Base
from infrastructure.database.session import Database
from infrastructure.email.sender import EmailMessage
from infrastructure.storage.object_store import LocalObjectStore

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "correct horse battery staple"


class RecordingEmailSender:
    """Email sender that keeps messages instead of delivering them."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> bool:
        self.sent.append(message)
        return self.succeed


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """A fresh in-memory database with the full schema, per test."""
    db = Database(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.dispose()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def object_store(tmp_path: Path) -> LocalObjectStore:
    return LocalObjectStore(tmp_path / "uploads", url_prefix="/uploads")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
async def client(
    database: Database,
    email_sender: RecordingEmailSender,
    object_store: LocalObjectStore,
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client running the full app against the test database.

    ASGITransport does not run the lifespan, so the database and the
    external collaborators are injected through dependency overrides.
    """
    from api.dependencies.services import (
        get_auth_provider,
        get_database,
        get_email_sender,
        get_object_store,
        get_password_hasher,
    )
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    # Minimum bcrypt cost keeps the suite fast
    app.dependency_overrides[get_password_hasher] = lambda: BcryptPasswordHasher(rounds=4)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


RegisterUser = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
def register_user(client: AsyncClient) -> RegisterUser:
    """Register a user through the API.

    Returns the response body extended with ready-to-use ``headers``.
    """

    async def _register(
        name: str = "Test User",
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        **extra: Any,
    ) -> dict[str, Any]:
        email = email or f"{name.lower().replace(' ', '.')}@example.com"
        response = await client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password, **extra},
        )
        assert response.status_code == 201, response.text
        body: dict[str, Any] = response.json()
        body["headers"] = {"Authorization": f"Bearer {body['token']}"}
        return body

    return _register


async def make_admin(database: Database, user_id: str) -> None:
    """Promote a user to the global admin role directly in the database."""
    from uuid import UUID

    from infrastructure.database.models import UserModel

    async with database.session_factory() as session:
        model = await session.get(UserModel, UUID(user_id))
        assert model is not None
        model.role = "admin"
        await session.commit()
