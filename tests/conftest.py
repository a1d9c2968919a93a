# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

from asyncio import Lock
from collections.abc import AsyncIterator
from io import BytesIO
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from PIL import Image
from pydantic import SecretStr

from app.clients import LocalDocumentStore
from app.clients.document_store import serialize_document
from app.configs import Settings
from app.errors import DocumentStoreError
from app.main import create_app
from app.managers import PasswordHasher, TokenManager
from app.managers.rate_limiter import limiter
from app.schemas import BlogPost, Document, UserAccount
from app.services import BlogService, MediaService
from app.services.storage import LocalStorage

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "Himatikom#2024"
TEST_SECRET_KEY = "test-secret-key-for-session-cookies"


class UnreachableStore:
    """Store whose backend is down: every call fails."""

    name = "unreachable"

    def __init__(self) -> None:
        self.lock = Lock()

    async def load(self) -> Document:
        mssg = "connection refused"
        raise DocumentStoreError(mssg)

    async def save(self, document: Document) -> None:
        mssg = "connection refused"
        raise DocumentStoreError(mssg, operation="save")

    async def initialize(self, document: Document) -> str:
        mssg = "connection refused"
        raise DocumentStoreError(mssg, operation="save")

    async def close(self) -> None:
        return None


class SaveFailingStore(LocalDocumentStore):
    """Local store that reads fine but refuses every write."""

    async def save(self, document: Document) -> None:
        mssg = "disk full"
        raise DocumentStoreError(mssg, operation="save")


def make_image_bytes(fmt: str = "JPEG", color: str = "red") -> bytes:
    mode = "RGBA" if fmt == "PNG" else "RGB"
    img = Image.new(mode, (64, 64), color=color)
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def write_document(path: Path, document: Document) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(serialize_document(document))


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every file at a temporary directory."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="development",
        LOG_LEVEL="WARNING",
        SECRET_KEY=SecretStr(TEST_SECRET_KEY),
        DOCUMENT_STORE="local",
        DATA_FILE=tmp_path / "data" / "blog.json",
        STORAGE_PROVIDER="local",
        UPLOADS_DIR=tmp_path / "uploads",
    )


@pytest.fixture(scope="session")
def admin_password_hash() -> str:
    """Hash the admin password once per session, Argon2 is slow on purpose."""
    return PasswordHasher().hash(ADMIN_PASSWORD)


@pytest.fixture
def admin_account(admin_password_hash: str) -> UserAccount:
    return UserAccount(id=1, username=ADMIN_USERNAME, password=admin_password_hash)


@pytest.fixture
def seeded_document(settings: Settings, admin_account: UserAccount) -> Document:
    """Write a document holding only the admin account."""
    document = Document(users=[admin_account])
    write_document(settings.DATA_FILE, document)
    return document


@pytest.fixture
def store(settings: Settings) -> LocalDocumentStore:
    return LocalDocumentStore(settings.DATA_FILE)


@pytest.fixture
def storage(settings: Settings) -> LocalStorage:
    return LocalStorage(settings.UPLOADS_DIR, settings.UPLOADS_URL_PREFIX)


@pytest.fixture
def media_service(storage: LocalStorage, settings: Settings) -> MediaService:
    return MediaService(storage, settings)


@pytest.fixture
def blog_service(store: LocalDocumentStore, media_service: MediaService) -> BlogService:
    return BlogService(store, media_service)


@pytest.fixture
def token_manager(settings: Settings) -> TokenManager:
    return TokenManager.from_settings(settings)


@pytest.fixture
def admin_token(token_manager: TokenManager, admin_account: UserAccount) -> str:
    return token_manager.create_access_token(admin_account.id, admin_account.username)


@pytest.fixture
def sample_post() -> BlogPost:
    return BlogPost(
        id=1,
        title="Hello World",
        slug="hello-world",
        content="First post",
        author="Admin",
    )


@pytest.fixture
def app(settings: Settings, seeded_document: Document) -> FastAPI:
    """Application wired to the temporary data file and uploads directory."""
    return create_app(settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Create async HTTP client for testing."""
    limiter.enabled = False
    async with AsyncClient(
        base_url="https://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = True


@pytest.fixture
async def auth_client(client: AsyncClient, admin_token: str) -> AsyncClient:
    """Client carrying a valid session cookie."""
    client.cookies.set("token", admin_token)
    return client


@pytest.fixture
def valid_jpeg_bytes() -> bytes:
    """Create valid JPEG image bytes."""
    return make_image_bytes("JPEG")


@pytest.fixture
def valid_png_bytes() -> bytes:
    """Create valid PNG image bytes."""
    return make_image_bytes("PNG", color="blue")


@pytest.fixture
def unreachable_store() -> UnreachableStore:
    return UnreachableStore()


@pytest.fixture
def save_failing_store(settings: Settings, seeded_document: Document) -> SaveFailingStore:
    return SaveFailingStore(settings.DATA_FILE)
