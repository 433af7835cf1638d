"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, in-memory blob store, seeded users and skills
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timezone

import pytest

from portfolio_backend.boundary.aws.blob_store import BlobObject
from portfolio_backend.core.exceptions import StorageError
from portfolio_backend.models.upload import ImageUpload


class InMemoryBlobStore:
    """
    BlobStore double keeping objects in a dict.

    Failures are injected per filename (put) or per URL (delete).
    """

    base_url = "https://blobs.test"

    def __init__(self) -> None:
        self.objects: dict[str, BlobObject] = {}
        self.deleted: list[str] = []
        self.fail_put_filenames: set[str] = set()
        self.fail_delete_urls: set[str] = set()
        self.fail_all_deletes = False

    async def put(self, upload: ImageUpload, folder: str) -> str:
        if upload.filename in self.fail_put_filenames:
            raise StorageError(f"Failed to upload {upload.filename}", operation="put")
        url = f"{self.base_url}/{folder}/{uuid.uuid4()}{upload.extension}"
        self.objects[url] = BlobObject(
            url=url,
            last_modified=datetime.now(timezone.utc),
            size=upload.size,
        )
        return url

    async def delete(self, url: str) -> None:
        if self.fail_all_deletes or url in self.fail_delete_urls:
            raise StorageError("Failed to delete object", operation="delete", url=url)
        self.objects.pop(url, None)
        self.deleted.append(url)

    async def list_objects(self, folder: str) -> list[BlobObject]:
        prefix = f"{self.base_url}/{folder}/"
        return [obj for url, obj in self.objects.items() if url.startswith(prefix)]


def make_image(filename: str = "photo.png", data: bytes = b"\x89PNG-bytes") -> ImageUpload:
    """Build a non-empty image upload."""
    return ImageUpload(filename=filename, data=data, content_type="image/png")


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from portfolio_backend.boundary.db.create_tables import create_all_tables, drop_all_tables

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    await create_all_tables(engine)

    # Same options as the application session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    await drop_all_tables(engine)

    await engine.dispose()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    """Provide an empty in-memory blob store."""
    return InMemoryBlobStore()


@pytest.fixture
async def owner(test_async_db):
    """Committed user owning the portfolios under test."""
    from portfolio_backend.boundary.db.CRUD.user_crud import user_crud

    user = await user_crud.create(test_async_db, name="Alice Kim", email="alice@example.com")
    await test_async_db.commit()
    return user


@pytest.fixture
async def other_user(test_async_db):
    """Committed user who owns nothing."""
    from portfolio_backend.boundary.db.CRUD.user_crud import user_crud

    user = await user_crud.create(test_async_db, name="Bob Lee", email="bob@example.com")
    await test_async_db.commit()
    return user


@pytest.fixture
async def skill_catalog(test_async_db):
    """Seed the skill catalog with a few names."""
    from portfolio_backend.boundary.db.seed_skills import seed_skills

    return await seed_skills(test_async_db, ["python", "go", "rust", "java"])


@pytest.fixture
def portfolio_settings():
    """Portfolio settings with defaults."""
    from portfolio_backend.configs import PortfolioSettings

    return PortfolioSettings()


@pytest.fixture
def portfolio_service(test_async_db, blob_store, portfolio_settings, skill_catalog):
    """PortfolioService over the test database and in-memory blob store."""
    from portfolio_backend.application.services.portfolio_service import PortfolioService

    return PortfolioService(test_async_db, blob_store, settings=portfolio_settings)


@pytest.fixture
def image_factory():
    """Provide the image upload builder."""
    return make_image
