"""
Pytest configuration and fixtures for media export tests.
"""

from collections.abc import AsyncGenerator, Callable, Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

import media_export.models  # noqa: F401  (registers tables)
from media_export.core.exceptions import StorageException
from media_export.db.base import Base
from media_export.models import Asset, AssetCollection, Resource, Tag
from media_export.services.asset_stream import AssetStream
from media_export.storage import LocalStorageBackend


class RecordingReportSink:
    """ReportSink that keeps everything in memory."""

    def __init__(self):
        self.events: list[tuple] = []
        self.lines: list[str] = []
        self.tables: list[tuple[list, tuple]] = []
        self.progress_total: int | None = None
        self.advances = 0
        self.finished = False

    def line(self, text: str = "", style: str | None = None) -> None:
        self.lines.append(text)
        self.events.append(("line", text))

    def progress_start(self, total: int) -> None:
        self.progress_total = total
        self.events.append(("progress_start", total))

    def progress_advance(self, step: int = 1) -> None:
        self.advances += step
        self.events.append(("progress_advance", step))

    def progress_finish(self) -> None:
        self.finished = True
        self.events.append(("progress_finish",))

    def table(self, rows, headers) -> None:
        self.tables.append((list(rows), tuple(headers)))
        self.events.append(("table", len(rows)))

    @property
    def text_lines(self) -> list[str]:
        """Non-empty output lines."""
        return [line for line in self.lines if line]


class ListAssetReader:
    """Stream reader over an in-memory list of records."""

    def __init__(self, records: Iterable[Any], total: int | None = None):
        self.records = list(records)
        self.total = len(self.records) if total is None else total
        self.yielded = 0

    async def _iterate(self):
        for record in self.records:
            self.yielded += 1
            yield record

    async def open(self) -> AssetStream:
        return AssetStream(total=self.total, records=self._iterate())


class FailingStorage(LocalStorageBackend):
    """Local storage that breaks the stream of selected paths mid-read."""

    def __init__(self, base_path: str, failing_paths: set[str]):
        super().__init__(base_path=base_path)
        self.failing_paths = failing_paths

    async def download(self, path: str):
        if path not in self.failing_paths:
            async for chunk in super().download(path):
                yield chunk
            return
        yield b"partial"
        raise StorageException(message="Connection reset while reading", details={"path": path})


def build_asset(
    identifier: str | None = None,
    asset_source: str | None = "neos",
    usage_count: int = 0,
    tags: Iterable[str] = (),
    collections: Iterable[str] = (),
    filename: str | None = None,
    file_size: int = 0,
    title: str = "",
    caption: str = "",
    last_modified: datetime | None = None,
    with_resource: bool = True,
) -> Asset:
    """Build a transient Asset with its resource, tags and collections."""
    identifier = identifier or str(uuid4())
    resource = None
    if with_resource:
        filename = filename or f"{identifier}.jpg"
        resource = Resource(
            filename=filename,
            file_size=file_size,
            file_path=f"resources/{identifier}/{filename}",
            media_type="image/jpeg",
        )
    return Asset(
        id=identifier,
        title=title,
        caption=caption,
        last_modified=last_modified or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
        asset_source_identifier=asset_source,
        usage_count=usage_count,
        resource=resource,
        tags=[Tag(label=label) for label in tags],
        asset_collections=[AssetCollection(title=title) for title in collections],
    )


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """Create a test database engine."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_storage(tmp_path) -> LocalStorageBackend:
    """Create a test storage backend."""
    return LocalStorageBackend(base_path=str(tmp_path / "storage"))


@pytest.fixture
def export_dir(tmp_path) -> Path:
    """Export target; not created up front."""
    return tmp_path / "export"


@pytest.fixture
def report_sink() -> RecordingReportSink:
    return RecordingReportSink()


@pytest.fixture
def asset_factory() -> Callable[..., Asset]:
    return build_asset


@pytest.fixture
def list_reader() -> type[ListAssetReader]:
    return ListAssetReader


@pytest.fixture
def failing_storage(test_storage: LocalStorageBackend):
    """Storage sharing test_storage's directory, failing for the given paths."""

    def _make(*failing_paths: str) -> FailingStorage:
        return FailingStorage(str(test_storage.base_path), set(failing_paths))

    return _make


@pytest.fixture
def store_asset(test_storage: LocalStorageBackend):
    """Upload content for an asset and fix up its declared size."""

    async def _store(asset: Asset, content: bytes) -> Asset:
        await test_storage.upload_bytes(content, asset.resource.file_path, asset.resource.media_type)
        asset.resource.file_size = len(content)
        return asset

    return _store


@pytest.fixture
def seed_asset(db_session: AsyncSession, store_asset):
    """Persist an asset (and its content) in the test repository."""

    async def _seed(content: bytes = b"image bytes", **kwargs: Any) -> Asset:
        asset = build_asset(**kwargs)
        if asset.resource is not None:
            await store_asset(asset, content)
        db_session.add(asset)
        await db_session.commit()
        return asset

    return _seed


@pytest.fixture
def sample_file_content() -> bytes:
    """Sample file content for testing exports."""
    return b"fake JPEG binary content for testing"
