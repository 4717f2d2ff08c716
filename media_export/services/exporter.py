"""
Asset exporter - writes an asset's content and metadata sidecar to disk.
"""

import logging
import os
from contextlib import suppress
from pathlib import Path
from typing import NamedTuple

import aiofiles
import aiofiles.os

from media_export.core.exceptions import (
    DirectoryBootstrapError,
    SourceReadError,
    StorageException,
    WriteError,
)
from media_export.models.asset import Asset
from media_export.schemas.metadata import AssetMetadata
from media_export.storage.base import StorageBackend

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta"
PARTIAL_SUFFIX = ".part"
BACKUP_SUFFIX = ".bak"


class ExportedFileInfo(NamedTuple):
    """Written filename and the resource's declared size."""

    filename: str
    file_size: int


class AssetExporter:
    """
    Exports assets into a single flat directory.

    Each asset produces ``<filename>`` and ``<filename>.meta``. Both are
    written to hidden temporary files first and moved into place content
    first, so a failed export leaves neither file behind. Existing files of
    the same name are overwritten; if the replacement fails, the previous
    pair is put back.
    """

    def __init__(
        self,
        export_path: str | Path,
        storage: StorageBackend,
        prefix_identifier: bool = False,
    ):
        """
        Args:
            export_path: Target directory, created on first export
            storage: Backend holding the resource content
            prefix_identifier: Write ``<identifier>_<filename>`` to keep
                assets sharing a filename apart
        """
        self.export_path = Path(export_path)
        self.storage = storage
        self.prefix_identifier = prefix_identifier
        self._directory_ready = False
        self._written_filenames: set[str] = set()

    def ensure_directory(self) -> Path:
        """
        Create the export directory if it does not exist yet.

        Raises:
            DirectoryBootstrapError: If the directory cannot be created
        """
        if self._directory_ready:
            return self.export_path

        try:
            self.export_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryBootstrapError(str(self.export_path), str(e)) from e

        self._directory_ready = True
        logger.info(f"Exporting to {self.export_path.resolve()}")
        return self.export_path

    def target_filename(self, asset: Asset) -> str:
        filename = asset.resource.filename
        if self.prefix_identifier:
            return f"{asset.id}_{filename}"
        return filename

    async def export(self, asset: Asset) -> ExportedFileInfo:
        """
        Export one asset.

        Args:
            asset: Asset with a resource

        Returns:
            ExportedFileInfo with the declared (not re-measured) size

        Raises:
            SourceReadError: If the content stream fails
            WriteError: If a file cannot be written or the filename is unusable
            DirectoryBootstrapError: If the export directory cannot be created
        """
        export_dir = self.ensure_directory()
        filename = self.target_filename(asset)
        content_path = export_dir / filename
        meta_path = export_dir / f"{filename}{META_SUFFIX}"

        if filename in ("", ".", "..") or Path(filename).name != filename:
            raise WriteError(asset.id, str(content_path), "invalid filename")

        if filename in self._written_filenames:
            logger.warning(f"Overwriting '{filename}' exported earlier in this run (asset {asset.id})")

        content_tmp = export_dir / f".{filename}{PARTIAL_SUFFIX}"
        meta_tmp = export_dir / f".{filename}{META_SUFFIX}{PARTIAL_SUFFIX}"
        backups: list[tuple[Path, Path]] = []
        content_placed = False

        try:
            await self._write_content(asset, content_tmp)
            await self._write_metadata(asset, meta_tmp)
            for target in (content_path, meta_path):
                if target.exists():
                    backup = export_dir / f".{target.name}{BACKUP_SUFFIX}"
                    await self._move(asset, target, backup)
                    backups.append((backup, target))
            await self._move(asset, content_tmp, content_path)
            content_placed = True
            await self._move(asset, meta_tmp, meta_path)
        except BaseException:
            # Also runs on cancellation so no half-written pair survives
            self._discard(content_tmp, meta_tmp)
            if content_placed:
                self._discard(content_path)
            self._restore(backups)
            raise

        self._discard(*(backup for backup, _ in backups))
        self._written_filenames.add(filename)
        return ExportedFileInfo(filename=filename, file_size=asset.resource.file_size)

    async def _write_content(self, asset: Asset, target: Path) -> None:
        """Stream the resource into ``target`` chunk by chunk."""
        resource = asset.resource
        chunks = self.storage.download(resource.file_path)

        try:
            async with aiofiles.open(target, "wb") as f:
                while True:
                    try:
                        chunk = await anext(chunks)
                    except StopAsyncIteration:
                        break
                    except (StorageException, OSError) as e:
                        raise SourceReadError(
                            asset.id,
                            str(e),
                            details={"path": resource.file_path},
                        ) from e
                    await f.write(chunk)
        except OSError as e:
            raise WriteError(asset.id, str(target), str(e)) from e
        finally:
            await chunks.aclose()

    async def _write_metadata(self, asset: Asset, target: Path) -> None:
        payload = AssetMetadata.from_asset(asset).to_json()
        try:
            async with aiofiles.open(target, "w", encoding="utf-8") as f:
                await f.write(payload)
        except OSError as e:
            raise WriteError(asset.id, str(target), str(e)) from e

    async def _move(self, asset: Asset, source: Path, target: Path) -> None:
        try:
            await aiofiles.os.replace(source, target)
        except OSError as e:
            raise WriteError(asset.id, str(target), str(e)) from e

    @staticmethod
    def _discard(*paths: Path) -> None:
        for path in paths:
            with suppress(OSError):
                path.unlink(missing_ok=True)

    @staticmethod
    def _restore(backups: list[tuple[Path, Path]]) -> None:
        for backup, target in backups:
            try:
                os.replace(backup, target)
            except OSError as e:
                logger.error(f"Could not restore '{target}' from '{backup}': {e}")
