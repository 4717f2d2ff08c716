"""Typer-based CLI entry point."""

import asyncio
import logging
from functools import wraps
from pathlib import Path
from typing import Optional

import typer

from media_export.config import Settings, get_settings
from media_export.core.exceptions import MediaExportException, RepositoryNotFoundError
from media_export.db.session import (
    create_engine,
    create_session_factory,
    create_tables,
    get_active_database_url,
    sqlite_database_path,
)
from media_export.services.asset_stream import AssetStreamReader
from media_export.services.exporter import AssetExporter
from media_export.services.filters import ExportCriteria
from media_export.services.pipeline import ExportPipeline, ExportSummary
from media_export.services.report import ReportSink, RichReportSink
from media_export.storage.factory import create_storage_backend

logger = logging.getLogger(__name__)

app = typer.Typer(help="Export media assets together with a JSON metadata sidecar")

ASSET_SOURCE_HELP = 'If specified, only assets of this asset source are considered, e.g. "neos"'
ONLY_TAGS_HELP = "Comma-separated list of asset tags that should be taken into account"
EXPORT_PATH_HELP = "Target directory (defaults to EXPORT_PATH)"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def run_export(
    criteria: ExportCriteria,
    settings: Settings,
    export_path: Path | None = None,
    sink: ReportSink | None = None,
) -> ExportSummary:
    """Wire repository, storage and exporter together and run one export."""
    database_url = get_active_database_url(settings)
    sqlite_path = sqlite_database_path(database_url)
    if sqlite_path is not None and not settings.AUTO_CREATE_TABLES and not sqlite_path.exists():
        raise RepositoryNotFoundError(str(sqlite_path))

    engine = create_engine(database_url, echo=settings.DEBUG)
    try:
        if sqlite_path is not None and settings.AUTO_CREATE_TABLES:
            await create_tables(engine)

        exporter = AssetExporter(
            export_path or settings.EXPORT_PATH,
            create_storage_backend(settings),
            prefix_identifier=settings.EXPORT_PREFIX_IDENTIFIER,
        )
        session_factory = create_session_factory(engine)
        async with session_factory() as session:
            reader = AssetStreamReader(session, batch_size=settings.EXPORT_BATCH_SIZE)
            pipeline = ExportPipeline(reader, exporter, sink or RichReportSink())
            return await pipeline.run(criteria)
    finally:
        await engine.dispose()


def _handle_errors(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except MediaExportException as exc:
            logger.error(f"Export aborted: {exc.to_dict()}")
            typer.echo(f"Error: {exc.message}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _export(only_unused: bool, asset_source: str, only_tags: str, export_path: Path | None) -> None:
    settings = get_settings()
    configure_logging(settings)
    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    criteria = ExportCriteria(
        asset_source=asset_source,
        only_tags=only_tags,
        only_unused=only_unused,
    )
    asyncio.run(run_export(criteria, settings, export_path=export_path))


@app.command("all")
@_handle_errors
def export_all(
    asset_source: str = typer.Option("", "--asset-source", help=ASSET_SOURCE_HELP),
    only_tags: str = typer.Option("", "--only-tags", help=ONLY_TAGS_HELP),
    export_path: Optional[Path] = typer.Option(None, "--export-path", help=EXPORT_PATH_HELP),
) -> None:
    """Export all media assets, optionally filtered by asset source and tags."""

    _export(False, asset_source, only_tags, export_path)


@app.command("unused")
@_handle_errors
def export_unused(
    asset_source: str = typer.Option("", "--asset-source", help=ASSET_SOURCE_HELP),
    only_tags: str = typer.Option("", "--only-tags", help=ONLY_TAGS_HELP),
    export_path: Optional[Path] = typer.Option(None, "--export-path", help=EXPORT_PATH_HELP),
) -> None:
    """Export unused media assets, optionally filtered by asset source and tags."""

    _export(True, asset_source, only_tags, export_path)


if __name__ == "__main__":
    app()
