"""
Tests for the export CLI commands.
"""

import asyncio
import json

import pytest
from typer.testing import CliRunner

from media_export import cli
from media_export.config import get_settings
from media_export.core.exceptions import DirectoryBootstrapError
from media_export.db.session import create_engine, create_session_factory, create_tables
from media_export.services.filters import ExportCriteria
from media_export.services.pipeline import ExportSummary
from media_export.storage import LocalStorageBackend

runner = CliRunner()


@pytest.fixture
def fake_run_export(monkeypatch):
    calls = []

    async def _fake(criteria, settings, export_path=None, sink=None):
        calls.append({"criteria": criteria, "export_path": export_path})
        return ExportSummary()

    monkeypatch.setattr(cli, "run_export", _fake)
    return calls


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point settings at a throwaway repository, storage and export dir."""
    paths = {
        "database": tmp_path / "repository.db",
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'repository.db'}",
        "storage": tmp_path / "storage",
        "export": tmp_path / "export",
    }
    monkeypatch.setenv("DATABASE_URL", paths["database_url"])
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("LOCAL_STORAGE_PATH", str(paths["storage"]))
    monkeypatch.setenv("EXPORT_PATH", str(paths["export"]))
    get_settings.cache_clear()
    yield paths
    get_settings.cache_clear()


def seed_repository(paths, assets_with_content):
    async def _seed():
        engine = create_engine(paths["database_url"])
        await create_tables(engine)
        storage = LocalStorageBackend(base_path=str(paths["storage"]))
        async with create_session_factory(engine)() as session:
            for asset, content in assets_with_content:
                await storage.upload_bytes(content, asset.resource.file_path, asset.resource.media_type)
                asset.resource.file_size = len(content)
                session.add(asset)
            await session.commit()
        await engine.dispose()

    asyncio.run(_seed())


def test_all_command_passes_filters(fake_run_export):
    result = runner.invoke(cli.app, ["all", "--asset-source", "neos", "--only-tags", "a,b"])

    assert result.exit_code == 0
    assert fake_run_export[0]["criteria"] == ExportCriteria(
        asset_source="neos",
        only_tags="a,b",
        only_unused=False,
    )


def test_unused_command_defaults(fake_run_export):
    result = runner.invoke(cli.app, ["unused"])

    assert result.exit_code == 0
    assert fake_run_export[0]["criteria"] == ExportCriteria(only_unused=True)
    assert fake_run_export[0]["export_path"] is None


def test_bootstrap_failure_exits_with_error(monkeypatch):
    async def _failing(criteria, settings, export_path=None, sink=None):
        raise DirectoryBootstrapError("/readonly/export", "Permission denied")

    monkeypatch.setattr(cli, "run_export", _failing)

    result = runner.invoke(cli.app, ["all"])

    assert result.exit_code == 1


def test_empty_repository_exits_successfully(cli_env):
    seed_repository(cli_env, [])

    result = runner.invoke(cli.app, ["unused"])

    assert result.exit_code == 0
    assert "No unused assets found." in result.output
    assert "Total size" not in result.output


def test_export_end_to_end(cli_env, asset_factory):
    seed_repository(
        cli_env,
        [
            (asset_factory(identifier="a1", filename="one.jpg", usage_count=0), b"first"),
            (asset_factory(identifier="a2", filename="two.jpg", usage_count=3), b"second"),
            (asset_factory(identifier="a3", filename="three.jpg", asset_source="dam"), b"third"),
        ],
    )

    result = runner.invoke(cli.app, ["unused", "--asset-source", "neos"])

    assert result.exit_code == 0
    assert "Total size of 1 exported assets: 5 B" in result.output
    export_dir = cli_env["export"]
    assert (export_dir / "one.jpg").read_bytes() == b"first"
    assert json.loads((export_dir / "one.jpg.meta").read_text())["identifier"] == "a1"
    assert not (export_dir / "two.jpg").exists()
    assert not (export_dir / "three.jpg").exists()


def test_export_path_option_overrides_settings(cli_env, asset_factory, tmp_path):
    seed_repository(cli_env, [(asset_factory(identifier="a1", filename="one.jpg"), b"data")])
    target = tmp_path / "elsewhere"

    result = runner.invoke(cli.app, ["all", "--export-path", str(target)])

    assert result.exit_code == 0
    assert (target / "one.jpg").exists()
    assert not cli_env["export"].exists()


def test_missing_sqlite_repository_is_not_created(cli_env):
    result = runner.invoke(cli.app, ["all"])

    assert result.exit_code == 1
    assert not cli_env["database"].exists()


def test_auto_create_tables_bootstraps_dev_repository(cli_env, monkeypatch):
    monkeypatch.setenv("AUTO_CREATE_TABLES", "true")
    get_settings.cache_clear()

    result = runner.invoke(cli.app, ["all"])

    assert result.exit_code == 0
    assert "No assets found." in result.output
    assert cli_env["database"].exists()
