"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from archivist.cli import app
from archivist.config import ConfigModel, save_config

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_credentials(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("SEARCH_ENGINE_ID", raising=False)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    save_config(ConfigModel(storage={"workspace_root": str(tmp_path)}), path)
    return path


@pytest.fixture
def export_file(tmp_path: Path) -> Path:
    path = tmp_path / "export.json"
    rows = [
        {"id": 1, "url": "https://medium.com/@dl/a", "title": "The Ethics of Rest", "platform": "Medium", "date": "2023-01-05"},
        {"id": 2, "url": "https://bigthink.com/b", "title": "How to Think", "platform": "BigThink", "date": "2023-02-05"},
        {"url": "https://medium.com/@dl/a", "title": "Duplicate"},
    ]
    path.write_text(json.dumps({"articles": rows}))
    return path


class TestDiscover:
    """Tests for the discover command."""

    def test_missing_credentials_fails(self, config_file: Path):
        """Should exit with status 2 when credentials are required."""
        result = runner.invoke(app, ["discover", "--config", str(config_file)])
        assert result.exit_code == 2

    def test_missing_credentials_allowed(self, config_file: Path):
        """Should exit cleanly when asked to."""
        result = runner.invoke(app, ["discover", "--config", str(config_file), "--allow-missing-credentials"])
        assert result.exit_code == 0

    def test_credentials_optional_in_config(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        save_config(ConfigModel(require_credentials=False), path)
        result = runner.invoke(app, ["discover", "--config", str(path)])
        assert result.exit_code == 0

    def test_bad_config_exits(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("search: [")
        result = runner.invoke(app, ["discover", "--config", str(path)])
        assert result.exit_code == 1


class TestSeedAndBuild:
    """Tests for seeding and building artifacts."""

    def test_seed_then_build(self, tmp_path: Path, config_file: Path, export_file: Path):
        """Should seed the store and build every artifact."""
        result = runner.invoke(app, ["seed", str(export_file), "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Kept: 2" in result.output

        store = json.loads((tmp_path / "data" / "articles.json").read_text(encoding="utf-8"))
        assert [a["id"] for a in store] == [1, 2]

        result = runner.invoke(app, ["build", "all", "--order", "desc", "--config", str(config_file)])
        assert result.exit_code == 0

        data_dir = tmp_path / "data"
        bibliography = json.loads((data_dir / "master-bibliography.json").read_text(encoding="utf-8"))
        assert [e["item"]["name"] for e in bibliography["itemListElement"]] == ["How to Think", "The Ethics of Rest"]
        assert (data_dir / "topics").is_dir()
        assert (data_dir / "related" / "the-ethics-of-rest.json").exists()
        assert (data_dir / "outbox" / "archive" / "bigthink" / "how-to-think" / "bib.json").exists()

    def test_seed_refuses_to_overwrite(self, tmp_path: Path, config_file: Path, export_file: Path):
        """Should keep an existing store unless forced."""
        assert runner.invoke(app, ["seed", str(export_file), "--config", str(config_file)]).exit_code == 0
        assert runner.invoke(app, ["seed", str(export_file), "--config", str(config_file)]).exit_code == 1
        assert runner.invoke(app, ["seed", str(export_file), "--force", "--config", str(config_file)]).exit_code == 0

    def test_seed_rejects_empty_export(self, tmp_path: Path, config_file: Path):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        result = runner.invoke(app, ["seed", str(path), "--config", str(config_file)])
        assert result.exit_code == 1

    def test_build_with_empty_store(self, config_file: Path):
        result = runner.invoke(app, ["build", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "nothing to build" in result.output

    def test_build_with_corrupt_store(self, tmp_path: Path, config_file: Path):
        data_dir = tmp_path / "data"
        data_dir.mkdir()
        (data_dir / "articles.json").write_text("{broken")
        result = runner.invoke(app, ["build", "--config", str(config_file)])
        assert result.exit_code == 1


class TestClassify:
    """Tests for the classify command."""

    def test_prints_classification(self):
        result = runner.invoke(app, ["classify", "An Interview with Peter Singer on Ethics"])
        assert result.exit_code == 0
        assert "Interview" in result.output
        assert "Ethics" in result.output
        assert "Peter Singer" in result.output


class TestInit:
    """Tests for the init command."""

    def test_creates_config_and_workspace(self, tmp_path: Path):
        path = tmp_path / "conf" / "config.yaml"
        workspace = tmp_path / "ws"
        result = runner.invoke(
            app,
            ["init", "--config", str(path), "--workspace", str(workspace), "--author", "Jane Doe"],
        )
        assert result.exit_code == 0
        assert (workspace / "data").is_dir()

        data = yaml.safe_load(path.read_text())
        assert data["author"]["name"] == "Jane Doe"
        assert data["storage"]["workspace_root"] == str(workspace.resolve())

    def test_refuses_existing_config(self, config_file: Path):
        result = runner.invoke(app, ["init", "--config", str(config_file)])
        assert result.exit_code == 1
