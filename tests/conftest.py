from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def project_dir(tmp_path: Path, monkeypatch) -> Path:
    """Working directory for a documentation run, isolated per test."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project
