"""Tests for CLI main app."""

import logging

import pytest
from rich.logging import RichHandler
from typer.testing import CliRunner

from dexsearch import __version__
from dexsearch.cli import config as config_module
from dexsearch.cli.main import app

runner = CliRunner()


@pytest.fixture
def root_logger(monkeypatch, tmp_path):
    """Restore the root logger after the CLI reconfigures it."""
    monkeypatch.delenv("DEXSEARCH_VERBOSE", raising=False)
    monkeypatch.setattr(config_module, "CONFIG_LOCATIONS", [tmp_path / "config.json"])
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_help():
    """Test that CLI help works."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Fuzzy Pokédex lookup" in result.stdout


def test_cli_version():
    """Test that --version prints the package version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"dexsearch version {__version__}" in result.stdout


def test_commands_registered():
    """Test every command is listed in the help output."""
    result = runner.invoke(app, ["--help"])
    for command in ["lookup", "matches", "config-show", "config-init"]:
        assert command in result.stdout


def test_verbose_applies_on_repeated_invocations(root_logger):
    """Test each invocation reconfigures logging, even in one process."""
    assert runner.invoke(app, ["config-show"]).exit_code == 0
    assert root_logger.level == logging.WARNING

    assert runner.invoke(app, ["--verbose", "config-show"]).exit_code == 0
    assert root_logger.level == logging.INFO
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], RichHandler)
