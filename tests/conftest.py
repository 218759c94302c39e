"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real home directory,
log directory and terminal.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Route the application logger into *tmp_path* for every test."""
    from pomo_cli.utils.logger import close_logger

    log_dir = tmp_path / "logs"
    close_logger()
    with patch("pomo_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir
    close_logger()


@pytest.fixture()
def home_dir(tmp_path, monkeypatch):
    """Point $HOME at a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
