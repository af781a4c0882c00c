"""Shared fixtures for the Images Manager tests."""

import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep configuration and log files out of the real home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    yield home

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_images_manager", False):
            root_logger.removeHandler(handler)
            handler.close()


def make_files(root: Path, *relative_paths: str, content: bytes = b"data"):
    """Create files (and their parent folders) below ``root``."""
    for relative_path in relative_paths:
        file_path = root.joinpath(*relative_path.split("/"))
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
