# tests/conftest.py

"""Shared pytest fixtures for all stock_tracker tests."""

import tempfile
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_output_dirs() -> Generator[Path, None, None]:
    """Point export and chart directories at a throwaway temp dir."""
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        with patch.object(
            Settings, "EXPORTS_DIR", root / "exports"
        ), patch.object(Settings, "CHARTS_DIR", root / "charts"):
            yield root
