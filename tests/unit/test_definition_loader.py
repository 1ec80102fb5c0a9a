"""Tests for definition loader."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from webdriver_test_action.definition_loader import load_run_definition


class TestLoadRunDefinition:
    """Tests for load_run_definition function."""

    async def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads and parses a definition with shared options and targets."""
        path = tmp_path / "webdriver.yaml"
        path.write_text(
            """
version: "1.0"
options:
  browser: chrome
targets:
  unit:
    urls:
      - "http://localhost:9876/test/unit.html"
      - "http://localhost:9876/test/integration.html"
  mobile:
    browser: chrome-mobile
    urls:
      - "http://localhost:9876/test/unit.html"
"""
        )

        definition = await load_run_definition(path)
        targets = definition.resolve_targets()

        assert definition.version == "1.0"
        assert list(targets) == ["unit", "mobile"]
        assert targets["unit"].browser == "chrome"
        assert list(targets["unit"].urls) == [
            "http://localhost:9876/test/unit.html",
            "http://localhost:9876/test/integration.html",
        ]
        assert targets["mobile"].browser == "chrome-mobile"

    async def test_raises_for_missing_file(self, tmp_path: Path) -> None:
        """Raises FileNotFoundError for missing definition."""
        with pytest.raises(FileNotFoundError, match="Run definition not found"):
            await load_run_definition(tmp_path / "missing.yaml")

    async def test_raises_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ValueError for malformed YAML."""
        path = tmp_path / "webdriver.yaml"
        path.write_text("invalid: yaml: content: [")

        with pytest.raises(ValueError, match="Invalid YAML"):
            await load_run_definition(path)

    async def test_raises_for_non_mapping(self, tmp_path: Path) -> None:
        """Raises ValueError when the document is not a mapping."""
        path = tmp_path / "webdriver.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            await load_run_definition(path)

    async def test_raises_for_invalid_schema(self, tmp_path: Path) -> None:
        """Raises ValidationError for fields of the wrong type."""
        path = tmp_path / "webdriver.yaml"
        path.write_text(
            """
targets:
  unit:
    poll_interval: -1
"""
        )

        with pytest.raises(ValidationError):
            await load_run_definition(path)
