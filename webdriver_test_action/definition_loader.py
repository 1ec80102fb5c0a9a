"""Load run definitions from YAML files."""

import asyncio
from pathlib import Path

import yaml

from webdriver_test_action.models.definition import RunDefinition


async def load_run_definition(path: Path) -> RunDefinition:
    """Load and validate a run definition.

    Args:
        path: Path to the YAML definition file

    Returns:
        Parsed run definition

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid YAML or not a mapping
        pydantic.ValidationError: If the content does not match the schema

    """
    if not path.is_file():
        raise FileNotFoundError(f"Run definition not found: {path}")

    content = await asyncio.to_thread(path.read_text, encoding="utf-8")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Run definition {path} must be a mapping")

    return RunDefinition.model_validate(data)
