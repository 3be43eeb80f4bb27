"""Loading comparison options from YAML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml

from .exceptions import ConfigFileError, OptionsError
from .models import ComparisonOptions

logger = logging.getLogger(__name__)

SECTION = "comparison"


def options_from_document(document: Optional[dict]) -> ComparisonOptions:
    """
    Build options from a parsed document.

    Options may sit at the top level or under a `comparison:` key.
    An empty document gives the defaults.
    """
    if document is None:
        return ComparisonOptions()
    if not isinstance(document, dict):
        raise OptionsError(
            f"Options document must be a mapping, got {type(document).__name__}"
        )
    if SECTION in document:
        section = document[SECTION]
        if section is None:
            return ComparisonOptions()
        if not isinstance(section, dict):
            raise OptionsError(f"'{SECTION}' section must be a mapping", SECTION)
        document = section
    return ComparisonOptions.from_dict(document)


def load_options(path: str | Path) -> ComparisonOptions:
    """
    Load options from a YAML or JSON file.

    Args:
        path: Path to the options file

    Returns:
        ComparisonOptions

    Raises:
        ConfigFileError: if the file is missing or not valid YAML
        OptionsError: if the file holds unknown or mistyped options
    """
    options_path = Path(path)
    if not options_path.exists():
        raise ConfigFileError(str(options_path), "file not found")

    with open(options_path, 'r') as f:
        content = f.read()

    # JSON is valid YAML, so one parser covers both
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigFileError(str(options_path), str(e)) from e

    options = options_from_document(document)
    logger.info("Loaded comparison options from %s", options_path)
    return options
