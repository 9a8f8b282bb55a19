"""Read the gripper and grasp generator configuration files written in YAML."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def load_yaml_data(yaml_path: Path) -> Any:
    """Parse a YAML file into plain Python data, leaving validation to the caller's schema.

    :param yaml_path: YAML file to be read
    :return: Parsed contents (typically a dictionary)
    :raises FileNotFoundError: If no file exists at the given path
    :raises RuntimeError: If the file is not well-formed YAML
    """
    if not yaml_path.is_file():
        raise FileNotFoundError(f"No YAML file found at {yaml_path}")

    logger.debug("Reading YAML data from %s", yaml_path)
    try:
        with yaml_path.open() as yaml_file:
            return yaml.safe_load(yaml_file)
    except yaml.YAMLError as error:
        raise RuntimeError(f"Could not parse YAML file {yaml_path}: {error}") from error
