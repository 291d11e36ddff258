"""YAML config loading."""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ShareHashConfig

# Points at a config file when no --config is given
CONFIG_ENV_VAR = "SHAREHASH_CONFIG"


def _candidate_paths(cli_path: str | None) -> list[Path]:
    """Config locations in priority order: CLI > env > project-local > user-global."""
    if cli_path:
        path = Path(cli_path)
        if not path.is_file():
            raise ValueError(f"Config file not found: {path}")
        return [path]
    paths = []
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path("./sharehash.yaml"))
    paths.append(Path.home() / ".sharehash" / "config.yaml")
    return paths


def load_config(cli_path: str | None = None) -> ShareHashConfig:
    """Load the first non-empty config file found, or defaults.

    Raises ValueError naming the file when it is not valid YAML, not a
    mapping, or names an unregistered schema version.
    """
    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")
        try:
            return ShareHashConfig.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return ShareHashConfig()


# Default YAML template for `sharehash config init`
DEFAULT_CONFIG_TEMPLATE = """\
# sharehash.yaml

# Schema version used for new shares
default_version: "1.1.2"       # 1.0 | 1.0.1 | 1.1.2

# Envelope output
envelope:
  # indent: 2                  # pretty-print; compact when unset
  sort_keys: false

# Logging
log_level: "warn"              # debug | info | warn | error
"""
