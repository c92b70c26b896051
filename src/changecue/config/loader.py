"""Configuration file loading."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from changecue.config.settings import Settings
from changecue.errors import ConfigError

CONFIG_FILENAMES = [".changecue.yaml", ".changecue.yml", "changecue.yaml", "changecue.yml"]


def _find_config_file(config_path: Path | None = None) -> Path | None:
  """Find config file path, or None if no config exists."""
  if config_path:
    return config_path

  for filename in CONFIG_FILENAMES:
    path = Path.cwd() / filename
    if path.exists():
      return path

  return None


def load_config(config_path: Path | None = None) -> Settings:
  """Load configuration from file or defaults.

  An explicit ``config_path`` must exist; auto-discovered files are
  optional.
  """
  path = _find_config_file(config_path)
  if path:
    return _load_from_file(path)
  return Settings()


def _load_from_file(path: Path) -> Settings:
  """Load settings from a YAML file."""
  if not path.exists():
    raise ConfigError("Config file not found", source=path)

  try:
    with open(path, encoding="utf-8") as f:
      data = yaml.safe_load(f) or {}
  except yaml.YAMLError as e:
    raise ConfigError(f"Invalid YAML in config file: {e}", source=path) from e

  return _parse_config(data, source=path)


def _parse_config(data: dict, source: Path | None = None) -> Settings:
  """Parse config dict into Settings."""
  if not isinstance(data, dict):
    raise ConfigError("Config file must contain a mapping", source=source)

  try:
    return Settings.model_validate(data)
  except ValidationError as e:
    raise ConfigError(f"Invalid config: {e.error_count()} error(s)\n{e}", source=source) from e
