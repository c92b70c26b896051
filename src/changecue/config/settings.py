"""Application settings."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

DEFAULT_RULES_PATH = Path(".github/changecue.yml")


class OutputFormat(Enum):
  """Supported output formats."""

  TERMINAL = "terminal"
  JSON = "json"
  MARKDOWN = "markdown"
  GITHUB = "github"
  COMMANDS = "commands"


class Settings(BaseModel):
  """Application configuration."""

  model_config = ConfigDict(extra="forbid", use_enum_values=False)

  rules_path: Path = DEFAULT_RULES_PATH
  base: str = "main"
  format: OutputFormat = OutputFormat.TERMINAL
  fail_on_empty: bool = False
