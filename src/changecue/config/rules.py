"""Rule set document decoding.

Decodes a YAML document of the form::

  matchers:
    docs: ["docs/**", "**/*.md"]
    backend:
      - all: ["src/**", "!src/ui/**"]
        any: ["**/*.py"]
  commands:
    docs: "make docs"
    backend: "make test-backend"

into a typed ``RuleSet``. Plain strings inside a matcher list are shorthand
for ``{any: [glob]}``; a bare string or a single mapping stands for a
one-element list.
"""

from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from changecue.errors import ConfigError
from changecue.models import MatchCondition, RuleSet
from changecue.rules.glob import parse_patterns


class MatchConfig(BaseModel):
  """Structured ``{all?, any?}`` matcher entry."""

  model_config = ConfigDict(extra="forbid")

  all_: list[StrictStr] | None = Field(default=None, alias="all")
  any_: list[StrictStr] | None = Field(default=None, alias="any")


MatcherEntry = Union[StrictStr, MatchConfig]


class RuleSetDocument(BaseModel):
  """Top-level shape of a rules document."""

  model_config = ConfigDict(extra="forbid")

  matchers: dict[StrictStr, MatcherEntry | list[MatcherEntry]] = Field(default_factory=dict)
  commands: dict[StrictStr, StrictStr] = Field(default_factory=dict)


def _to_condition(entry: MatcherEntry) -> MatchCondition:
  if isinstance(entry, str):
    return MatchCondition(any=parse_patterns([entry]))

  return MatchCondition(
    all=parse_patterns(entry.all_) if entry.all_ is not None else None,
    any=parse_patterns(entry.any_) if entry.any_ is not None else None,
  )


def _format_validation_error(error: ValidationError) -> str:
  """Condense pydantic errors into one line per location."""
  parts = []
  for detail in error.errors():
    location = ".".join(str(loc) for loc in detail["loc"])
    parts.append(f"{location}: {detail['msg']}")
  return "; ".join(parts)


def parse_rule_set(data: Any, source: Path | None = None) -> RuleSet:
  """Decode a parsed document into a RuleSet.

  Args:
    data: Result of loading the YAML document (None for an empty file).
    source: Path the document came from, for error messages.

  Raises:
    ConfigError: On any shape mismatch or invalid glob pattern.
  """
  if data is None:
    data = {}
  if not isinstance(data, dict):
    raise ConfigError(
      f"Rules document must be a mapping, got {type(data).__name__}",
      source=source,
    )

  try:
    document = RuleSetDocument.model_validate(data)
  except ValidationError as e:
    raise ConfigError(
      f"Invalid rules document ({_format_validation_error(e)})",
      source=source,
    ) from e

  matchers: dict[str, tuple[MatchCondition, ...]] = {}
  for label, entries in document.matchers.items():
    if not isinstance(entries, list):
      entries = [entries]
    try:
      matchers[label] = tuple(_to_condition(entry) for entry in entries)
    except ConfigError as e:
      raise ConfigError(f"Label '{label}': {e.message}", label=label, source=source) from e

  return RuleSet(matchers=matchers, commands=document.commands)


def load_rule_set(path: Path) -> RuleSet:
  """Load and decode a rules document from a YAML file.

  Raises:
    ConfigError: If the file is missing, not valid YAML, or malformed.
  """
  if not path.exists():
    raise ConfigError("Rules file not found", source=path)

  try:
    with open(path, encoding="utf-8") as f:
      data = yaml.safe_load(f)
  except yaml.YAMLError as e:
    raise ConfigError(f"Invalid YAML in rules file: {e}", source=path) from e

  return parse_rule_set(data, source=path)
