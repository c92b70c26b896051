"""Core domain models for rule evaluation."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Sequence

if TYPE_CHECKING:
  from changecue.rules.glob import GlobPattern


@dataclass(frozen=True)
class MatchCondition:
  """An ``{all?, any?}`` pair of pattern groups.

  ``None`` marks an absent clause, which imposes no constraint. An empty
  tuple is a present clause with no patterns.
  """

  all: "tuple[GlobPattern, ...] | None" = None
  any: "tuple[GlobPattern, ...] | None" = None

  @property
  def is_empty(self) -> bool:
    return self.all is None and self.any is None


@dataclass(frozen=True)
class RuleSet:
  """Label to conditions mapping, plus label to command mapping.

  Both mappings keep configuration order and are read-only once built.
  """

  matchers: Mapping[str, tuple[MatchCondition, ...]] = field(default_factory=dict)
  commands: Mapping[str, str] = field(default_factory=dict)

  def __post_init__(self) -> None:
    matchers = {label: tuple(conds) for label, conds in self.matchers.items()}
    object.__setattr__(self, "matchers", MappingProxyType(matchers))
    object.__setattr__(self, "commands", MappingProxyType(dict(self.commands)))

  @property
  def labels(self) -> list[str]:
    """Labels that carry a command, in configuration order."""
    return list(self.commands.keys())


@dataclass(frozen=True)
class ChangeSet:
  """Ordered changed paths, used exactly as supplied."""

  files: Sequence[str]
  base_ref: str = "N/A"
  target_ref: str = "N/A"

  def __post_init__(self) -> None:
    object.__setattr__(self, "files", tuple(self.files))

  @property
  def is_empty(self) -> bool:
    return not self.files


@dataclass(frozen=True)
class LabelOutcome:
  """Evaluation outcome of a single label."""

  label: str
  command: str
  matched: bool
  condition_index: int | None = None


@dataclass(frozen=True)
class TriggerResult:
  """Result of evaluating a changeset against a rule set."""

  commands: Sequence[str]
  outcomes: Sequence[LabelOutcome]
  changes: ChangeSet
  summary: str

  @property
  def command_set(self) -> frozenset[str]:
    """Triggered commands as a set."""
    return frozenset(self.commands)

  @property
  def matched_labels(self) -> list[str]:
    return [o.label for o in self.outcomes if o.matched]

  @property
  def has_triggered(self) -> bool:
    return bool(self.commands)
