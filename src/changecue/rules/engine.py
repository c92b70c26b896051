"""Rule evaluator that folds a changeset and a rule set into commands."""

import logging
from typing import Sequence

from changecue.errors import ConfigError
from changecue.models import ChangeSet, LabelOutcome, MatchCondition, RuleSet, TriggerResult
from changecue.rules.glob import GlobPattern

logger = logging.getLogger(__name__)


def _file_matches_group(path: str, patterns: Sequence[GlobPattern]) -> bool:
  """Check that a single file satisfies every pattern in a group."""
  for pattern in patterns:
    if not pattern.matches(path):
      logger.debug("  %s does not match %s", path, pattern.describe())
      return False
  return True


def _check_all(changed_files: Sequence[str], patterns: Sequence[GlobPattern]) -> bool:
  """Every changed file must match every pattern in the group."""
  for path in changed_files:
    if not _file_matches_group(path, patterns):
      logger.debug("  'all' group failed on %s", path)
      return False
  return True


def _check_any(changed_files: Sequence[str], patterns: Sequence[GlobPattern]) -> bool:
  """Some changed file must match every pattern in the group."""
  for path in changed_files:
    if _file_matches_group(path, patterns):
      logger.debug("  'any' group satisfied by %s", path)
      return True
  return False


def check_condition(condition: MatchCondition, changed_files: Sequence[str]) -> bool:
  """Check a single condition against the changeset.

  Absent clauses impose no constraint, so an empty condition always
  passes. When both clauses are present, both must hold.

  Args:
    condition: The condition to check.
    changed_files: Changed paths, used as-is.

  Returns:
    True if every present clause holds.
  """
  if condition.all is not None and not _check_all(changed_files, condition.all):
    return False

  if condition.any is not None and not _check_any(changed_files, condition.any):
    return False

  return True


def check_label(
  conditions: Sequence[MatchCondition],
  changed_files: Sequence[str],
) -> int | None:
  """Find the first passing condition for a label.

  Conditions are OR'ed in order; an empty list never matches.

  Returns:
    Index of the first passing condition, or None if none pass.
  """
  for index, condition in enumerate(conditions):
    if check_condition(condition, changed_files):
      return index
  return None


class RuleEvaluator:
  """Evaluates a read-only rule set against changesets.

  Holds no mutable state, so a single evaluator can be shared across
  changesets.

  Example:
    evaluator = RuleEvaluator(rule_set)
    commands = evaluator.evaluate(["src/a.ts", "README.md"])
  """

  def __init__(self, rule_set: RuleSet):
    self._rule_set = rule_set

  @property
  def rule_set(self) -> RuleSet:
    return self._rule_set

  def evaluate(self, changed_files: Sequence[str]) -> frozenset[str]:
    """Return the set of commands triggered by the changed files.

    Raises:
      ConfigError: If a label in ``commands`` has no matcher entry.
    """
    outcomes = self._evaluate_labels(changed_files)
    return frozenset(o.command for o in outcomes if o.matched)

  def explain(self, changes: ChangeSet) -> TriggerResult:
    """Evaluate a changeset and keep the per-label outcomes.

    Raises:
      ConfigError: If a label in ``commands`` has no matcher entry.
    """
    outcomes = self._evaluate_labels(changes.files)

    commands: list[str] = []
    for outcome in outcomes:
      if outcome.matched and outcome.command not in commands:
        commands.append(outcome.command)

    return TriggerResult(
      commands=commands,
      outcomes=outcomes,
      changes=changes,
      summary=self._generate_summary(changes, outcomes, commands),
    )

  def validate(self) -> None:
    """Check that every commanded label has a matcher entry.

    Raises:
      ConfigError: Naming the first label without matchers.
    """
    matchers = self._rule_set.matchers
    missing = [label for label in self._rule_set.commands if label not in matchers]
    if missing:
      raise ConfigError(
        f"No matchers configured for label(s): {', '.join(missing)}",
        label=missing[0],
      )

  def _evaluate_labels(self, changed_files: Sequence[str]) -> list[LabelOutcome]:
    self.validate()
    matchers = self._rule_set.matchers

    outcomes: list[LabelOutcome] = []
    for label, command in self._rule_set.commands.items():
      logger.debug("checking label %s", label)
      index = check_label(matchers[label], changed_files)
      if index is not None:
        logger.debug("label %s matched on condition %d", label, index)
      outcomes.append(LabelOutcome(
        label=label,
        command=command,
        matched=index is not None,
        condition_index=index,
      ))
    return outcomes

  def _generate_summary(
    self,
    changes: ChangeSet,
    outcomes: list[LabelOutcome],
    commands: list[str],
  ) -> str:
    if changes.is_empty:
      return "No changed files."

    matched = sum(1 for o in outcomes if o.matched)
    files = len(changes.files)
    summary = (
      f"{files} changed file{'s' if files != 1 else ''}, "
      f"{matched} of {len(outcomes)} label{'s' if len(outcomes) != 1 else ''} matched"
    )
    if commands:
      summary += f", {len(commands)} command{'s' if len(commands) != 1 else ''} triggered."
    else:
      summary += ", nothing to run."
    return summary
