"""Core trigger orchestration."""

import logging
from pathlib import Path

from changecue.changes import (
  changes_from_paths,
  changes_from_text,
  extract_branch_changes,
  extract_staged_changes,
  extract_working_changes,
)
from changecue.config import Settings, load_config, load_rule_set
from changecue.errors import NoChangesError
from changecue.models import ChangeSet, LabelOutcome, RuleSet, TriggerResult
from changecue.rules import RuleEvaluator

logger = logging.getLogger(__name__)


class TriggerOrchestrator:
  """Collects a changeset and evaluates it against a rule set."""

  def __init__(self, rule_set: RuleSet, settings: Settings | None = None):
    self.settings = settings or Settings()
    self.evaluator = RuleEvaluator(rule_set)

  def trigger_paths(self, paths: list[str]) -> TriggerResult:
    """Evaluate an explicit list of changed paths."""
    return self._perform_trigger(changes_from_paths(paths))

  def trigger_text(self, text: str) -> TriggerResult:
    """Evaluate newline-separated changed paths."""
    return self._perform_trigger(changes_from_text(text))

  def trigger_staged(self, cwd: Path | None = None) -> TriggerResult:
    """Evaluate staged changes."""
    return self._perform_trigger(extract_staged_changes(cwd))

  def trigger_working(self, cwd: Path | None = None) -> TriggerResult:
    """Evaluate unstaged working tree changes."""
    return self._perform_trigger(extract_working_changes(cwd))

  def trigger_branch(
    self,
    branch: str,
    base: str | None = None,
    cwd: Path | None = None,
  ) -> TriggerResult:
    """Evaluate changes between a branch and its base."""
    changes = extract_branch_changes(branch, base or self.settings.base, cwd)
    return self._perform_trigger(changes)

  def _perform_trigger(self, changes: ChangeSet) -> TriggerResult:
    logger.debug(
      "found %d changed file(s) (%s..%s)",
      len(changes.files), changes.base_ref, changes.target_ref,
    )
    for path in changes.files:
      logger.debug("  %s", path)

    if changes.is_empty:
      if self.settings.fail_on_empty:
        raise NoChangesError(f"No changed files found ({changes.base_ref}..{changes.target_ref})")
      return self._skip_trigger(changes)

    return self.evaluator.explain(changes)

  def _skip_trigger(self, changes: ChangeSet) -> TriggerResult:
    """Report every label as unmatched without evaluating the rule set."""
    self.evaluator.validate()
    logger.debug("no changed files, skipping evaluation")
    return TriggerResult(
      commands=[],
      outcomes=[
        LabelOutcome(label=label, command=command, matched=False)
        for label, command in self.evaluator.rule_set.commands.items()
      ],
      changes=changes,
      summary="No changed files.",
    )


def run_trigger(
  files: list[str] | None = None,
  stdin_text: str | None = None,
  branch: str | None = None,
  base: str | None = None,
  working: bool = False,
  rules_path: Path | None = None,
  config_path: Path | None = None,
  fail_on_empty: bool | None = None,
  cwd: Path | None = None,
  settings: Settings | None = None,
) -> TriggerResult:
  """Run a trigger evaluation with the given options.

  Sources are checked in order: explicit files, stdin text, branch diff,
  working tree, and finally the staged index. Pre-loaded ``settings`` take
  the place of reading ``config_path``; overrides apply to a copy.
  """
  settings = (settings or load_config(config_path)).model_copy(deep=True)

  if rules_path:
    settings.rules_path = rules_path
  if base:
    settings.base = base
  if fail_on_empty is not None:
    settings.fail_on_empty = fail_on_empty

  rules_file = settings.rules_path
  if cwd and not rules_file.is_absolute():
    rules_file = cwd / rules_file
  logger.debug("loading rules from %s", rules_file)
  rule_set = load_rule_set(rules_file)

  orchestrator = TriggerOrchestrator(rule_set, settings)

  if files:
    return orchestrator.trigger_paths(files)
  if stdin_text is not None:
    return orchestrator.trigger_text(stdin_text)
  if branch:
    return orchestrator.trigger_branch(branch, cwd=cwd)
  if working:
    return orchestrator.trigger_working(cwd)
  return orchestrator.trigger_staged(cwd)
