"""Glob matching and rule evaluation."""

from changecue.rules.engine import RuleEvaluator, check_condition, check_label
from changecue.rules.glob import GlobPattern, describe, matches

__all__ = [
  "GlobPattern",
  "RuleEvaluator",
  "check_condition",
  "check_label",
  "describe",
  "matches",
]
