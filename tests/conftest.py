"""Pytest fixtures."""

import pytest
from changecue.models import ChangeSet, LabelOutcome, MatchCondition, RuleSet, TriggerResult
from changecue.rules.glob import parse_patterns


def condition(
  all: list[str] | None = None,
  any: list[str] | None = None,
) -> MatchCondition:
  """Build a MatchCondition from raw pattern lists."""
  return MatchCondition(
    all=parse_patterns(all) if all is not None else None,
    any=parse_patterns(any) if any is not None else None,
  )


@pytest.fixture
def sample_rule_set() -> RuleSet:
  return RuleSet(
    matchers={
      "ts": (condition(all=["src/**/*.ts"]),),
      "docs": (condition(any=["docs/**"]), condition(any=["**/*.md"])),
      "python": (condition(any=["**/*.py"]),),
    },
    commands={
      "ts": "run-ts-tests",
      "docs": "make docs",
      "python": "pytest",
    },
  )


@pytest.fixture
def sample_rules_yaml() -> str:
  return """
matchers:
  ts:
    - all: ["src/**/*.ts"]
  docs: ["docs/**", "**/*.md"]
  python:
    - any: ["**/*.py"]
commands:
  ts: run-ts-tests
  docs: make docs
  python: pytest
"""


@pytest.fixture
def sample_trigger_result() -> TriggerResult:
  return TriggerResult(
    commands=["make docs"],
    outcomes=[
      LabelOutcome(label="ts", command="run-ts-tests", matched=False),
      LabelOutcome(label="docs", command="make docs", matched=True, condition_index=1),
    ],
    changes=ChangeSet(files=["README.md"], base_ref="main", target_ref="feature"),
    summary="1 changed file, 1 of 2 labels matched, 1 command triggered.",
  )
