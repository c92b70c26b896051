"""Glob pattern matching for changed file paths.

Patterns follow extended shell globbing with path-separator awareness:

- ``*`` and ``?`` match within a single path segment
- ``**`` matches zero or more segments
- ``[...]`` character classes, ``{a,b}`` and ``{1..3}`` brace expansion
- ``@(...)``, ``+(...)`` and friends (extended globs)

A leading ``!`` negates the pattern: the glob is compiled from the text
after the marker and the match outcome is inverted.

Example:
  >>> pattern = GlobPattern.parse("!docs/**")
  >>> pattern.matches("src/app.py")
  True
  >>> describe(pattern)
  '!docs/**'
"""

import re
from dataclasses import dataclass, field

from wcmatch import glob as wcglob
from wcmatch._wcparse import PatternLimitException

from changecue.errors import ConfigError

NEGATION_MARKER = "!"

GLOB_FLAGS = (
  wcglob.GLOBSTAR
  | wcglob.BRACE
  | wcglob.EXTGLOB
  | wcglob.DOTGLOB
  | wcglob.FORCEUNIX
)


def _split_negation(raw: str) -> tuple[bool, str]:
  """Strip leading negation markers, returning (negated, pattern).

  Each ``!`` flips the flag, so ``!!a`` is equivalent to ``a``. A ``!``
  directly followed by ``(`` opens an extended glob and is left alone.
  """
  negated = False
  index = 0
  while raw.startswith(NEGATION_MARKER, index) and not raw.startswith("(", index + 1):
    negated = not negated
    index += 1
  return negated, raw[index:]


@dataclass(frozen=True)
class GlobPattern:
  """A single compiled glob pattern. Immutable once parsed."""

  raw: str
  pattern: str
  negated: bool = False
  _regexes: tuple[re.Pattern[str], ...] = field(repr=False, compare=False, default=())

  @classmethod
  def parse(cls, raw: str) -> "GlobPattern":
    """Compile a raw pattern string.

    Raises:
      ConfigError: If the pattern is empty or cannot be compiled.
    """
    if not isinstance(raw, str):
      raise ConfigError(f"Glob pattern must be a string, got {type(raw).__name__}")

    negated, pattern = _split_negation(raw)
    if not pattern:
      raise ConfigError(f"Empty glob pattern: {raw!r}")

    try:
      include, _ = wcglob.translate(pattern, flags=GLOB_FLAGS)
      regexes = tuple(re.compile(expr) for expr in include)
    except (PatternLimitException, ValueError, re.error) as e:
      raise ConfigError(f"Invalid glob pattern {raw!r}: {e}") from e

    return cls(raw=raw, pattern=pattern, negated=negated, _regexes=regexes)

  def matches(self, path: str) -> bool:
    """Check whether a path satisfies this pattern."""
    hit = any(regex.fullmatch(path) for regex in self._regexes)
    return hit != self.negated

  def describe(self) -> str:
    """Render the pattern back out, with the marker if negated."""
    return f"{NEGATION_MARKER if self.negated else ''}{self.pattern}"

  def __str__(self) -> str:
    return self.describe()


def matches(pattern: GlobPattern, path: str) -> bool:
  """Check whether ``path`` satisfies ``pattern``."""
  return pattern.matches(path)


def describe(pattern: GlobPattern) -> str:
  """Render ``pattern`` for logs and diagnostics."""
  return pattern.describe()


def parse_patterns(raw_patterns: list[str]) -> tuple[GlobPattern, ...]:
  """Compile a list of raw patterns, preserving order."""
  return tuple(GlobPattern.parse(raw) for raw in raw_patterns)
