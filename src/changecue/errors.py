"""Exception hierarchy for changecue."""

from pathlib import Path


class ChangeCueError(Exception):
  """Base user-facing error."""


class ConfigError(ChangeCueError):
  """Rule set is malformed: bad entry shape, unknown label or invalid glob."""

  def __init__(
    self,
    message: str,
    label: str | None = None,
    source: Path | None = None,
  ):
    self.label = label
    self.source = source
    self.message = message
    if source is not None:
      message = f"{message} ({source})"
    super().__init__(message)


class NoChangesError(ChangeCueError):
  """Changeset is empty.

  Soft condition: evaluation of an empty changeset simply triggers nothing.
  Only raised when the caller asks for empty changesets to be treated as
  failures.
  """


class GitError(ChangeCueError):
  """Git command failed."""
