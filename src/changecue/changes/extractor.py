"""Changed path collection from local sources."""

import subprocess
from pathlib import Path
from typing import Iterable

from changecue.errors import GitError
from changecue.models import ChangeSet


def _sanitize_error(stderr: str) -> str:
  """Remove potentially sensitive path information from error messages."""
  lines = stderr.strip().split("\n")
  sanitized = []
  for line in lines:
    if "fatal:" in line or "error:" in line:
      sanitized.append(line.split("/")[-1] if "/" in line else line)
    else:
      sanitized.append(line)
  return "\n".join(sanitized)


def run_git(*args: str, cwd: Path | None = None) -> str:
  """Run a git command and return stdout."""
  try:
    result = subprocess.run(
      ["git", *args],
      capture_output=True,
      text=True,
      check=True,
      cwd=cwd,
    )
    return result.stdout
  except subprocess.CalledProcessError as e:
    sanitized = _sanitize_error(e.stderr)
    raise GitError(f"git {' '.join(args)} failed: {sanitized}") from e
  except FileNotFoundError as e:
    raise GitError("git executable not found") from e


def parse_name_only(output: str) -> list[str]:
  """Parse ``git diff --name-only -z`` output into paths."""
  return [path for path in output.split("\0") if path]


def changes_from_paths(
  paths: Iterable[str],
  base_ref: str = "N/A",
  target_ref: str = "paths",
) -> ChangeSet:
  """Wrap an explicit list of paths. Order and duplicates are kept."""
  return ChangeSet(files=list(paths), base_ref=base_ref, target_ref=target_ref)


def changes_from_text(text: str) -> ChangeSet:
  """Read one path per line (e.g. from stdin), skipping blank lines."""
  paths = [line.strip() for line in text.splitlines()]
  return changes_from_paths([p for p in paths if p], target_ref="stdin")


def extract_staged_changes(cwd: Path | None = None) -> ChangeSet:
  """Collect paths with staged changes."""
  output = run_git("diff", "--cached", "--name-only", "-z", cwd=cwd)
  return ChangeSet(files=parse_name_only(output), base_ref="HEAD", target_ref="staged")


def extract_working_changes(cwd: Path | None = None) -> ChangeSet:
  """Collect paths with unstaged changes in the working tree."""
  output = run_git("diff", "--name-only", "-z", cwd=cwd)
  return ChangeSet(files=parse_name_only(output), base_ref="HEAD", target_ref="working")


def extract_branch_changes(
  branch: str,
  base: str = "main",
  cwd: Path | None = None,
) -> ChangeSet:
  """Collect paths changed on ``branch`` since it diverged from ``base``."""
  output = run_git("diff", "--name-only", "-z", f"{base}...{branch}", cwd=cwd)
  return ChangeSet(files=parse_name_only(output), base_ref=base, target_ref=branch)
