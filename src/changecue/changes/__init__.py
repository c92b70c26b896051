"""Changed path collection."""

from changecue.changes.extractor import (
  changes_from_paths,
  changes_from_text,
  extract_branch_changes,
  extract_staged_changes,
  extract_working_changes,
)

__all__ = [
  "changes_from_paths",
  "changes_from_text",
  "extract_branch_changes",
  "extract_staged_changes",
  "extract_working_changes",
]
