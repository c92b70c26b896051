"""Output formatting."""

from changecue.output.formatter import (
  CommandsFormatter,
  GitHubFormatter,
  JsonFormatter,
  MarkdownFormatter,
  OutputFormatter,
  TerminalFormatter,
  get_formatter,
)

__all__ = [
  "CommandsFormatter",
  "GitHubFormatter",
  "JsonFormatter",
  "MarkdownFormatter",
  "OutputFormatter",
  "TerminalFormatter",
  "get_formatter",
]
