"""Output formatting for trigger results."""

import json
from abc import ABC, abstractmethod

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from changecue.models import TriggerResult


class OutputFormatter(ABC):
  """Base output formatter."""

  @abstractmethod
  def format(self, result: TriggerResult) -> str:
    """Format trigger result for output."""
    ...


class TerminalFormatter(OutputFormatter):
  """Rich terminal output formatter."""

  def __init__(self, console: Console | None = None):
    self.console = console or Console()

  def format(self, result: TriggerResult) -> str:
    self._print_summary(result)
    self._print_outcomes(result)
    return ""

  def _print_summary(self, result: TriggerResult) -> None:
    changes = result.changes
    self.console.print()
    self.console.print(Panel(
      result.summary,
      title=f"[bold]Triggered Commands[/bold] ({changes.base_ref}..{changes.target_ref})",
      border_style="blue",
    ))

  def _print_outcomes(self, result: TriggerResult) -> None:
    if not result.outcomes:
      self.console.print("\n[yellow]No labels configured.[/yellow]")
      return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Status", width=8)
    table.add_column("Label", width=24)
    table.add_column("Command", min_width=40)

    for outcome in result.outcomes:
      if outcome.matched:
        status = Text("RUN", style="green")
      else:
        status = Text("SKIP", style="dim")
      table.add_row(status, outcome.label, outcome.command)

    self.console.print()
    self.console.print(table)
    self.console.print(f"\n[dim]{len(result.commands)} command(s) triggered[/dim]")


class JsonFormatter(OutputFormatter):
  """JSON output formatter."""

  def format(self, result: TriggerResult) -> str:
    data = {
      "summary": result.summary,
      "base_ref": result.changes.base_ref,
      "target_ref": result.changes.target_ref,
      "changed_files": list(result.changes.files),
      "commands": list(result.commands),
      "labels": [
        {
          "label": o.label,
          "command": o.command,
          "matched": o.matched,
          "condition": o.condition_index,
        }
        for o in result.outcomes
      ],
    }
    return json.dumps(data, indent=2)


class MarkdownFormatter(OutputFormatter):
  """Markdown output formatter."""

  def format(self, result: TriggerResult) -> str:
    lines = [
      "# Triggered Commands",
      "",
      f"**Changes:** {result.changes.base_ref}..{result.changes.target_ref}",
      "",
      "## Summary",
      "",
      result.summary,
      "",
    ]

    if result.commands:
      lines.extend(["## Commands", ""])
      for outcome in result.outcomes:
        if outcome.matched:
          lines.append(f"- **{outcome.label}**: `{outcome.command}`")
      lines.append("")
    else:
      lines.extend(["## Commands", "", "Nothing to run.", ""])

    return "\n".join(lines)


class GitHubFormatter(OutputFormatter):
  """GitHub Actions workflow command formatter."""

  def format(self, result: TriggerResult) -> str:
    lines = []
    for outcome in result.outcomes:
      if outcome.matched:
        message = self._escape(f"{outcome.label}: {outcome.command}")
        lines.append(f"::notice title=changecue::{message}")
    lines.append(f"commands={json.dumps(list(result.commands))}")
    return "\n".join(lines)

  def _escape(self, message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class CommandsFormatter(OutputFormatter):
  """One distinct command per line, for piping into a shell."""

  def format(self, result: TriggerResult) -> str:
    return "\n".join(result.commands)


def get_formatter(format_type: str) -> OutputFormatter:
  """Get formatter by type name."""
  formatters = {
    "terminal": TerminalFormatter,
    "json": JsonFormatter,
    "markdown": MarkdownFormatter,
    "github": GitHubFormatter,
    "commands": CommandsFormatter,
  }
  formatter_class = formatters.get(format_type)
  if not formatter_class:
    raise ValueError(f"Unknown format: {format_type}")
  return formatter_class()
