"""CLI interface using Typer."""

import logging
import os
import sys
import traceback
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from changecue import __version__
from changecue.config import load_config
from changecue.errors import ConfigError, GitError, NoChangesError
from changecue.output import get_formatter
from changecue.trigger import run_trigger

app = typer.Typer(
  name="changecue",
  help="Decide which commands a changeset triggers",
  no_args_is_help=False,
)

console = Console()
err_console = Console(stderr=True)

EXIT_NOTHING_TRIGGERED = 2


def _is_debug() -> bool:
  return os.environ.get("CHANGECUE_DEBUG", "").lower() in ("1", "true", "yes")


def _configure_logging(debug: bool) -> None:
  package_logger = logging.getLogger("changecue")
  package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
  if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
    package_logger.addHandler(RichHandler(console=err_console, show_path=False))


def version_callback(value: bool) -> None:
  if value:
    console.print(f"changecue {__version__}")
    raise typer.Exit()


@app.command()
def main(
  files: Optional[list[str]] = typer.Argument(
    None,
    help="Changed file paths (default: staged git changes)",
  ),
  stdin: bool = typer.Option(False, "--stdin", help="Read changed paths from stdin, one per line"),
  branch: str = typer.Option(None, "--branch", "-b", help="Branch to compare against base"),
  base: str = typer.Option(None, "--base", help="Base ref for comparison (default: main)"),
  working: bool = typer.Option(False, "--working", "-w", help="Use unstaged working tree changes"),
  rules: Path = typer.Option(None, "--rules", "-r", help="Rules file path"),
  config: Path = typer.Option(None, "--config", "-c", help="Config file path"),
  format_type: str = typer.Option(
    None, "--format", help="Output format: terminal, json, markdown, github, commands"
  ),
  exit_code: bool = typer.Option(
    False, "--exit-code", help=f"Exit {EXIT_NOTHING_TRIGGERED} when no command is triggered"
  ),
  fail_on_empty: Optional[bool] = typer.Option(
    None, "--fail-on-empty/--allow-empty", help="Treat an empty changeset as an error"
  ),
  debug: bool = typer.Option(False, "--debug", "-d", help="Log matching details and show tracebacks"),
  version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
) -> None:
  """Print the commands triggered by changed files.

  With no arguments, evaluates staged git changes.
  With file arguments, evaluates the given paths as-is.
  """
  show_traceback = debug or _is_debug()
  _configure_logging(show_traceback)

  try:
    settings = load_config(config)
    result = run_trigger(
      files=files,
      stdin_text=sys.stdin.read() if stdin else None,
      branch=branch,
      base=base,
      working=working,
      rules_path=rules,
      fail_on_empty=fail_on_empty,
      settings=settings,
    )

    formatter = get_formatter(format_type or settings.format.value)
    output = formatter.format(result)
    if output:
      console.print(output, markup=False, highlight=False, emoji=False, soft_wrap=True)

  except NoChangesError as e:
    console.print(f"[yellow]Warning:[/yellow] {escape(str(e))}")
    raise typer.Exit(1) from None
  except ConfigError as e:
    console.print(f"[red]Error:[/red] {escape(str(e))}")
    raise typer.Exit(1) from None
  except GitError as e:
    console.print(f"[red]Error:[/red] {escape(str(e))}")
    raise typer.Exit(1) from None
  except Exception as e:
    console.print(f"[red]Error:[/red] {escape(str(e))}")
    if show_traceback:
      console.print("\n[dim]Traceback:[/dim]")
      console.print(traceback.format_exc())
    raise typer.Exit(1) from None

  if exit_code and not result.has_triggered:
    raise typer.Exit(EXIT_NOTHING_TRIGGERED)


if __name__ == "__main__":
  app()
