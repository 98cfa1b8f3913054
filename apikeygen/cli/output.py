"""Status output for the apikeygen CLI.

Status lines go to stdout and diagnostics to stderr. Both consoles soft-wrap so long
paths stay on one line, and markup is disabled so paths are printed verbatim.
"""

import sys

from rich.console import Console

console = Console(soft_wrap=True, highlight=False, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


def is_piped() -> bool:
    """Check if stdout is not a terminal."""
    return not sys.stdout.isatty()


def print_key(key: str) -> None:
    """Print the generated API key."""
    console.print(f"Generated API Key: {key}", markup=False)


def print_success(message: str) -> None:
    """Print a success message to stdout."""
    if is_piped():
        console.print(message, markup=False)
    else:
        console.print(message, style="green", markup=False)


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"Warning: {message}", style="yellow", markup=False)


def print_error(message: str, hint: str | None = None) -> None:
    """Print an error and optional hint to stderr."""
    err_console.print(f"Error: {message}", style="bold red", markup=False)
    if hint:
        err_console.print(f"  {hint}", style="dim", markup=False)


def print_failure(message: str) -> None:
    """Print a final failure summary to stderr."""
    err_console.print(message, style="red", markup=False)
