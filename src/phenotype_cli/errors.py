"""Exception → exit code mapping for the console front end.

The SDK raises ``FileNotFoundError`` for missing rule/answer files,
``RulesetError`` (a ``ValueError``) for inconsistent rule data or bad
answer input, and ``KeyError`` for unknown ids.  Rather than catching these
in every command, :func:`handle_error` picks the exit code and a short
message from an ordered table.
"""

import logging

from rich.console import Console

from phenotype_rulesets.ruleset import RulesetError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1

# --- Exception types and their exit codes / message prefixes ---
# Checked in order; first isinstance match wins, so subclasses come first.
_ERROR_TABLE: list[tuple[type[BaseException], int, str]] = [
    (FileNotFoundError, 2, "File not found"),
    (RulesetError, 3, "Invalid ruleset"),
    (ValueError, 3, "Invalid input"),
    (KeyError, 4, "Unknown id"),
]


def exit_code_for(exc: BaseException) -> int:
    for exc_type, code, _ in _ERROR_TABLE:
        if isinstance(exc, exc_type):
            return code
    return EXIT_UNEXPECTED


def handle_error(exc: BaseException, console: Console) -> int:
    """Report *exc* on *console* and return the exit code to use.

    Known errors get a one-line message; anything else is logged with its
    full traceback.
    """
    for exc_type, code, prefix in _ERROR_TABLE:
        if isinstance(exc, exc_type):
            logger.warning("%s: %s", prefix, exc)
            console.print(f"[bold red]{prefix}:[/bold red] {exc}")
            return code

    logger.exception("Unhandled exception")
    console.print("[bold red]Internal error[/bold red] (see log for details)")
    return EXIT_UNEXPECTED
