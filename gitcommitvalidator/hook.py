"""commit-msg hook entry point.

git calls the hook with the path to the file holding the candidate message.
The installed hook runs ``python -m gitcommitvalidator.hook "$1"``.
"""
import sys
from pathlib import Path
from typing import Union

from rich.console import Console

from .commit_message import format_help, validate
from .models import Verdict

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2

# git's message cleanup only strips ASCII whitespace
TRAILING_WHITESPACE = " \t\n\r\f\v"


def read_message_file(path: Union[str, Path]) -> str:
    """Read a commit message file with trailing ASCII whitespace stripped.

    Raises:
        OSError: when the file cannot be read
    """
    return Path(path).read_text(encoding="utf-8").rstrip(TRAILING_WHITESPACE)


def check_message(message: str, console: Console) -> int:
    """Validate one message, printing the format help on rejection."""
    verdict: Verdict = validate(message)
    if verdict.accepted:
        return EXIT_OK

    console.print("\n[red]ERROR: Invalid commit format[/red]\n")
    console.print(format_help(verdict, message), markup=False, highlight=False, emoji=False)
    return EXIT_REJECTED


def run_hook(path: Union[str, Path], console: Console) -> int:
    """Validate the message file at ``path`` and return the exit status."""
    try:
        message = read_message_file(path)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error: cannot read commit message file '{path}': {e}[/red]")
        return EXIT_ERROR
    return check_message(message, console)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    console = Console(stderr=True, soft_wrap=True)
    if len(argv) != 1:
        console.print("Usage: python -m gitcommitvalidator.hook MESSAGE_FILE")
        return EXIT_ERROR
    return run_hook(argv[0], console)


if __name__ == "__main__":
    sys.exit(main())
