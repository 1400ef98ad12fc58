"""Commit message validation."""
from typing import Optional

from ..models import Verdict
from .grammar import (
    COMMIT_TYPES,
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    EXAMPLE,
    FORMAT,
)
from .validation import create_validation_chain


class CommitMessageValidator:
    """Validates commit messages against the structured commit format."""

    def __init__(self):
        self.validation_chain = create_validation_chain()

    def validate(self, message: Optional[str]) -> Verdict:
        """Validate a commit message. Never raises for text input."""
        return self.validation_chain.handle(message or "")


_default_validator = CommitMessageValidator()


def validate(message: Optional[str]) -> Verdict:
    return _default_validator.validate(message)


def format_help(verdict: Optional[Verdict] = None, message: Optional[str] = None) -> str:
    """Build the explanation shown when a message is rejected."""
    lines = []
    if verdict is not None and verdict.detail:
        lines += [f"Reason: {verdict.detail}", ""]
    lines += [
        "Required format:",
        f"   {FORMAT}",
        "",
        f"Valid types: {', '.join(COMMIT_TYPES)}",
        "",
        f"Description: {DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH} characters "
        "(letters, numbers, spaces, . , ! ? -)",
        "",
        "Valid example:",
        f"   {EXAMPLE}",
        "",
        "Merge/revert/fixup/squash commits are allowed without format",
    ]
    if message is not None:
        lines += ["", "Your commit:", f"   {message}"]
    return "\n".join(lines)
