"""Commit message validation using Chain of Responsibility pattern."""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import RejectionReason, StructuredCommit, Verdict
from .grammar import (
    COMMIT_RE,
    COMMIT_TYPES,
    DATE_RE,
    DESCRIPTION_CHARS_RE,
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    SEPARATOR,
    SPECIAL_RE,
    TASK_ID_RE,
)


def split_fields(message: str) -> List[str]:
    """Split on the first three separators.

    Type, task id and date can never contain the separator, so this is the
    only decomposition the grammar could accept.
    """
    return message.split(SEPARATOR, 3)


def is_special_commit(message: str) -> bool:
    """Return True for messages produced by git merge/revert/rebase machinery."""
    return SPECIAL_RE.match(message or "") is not None


def first_invalid_char(value: str) -> Optional[str]:
    for char in value:
        if not DESCRIPTION_CHARS_RE.fullmatch(char):
            return char
    return None


class ValidationHandler(ABC):
    """Abstract base class for validation handlers.

    ``validate`` returns a verdict to stop the chain, or None to pass the
    message on to the next handler.
    """

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, message: str) -> Verdict:
        """Handle validation and pass to next handler if undecided."""
        result = self.validate(message)
        if result is not None:
            return result
        if self.next_handler:
            return self.next_handler.handle(message)
        return Verdict.reject(
            RejectionReason.STRUCTURE,
            "Message does not match the required format",
        )

    @abstractmethod
    def validate(self, message: str) -> Optional[Verdict]:
        """Validate the commit message."""
        pass


class SpecialCommitHandler(ValidationHandler):
    """Accepts merge/revert/fixup/squash commits without further checks."""

    def validate(self, message: str) -> Optional[Verdict]:
        if is_special_commit(message):
            return Verdict.accept(special=True)
        return None


class GrammarHandler(ValidationHandler):
    """Accepts messages matching the full structured grammar."""

    def validate(self, message: str) -> Optional[Verdict]:
        match = COMMIT_RE.fullmatch(message)
        if match is None:
            return None
        return Verdict.accept(
            commit=StructuredCommit(
                commit_type=match.group("type"),
                task_id=match.group("task_id"),
                date=match.group("date"),
                description=match.group("description"),
            )
        )


class StructureHandler(ValidationHandler):
    """Rejects messages without the four separated fields."""

    def validate(self, message: str) -> Optional[Verdict]:
        fields = split_fields(message)
        if len(fields) < 4:
            return Verdict.reject(
                RejectionReason.STRUCTURE,
                f"Expected 4 fields separated by '{SEPARATOR}', found {len(fields)}",
            )
        return None


class CommitTypeHandler(ValidationHandler):

    def validate(self, message: str) -> Optional[Verdict]:
        commit_type = split_fields(message)[0]
        if commit_type not in COMMIT_TYPES:
            return Verdict.reject(
                RejectionReason.TYPE,
                f"Unknown commit type '{commit_type}'",
            )
        return None


class TaskIdHandler(ValidationHandler):

    def validate(self, message: str) -> Optional[Verdict]:
        task_id = split_fields(message)[1]
        if not TASK_ID_RE.fullmatch(task_id):
            return Verdict.reject(
                RejectionReason.TASK_ID,
                "Task id may only contain letters, numbers and hyphens",
            )
        return None


class DateHandler(ValidationHandler):

    def validate(self, message: str) -> Optional[Verdict]:
        date = split_fields(message)[2]
        if not DATE_RE.fullmatch(date):
            return Verdict.reject(
                RejectionReason.DATE,
                f"Date must be exactly 8 digits (YYYYMMDD), got '{date}'",
            )
        return None


class DescriptionHandler(ValidationHandler):

    def validate(self, message: str) -> Optional[Verdict]:
        description = split_fields(message)[3]
        bad_char = first_invalid_char(description)
        if bad_char is not None:
            return Verdict.reject(
                RejectionReason.DESCRIPTION,
                f"Description contains a disallowed character: {bad_char!r}",
            )
        if not DESCRIPTION_MIN_LENGTH <= len(description) <= DESCRIPTION_MAX_LENGTH:
            return Verdict.reject(
                RejectionReason.DESCRIPTION,
                f"Description must be {DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH} "
                f"characters, got {len(description)}",
            )
        return None


def create_validation_chain() -> ValidationHandler:
    """Create the default validation chain.

    The verdict is decided by the first two handlers alone; the field
    handlers only run on rejected messages to name the failing field.
    """
    description = DescriptionHandler()
    date = DateHandler(description)
    task_id = TaskIdHandler(date)
    commit_type = CommitTypeHandler(task_id)
    structure = StructureHandler(commit_type)
    grammar = GrammarHandler(structure)
    special = SpecialCommitHandler(grammar)

    return special
