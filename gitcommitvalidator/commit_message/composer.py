"""Field-by-field construction of commit messages and branch names.

The checks here use the same compiled patterns as the validator, so a
message built by :class:`CommitMessageComposer` always validates.
"""
from typing import Union

from ..models import BranchType, CommitType
from .grammar import (
    BRANCH_TASK_ID_RE,
    DATE_RE,
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    SEPARATOR,
    TASK_ID_RE,
)
from .validation import first_invalid_char


class FieldError(ValueError):
    """A single field value violates its character or length rule."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class CommitMessageComposer:
    """Builds ``Type|TaskId|YYYYMMDD|Description`` messages from fields."""

    def check_type(self, commit_type: Union[CommitType, str]) -> CommitType:
        try:
            return CommitType(commit_type)
        except ValueError:
            valid = ", ".join(t.value for t in CommitType)
            raise FieldError("type", f"Unknown commit type '{commit_type}' (valid: {valid})")

    def check_task_id(self, task_id: str) -> str:
        if not task_id:
            raise FieldError("task_id", "Task id is required")
        if not TASK_ID_RE.fullmatch(task_id):
            raise FieldError("task_id", "Only letters, numbers and hyphens are allowed")
        return task_id

    def check_date(self, date: str) -> str:
        if not DATE_RE.fullmatch(date or ""):
            raise FieldError("date", "Date must be exactly 8 digits (YYYYMMDD)")
        return date

    def check_description(self, description: str) -> str:
        description = description or ""
        if len(description) < DESCRIPTION_MIN_LENGTH:
            raise FieldError("description", f"Minimum {DESCRIPTION_MIN_LENGTH} characters")
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise FieldError("description", f"Maximum {DESCRIPTION_MAX_LENGTH} characters")
        if first_invalid_char(description) is not None:
            raise FieldError(
                "description",
                "Only letters, numbers, spaces and . , ! ? - are allowed",
            )
        return description

    def compose(
        self,
        commit_type: Union[CommitType, str],
        task_id: str,
        date: str,
        description: str,
    ) -> str:
        """Validate each field in order and join them.

        Raises:
            FieldError: for the first field that fails its rule
        """
        fields = [
            self.check_type(commit_type).value,
            self.check_task_id(task_id),
            self.check_date(date),
            self.check_description(description),
        ]
        return SEPARATOR.join(fields)


def compose_message(
    commit_type: Union[CommitType, str], task_id: str, date: str, description: str
) -> str:
    return CommitMessageComposer().compose(commit_type, task_id, date, description)


def compose_branch_name(branch_type: Union[BranchType, str], task_id: str) -> str:
    """Build a ``type/task-id`` branch name."""
    try:
        branch_type = BranchType(branch_type)
    except ValueError:
        raise FieldError("branch_type", f"Unknown branch type '{branch_type}'")
    if not task_id or not BRANCH_TASK_ID_RE.fullmatch(task_id):
        raise FieldError(
            "task_id", "Only lowercase letters, numbers and hyphens are allowed"
        )
    return f"{branch_type.value}/{task_id}"
