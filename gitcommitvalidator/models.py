"""Shared models for git-commit-validator."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CommitType(str, Enum):
    FEAT = "feat"
    FIX = "fix"
    REFACTOR = "refactor"
    REVIEW = "review"
    TEST = "test"
    DOCS = "docs"
    CHORE = "chore"

    @property
    def description(self) -> str:
        return COMMIT_TYPE_DESCRIPTIONS[self]


COMMIT_TYPE_DESCRIPTIONS = {
    CommitType.FEAT: "New feature",
    CommitType.FIX: "Bug fix",
    CommitType.REFACTOR: "Refactoring",
    CommitType.REVIEW: "Code review",
    CommitType.TEST: "Tests",
    CommitType.DOCS: "Documentation",
    CommitType.CHORE: "Maintenance",
}


class BranchType(str, Enum):
    FEATURE = "feature"
    FIX = "fix"
    HOTFIX = "hotfix"
    REFACTOR = "refactor"
    CHORE = "chore"
    DOCS = "docs"
    TEST = "test"
    RELEASE = "release"

    @property
    def description(self) -> str:
        return BRANCH_TYPE_DESCRIPTIONS[self]


BRANCH_TYPE_DESCRIPTIONS = {
    BranchType.FEATURE: "New feature",
    BranchType.FIX: "Bug fix",
    BranchType.HOTFIX: "Urgent production fix",
    BranchType.REFACTOR: "Code refactoring",
    BranchType.CHORE: "Maintenance tasks",
    BranchType.DOCS: "Documentation",
    BranchType.TEST: "Tests",
    BranchType.RELEASE: "Release preparation",
}


class RejectionReason(str, Enum):
    """Which part of a structured commit message failed to match."""

    STRUCTURE = "structure"
    TYPE = "type"
    TASK_ID = "task_id"
    DATE = "date"
    DESCRIPTION = "description"


class StructuredCommit(BaseModel):
    commit_type: CommitType
    task_id: str = Field(description="Task identifier, letters, digits and hyphens")
    date: str = Field(description="Eight digit date stamp, YYYYMMDD")
    description: str = Field(description="Free text summary, 5-100 safe characters")

    @property
    def message(self) -> str:
        return "|".join(
            [self.commit_type.value, self.task_id, self.date, self.description]
        )


@dataclass(frozen=True)
class Verdict:
    """Outcome of validating one commit message.

    A rejected verdict carries the field that failed to match in ``reason``
    and a human readable ``detail``. Accepted structured messages carry the
    parsed ``commit``; special commits are accepted with ``special`` set.
    """

    accepted: bool
    reason: Optional[RejectionReason] = None
    detail: str = ""
    special: bool = False
    commit: Optional[StructuredCommit] = None

    @classmethod
    def accept(
        cls, commit: Optional[StructuredCommit] = None, special: bool = False
    ) -> "Verdict":
        return cls(accepted=True, special=special, commit=commit)

    @classmethod
    def reject(cls, reason: RejectionReason, detail: str) -> "Verdict":
        return cls(accepted=False, reason=reason, detail=detail)

    def __bool__(self) -> bool:
        return self.accepted
