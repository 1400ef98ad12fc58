"""Tests for commit message and branch name composition."""
import itertools

import pytest

from gitcommitvalidator.commit_message import (
    CommitMessageComposer,
    FieldError,
    compose_branch_name,
    compose_message,
    validate,
)
from gitcommitvalidator.models import BranchType, CommitType


@pytest.fixture
def composer():
    return CommitMessageComposer()


def test_compose_joins_fields(composer):
    message = composer.compose(CommitType.FEAT, "backend", "20250129", "Add user authentication")
    assert message == "feat|backend|20250129|Add user authentication"


def test_compose_accepts_type_value(composer):
    assert composer.compose("review", "MV-001", "20250129", "Review login") == (
        "review|MV-001|20250129|Review login"
    )


@pytest.mark.parametrize("args,field", [
    (("feature", "backend", "20250129", "Add feature"), "type"),
    (("FEAT", "backend", "20250129", "Add feature"), "type"),
    (("feat", "", "20250129", "Add feature"), "task_id"),
    (("feat", "task_id", "20250129", "Add feature"), "task_id"),
    (("feat", "backend", "2025-01-29", "Add feature"), "date"),
    (("feat", "backend", "2025012", "Add feature"), "date"),
    (("feat", "backend", "20250129", "Four"), "description"),
    (("feat", "backend", "20250129", "x" * 101), "description"),
    (("feat", "backend", "20250129", "Run $(whoami) now"), "description"),
    (("feat", "backend", "20250129", "Añadir autenticación"), "description"),
])
def test_compose_reports_failing_field(composer, args, field):
    with pytest.raises(FieldError) as excinfo:
        composer.compose(*args)
    assert excinfo.value.field == field
    assert excinfo.value.message
    assert isinstance(excinfo.value, ValueError)


def test_compose_reports_first_failing_field(composer):
    with pytest.raises(FieldError) as excinfo:
        composer.compose("bad", "bad_task", "bad", "bad")
    assert excinfo.value.field == "type"

    with pytest.raises(FieldError) as excinfo:
        composer.compose("feat", "bad_task", "bad", "bad")
    assert excinfo.value.field == "task_id"


def test_check_description_messages(composer):
    with pytest.raises(FieldError, match="Minimum 5"):
        composer.check_description("abcd")
    with pytest.raises(FieldError, match="Maximum 100"):
        composer.check_description("a" * 101)
    with pytest.raises(FieldError, match="Only letters"):
        composer.check_description("Has \"quotes\"")
    assert composer.check_description("  ok  ") == "  ok  "


def test_check_type_returns_enum(composer):
    assert composer.check_type("docs") is CommitType.DOCS
    assert composer.check_type(CommitType.CHORE) is CommitType.CHORE


def test_composed_messages_always_validate(composer):
    task_ids = ["a", "MV-001", "backend", "-", "A-b-1"]
    dates = ["00000000", "20250129", "99999999", "20250230"]
    descriptions = ["12345", "x" * 100, "Fix it, now!", " spaced  out ", "Why? Because."]

    for commit_type, task_id, date, description in itertools.product(
        CommitType, task_ids, dates, descriptions
    ):
        message = compose_message(commit_type, task_id, date, description)
        verdict = validate(message)
        assert verdict.accepted, message
        assert verdict.commit.commit_type is commit_type
        assert verdict.commit.description == description


def test_compose_branch_name():
    assert compose_branch_name(BranchType.FEATURE, "user-auth") == "feature/user-auth"
    assert compose_branch_name("hotfix", "s3-upload") == "hotfix/s3-upload"


@pytest.mark.parametrize("branch_type,task_id,field", [
    ("feat", "user-auth", "branch_type"),
    (BranchType.FIX, "User-Auth", "task_id"),
    (BranchType.FIX, "user_auth", "task_id"),
    (BranchType.FIX, "user auth", "task_id"),
    (BranchType.FIX, "", "task_id"),
])
def test_compose_branch_name_rejects(branch_type, task_id, field):
    with pytest.raises(FieldError) as excinfo:
        compose_branch_name(branch_type, task_id)
    assert excinfo.value.field == field
