"""Tests for the CI commit range check."""
import pytest
from git import GitCommandError, Repo

from gitcommitvalidator.ci import CommitFailure, check_commit_range, first_line
from gitcommitvalidator.models import RejectionReason


def test_first_line():
    assert first_line("subject\n\nbody") == "subject"
    assert first_line("subject") == "subject"
    assert first_line("") == ""


def test_reports_all_invalid_commits(git_repo_with_history):
    path, base = git_repo_with_history
    repo = Repo(path)

    failures = check_commit_range(repo, base, "HEAD")

    subjects = [failure.subject for failure in failures]
    # Newest first, as git log lists them
    assert subjects == [
        "feature|backend|20250129|Add feature",
        "added new feature",
    ]
    assert failures[0].verdict.reason == RejectionReason.TYPE
    assert failures[1].verdict.reason == RejectionReason.STRUCTURE


def test_only_first_line_is_validated(git_repo_with_history):
    path, base = git_repo_with_history
    repo = Repo(path)

    failures = check_commit_range(repo, base, "HEAD")
    assert "fix|MV-001|20250130|Fix login" not in [f.subject for f in failures]


def test_empty_range(temp_git_repo):
    repo = Repo(temp_git_repo)
    assert check_commit_range(repo, "HEAD", "HEAD") == []


def test_all_valid_range(temp_git_repo, make_commit):
    repo = Repo(temp_git_repo)
    base = repo.head.commit.hexsha
    make_commit(repo, "x.txt", "x", "feat|a|20250130|12345")
    make_commit(repo, "y.txt", "y", "squash! feat|a|20250130|12345")

    assert check_commit_range(repo, base, "HEAD") == []


def test_unknown_revision_raises(temp_git_repo):
    repo = Repo(temp_git_repo)
    with pytest.raises(GitCommandError):
        check_commit_range(repo, "does-not-exist", "HEAD")


def test_failure_str():
    failure = CommitFailure("abc123", "bad message", verdict=None)
    assert str(failure) == "- abc123: bad message"
