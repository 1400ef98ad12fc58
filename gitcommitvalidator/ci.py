"""Batch validation of a commit range, as run by the CI workflow."""
from dataclasses import dataclass
from typing import List

from git import Repo

from .commit_message import validate
from .models import Verdict


@dataclass
class CommitFailure:
    sha: str
    subject: str
    verdict: Verdict

    def __str__(self) -> str:
        return f"- {self.sha}: {self.subject}"


def first_line(message: str) -> str:
    return message.split("\n", 1)[0]


def check_commit_range(repo: Repo, base: str, head: str) -> List[CommitFailure]:
    """Validate the subject line of every commit in ``base..head``.

    All commits are checked; every offending commit is returned, newest first.

    Raises:
        git.GitCommandError: if either revision cannot be resolved
    """
    failures = []
    for commit in repo.iter_commits(f"{base}..{head}"):
        subject = first_line(commit.message)
        verdict = validate(subject)
        if not verdict.accepted:
            failures.append(CommitFailure(commit.hexsha, subject, verdict))
    return failures
