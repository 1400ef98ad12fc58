import tempfile
from pathlib import Path

import pytest
from git import Repo

def configure_repo(repo: Repo) -> None:
    """Give the repository an identity so the git CLI can commit."""
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")


def commit_file(repo: Repo, name: str, content: str, message: str) -> str:
    """Write, stage and commit a file, returning the new commit hash."""
    path = Path(repo.working_tree_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.git.commit("-m", message, "--no-verify")
    return repo.head.commit.hexsha


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        configure_repo(repo)

        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content")

        repo.index.add(["test.txt"])
        repo.index.commit("Initial commit")

        yield tmp_dir


@pytest.fixture
def empty_git_repo():
    """Create a temporary git repository without any commits."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        configure_repo(repo)
        yield tmp_dir


@pytest.fixture
def git_repo_with_history(temp_git_repo):
    """Repository with a mix of valid, special and invalid commits after a base."""
    repo = Repo(temp_git_repo)
    base = repo.head.commit.hexsha

    commit_file(repo, "a.txt", "a", "feat|backend|20250129|Add user authentication")
    commit_file(repo, "b.txt", "b", "added new feature")
    commit_file(repo, "c.txt", "c", "Merge branch 'develop' into main")
    commit_file(repo, "d.txt", "d", "fix|MV-001|20250130|Fix login\n\nLonger body with $pecial chars")
    commit_file(repo, "e.txt", "e", "feature|backend|20250129|Add feature")

    return temp_git_repo, base


@pytest.fixture
def valid_message():
    return "feat|backend|20250129|Add user authentication"


@pytest.fixture
def make_commit():
    return commit_file
