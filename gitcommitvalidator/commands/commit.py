"""Command for creating git commits."""

from typing import Optional

from git import GitCommandError, Repo
from rich.console import Console

from .base import GitCommand


def has_staged_changes(repo: Repo) -> bool:
    """Return True when the index differs from HEAD."""
    if not repo.head.is_valid():
        # Unborn branch: anything in the index is a staged addition
        return len(repo.index.entries) > 0
    return bool(repo.index.diff("HEAD"))


class CommitCommand(GitCommand):
    """Command for committing the staged changes with a given message.

    The message is passed to ``git commit`` verbatim, so the repository's
    commit-msg hook validates it like any other commit.

    Attributes:
        message (str): The commit message
        commit_hash (Optional[str]): The hash of the created commit
    """

    def __init__(
        self,
        repo: Repo,
        message: str,
        console: Optional[Console] = None,
    ):
        """Initialize the commit command.

        Args:
            repo: The git repository to operate on
            message: The commit message
            console: Optional Rich console for output
        """
        super().__init__(repo, console)
        self.message = message
        self.commit_hash: Optional[str] = None

    async def execute(self) -> bool:
        """Create a commit from the staged changes.

        Returns:
            bool: True if the commit was created successfully, False otherwise
        """
        if not has_staged_changes(self.repo):
            self.console.print(
                "[yellow]No staged changes. Use \"git add\" first.[/yellow]"
            )
            return False

        try:
            self.repo.git.commit("-m", self.message)
        except GitCommandError as e:
            self.console.print(f"[red]Failed to create commit: {e.stderr.strip() or e}[/red]")
            return False

        self.commit_hash = self.repo.head.commit.hexsha

        for observer in self.observers:
            await observer.on_commit_created(self.message, self.commit_hash)

        return True

    async def undo(self) -> bool:
        """Undo the commit, keeping its changes staged.

        Returns:
            bool: True if the commit was undone successfully, False otherwise
        """
        if not self.commit_hash:
            self.console.print("[yellow]No commit to undo[/yellow]")
            return False

        try:
            if self.repo.head.commit.parents:
                self.repo.git.reset("--soft", "HEAD~1")
            else:
                # Root commit: drop the branch ref, index stays as it was
                self.repo.git.update_ref("-d", "HEAD")
            self.commit_hash = None
            return True

        except GitCommandError as e:
            self.console.print(f"[red]Failed to undo commit: {str(e)}[/red]")
            return False
