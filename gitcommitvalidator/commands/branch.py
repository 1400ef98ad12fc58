"""Command for creating and checking out a branch."""

from typing import Optional

from git import GitCommandError, Repo
from rich.console import Console

from .base import GitCommand


class CreateBranchCommand(GitCommand):
    """Command for creating a new branch and switching to it.

    Attributes:
        branch_name (str): Name of the branch to create
        previous_ref (Optional[str]): Branch (or commit, when detached) that
            was checked out before execute()
    """

    def __init__(self, repo: Repo, branch_name: str, console: Optional[Console] = None):
        super().__init__(repo, console)
        self.branch_name = branch_name
        self.previous_ref: Optional[str] = None
        self.created = False

    def _current_ref(self) -> str:
        try:
            return self.repo.active_branch.name
        except TypeError:
            # Detached HEAD
            return self.repo.head.commit.hexsha

    async def execute(self) -> bool:
        """Create the branch and check it out.

        Returns:
            bool: True if the branch was created, False if it already exists
            or git refused
        """
        if self.branch_name in [head.name for head in self.repo.heads]:
            self.console.print(
                f"[red]Branch '{self.branch_name}' already exists[/red]"
            )
            return False

        self.previous_ref = self._current_ref()

        try:
            self.repo.git.checkout("-b", self.branch_name)
        except GitCommandError as e:
            self.console.print(
                f"[red]Failed to create branch: {e.stderr.strip() or e}[/red]"
            )
            return False

        self.created = True
        for observer in self.observers:
            await observer.on_branch_created(self.branch_name)

        return True

    async def undo(self) -> bool:
        """Switch back to the previous ref and delete the branch."""
        if not self.created:
            self.console.print("[yellow]No branch to undo[/yellow]")
            return False

        try:
            self.repo.git.checkout(self.previous_ref)
            self.repo.git.branch("-D", self.branch_name)
            self.created = False
            return True
        except GitCommandError as e:
            self.console.print(f"[red]Failed to undo branch creation: {str(e)}[/red]")
            return False
