"""Git operation commands using the Command Pattern.

Example:
    ```python
    from gitcommitvalidator.commands import CommitCommand
    from gitcommitvalidator.observers import FileLogObserver

    commit_cmd = CommitCommand(repo, "feat|backend|20250129|Add user authentication")
    commit_cmd.add_observer(FileLogObserver("git.log"))
    success = await commit_cmd.execute()

    # Undo the commit if needed
    success = await commit_cmd.undo()
    ```
"""

from .base import GitCommand
from .branch import CreateBranchCommand
from .commit import CommitCommand, has_staged_changes

__all__ = [
    "GitCommand",
    "CommitCommand",
    "CreateBranchCommand",
    "has_staged_changes",
]
