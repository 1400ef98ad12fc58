"""Interactive helper for creating compliant branches and commits."""
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, TypeVar

import click
import pyperclip
from git import Repo
from rich.console import Console

from .commands import CommitCommand, CreateBranchCommand, has_staged_changes
from .commit_message import (
    CommitMessageComposer,
    FieldError,
    compose_branch_name,
)
from .config import Config
from .models import BranchType, CommitType
from .observers import GitOperationObserver

T = TypeVar("T")

ACTIONS = [
    ("branch_and_commit", "Create branch + commit"),
    ("branch", "Create branch only"),
    ("commit", "Commit only"),
]


def current_date_stamp(use_utc: bool = True, now: Optional[datetime] = None) -> str:
    """Format today's date as the 8 digit commit date stamp."""
    if now is None:
        now = datetime.now(timezone.utc) if use_utc else datetime.now()
    elif use_utc and now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y%m%d")


class GitHelper:
    """Prompts for branch and commit fields and runs the git commands.

    Every field is checked as soon as it is entered and re-prompted on
    error, so the final message is valid before it reaches ``git commit``.
    """

    def __init__(
        self,
        repo: Repo,
        config: Optional[Config] = None,
        console: Optional[Console] = None,
        observers: Optional[List[GitOperationObserver]] = None,
        clock: Optional[Callable[[], str]] = None,
    ):
        self.repo = repo
        self.config = config or Config()
        self.console = console or Console()
        self.observers = observers or []
        self.composer = CommitMessageComposer()
        self.clock = clock or (lambda: current_date_stamp(self.config.use_utc()))

    def choose(self, title: str, options: Sequence[T], label: Callable[[T], str]) -> T:
        self.console.print(f"\n[bold]{title}:[/bold]")
        for idx, option in enumerate(options, start=1):
            self.console.print(f"  {idx}. {label(option)}")
        choice = click.prompt(
            f"Choose an option (1-{len(options)})",
            type=click.IntRange(1, len(options)),
        )
        return options[choice - 1]

    def prompt_field(self, text: str, check: Callable[[str], str]) -> str:
        while True:
            value = click.prompt(text, default="", show_default=False)
            try:
                return check(value)
            except FieldError as e:
                self.console.print(f"[red]{e.message}[/red]")

    def _attach(self, command):
        for observer in self.observers:
            command.add_observer(observer)
        return command

    async def create_branch(self) -> bool:
        self.console.print("\n[bold cyan]CREATE BRANCH[/bold cyan]")
        branch_type = self.choose(
            "Select the branch type",
            list(BranchType),
            lambda t: f"{t.value}/ - {t.description}",
        )
        branch_name = self.prompt_field(
            "Task id (e.g. user-auth, s3-upload)",
            lambda value: compose_branch_name(branch_type, value),
        )

        if not click.confirm(f'Create branch "{branch_name}"?', default=True):
            return False

        command = self._attach(CreateBranchCommand(self.repo, branch_name, self.console))
        return await command.execute()

    async def create_commit(self) -> bool:
        self.console.print("\n[bold cyan]CREATE COMMIT[/bold cyan]")
        if not has_staged_changes(self.repo):
            self.console.print(
                "[yellow]No staged changes. Use \"git add\" first.[/yellow]"
            )
            return False

        commit_type = self.choose(
            "Select the commit type",
            list(CommitType),
            lambda t: f"{t.value} - {t.description}",
        )
        task_id = self.prompt_field(
            "Task id (e.g. backend, MV-001)", self.composer.check_task_id
        )
        description = self.prompt_field(
            "Commit description (English, 5-100 characters)",
            self.composer.check_description,
        )
        message = self.composer.compose(commit_type, task_id, self.clock(), description)

        self.console.print("\n[bold]Generated commit message:[/bold]")
        self.console.print(f"   {message}\n", markup=False, highlight=False, emoji=False)

        if not click.confirm("Run commit with this message?", default=True):
            self._copy_to_clipboard(message)
            return False

        command = self._attach(CommitCommand(self.repo, message, self.console))
        return await command.execute()

    def _copy_to_clipboard(self, message: str) -> None:
        try:
            pyperclip.copy(message)
            self.console.print("[dim]Message copied to clipboard[/dim]")
        except pyperclip.PyperclipException:
            self.console.print("[dim]Clipboard unavailable, copy the message above[/dim]")

    async def run(self) -> bool:
        self.console.print("\n[bold]Git Helper - branch and commit automation[/bold]")
        action, _ = self.choose("What do you want to do?", ACTIONS, lambda a: a[1])

        if action == "branch_and_commit":
            if not await self.create_branch():
                return False
            return await self.create_commit()
        if action == "branch":
            return await self.create_branch()
        return await self.create_commit()
