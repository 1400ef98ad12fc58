#!/usr/bin/env python3
import asyncio
import os
from pathlib import Path
from typing import List, Optional

import click
import pyperclip
from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from rich.console import Console

from .ci import check_commit_range
from .commit_message.grammar import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    EXAMPLE,
    FORMAT,
)
from .config import DEFAULT_CONFIG_FILENAME, Config
from .helper import GitHelper
from .hook import EXIT_ERROR, EXIT_OK, EXIT_REJECTED, check_message, run_hook
from .installer import Installer
from .observers import ConsoleLogObserver, FileLogObserver, GitOperationObserver

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

repo_path_option = click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)


def run_async(coro):
    """Run a command coroutine to completion."""
    return asyncio.run(coro)


def open_repo(path: Path) -> Repo:
    """Open the repository containing ``path`` or exit with an error."""
    try:
        return Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        err_console.print(f"[red]Error: {path} is not a git repository[/red]")
        err_console.print('[yellow]Run "git init" first[/yellow]')
        click.get_current_context().exit(EXIT_ERROR)


def build_observers(config: Config, log_file: Optional[Path]) -> List[GitOperationObserver]:
    observers: List[GitOperationObserver] = [ConsoleLogObserver(console)]
    log_file_path = log_file or config.get_log_file()
    if log_file_path:
        observers.append(FileLogObserver(str(log_file_path)))
    return observers


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Display version information and exit")
@click.pass_context
def main(ctx: click.Context, version: bool):
    """
    Validate and compose structured git commit messages.

    Commit messages must follow:

        Type|TaskId|YYYYMMDD|Description

    Merge, revert, fixup and squash commits are accepted without the format.
    Configuration can be set in .gitcommitvalidator.toml in the repository root.
    """
    if version:
        from .version import display_version_info

        display_version_info()
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("message_file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def hook(ctx: click.Context, message_file: Path):
    """Validate the commit message file passed by git's commit-msg hook."""
    ctx.exit(run_hook(message_file, err_console))


@main.command()
@click.argument("messages", nargs=-1, required=True)
@click.pass_context
def check(ctx: click.Context, messages):
    """Validate one or more commit messages given as arguments."""
    statuses = [check_message(message, err_console) for message in messages]
    if any(status != EXIT_OK for status in statuses):
        ctx.exit(EXIT_REJECTED)
    console.print("[green]All messages valid[/green]")


@main.command("check-range")
@click.argument("base")
@click.argument("head")
@repo_path_option
@click.pass_context
def check_range(ctx: click.Context, base: str, head: str, path: Path):
    """Validate the first line of every commit in BASE..HEAD."""
    repo = open_repo(path)
    try:
        failures = check_commit_range(repo, base, head)
    except GitCommandError as e:
        err_console.print(f"[red]Error: cannot read commit range {base}..{head}[/red]")
        err_console.print(str(e), markup=False, highlight=False)
        ctx.exit(EXIT_ERROR)

    if failures:
        console.print("[red]Commits with invalid format:[/red]")
        for failure in failures:
            console.print(str(failure), markup=False, highlight=False, emoji=False)
        console.print(
            f"Format: {FORMAT} ({DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH} characters)",
            markup=False,
        )
        console.print("Merge/revert/fixup/squash commits are allowed without format")
        ctx.exit(EXIT_REJECTED)

    console.print("[green]All commits valid[/green]")


@main.command()
@repo_path_option
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log git operations (overrides config setting)",
)
@click.pass_context
def helper(ctx: click.Context, path: Path, log_file: Optional[Path]):
    """Interactively create a branch and/or a validated commit."""
    repo = open_repo(path)
    config = Config.load(Path(repo.working_tree_dir))
    git_helper = GitHelper(repo, config, console, build_observers(config, log_file))

    try:
        success = run_async(git_helper.run())
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        ctx.exit(EXIT_REJECTED)

    ctx.exit(EXIT_OK if success else EXIT_REJECTED)


@main.command()
@repo_path_option
@click.option(
    "--workflow/--no-workflow",
    default=None,
    help="Write the GitHub Actions workflow (overrides config setting)",
)
@click.option(
    "--docs/--no-docs",
    default=None,
    help="Write docs/GIT_VALIDATOR.md (overrides config setting)",
)
@click.pass_context
def install(ctx: click.Context, path: Path, workflow: Optional[bool], docs: Optional[bool]):
    """Install the commit-msg hook, CI workflow and docs."""
    repo = open_repo(path)
    config = Config.load(Path(repo.working_tree_dir))
    installer = Installer(repo, config, console)

    console.print("[blue]Installing Git Commit Validator...[/blue]\n")
    try:
        installer.install(workflow=workflow, docs=docs)
    except OSError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        ctx.exit(EXIT_ERROR)

    console.print("\n[green]Installation completed successfully[/green]\n")
    console.print("[cyan]Next steps:[/cyan]")
    console.print("   git-helper              -> interactive helper")
    console.print('   git commit -m "..."     -> automatic validation')
    console.print("\n[cyan]Commit format:[/cyan]")
    console.print(f"   {FORMAT}", markup=False)
    console.print(f"   Example: {EXAMPLE}", markup=False)


@main.command()
@repo_path_option
@click.pass_context
def uninstall(ctx: click.Context, path: Path):
    """Remove the hook (restoring any backup), workflow and docs."""
    repo = open_repo(path)
    installer = Installer(repo, console=console)

    console.print("[blue]Uninstalling Git Commit Validator...[/blue]\n")
    try:
        removed = installer.uninstall()
    except OSError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        ctx.exit(EXIT_ERROR)

    if removed:
        console.print("\n[green]Uninstall completed successfully[/green]")


@main.command("config")
@click.option(
    "--dir",
    "config_dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@repo_path_option
def config_command(config_dir: bool, path: Path):
    """Show configuration settings or the config file location."""
    repo_path = Path(open_repo(path).working_tree_dir)
    config_path = repo_path / DEFAULT_CONFIG_FILENAME

    if config_dir:
        # Create default config file if it doesn't exist
        if not config_path.exists():
            Config().save(repo_path)
            console.print("[yellow]Created new config file with default values[/yellow]")

        console.print(f"[green]Config file location:[/green] {config_path}")
        try:
            pyperclip.copy(str(config_path))
            console.print("[green]Path copied to clipboard![/green]")
        except pyperclip.PyperclipException:
            console.print("[dim]Clipboard unavailable[/dim]")
        return

    config = Config.load(repo_path)
    source = "config" if config_path.exists() else "default"

    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<20} {'Value':<26} {'Source':<10}", markup=False)
    console.print("-" * 56)
    for name, value in config.model_dump().items():
        if isinstance(value, list):
            value = ", ".join(value)
        console.print(f"{name:<20} {str(value):<26} {source:<10}", markup=False)

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


if __name__ == "__main__":
    main()
