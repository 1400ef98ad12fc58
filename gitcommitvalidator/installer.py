"""Install and remove the validator in a target repository.

Installs three files:

* ``.git/hooks/commit-msg``, which runs :mod:`gitcommitvalidator.hook`
* ``.github/workflows/validate-commits.yml``, which runs ``check-range``
* ``docs/GIT_VALIDATOR.md``

Both the hook and the workflow call back into this package, so every call
site validates with the same grammar.
"""
import shutil
import stat
import sys
import time
from pathlib import Path
from string import Template
from typing import List, Optional

from git import Repo
from rich.console import Console

from .commit_message.grammar import COMMIT_TYPES, EXAMPLE, FORMAT
from .config import DEFAULT_WORKFLOW_REQUIREMENT, Config
from .models import BranchType

HOOK_NAME = "commit-msg"
HOOK_MARKER = "# Installed by git-commit-validator"
BACKUP_SUFFIX = ".backup-"
WORKFLOW_PATH = Path(".github") / "workflows" / "validate-commits.yml"
DOCS_PATH = Path("docs") / "GIT_VALIDATOR.md"

HOOK_TEMPLATE = Template("""#!/bin/sh
$marker
exec "$python" -m gitcommitvalidator.hook "$$1"
""")

WORKFLOW_TEMPLATE = Template("""name: Validate Commits

on:
  pull_request:
    branches: [$branches]

jobs:
  validate-commits:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
        with:
          fetch-depth: 0

      - uses: actions/setup-python@v5
        with:
          python-version: "3.x"

      - name: Install git-commit-validator
        run: pip install "$requirement"

      - name: Validate commit messages
        run: >-
          git-commit-validator check-range
          $${{ github.event.pull_request.base.sha }}
          $${{ github.event.pull_request.head.sha }}
""")

DOCS_TEMPLATE = Template("""# Git Commit Validator

Automatic commit message validation is installed in this repository.

## Required format

```
$format
```

**Types:** $types

**Examples:**
```bash
$example
fix|MV-001|20250129|Fix login validation
chore|backend|20250129|Update dependencies
```

Descriptions are 5-100 characters of letters, numbers, spaces and `. , ! ? -`.
Merge, revert, fixup and squash commits are accepted without the format.

## Usage

```bash
# Validated automatically by the commit-msg hook
git commit -m "$example"

# Interactive helper
git-helper
```

## Branch types

$branch_types

## CI

`.github/workflows/validate-commits.yml` runs `pip install "$requirement"` and
checks every commit in the pull request. Set `workflow_requirement` in
`.gitcommitvalidator.toml` to pin a release or install from a VCS URL, then
reinstall.

Installed with: git-commit-validator
""")


def render_hook(python: Optional[str] = None) -> str:
    return HOOK_TEMPLATE.substitute(marker=HOOK_MARKER, python=python or sys.executable)


def render_workflow(branches: List[str], requirement: str = DEFAULT_WORKFLOW_REQUIREMENT) -> str:
    """Render the CI workflow.

    ``requirement`` is passed to ``pip install`` in the job, so it can name a
    pinned release or a VCS URL instead of the package index default.
    """
    return WORKFLOW_TEMPLATE.substitute(
        branches=", ".join(branches), requirement=requirement
    )


def render_docs(requirement: str = DEFAULT_WORKFLOW_REQUIREMENT) -> str:
    return DOCS_TEMPLATE.substitute(
        requirement=requirement,
        format=FORMAT,
        types=", ".join(COMMIT_TYPES),
        example=EXAMPLE,
        branch_types="\n".join(
            f"- {t.value}/ - {t.description}" for t in BranchType
        ),
    )


class Installer:
    """Writes and removes the validator files in a git repository."""

    def __init__(
        self,
        repo: Repo,
        config: Optional[Config] = None,
        console: Optional[Console] = None,
    ):
        self.repo = repo
        self.config = config or Config()
        self.console = console or Console()
        self.work_dir = Path(repo.working_tree_dir)
        self.hooks_dir = Path(repo.git_dir) / "hooks"
        self.hook_path = self.hooks_dir / HOOK_NAME

    def _write(self, relative: Path, content: str) -> Path:
        path = self.work_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def backups(self) -> List[Path]:
        """Existing hook backups, newest first."""
        if not self.hooks_dir.exists():
            return []
        return sorted(
            self.hooks_dir.glob(f"{HOOK_NAME}{BACKUP_SUFFIX}*"), reverse=True
        )

    def is_installed(self) -> bool:
        if not self.hook_path.exists():
            return False
        return HOOK_MARKER in self.hook_path.read_text(encoding="utf-8", errors="replace")

    def install_hook(self) -> Path:
        self.hooks_dir.mkdir(parents=True, exist_ok=True)
        if self.hook_path.exists() and not self.is_installed():
            backup = self.hooks_dir / f"{HOOK_NAME}{BACKUP_SUFFIX}{int(time.time() * 1000)}"
            shutil.copy2(self.hook_path, backup)
            self.console.print(f"[yellow]Existing hook backed up to: {backup}[/yellow]")

        self.hook_path.write_text(render_hook(), encoding="utf-8")
        mode = self.hook_path.stat().st_mode
        self.hook_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        self.console.print(f"[green]Hook installed in {self.hook_path}[/green]")
        return self.hook_path

    def install_workflow(self) -> Path:
        workflow = render_workflow(
            self.config.workflow_branches, self.config.workflow_requirement
        )
        path = self._write(WORKFLOW_PATH, workflow)
        self.console.print("[green]GitHub Actions workflow created[/green]")
        return path

    def install_docs(self) -> Path:
        path = self._write(DOCS_PATH, render_docs(self.config.workflow_requirement))
        self.console.print(f"[green]Documentation created in {DOCS_PATH}[/green]")
        return path

    def install(self, workflow: Optional[bool] = None, docs: Optional[bool] = None) -> List[Path]:
        """Install the hook and, unless disabled, the workflow and docs.

        ``workflow`` and ``docs`` default to the config settings.
        """
        if workflow is None:
            workflow = self.config.install_workflow
        if docs is None:
            docs = self.config.install_docs

        installed = [self.install_hook()]
        if workflow:
            installed.append(self.install_workflow())
        if docs:
            installed.append(self.install_docs())
        return installed

    def uninstall(self) -> bool:
        """Remove installed files, restoring the newest hook backup.

        Returns:
            bool: True if anything was removed
        """
        removed = False

        backups = self.backups()
        if backups:
            shutil.copy2(backups[0], self.hook_path)
            self.console.print(f"[green]Hook restored from: {backups[0].name}[/green]")
            for backup in backups:
                backup.unlink()
            self.console.print("[green]Backups removed[/green]")
            removed = True
        elif self.hook_path.exists():
            self.hook_path.unlink()
            self.console.print("[green]Hook removed[/green]")
            removed = True

        for relative, label in ((DOCS_PATH, "Documentation"), (WORKFLOW_PATH, "GitHub Actions workflow")):
            path = self.work_dir / relative
            if path.exists():
                path.unlink()
                self.console.print(f"[green]{label} removed[/green]")
                removed = True

        if not removed:
            self.console.print("[yellow]No validator files found[/yellow]")
        return removed
