"""Configuration management for git-commit-validator."""
from datetime import datetime
from pathlib import Path
from typing import List, Optional
import os
import re

from pydantic import BaseModel, Field
import tomli
import tomli_w

DEFAULT_CONFIG_FILENAME = ".gitcommitvalidator.toml"
CONFIG_SECTION = "gitcommitvalidator"
DEFAULT_WORKFLOW_REQUIREMENT = "git-commit-validator"

STRING_FIELDS = ['date_timezone', 'log_file', 'workflow_requirement']
BOOL_FIELDS = ['install_workflow', 'install_docs', 'always_log']


class Config(BaseModel):
    """Configuration settings for git-commit-validator.

    Values come from the ``[gitcommitvalidator]`` table of the config file;
    ``GIT_COMMIT_VALIDATOR_*`` environment variables fill in unset values.
    """

    date_timezone: str = Field(
        default="utc",
        description="Clock used for the commit date stamp (utc or local)"
    )

    install_workflow: bool = Field(
        default=True,
        description="Whether install writes the CI workflow"
    )

    install_docs: bool = Field(
        default=True,
        description="Whether install writes docs/GIT_VALIDATOR.md"
    )

    workflow_branches: List[str] = Field(
        default_factory=lambda: ["develop", "main", "master"],
        description="Pull request target branches checked by the CI workflow"
    )

    workflow_requirement: str = Field(
        default=DEFAULT_WORKFLOW_REQUIREMENT,
        description="pip requirement the CI workflow installs (a package name, pinned version or VCS URL)"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Sanitize string values read from files or the environment."""
        if not value:
            return value

        # Remove control characters and null bytes
        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

        # Drop anything after a shell metacharacter
        value = re.split(r'[;&|`$()]', value)[0]

        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (relative, no traversal)."""
        if not path:
            return False

        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        if os.path.isabs(path):
            return False

        return True

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Path to the git repository

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = Path(repo_path) / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            section = dict(config_data.get(CONFIG_SECTION, config_data))

            for key in STRING_FIELDS:
                if key in section and isinstance(section[key], str):
                    section[key] = cls._sanitize_string(section[key])

            if section.get('log_file') and not cls._is_safe_path(section['log_file']):
                print(f"Warning: Unsafe log file path '{section['log_file']}', using default")
                section['log_file'] = None

            return cls(**section)
        except Exception as e:
            # If there's any error reading the config, use defaults
            print(f"Warning: Error reading config file: {e}")
            return cls()

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the git repository
        """
        config_path = Path(repo_path) / DEFAULT_CONFIG_FILENAME

        try:
            # TOML has no null, so unset values are left out
            config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

            if config_dict.get('log_file') and not self._is_safe_path(config_dict['log_file']):
                print(f"Warning: Unsafe log file path '{config_dict['log_file']}', not saving")
                del config_dict['log_file']

            with config_path.open('wb') as f:
                tomli_w.dump({CONFIG_SECTION: config_dict}, f)
        except OSError as e:
            print(f"Error saving config file: {e}")

    def use_utc(self) -> bool:
        return self.date_timezone.lower() != "local"

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"gcv_log-{timestamp}.log")
        elif self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            else:
                print(f"Warning: Unsafe log file path '{self.log_file}', using default")
                return None
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support and sanitization."""
        env_data = {}

        env_mapping = {
            'GIT_COMMIT_VALIDATOR_DATE_TIMEZONE': 'date_timezone',
            'GIT_COMMIT_VALIDATOR_INSTALL_WORKFLOW': 'install_workflow',
            'GIT_COMMIT_VALIDATOR_INSTALL_DOCS': 'install_docs',
            'GIT_COMMIT_VALIDATOR_ALWAYS_LOG': 'always_log',
            'GIT_COMMIT_VALIDATOR_LOG_FILE': 'log_file',
            'GIT_COMMIT_VALIDATOR_WORKFLOW_REQUIREMENT': 'workflow_requirement',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = os.environ[env_var]

                if field_name in STRING_FIELDS:
                    value = self._sanitize_string(value)

                if field_name in BOOL_FIELDS:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        merged_data = {**env_data, **data}

        super().__init__(**merged_data)
