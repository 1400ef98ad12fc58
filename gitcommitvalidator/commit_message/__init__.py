"""Commit message grammar, validation and composition package."""

from .composer import (
    CommitMessageComposer,
    FieldError,
    compose_branch_name,
    compose_message,
)
from .validation import is_special_commit
from .validator import CommitMessageValidator, format_help, validate

__all__ = [
    'CommitMessageComposer',
    'CommitMessageValidator',
    'FieldError',
    'compose_branch_name',
    'compose_message',
    'format_help',
    'is_special_commit',
    'validate',
]
