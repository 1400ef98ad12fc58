"""The structured commit message grammar.

Every caller (commit-msg hook, CI range check, interactive composer and the
installed templates) builds on the patterns in this module, so the accepted
language is defined exactly once:

    Type|TaskId|YYYYMMDD|Description

All character classes are explicit ASCII ranges. ``\\d`` and ``\\w`` would
also match non-ASCII digits and letters in Python's ``re``.
"""
import re

from ..models import CommitType

SEPARATOR = "|"

COMMIT_TYPES = tuple(commit_type.value for commit_type in CommitType)

TYPE_PATTERN = "(?:" + "|".join(COMMIT_TYPES) + ")"
TASK_ID_PATTERN = r"[A-Za-z0-9-]+"
DATE_PATTERN = r"[0-9]{8}"
DESCRIPTION_CHARS = r"A-Za-z0-9 .,!?-"
DESCRIPTION_MIN_LENGTH = 5
DESCRIPTION_MAX_LENGTH = 100
DESCRIPTION_PATTERN = (
    f"[{DESCRIPTION_CHARS}]{{{DESCRIPTION_MIN_LENGTH},{DESCRIPTION_MAX_LENGTH}}}"
)

BRANCH_TASK_ID_PATTERN = r"[a-z0-9-]+"

SPECIAL_PREFIXES = ("Merge", "Revert", "Fixup", "Squash", "fixup!", "squash!")
SPECIAL_PATTERN = "^(?:" + "|".join(re.escape(p) for p in SPECIAL_PREFIXES) + ")"

COMMIT_PATTERN = (
    f"(?P<type>{TYPE_PATTERN})"
    + re.escape(SEPARATOR)
    + f"(?P<task_id>{TASK_ID_PATTERN})"
    + re.escape(SEPARATOR)
    + f"(?P<date>{DATE_PATTERN})"
    + re.escape(SEPARATOR)
    + f"(?P<description>{DESCRIPTION_PATTERN})"
)

COMMIT_RE = re.compile(COMMIT_PATTERN)
SPECIAL_RE = re.compile(SPECIAL_PATTERN, re.IGNORECASE)
TASK_ID_RE = re.compile(TASK_ID_PATTERN)
DATE_RE = re.compile(DATE_PATTERN)
DESCRIPTION_CHARS_RE = re.compile(f"[{DESCRIPTION_CHARS}]+")
BRANCH_TASK_ID_RE = re.compile(BRANCH_TASK_ID_PATTERN)

FORMAT = "Type|TaskId|YYYYMMDD|Description"
EXAMPLE = "feat|backend|20250129|Add user authentication"
