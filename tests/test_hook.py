"""Tests for the commit-msg hook adapter."""
from io import StringIO

import pytest
from rich.console import Console

from gitcommitvalidator.hook import (
    EXIT_ERROR,
    EXIT_OK,
    EXIT_REJECTED,
    main,
    read_message_file,
    run_hook,
)


@pytest.fixture
def console_output():
    buffer = StringIO()
    return Console(file=buffer, width=200), buffer


def write_message(tmp_path, text):
    path = tmp_path / "COMMIT_EDITMSG"
    path.write_text(text, encoding="utf-8")
    return path


def test_read_message_file_strips_trailing_whitespace(tmp_path):
    path = write_message(tmp_path, "feat|a|20250130|12345  \n\n")
    assert read_message_file(path) == "feat|a|20250130|12345"


def test_read_message_file_keeps_non_ascii_whitespace(tmp_path):
    path = write_message(tmp_path, "feat|a|20250130|12345\u00a0\n")
    assert read_message_file(path) == "feat|a|20250130|12345\u00a0"


def test_hook_rejects_trailing_nbsp(tmp_path, console_output):
    console, buffer = console_output
    path = write_message(tmp_path, "feat|a|20250130|12345\u00a0\n")
    assert run_hook(path, console) == EXIT_REJECTED
    assert "Invalid commit format" in buffer.getvalue()


def test_read_message_file_keeps_leading_whitespace(tmp_path):
    path = write_message(tmp_path, "  feat|a|20250130|12345\n")
    assert read_message_file(path) == "  feat|a|20250130|12345"


@pytest.mark.parametrize("text", [
    "feat|backend|20250129|Add user authentication\n",
    "fix|MV-001|20250130|Fix critical security bug",
    "Merge branch develop into main\n",
    "Revert \"feat|backend|20250129|Add feature\"\n\nThis reverts commit abc.\n",
])
def test_hook_accepts(tmp_path, console_output, text):
    console, buffer = console_output
    assert run_hook(write_message(tmp_path, text), console) == EXIT_OK
    assert buffer.getvalue() == ""


@pytest.mark.parametrize("text", [
    "added new feature\n",
    "feat|backend|20250129|Four\n",
    "feat|backend|20250129|Has \"quotes\" in text\n",
])
def test_hook_rejects_with_help(tmp_path, console_output, text):
    console, buffer = console_output
    assert run_hook(write_message(tmp_path, text), console) == EXIT_REJECTED

    output = buffer.getvalue()
    assert "Invalid commit format" in output
    assert "Type|TaskId|YYYYMMDD|Description" in output
    assert "feat|backend|20250129|Add user authentication" in output
    assert text.strip() in output


def test_hook_validates_whole_message(tmp_path, console_output):
    # A valid subject followed by a body is not a structured message
    console, _ = console_output
    path = write_message(tmp_path, "feat|backend|20250129|Add feature\n\nSome body\n")
    assert run_hook(path, console) == EXIT_REJECTED


def test_hook_missing_file(tmp_path, console_output):
    console, buffer = console_output
    assert run_hook(tmp_path / "missing", console) == EXIT_ERROR
    assert "cannot read commit message file" in buffer.getvalue()


def test_hook_non_utf8_file(tmp_path, console_output):
    console, _ = console_output
    path = tmp_path / "COMMIT_EDITMSG"
    path.write_bytes(b"feat|a|20250130|\xff\xfe\xfd")
    assert run_hook(path, console) == EXIT_ERROR


def test_main_entry_point(tmp_path, capsys):
    assert main([str(write_message(tmp_path, "feat|a|20250130|12345"))]) == EXIT_OK
    assert main([str(write_message(tmp_path, "bad"))]) == EXIT_REJECTED
    assert main([]) == EXIT_ERROR
