"""Tests for CLI command parsing."""

import pytest

from cli.models import DeleteCommand, FindCommand, GetCommand, IdentityCommand, InsertCommand, ListCommand
from cli.parser import ParseError, parse_command


def test_parse_insert():
    assert parse_command("insert a.txt text 100") == InsertCommand(name="a.txt", file_type="text", size=100)


def test_parse_insert_quoted_name():
    cmd = parse_command('insert "my report.pdf" pdf 2048')

    assert cmd.name == "my report.pdf"
    assert cmd.size == 2048


def test_parse_insert_keeps_negative_size_for_server_validation():
    assert parse_command("insert a.txt text -5").size == -5


@pytest.mark.parametrize("line", [
    "insert a.txt text",
    "insert a.txt text 100 extra",
    "insert a.txt text big",
])
def test_parse_insert_errors(line):
    with pytest.raises(ParseError):
        parse_command(line)


def test_parse_simple_commands():
    assert parse_command("identity alice") == IdentityCommand(credential="alice")
    assert parse_command("get abc123") == GetCommand(key="abc123")
    assert parse_command("delete abc123") == DeleteCommand(key="abc123")
    assert parse_command("list") == ListCommand()
    assert parse_command("find a.txt") == FindCommand(name="a.txt")


@pytest.mark.parametrize("line", ["", "   ", "get", "delete a b", "list extra", "find", "upload x", 'find "unterminated'])
def test_parse_errors(line):
    with pytest.raises(ParseError):
        parse_command(line)
