"""Command parser for CLI input."""

import shlex

from cli.models import (
    CommandRequest,
    DeleteCommand,
    FindCommand,
    GetCommand,
    IdentityCommand,
    InsertCommand,
    ListCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]
    args = tokens[1:]

    if command_name == "identity":
        return IdentityCommand(credential=_single_arg(args, "identity", "<credential>"))
    elif command_name == "insert":
        return _parse_insert(args)
    elif command_name == "get":
        return GetCommand(key=_single_arg(args, "get", "<key>"))
    elif command_name == "delete":
        return DeleteCommand(key=_single_arg(args, "delete", "<key>"))
    elif command_name == "list":
        if args:
            raise ParseError("list takes no arguments")
        return ListCommand()
    elif command_name == "find":
        return FindCommand(name=_single_arg(args, "find", "<name>"))
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _single_arg(args: list[str], command_name: str, usage: str) -> str:
    if len(args) != 1:
        raise ParseError(f"{command_name} requires exactly 1 argument: {usage}")
    return args[0]


def _parse_insert(args: list[str]) -> InsertCommand:
    """Parse 'insert <name> <file_type> <size>' command."""
    if len(args) != 3:
        raise ParseError("insert requires exactly 3 arguments: <name> <file_type> <size>")

    name, file_type, size_str = args
    try:
        size = int(size_str)
    except ValueError:
        raise ParseError(f"size must be an integer, got '{size_str}'")

    return InsertCommand(name=name, file_type=file_type, size=size)
