"""Interactive prompt for the registry CLI."""

from typing import Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import clear

from cli.commands import create_client, dispatch_command
from cli.constants import (
    COMMANDS,
    HELP_TEXT,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.parser import ParseError, parse_command
from cli.registry_client import RegistryClient


def show_welcome() -> None:
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def evaluate(line: str, client: RegistryClient) -> str:
    """Run one registry command line and return what should be printed."""
    try:
        command = parse_command(line)
    except ParseError as e:
        return f"Error: {e}"
    return dispatch_command(command, client)


def _prompt_session() -> Callable[[], str]:
    session: PromptSession = PromptSession(
        completer=WordCompleter(COMMANDS, ignore_case=True),
        history=InMemoryHistory(),
        style=STYLE,
    )
    return lambda: session.prompt([("class:prompt", PROMPT_TEXT)])


def repl_loop(
    client: Optional[RegistryClient] = None,
    read_line: Optional[Callable[[], str]] = None,
) -> None:
    """
    Read commands until 'exit' or end of input.

    Args:
        client: Client to run commands with; built from saved settings when omitted
        read_line: Source of input lines; an interactive prompt when omitted
    """
    if client is None:
        client = create_client()
    if read_line is None:
        read_line = _prompt_session()
        clear()

    show_welcome()

    while True:
        try:
            line = read_line()
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            return

        word = line.strip()
        if not word:
            continue
        if word == "exit":
            print("Goodbye!")
            return
        if word == "help":
            print(HELP_TEXT)
        elif word == "clear":
            clear()
            show_welcome()
        else:
            print(evaluate(line, client))
