"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class IdentityCommand:
    """Set the credential presented as caller identity."""

    credential: str
    command: Literal["identity"] = "identity"


@dataclass(frozen=True)
class InsertCommand:
    """Register a descriptor."""

    name: str
    file_type: str
    size: int
    command: Literal["insert"] = "insert"


@dataclass(frozen=True)
class GetCommand:
    """Show the descriptor stored under a key."""

    key: str
    command: Literal["get"] = "get"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete the descriptor stored under a key."""

    key: str
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class ListCommand:
    """List every descriptor."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class FindCommand:
    """Find the key of a descriptor by exact name."""

    name: str
    command: Literal["find"] = "find"


CommandRequest = (
    IdentityCommand
    | InsertCommand
    | GetCommand
    | DeleteCommand
    | ListCommand
    | FindCommand
)
