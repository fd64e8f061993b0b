"""Command handler functions for CLI operations."""

from typing import Optional

from common.logging_config import get_logger
from cli.config import DEFAULT_CONFIG_PATH, ClientConfig
from cli.models import (
    CommandRequest,
    DeleteCommand,
    FindCommand,
    GetCommand,
    IdentityCommand,
    InsertCommand,
    ListCommand,
)
from cli.registry_client import RegistryClient

logger = get_logger(__name__)


def create_client(config_path=DEFAULT_CONFIG_PATH, base_url: Optional[str] = None) -> RegistryClient:
    """
    Build a client from the saved settings.

    Args:
        config_path: JSON settings file
        base_url: Registry URL for this session only; never saved
    """
    logger.debug(f"Creating RegistryClient from {config_path}")
    return RegistryClient(ClientConfig.load(config_path), base_url=base_url)


def handle_identity(cmd: IdentityCommand, client: RegistryClient) -> str:
    return client.set_identity(cmd.credential)


def handle_insert(cmd: InsertCommand, client: RegistryClient) -> str:
    """
    Handle 'insert' command.

    Args:
        cmd: InsertCommand with name, file_type and size
        client: RegistryClient used for the request

    Returns:
        Success message with the new key, or error message
    """
    logger.info(f"Executing insert command: name={cmd.name} file_type={cmd.file_type} size={cmd.size}")
    return client.insert(cmd.name, cmd.file_type, cmd.size)


def handle_get(cmd: GetCommand, client: RegistryClient) -> str:
    return client.get(cmd.key)


def handle_delete(cmd: DeleteCommand, client: RegistryClient) -> str:
    logger.info(f"Executing delete command: key={cmd.key}")
    return client.delete(cmd.key)


def handle_list(cmd: ListCommand, client: RegistryClient) -> str:
    return client.list_all()


def handle_find(cmd: FindCommand, client: RegistryClient) -> str:
    return client.find(cmd.name)


HANDLERS = {
    IdentityCommand: handle_identity,
    InsertCommand: handle_insert,
    GetCommand: handle_get,
    DeleteCommand: handle_delete,
    ListCommand: handle_list,
    FindCommand: handle_find,
}


def dispatch_command(cmd_obj: CommandRequest, client: RegistryClient) -> str:
    """Dispatch parsed command to appropriate handler."""
    handler = HANDLERS.get(type(cmd_obj))
    if handler is None:
        return f"Unknown command type: {type(cmd_obj)}"
    return handler(cmd_obj, client)
