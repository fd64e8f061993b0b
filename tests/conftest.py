"""Shared pytest fixtures for all tests."""

import pytest

from cli.config import ClientConfig
from common.types import Identity
from registry.file_registry import FileRegistry
from registry.hashing import Sha256HashFunction


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .filereg directory
    """
    config_dir = tmp_path / '.filereg'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Returns:
        ClientConfig backed by a file in the temp directory
    """
    return ClientConfig.load(temp_config_dir / 'config.json')


@pytest.fixture
def owner1():
    return Identity("owner1")


@pytest.fixture
def owner2():
    return Identity("owner2")


@pytest.fixture
def registry():
    """In-memory registry with the production hash function."""
    return FileRegistry(Sha256HashFunction())
