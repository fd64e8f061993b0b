"""Shared data type definitions (Descriptor, RegistryKey, Identity)."""

from dataclasses import dataclass
from typing import NewType

Identity = NewType("Identity", str)

RegistryKey = NewType("RegistryKey", bytes)


@dataclass(frozen=True)
class Descriptor:
    """
    Immutable metadata record for a registered file.
    """
    name: str
    file_type: str
    size: int
    owner: Identity
