"""Repository layer for data access."""

from registry.repositories.descriptor_repository import DescriptorRepository

__all__ = [
    "DescriptorRepository",
]
