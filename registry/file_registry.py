"""Content-addressed registry of immutable file descriptors."""

import threading
from typing import Dict, List, Optional, Tuple

from common.logging_config import get_logger
from common.types import Descriptor, Identity, RegistryKey
from registry.exceptions import (
    DuplicateEntryError,
    InvalidInputError,
    InvariantViolation,
    NotFoundError,
    UnauthorizedError,
    UnsupportedOperationError,
)
from registry.hashing import HashFunction, key_to_hex

logger = get_logger(__name__)


class FileRegistry:
    """
    Map of registry key to descriptor plus the order sequence used for
    enumeration and O(1) removal.

    Enumeration order is insertion order until the first delete; a delete
    moves the last key into the freed slot, so order is not stable after that.
    """

    def __init__(self, hash_function: HashFunction, repository=None):
        """
        Args:
            hash_function: Derives registry keys from descriptor fields
            repository: Optional durable mirror (see DescriptorRepository);
                        its stored entries are loaded on construction
        """
        self.hash_function = hash_function
        self.repository = repository
        self._lock = threading.RLock()
        self._entries: Dict[RegistryKey, Descriptor] = {}
        self._order: List[RegistryKey] = []
        self._positions: Dict[RegistryKey, int] = {}

        if repository is not None:
            self._load_from_repository()

    def _load_from_repository(self) -> None:
        with self._lock:
            for key, descriptor in self.repository.load_all():
                self._positions[key] = len(self._order)
                self._entries[key] = descriptor
                self._order.append(key)
            self.verify_integrity()
        logger.info(f"Loaded {len(self._order)} descriptors from repository")

    def insert(self, name: str, file_type: str, size: int, caller: Identity) -> RegistryKey:
        """
        Register a new descriptor owned by caller.

        Returns:
            The key derived from (name, file_type, size, caller)

        Raises:
            InvalidInputError: Malformed fields, non-positive size or absent caller
            DuplicateEntryError: The same field tuple is already registered
        """
        _validate_descriptor_fields(name, file_type, size)
        _require_identity(caller)

        key = self.hash_function.digest(name, file_type, size, caller)
        descriptor = Descriptor(name=name, file_type=file_type, size=size, owner=caller)

        with self._lock:
            if key in self._entries:
                logger.warning(f"Rejected duplicate insert [key={key_to_hex(key)}] [owner={caller}]")
                raise DuplicateEntryError(f"Descriptor {key_to_hex(key)} is already registered")

            position = len(self._order)
            if self.repository is not None:
                self.repository.insert(key, descriptor, position)

            self._entries[key] = descriptor
            self._order.append(key)
            self._positions[key] = position

        logger.info(f"Registered descriptor [key={key_to_hex(key)}] [name={name}] [owner={caller}]")
        return key

    def lookup(self, key: RegistryKey) -> Optional[Descriptor]:
        with self._lock:
            return self._entries.get(key)

    def get(self, key: RegistryKey) -> Descriptor:
        descriptor = self.lookup(key)
        if descriptor is None:
            raise NotFoundError(f"Descriptor {key_to_hex(key)} not found")
        return descriptor

    def delete(self, key: RegistryKey, caller: Identity) -> Descriptor:
        """
        Remove a descriptor. Only its owner may do so.

        Returns:
            The removed descriptor

        Raises:
            NotFoundError: No descriptor under key
            UnauthorizedError: caller is not the descriptor's owner
            InvariantViolation: The key is still reachable after removal
        """
        with self._lock:
            descriptor = self._entries.get(key)
            if descriptor is None:
                raise NotFoundError(f"Descriptor {key_to_hex(key)} not found")

            self._guard_owner(key, descriptor, caller)

            position = self._positions[key]
            last_key = self._order[-1]
            moved_key = last_key if last_key != key else None

            if self.repository is not None:
                self.repository.swap_remove(key, position, moved_key)

            self._order[position] = last_key
            self._positions[last_key] = position
            self._order.pop()
            del self._positions[key]
            del self._entries[key]

            if self._entries.get(key) is not None or key in self._positions:
                logger.critical(f"Descriptor still reachable after delete [key={key_to_hex(key)}]")
                raise InvariantViolation(f"Descriptor {key_to_hex(key)} still present after delete")

        logger.info(f"Deleted descriptor [key={key_to_hex(key)}] [owner={caller}]")
        return descriptor

    def _guard_owner(self, key: RegistryKey, descriptor: Descriptor, caller: Identity) -> None:
        if caller != descriptor.owner:
            logger.warning(f"Rejected delete by non-owner [key={key_to_hex(key)}] [caller={caller}]")
            raise UnauthorizedError(f"Caller {caller} does not own descriptor {key_to_hex(key)}")

    def items(self) -> List[Tuple[RegistryKey, Descriptor]]:
        with self._lock:
            return [(key, self._entries[key]) for key in self._order]

    def list_all(self) -> List[Descriptor]:
        """Descriptors in current order-sequence order (unstable after deletes)."""
        with self._lock:
            return [self._entries[key] for key in self._order]

    def find_key_by_name(self, name: str) -> RegistryKey:
        """
        Return the key of the first descriptor, in order-sequence order,
        whose name equals name exactly.

        Raises:
            NotFoundError: No descriptor has that name
        """
        with self._lock:
            for key in self._order:
                if self._entries[key].name == name:
                    return key
        raise NotFoundError(f"No descriptor named {name!r}")

    def reject_value_transfer(self, amount=None, sender: Optional[Identity] = None) -> None:
        logger.warning(f"Rejected value transfer [amount={amount}] [sender={sender}]")
        raise UnsupportedOperationError("Registry does not accept value transfers")

    def verify_integrity(self) -> None:
        """
        Check that the map and the order sequence reference the same keys one-to-one.

        Raises:
            InvariantViolation: On any mismatch
        """
        with self._lock:
            if not (len(self._order) == len(self._entries) == len(self._positions)):
                raise InvariantViolation(
                    f"Size mismatch: order={len(self._order)} "
                    f"entries={len(self._entries)} positions={len(self._positions)}"
                )
            for index, key in enumerate(self._order):
                if key not in self._entries:
                    raise InvariantViolation(f"Ordered key {key_to_hex(key)} has no entry")
                if self._positions.get(key) != index:
                    raise InvariantViolation(f"Key {key_to_hex(key)} is not at its recorded position")
                if not self._entries[key].owner:
                    raise InvariantViolation(f"Descriptor {key_to_hex(key)} has no owner")

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)

    def __contains__(self, key) -> bool:
        return self.lookup(key) is not None


def _validate_descriptor_fields(name, file_type, size) -> None:
    if not isinstance(name, str):
        raise InvalidInputError("Descriptor name must be a string")
    if not isinstance(file_type, str):
        raise InvalidInputError("Descriptor file type must be a string")
    _require_utf8(name, "name")
    _require_utf8(file_type, "file type")
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidInputError("Descriptor size must be an integer")
    if size <= 0:
        raise InvalidInputError(f"Descriptor size must be positive, got {size}")


def _require_utf8(value: str, label: str) -> None:
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        raise InvalidInputError(f"Descriptor {label} must be encodable as UTF-8")


def _require_identity(caller) -> None:
    if not isinstance(caller, str) or not caller:
        raise InvalidInputError("Caller identity is required")
