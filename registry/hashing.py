"""Registry key derivation."""

import hashlib
import re
from typing import Protocol

from common.constants import DIGEST_SIZE_BYTES, LENGTH_PREFIX_BYTES, SIZE_FIELD_BYTES
from common.types import RegistryKey
from registry.exceptions import InvalidInputError

_KEY_PATTERN = re.compile(rf"[0-9a-fA-F]{{{DIGEST_SIZE_BYTES * 2}}}")


class HashFunction(Protocol):
    """Deterministic fixed-width digest over the ordered descriptor fields."""

    def digest(self, name: str, file_type: str, size: int, owner: str) -> RegistryKey:
        ...


def _encode_text(value: str) -> bytes:
    try:
        data = value.encode('utf-8')
    except UnicodeEncodeError:
        raise InvalidInputError("Text fields must be encodable as UTF-8")
    return len(data).to_bytes(LENGTH_PREFIX_BYTES, 'big') + data


def _encode_size(size: int) -> bytes:
    try:
        return size.to_bytes(SIZE_FIELD_BYTES, 'big', signed=False)
    except OverflowError:
        raise InvalidInputError(f"Size {size} does not fit in {SIZE_FIELD_BYTES * 8} bits")


class Sha256HashFunction:
    """
    SHA-256 over (name, file_type, size, owner) in that order.

    Text fields are length-prefixed so that ('ab', 'c') and ('a', 'bc')
    never produce the same byte stream.
    """

    def digest(self, name: str, file_type: str, size: int, owner: str) -> RegistryKey:
        hasher = hashlib.sha256()
        hasher.update(_encode_text(name))
        hasher.update(_encode_text(file_type))
        hasher.update(_encode_size(size))
        hasher.update(_encode_text(owner))
        return RegistryKey(hasher.digest())


def key_to_hex(key: RegistryKey) -> str:
    return key.hex()


def parse_key(value: str) -> RegistryKey:
    """
    Parse a hex-encoded registry key.

    Args:
        value: 64 hex characters, either case, no whitespace or separators

    Returns:
        Raw registry key bytes

    Raises:
        InvalidInputError: If value is not a well-formed key
    """
    if not isinstance(value, str) or not _KEY_PATTERN.fullmatch(value):
        raise InvalidInputError(
            f"Registry key must be exactly {DIGEST_SIZE_BYTES * 2} hex characters"
        )
    return RegistryKey(bytes.fromhex(value))
