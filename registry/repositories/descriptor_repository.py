"""Descriptor repository for database operations."""

from typing import List, Optional, Tuple

from common.logging_config import get_logger
from common.types import Descriptor, Identity, RegistryKey
from registry.database import get_db_connection
from registry.exceptions import InvariantViolation

logger = get_logger(__name__)


class DescriptorRepository:
    """
    Durable mirror of the registry's map and order sequence.

    Each row carries its position in the order sequence so that
    enumeration order and the key bijection survive a restart.
    """

    @staticmethod
    def insert(key: RegistryKey, descriptor: Descriptor, position: int, conn=None) -> None:
        should_close = conn is None
        if conn is None:
            conn = get_db_connection().__enter__()

        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO descriptors (registry_key, position, name, file_type, size, owner)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    key.hex(),
                    position,
                    descriptor.name,
                    descriptor.file_type,
                    str(descriptor.size),
                    descriptor.owner,
                )
            )
            if should_close:
                conn.commit()
        finally:
            if should_close:
                conn.close()

    @staticmethod
    def swap_remove(
        key: RegistryKey,
        position: int,
        moved_key: Optional[RegistryKey],
        conn=None
    ) -> None:
        """
        Delete a row and move the row of moved_key into the freed position.

        Both statements run in one transaction.
        """
        logger.debug(f"Removing descriptor row [key={key.hex()}] [position={position}]")
        should_close = conn is None
        if conn is None:
            conn = get_db_connection().__enter__()

        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM descriptors WHERE registry_key = ?", (key.hex(),))

            if moved_key is not None:
                cursor.execute(
                    "UPDATE descriptors SET position = ? WHERE registry_key = ?",
                    (position, moved_key.hex())
                )

            if should_close:
                conn.commit()
        except Exception as e:
            if should_close:
                conn.rollback()
            logger.error(f"Failed to remove descriptor row [key={key.hex()}]: {e}", exc_info=True)
            raise
        finally:
            if should_close:
                conn.close()

    @staticmethod
    def load_all() -> List[Tuple[RegistryKey, Descriptor]]:
        """
        Load every stored descriptor in order-sequence order.

        Raises:
            InvariantViolation: If stored positions are not exactly 0..n-1
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT registry_key, position, name, file_type, size, owner
                FROM descriptors
                ORDER BY position
                """
            )
            rows = cursor.fetchall()

        entries = []
        for expected, row in enumerate(rows):
            if row["position"] != expected:
                raise InvariantViolation(
                    f"Stored order sequence has a gap at position {expected} "
                    f"(found {row['position']})"
                )
            entries.append((
                RegistryKey(bytes.fromhex(row["registry_key"])),
                Descriptor(
                    name=row["name"],
                    file_type=row["file_type"],
                    size=int(row["size"]),
                    owner=Identity(row["owner"]),
                ),
            ))
        return entries

