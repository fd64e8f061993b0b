"""Integration tests for the SQLite descriptor repository."""

import sqlite3
from pathlib import Path
from typing import Generator

import pytest

from common.types import Descriptor, Identity, RegistryKey
from registry.database import get_db_connection, init_database
from registry.exceptions import DuplicateEntryError, InvariantViolation
from registry.file_registry import FileRegistry
from registry.hashing import Sha256HashFunction
from registry.repositories.descriptor_repository import DescriptorRepository


@pytest.fixture
def test_db(tmp_path, monkeypatch) -> Generator[Path, None, None]:
    """
    Create a temporary test database for each test.
    """
    db_path = tmp_path / "registry.db"
    monkeypatch.setattr("registry.database.DATABASE_PATH", str(db_path))
    init_database()
    yield db_path


def _persistent_registry() -> FileRegistry:
    return FileRegistry(Sha256HashFunction(), repository=DescriptorRepository())


class TestDescriptorRepository:

    def test_insert_and_load(self, test_db):
        key = RegistryKey(bytes(range(32)))
        descriptor = Descriptor("a.txt", "text", 100, Identity("owner1"))

        DescriptorRepository.insert(key, descriptor, 0)

        assert DescriptorRepository.load_all() == [(key, descriptor)]

    def test_sizes_beyond_sqlite_integer_range(self, test_db):
        key = RegistryKey(bytes(32))
        descriptor = Descriptor("huge.bin", "binary", 2 ** 70, Identity("owner1"))

        DescriptorRepository.insert(key, descriptor, 0)

        assert DescriptorRepository.load_all()[0][1].size == 2 ** 70

    def test_swap_remove_moves_row(self, test_db):
        keys = [RegistryKey(bytes([i]) * 32) for i in range(3)]
        for position, key in enumerate(keys):
            DescriptorRepository.insert(key, Descriptor(f"f{position}", "t", 1, Identity("o")), position)

        DescriptorRepository.swap_remove(keys[0], 0, keys[2])

        assert [key for key, _ in DescriptorRepository.load_all()] == [keys[2], keys[1]]

    def test_load_detects_gap_in_positions(self, test_db):
        DescriptorRepository.insert(RegistryKey(bytes(32)), Descriptor("a", "t", 1, Identity("o")), 1)

        with pytest.raises(InvariantViolation):
            DescriptorRepository.load_all()


class TestPersistentRegistry:

    def test_state_survives_restart(self, test_db):
        registry = _persistent_registry()
        k1 = registry.insert("a.txt", "text", 100, Identity("owner1"))
        k2 = registry.insert("b.txt", "text", 200, Identity("owner1"))
        k3 = registry.insert("c.txt", "text", 300, Identity("owner2"))
        registry.delete(k1, Identity("owner1"))

        restarted = _persistent_registry()

        assert restarted.items() == registry.items()
        assert [key for key, _ in restarted.items()] == [k3, k2]
        restarted.verify_integrity()

    def test_duplicate_detected_after_restart(self, test_db):
        _persistent_registry().insert("a.txt", "text", 100, Identity("owner1"))

        with pytest.raises(DuplicateEntryError):
            _persistent_registry().insert("a.txt", "text", 100, Identity("owner1"))

    def test_failed_write_leaves_memory_untouched(self, test_db):
        registry = _persistent_registry()
        registry.insert("a.txt", "text", 100, Identity("owner1"))

        with get_db_connection() as conn:
            conn.execute("DROP TABLE descriptors")
            conn.commit()

        with pytest.raises(sqlite3.OperationalError):
            registry.insert("b.txt", "text", 100, Identity("owner1"))

        assert [d.name for d in registry.list_all()] == ["a.txt"]
        registry.verify_integrity()
