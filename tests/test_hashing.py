"""Tests for registry key derivation."""

import hashlib

import pytest

from registry.exceptions import InvalidInputError
from registry.hashing import Sha256HashFunction, key_to_hex, parse_key


@pytest.fixture
def hash_function():
    return Sha256HashFunction()


def test_digest_is_deterministic(hash_function):
    first = hash_function.digest("a.txt", "text", 100, "owner1")
    second = hash_function.digest("a.txt", "text", 100, "owner1")

    assert first == second
    assert len(first) == 32


def test_digest_matches_documented_encoding(hash_function):
    def text(value):
        data = value.encode('utf-8')
        return len(data).to_bytes(8, 'big') + data

    expected = hashlib.sha256(
        text("a.txt") + text("text") + (100).to_bytes(32, 'big') + text("owner1")
    ).digest()

    assert hash_function.digest("a.txt", "text", 100, "owner1") == expected


@pytest.mark.parametrize("fields", [
    ("a.txt", "text", 101, "owner1"),
    ("b.txt", "text", 100, "owner1"),
    ("a.txt", "json", 100, "owner1"),
    ("a.txt", "text", 100, "owner2"),
])
def test_each_field_changes_digest(hash_function, fields):
    assert hash_function.digest(*fields) != hash_function.digest("a.txt", "text", 100, "owner1")


def test_field_boundaries_are_unambiguous(hash_function):
    assert hash_function.digest("ab", "c", 1, "o") != hash_function.digest("a", "bc", 1, "o")


def test_parse_key_accepts_hex_round_trip(hash_function):
    key = hash_function.digest("a.txt", "text", 100, "owner1")

    assert parse_key(key_to_hex(key)) == key
    assert parse_key(key_to_hex(key).upper()) == key


@pytest.mark.parametrize("value", ["not-hex", "abcd", "00" * 33, ""])
def test_parse_key_rejects_malformed(value):
    with pytest.raises(InvalidInputError):
        parse_key(value)


def test_parse_key_accepts_mixed_case(hash_function):
    key = hash_function.digest("a.txt", "text", 100, "owner1")
    hex_key = key_to_hex(key)
    mixed = ''.join(c.upper() if i % 2 else c for i, c in enumerate(hex_key))

    assert parse_key(mixed) == key


@pytest.mark.parametrize("value", [
    " " + "00" * 32,
    "00" * 32 + " ",
    "00" * 32 + "\n",
    " ".join(["00"] * 32),
    "00" * 16 + "\t" + "00" * 16,
])
def test_parse_key_rejects_whitespace(value):
    with pytest.raises(InvalidInputError):
        parse_key(value)


@pytest.mark.parametrize("fields", [
    ("\ud800", "text", 1, "owner1"),
    ("a.txt", "\udfff", 1, "owner1"),
    ("a.txt", "text", 1, "owner\ud800"),
])
def test_text_not_encodable_as_utf8_rejected(hash_function, fields):
    with pytest.raises(InvalidInputError):
        hash_function.digest(*fields)


def test_non_ascii_text_is_hashed_as_utf8(hash_function):
    name = "résumé.pdf"
    data = name.encode('utf-8')
    expected = hashlib.sha256(
        len(data).to_bytes(8, 'big') + data
        + (4).to_bytes(8, 'big') + b"text"
        + (1).to_bytes(32, 'big')
        + (1).to_bytes(8, 'big') + b"o"
    ).digest()

    assert hash_function.digest(name, "text", 1, "o") == expected
