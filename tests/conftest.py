"""Pytest configuration and fixtures."""

import pytest

from hashmap import HashTable


SAMPLE_KEYS = [
    "apple", "banana", "carrot", "dog", "elephant", "frog",
    "grape", "hat", "ice cream", "jacket", "kite", "lion",
]


@pytest.fixture
def table():
    """Empty table with the default load factor and capacity."""
    return HashTable(0.75, 16)


@pytest.fixture
def sample_keys():
    """Twelve distinct keys, enough to reach the default growth threshold."""
    return list(SAMPLE_KEYS)
