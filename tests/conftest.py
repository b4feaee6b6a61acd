"""Shared test fixtures for the task board tests."""

import itertools

import pytest

from taskboard.models import seed_board
from taskboard.storage import BoardSnapshotStore, JsonFileStore


@pytest.fixture
def board():
    return seed_board()


@pytest.fixture
def store(tmp_path):
    return JsonFileStore(tmp_path / "store.json")


@pytest.fixture
def snapshots(store):
    return BoardSnapshotStore(store)


@pytest.fixture
def fixed_ids():
    """Id factory yielding 100, 101, ... regardless of the board."""
    counter = itertools.count(100)
    return lambda _board: str(next(counter))
