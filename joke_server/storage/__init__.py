"""Persistence for jokes"""

from joke_server.storage.fs_db_client import (
    FsDbClient,
    InvalidId,
    StorageError,
    StoreError,
    assert_valid_id,
)
from joke_server.storage.joke_repo import JokeAdded, JokeRemoved, JokeRepo

__all__ = [
    "FsDbClient",
    "InvalidId",
    "JokeAdded",
    "JokeRemoved",
    "JokeRepo",
    "StorageError",
    "StoreError",
    "assert_valid_id",
]
