"""Key/item store backed by a single JSON file."""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles

from joke_server.events import EventEmitter, ItemDeleted, ItemStored

logger = logging.getLogger(__name__)

Item = Dict[str, Any]

ID_SEPARATOR = "/"


class StoreError(Exception):
    """Base class for store failures."""


class InvalidId(StoreError, ValueError):
    """Raised for ids that are not non-empty strings without '/'."""


class StorageError(StoreError):
    """Raised when the store file cannot be read or written."""


class UninitializedStore(Exception):
    """The store file is missing, empty or not parseable JSON."""


def assert_valid_id(id: Any) -> None:
    """Check that id can address an item in the store.

    Raises:
        InvalidId: if id is not a string, is empty or contains '/'
    """
    if not isinstance(id, str):
        raise InvalidId(f"Expected id to be a string, but got '{type(id).__name__}'.")

    if id == "":
        raise InvalidId("id cannot be blank")

    if ID_SEPARATOR in id:
        raise InvalidId(
            f"The '{ID_SEPARATOR}' character is not allowed in item ids. "
            f"Invalid value was '{id}'."
        )


class JsonFileDocument:
    """The whole store file, read and written as one JSON object."""

    def __init__(self, file_path: str):
        self.file_path = Path(file_path)

    async def read(self) -> Item:
        try:
            async with aiofiles.open(self.file_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError as e:
            raise UninitializedStore(f"{self.file_path} does not exist") from e
        except OSError as e:
            raise StorageError(f"Could not read store file '{self.file_path}': {e}") from e

        if not content.strip():
            raise UninitializedStore(f"{self.file_path} is empty")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise UninitializedStore(f"{self.file_path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(
                f"Expected store file '{self.file_path}' to contain a JSON object, "
                f"but got '{type(data).__name__}'."
            )

        logger.debug(f"Read {len(data)} items from {self.file_path}")
        return data

    async def write(self, data: Item) -> None:
        try:
            content = json.dumps(data, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Items are not JSON serializable: {e}") from e

        try:
            async with aiofiles.open(self.file_path, "w", encoding="utf-8") as f:
                await f.write(content)
        except OSError as e:
            raise StorageError(f"Could not write store file '{self.file_path}': {e}") from e

        logger.debug(f"Wrote {len(data)} items to {self.file_path}")

    async def initialize(self) -> None:
        """Write an empty document."""
        await self.write({})


class StubDocument:
    """In-memory document for null stores.

    Reads return the configured items, writes are discarded.
    """

    def __init__(self, items: Optional[Item] = None, error: Optional[Exception] = None):
        self._items = dict(items or {})
        self._error = error

    async def read(self) -> Item:
        if self._error:
            raise self._error
        return copy.deepcopy(self._items)

    async def write(self, data: Item) -> None:
        if self._error:
            raise self._error

    async def initialize(self) -> None:
        pass


class FsDbClient:
    """Store for JSON items addressed by string ids.

    Every call re-reads the file; nothing is cached between calls. A missing,
    empty or unparseable file is initialized to ``{}`` and the operation is
    retried once.

    Events:
        item_stored: ItemStored after a successful put_item
        item_deleted: ItemDeleted after delete_item removed an item
    """

    @classmethod
    def create(cls, db_file: str) -> "FsDbClient":
        return cls(JsonFileDocument(db_file))

    @classmethod
    def create_null(
        cls,
        items: Optional[Item] = None,
        error: Optional[Exception] = None
    ) -> "FsDbClient":
        """Create a store that never touches the filesystem.

        Args:
            items: Items returned by reads, keyed by id
            error: Raised by every operation when given
        """
        return cls(StubDocument(items, error))

    def __init__(self, document):
        self._document = document
        self.item_stored: EventEmitter[ItemStored] = EventEmitter()
        self.item_deleted: EventEmitter[ItemDeleted] = EventEmitter()

    async def list_items(self) -> List[Item]:
        data = await self._read()
        return list(data.values())

    async def get_item(self, id: str) -> Optional[Item]:
        """Return the item stored under id, or None."""
        assert_valid_id(id)
        data = await self._read()
        return data.get(id)

    async def put_item(self, id: str, item: Item) -> None:
        """Store item under id, replacing any previous item.

        Raises:
            InvalidId: if id is malformed
            StorageError: if item is not a mapping
        """
        assert_valid_id(id)
        if not isinstance(item, dict):
            raise StorageError(f"Expected item to be a mapping, but got '{type(item).__name__}'.")
        data = await self._read()
        data[id] = item
        await self._document.write(data)
        self.item_stored.emit(ItemStored(id=id, item=item))

    async def delete_item(self, id: str) -> None:
        """Remove the item stored under id. Missing ids are ignored."""
        assert_valid_id(id)
        data = await self._read()
        if id not in data:
            return
        del data[id]
        await self._document.write(data)
        self.item_deleted.emit(ItemDeleted(id=id))

    async def _read(self) -> Item:
        try:
            return await self._document.read()
        except UninitializedStore as e:
            logger.warning(f"Initializing store: {e}")
            await self._document.initialize()

        try:
            return await self._document.read()
        except UninitializedStore as e:
            raise StorageError(f"Store is still unreadable after initialization: {e}") from e
