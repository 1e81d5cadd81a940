from dataclasses import dataclass
from typing import Dict, List, Optional

from joke_server.domain.joke import Joke, JokeId
from joke_server.events import EventEmitter
from joke_server.storage.fs_db_client import FsDbClient


@dataclass(frozen=True)
class JokeAdded:
    joke: Joke


@dataclass(frozen=True)
class JokeRemoved:
    joke_id: JokeId


class JokeRepo:
    """Jokes persisted through an FsDbClient, keyed by jokeId."""

    @classmethod
    def create(cls, db_file: str) -> "JokeRepo":
        return cls(FsDbClient.create(db_file))

    @classmethod
    def create_null(cls, jokes: Optional[Dict[str, Joke]] = None) -> "JokeRepo":
        """Create a repo over a null store preloaded with jokes."""
        items = {joke_id: joke.to_item() for joke_id, joke in (jokes or {}).items()}
        return cls(FsDbClient.create_null(items=items))

    def __init__(self, fs_db_client: FsDbClient):
        self._fs_db_client = fs_db_client
        self.joke_added: EventEmitter[JokeAdded] = EventEmitter()
        self.joke_removed: EventEmitter[JokeRemoved] = EventEmitter()

    async def find_all(self) -> List[Joke]:
        items = await self._fs_db_client.list_items()
        return [Joke.model_validate(item) for item in items]

    async def find_by_joke_id(self, joke_id: JokeId) -> Optional[Joke]:
        item = await self._fs_db_client.get_item(joke_id)
        if item is None:
            return None
        return Joke.model_validate(item)

    async def add(self, joke: Joke) -> None:
        """Store joke, replacing any joke with the same id."""
        await self._fs_db_client.put_item(joke.joke_id, joke.to_item())
        self.joke_added.emit(JokeAdded(joke=joke))

    async def remove(self, joke_id: JokeId) -> None:
        """Remove a joke. Emits joke_removed whether or not it existed."""
        await self._fs_db_client.delete_item(joke_id)
        self.joke_removed.emit(JokeRemoved(joke_id=joke_id))
