"""Collaborators the request handlers depend on."""

import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from joke_server.storage.joke_repo import JokeRepo

NIL_UUID = "00000000-0000-0000-0000-000000000000"


class Uuid:
    """Source of random identifiers."""

    @classmethod
    def create(cls) -> "Uuid":
        return cls(lambda: str(uuid.uuid4()))

    @classmethod
    def create_null(cls, uuids: Union[str, List[str], None] = None) -> "Uuid":
        """Create a Uuid returning fixed values.

        Args:
            uuids: A single value returned on every call, or a list of
                values returned in order. Defaults to the nil uuid.
        """
        if isinstance(uuids, list):
            remaining = list(uuids)

            def next_uuid() -> str:
                if not remaining:
                    raise RuntimeError("Uuid: Null instance ran out of configured Uuids")
                return remaining.pop(0)

            return cls(next_uuid)

        value = uuids if uuids is not None else NIL_UUID
        return cls(lambda: value)

    def __init__(self, uuid_v4: Callable[[], str]):
        self._uuid_v4 = uuid_v4

    def uuid_v4(self) -> str:
        return self._uuid_v4()


@dataclass
class Infrastructure:
    uuid: Uuid
    joke_repo: JokeRepo


def create_infrastructure(db_file: str) -> Infrastructure:
    return Infrastructure(
        uuid=Uuid.create(),
        joke_repo=JokeRepo.create(db_file)
    )


def create_null_infrastructure(
    uuid: Optional[Uuid] = None,
    joke_repo: Optional[JokeRepo] = None
) -> Infrastructure:
    """Infrastructure that never touches the filesystem."""
    return Infrastructure(
        uuid=uuid or Uuid.create_null(),
        joke_repo=joke_repo or JokeRepo.create_null()
    )
