"""Joke domain model and input validation."""

from dataclasses import dataclass
from typing import Any, Generic, NewType, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

JokeId = NewType("JokeId", str)

INVALID_JOKE_MESSAGE = "Joke data is invalid. No joke!"

T = TypeVar("T")
E = TypeVar("E")


def create_joke_id(value: str) -> JokeId:
    """Wrap a raw string as a JokeId.

    Raises:
        ValueError: if value is empty
    """
    if value == "":
        raise ValueError("JokeId cannot be empty")
    return JokeId(value)


class Joke(BaseModel):
    """A stored joke. Serialized with the ``jokeId`` key."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    joke_id: StrictStr = Field(..., alias="jokeId", min_length=1)
    question: StrictStr
    answer: StrictStr

    def to_item(self) -> dict:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class ValidationError:
    message: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


JokeResult = Union[Ok[Joke], Err[ValidationError]]


def validate_joke(data: Any) -> JokeResult:
    """Parse untrusted input into a Joke.

    Only ``jokeId``, ``question`` and ``answer`` are kept; anything else on
    the input is dropped. Never raises.
    """
    if not isinstance(data, dict):
        return Err(ValidationError(INVALID_JOKE_MESSAGE))

    try:
        joke = Joke.model_validate(
            {key: data[key] for key in ("jokeId", "question", "answer") if key in data}
        )
    except PydanticValidationError:
        return Err(ValidationError(INVALID_JOKE_MESSAGE))

    return Ok(joke)
