"""Domain types"""

from joke_server.domain.joke import (
    INVALID_JOKE_MESSAGE,
    Err,
    Joke,
    JokeId,
    Ok,
    ValidationError,
    create_joke_id,
    validate_joke,
)

__all__ = [
    "INVALID_JOKE_MESSAGE",
    "Err",
    "Joke",
    "JokeId",
    "Ok",
    "ValidationError",
    "create_joke_id",
    "validate_joke",
]
