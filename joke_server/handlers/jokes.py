"""Request handlers for the jokes collection."""

import logging
from typing import Any

from joke_server.domain.joke import Err, create_joke_id, validate_joke
from joke_server.handlers.responses import (
    Request,
    Response,
    bad_request,
    created,
    no_content,
    not_found,
    ok,
)
from joke_server.infrastructure import Infrastructure

logger = logging.getLogger(__name__)


def _with_joke_id(data: Any, joke_id: str) -> Any:
    if not isinstance(data, dict):
        return data
    return {**data, "jokeId": joke_id}


async def index(infrastructure: Infrastructure, request: Request) -> Response:
    jokes = await infrastructure.joke_repo.find_all()
    return ok({"jokes": [joke.to_item() for joke in jokes]})


async def show(infrastructure: Infrastructure, request: Request) -> Response:
    joke_id = create_joke_id(request.params["jokeId"])

    joke = await infrastructure.joke_repo.find_by_joke_id(joke_id)
    if joke is None:
        return not_found()
    return ok({"joke": joke.to_item()})


async def create(infrastructure: Infrastructure, request: Request) -> Response:
    """Add a joke under a freshly generated id."""
    joke_id = create_joke_id(infrastructure.uuid.uuid_v4())

    result = validate_joke(_with_joke_id(request.data, joke_id))
    if isinstance(result, Err):
        return bad_request({"message": result.error.message})

    await infrastructure.joke_repo.add(result.value)
    logger.info(f"Created joke {joke_id}")
    return created({"joke": result.value.to_item()})


async def update(infrastructure: Infrastructure, request: Request) -> Response:
    """Replace the joke at the id from the path."""
    joke_id = create_joke_id(request.params["jokeId"])

    result = validate_joke(_with_joke_id(request.data, joke_id))
    if isinstance(result, Err):
        return bad_request({"message": result.error.message})

    await infrastructure.joke_repo.add(result.value)
    logger.info(f"Updated joke {joke_id}")
    return no_content()


async def destroy(infrastructure: Infrastructure, request: Request) -> Response:
    joke_id = create_joke_id(request.params["jokeId"])
    await infrastructure.joke_repo.remove(joke_id)
    logger.info(f"Removed joke {joke_id}")
    return no_content()
