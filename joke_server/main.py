import json
import logging
import sys
from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from joke_server.config import get_settings
from joke_server.handlers import jokes
from joke_server.handlers.responses import Request as HandlerRequest
from joke_server.handlers.responses import Response as HandlerResponse
from joke_server.infrastructure import Infrastructure, create_infrastructure

logger = logging.getLogger(__name__)

RequestHandler = Callable[[Infrastructure, HandlerRequest], Awaitable[HandlerResponse]]


async def _read_json(request: Request) -> Any:
    """Request body as JSON, or None when it is missing or malformed."""
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        logger.info(f"Ignoring malformed JSON body on {request.method} {request.url.path}")
        return None


def create_app(infrastructure: Infrastructure) -> FastAPI:
    """Bind the joke handlers to HTTP routes."""
    app = FastAPI(title="Joke Server")

    async def dispatch(handler: RequestHandler, request: Request) -> Response:
        try:
            handler_request = HandlerRequest(
                params=dict(request.path_params),
                data=await _read_json(request)
            )
            response = await handler(infrastructure, handler_request)
        except Exception:
            logger.error(f"Error handling {request.method} {request.url.path}", exc_info=True)
            return JSONResponse(status_code=500, content={"message": "Internal server error"})

        if response.data is None:
            return Response(status_code=response.status)
        return JSONResponse(status_code=response.status, content=response.data)

    @app.get("/jokes")
    async def list_jokes(request: Request):
        """List all jokes"""
        return await dispatch(jokes.index, request)

    @app.post("/jokes")
    async def create_joke(request: Request):
        """Add a joke with a generated id"""
        return await dispatch(jokes.create, request)

    @app.get("/jokes/{jokeId}")
    async def show_joke(request: Request):
        """Get a single joke"""
        return await dispatch(jokes.show, request)

    @app.put("/jokes/{jokeId}")
    async def update_joke(request: Request):
        """Replace a joke"""
        return await dispatch(jokes.update, request)

    @app.delete("/jokes/{jokeId}")
    async def delete_joke(request: Request):
        """Remove a joke"""
        return await dispatch(jokes.destroy, request)

    # Health check
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


def main() -> None:
    """Entry point to start the joke server."""
    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR)
        if any(error["loc"] == ("DB_FILE",) and error["type"] == "missing" for error in e.errors()):
            logger.error("Required environment variable DB_FILE is not set")
        else:
            logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    import uvicorn

    app = create_app(create_infrastructure(settings.DB_FILE))
    logger.info(f"Starting joke server on http://{settings.HOST}:{settings.PORT} (store: {settings.DB_FILE})")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
