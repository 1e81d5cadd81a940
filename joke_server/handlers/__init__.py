"""Request handlers"""

from joke_server.handlers.responses import (
    Request,
    Response,
    bad_request,
    created,
    no_content,
    not_found,
    ok,
)

__all__ = [
    "Request",
    "Response",
    "bad_request",
    "created",
    "no_content",
    "not_found",
    "ok",
]
