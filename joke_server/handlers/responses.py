from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class Request:
    """Transport-independent request."""
    params: Dict[str, str] = field(default_factory=dict)
    data: Optional[Any] = None


@dataclass
class Response:
    """Transport-independent response."""
    status: int
    data: Optional[Dict[str, Any]]


def ok(data: Dict[str, Any]) -> Response:
    return Response(status=200, data=data)


def created(data: Dict[str, Any]) -> Response:
    return Response(status=201, data=data)


def no_content() -> Response:
    return Response(status=204, data=None)


def bad_request(data: Dict[str, Any]) -> Response:
    return Response(status=400, data=data)


def not_found() -> Response:
    return Response(status=404, data={"message": "Not found"})
