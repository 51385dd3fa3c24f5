"""Success/error envelopes wrapped around every API result."""

from typing import Any, Generic, TypeVar

from fastapi import Request
from pydantic import Field

from medialib.schemas.common import CamelModel
from medialib.shared.context import get_request_id
from medialib.shared.utils.datetime import to_iso, utc_now
from medialib.shared.utils.generators import generate_request_id

T = TypeVar("T")


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope: ``{success, data, message, timestamp, requestId}``."""

    success: bool = True
    data: T | None = None
    message: str | None = None
    timestamp: str = Field(default_factory=lambda: to_iso(utc_now()))
    request_id: str


class ErrorResponse(CamelModel):
    """Error envelope: ``{success, message, status, code, timestamp, requestId, details}``."""

    success: bool = False
    message: str
    status: int
    code: str
    timestamp: str = Field(default_factory=lambda: to_iso(utc_now()))
    request_id: str
    details: dict[str, Any] | list[Any] | None = None


def request_id_for(request: Request) -> str:
    """Return the id assigned by RequestIDMiddleware, or a fresh one."""
    return (
        getattr(request.state, "request_id", None) or get_request_id() or generate_request_id()
    )


def ok(request: Request, data: Any = None, message: str | None = None) -> ApiResponse:
    """Wrap ``data`` in the success envelope."""
    return ApiResponse(data=data, message=message, request_id=request_id_for(request))


def error_body(
    request: Request,
    message: str,
    status: int,
    code: str,
    details: dict[str, Any] | list[Any] | None = None,
) -> dict[str, Any]:
    """Return the error envelope as a JSON-ready dict."""
    return ErrorResponse(
        message=message,
        status=status,
        code=code,
        request_id=request_id_for(request),
        details=details or None,
    ).model_dump(by_alias=True, mode="json")
