"""Request-scoped context using contextvars.

The request id set by RequestIDMiddleware is readable anywhere during the
request (log records, envelopes) without passing the Request around.
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    """Bind ``request_id`` to the current task; pass the token to reset_request_id()."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    """Return the id of the request being served, or None outside a request."""
    return _request_id.get()
