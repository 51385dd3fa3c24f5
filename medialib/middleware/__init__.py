"""ASGI middleware."""

from medialib.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
