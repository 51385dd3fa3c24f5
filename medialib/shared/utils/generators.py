"""ID and value generators (CUID, request ids)."""

import secrets
import string

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

_REQUEST_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_request_id() -> str:
    """Return a short request id of the form ``req_<10 chars>``."""
    suffix = "".join(secrets.choice(_REQUEST_ID_ALPHABET) for _ in range(10))
    return f"req_{suffix}"
