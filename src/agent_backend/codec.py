"""
Transfer Codec

Turns request models into JSON bodies and backend responses into models.
Status codes are checked before the body is looked at.
"""

from typing import Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from .exceptions import DecodeError, UnexpectedStatusError
from .models import WireModel

T = TypeVar("T", bound=WireModel)


def encode(body: Optional[WireModel]) -> Optional[bytes]:
    """Serialize a request model to JSON using wire (camelCase) keys.

    Returns None when there is no body to send.
    """
    if body is None:
        return None
    return body.model_dump_json(by_alias=True).encode("utf-8")


def check_status(response: httpx.Response, expected_status: int) -> None:
    """Raise UnexpectedStatusError unless the response has the expected status."""
    if response.status_code != expected_status:
        raise UnexpectedStatusError(response.status_code, response.content)


def decode(
    response: httpx.Response,
    model: Optional[Type[T]],
    expected_status: int = 200,
) -> Optional[T]:
    """Check the response status, then parse its body into `model`.

    Operations without a typed response pass `model=None`; their body is ignored.

    Raises:
        UnexpectedStatusError: If the status is not `expected_status`
        DecodeError: If the body is not JSON or does not match `model`
    """
    check_status(response, expected_status)
    if model is None:
        return None

    body = response.content
    if not body:
        raise DecodeError(f"Empty response body, expected {model.__name__}", body)
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"Invalid {model.__name__} response: {e}", body) from e
