"""
Response envelope decoding.

Every TradeSatoshi response has the shape::

    {"success": bool, "message": str | null, "result": T | [T] | null}

and the exchange returns HTTP 200 for most application failures, so the
envelope, not the status code, decides between a result and an error.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Type, TypeVar

from ..data.models import WireModel
from .errors import APIError, MalformedResponseError


T = TypeVar('T', bound=WireModel)


@dataclass(frozen=True)
class Envelope:
    success: bool
    message: Optional[str] = None
    result: Any = None


def parse_envelope(body: str) -> Envelope:
    """Parse a raw body into an Envelope without interpreting ``result``."""
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}", body) from e

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Response envelope must be a JSON object, got {type(data).__name__}", body
        )

    success = data.get('success')
    if not isinstance(success, bool):
        raise MalformedResponseError("Response envelope has no boolean 'success' field", body)

    message = data.get('message')
    if message is not None and not isinstance(message, str):
        message = str(message)

    return Envelope(success=success, message=message, result=data.get('result'))


def _unwrap(body: str) -> Any:
    envelope = parse_envelope(body)
    if not envelope.success:
        raise APIError(envelope.message)
    if envelope.result is None:
        raise MalformedResponseError("Response reported success without a result", body)
    return envelope.result


def _build(model: Type[T], data: Any, body: str) -> T:
    try:
        return model.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponseError(f"Cannot decode {model.__name__}: {e}", body) from e


def decode_scalar(body: str, model: Type[T]) -> T:
    """
    Decode a single-object result.

    Raises:
        APIError: success is false
        MalformedResponseError: invalid JSON, missing result or bad fields
    """
    result = _unwrap(body)
    if not isinstance(result, dict):
        raise MalformedResponseError(
            f"Expected a {model.__name__} object, got {type(result).__name__}", body
        )
    return _build(model, result, body)


def decode_list(body: str, model: Type[T]) -> List[T]:
    """Decode a list result; each item becomes a ``model`` instance."""
    result = _unwrap(body)
    if not isinstance(result, list):
        raise MalformedResponseError(
            f"Expected a list of {model.__name__}, got {type(result).__name__}", body
        )
    return [_build(model, item, body) for item in result]
