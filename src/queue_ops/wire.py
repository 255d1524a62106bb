"""JSON encoding of queue messages.

The transport moves bytes; this module maps messages to and from those bytes
and turns an incoming message into a resolved request. It has no knowledge
of any particular transport.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from queue_ops import fields
from queue_ops.operations import DeprecationNotice, QueueOperation, resolve

logger = logging.getLogger(__name__)


class BadInputError(ValueError):
    """An incoming message cannot be interpreted."""

    error_type = fields.BAD_INPUT


class ParsedRequest(BaseModel):
    """An incoming message whose operation has been resolved."""

    model_config = ConfigDict(frozen=True)

    operation: QueueOperation
    payload: dict[str, Any] | None = None
    message: Any = None
    deprecation: DeprecationNotice | None = None


def pack_message(message: dict[str, Any]) -> bytes:
    """Serialize a message as compact UTF-8 JSON, keeping key order."""
    return json.dumps(message, separators=(",", ":")).encode("utf-8")


def unpack_message(frame: bytes | str) -> dict[str, Any]:
    """Deserialize a message; raise BadInputError unless it is a JSON object."""
    if isinstance(frame, bytes):
        try:
            frame = frame.decode("utf-8")
        except UnicodeDecodeError as err:
            raise BadInputError(f"Message is not UTF-8: {err}") from err
    try:
        message = json.loads(frame)
    except json.JSONDecodeError as err:
        raise BadInputError(f"Invalid JSON: {err}") from err
    if not isinstance(message, dict):
        raise BadInputError(f"Message must be a JSON object, got {type(message).__name__}")
    return message


def parse_request(message: dict[str, Any]) -> ParsedRequest:
    """Resolve the operation of an incoming message.

    Legacy operation names are accepted; the notice is passed along on the
    result and logged here at debug level only, so the receiver decides how
    loudly to report it.

    Raises:
        BadInputError: The operation is missing or unknown, or the payload is
            not an object.
    """
    name = message.get(fields.OPERATION)
    resolution = resolve(name)
    if resolution is None:
        raise BadInputError(f"Unknown operation: {name!r}")
    if resolution.deprecation is not None:
        logger.debug(resolution.deprecation.message)

    payload = message.get(fields.PAYLOAD)
    if payload is not None and not isinstance(payload, dict):
        raise BadInputError(f"Payload of {resolution.operation.value} must be an object")

    return ParsedRequest(
        operation=resolution.operation,
        payload=payload,
        message=message.get(fields.MESSAGE),
        deprecation=resolution.deprecation,
    )
