"""Build request messages for the queue engine.

Each operation has a fixed payload shape, recorded in OPERATION_SHAPES. The
generic :func:`build` assembles a message from that table; the
``build_*_operation`` functions are thin, typed entry points on top of it.

Arguments are not validated beyond their types: a payload field of the wrong
type raises pydantic.ValidationError, a field outside the operation's shape
raises TypeError. Whether a queue or lock actually exists is for the engine
to decide.
"""

from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from queue_ops.operations import QueueOperation
from queue_ops.queue_model_dto import QueuePayload, QueueRequest

# Fields that live at the top level of the message, next to the payload.
BODY_FIELDS = ("message",)


class OperationShape(NamedTuple):
    """Fields an operation accepts, by their Python names."""

    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    defaults: tuple[tuple[str, Any], ...] = ()
    # payload is an opaque mapping handed over as-is
    passthrough: bool = False

    @property
    def accepted(self) -> tuple[str, ...]:
        return self.required + self.optional


_NONE = OperationShape()
_QUEUE = OperationShape(required=("queue_name",))
_FILTER = OperationShape(optional=("filter",))

OPERATION_SHAPES: dict[QueueOperation, OperationShape] = {
    QueueOperation.ENQUEUE: OperationShape(required=("queue_name", "message")),
    QueueOperation.LOCKED_ENQUEUE: OperationShape(required=("queue_name", "message", "requested_by")),
    QueueOperation.GET_CONFIGURATION: _NONE,
    QueueOperation.SET_CONFIGURATION: OperationShape(optional=("configuration",), passthrough=True),
    QueueOperation.CHECK: _NONE,
    QueueOperation.RESET: OperationShape(optional=("configuration",), passthrough=True),
    QueueOperation.STOP: OperationShape(optional=("configuration",), passthrough=True),
    QueueOperation.GET_QUEUE_ITEMS: OperationShape(required=("queue_name", "limit")),
    QueueOperation.ADD_QUEUE_ITEM: OperationShape(required=("queue_name", "buffer")),
    QueueOperation.DELETE_QUEUE_ITEM: OperationShape(required=("queue_name", "index")),
    QueueOperation.GET_QUEUE_ITEM: OperationShape(required=("queue_name", "index")),
    QueueOperation.REPLACE_QUEUE_ITEM: OperationShape(required=("queue_name", "index", "buffer")),
    QueueOperation.DELETE_ALL_QUEUE_ITEMS: OperationShape(
        required=("queue_name",), optional=("unlock",), defaults=(("unlock", False),)
    ),
    QueueOperation.BULK_DELETE_QUEUES: OperationShape(required=("queues",)),
    QueueOperation.GET_ALL_LOCKS: _FILTER,
    QueueOperation.PUT_LOCK: OperationShape(required=("queue_name", "requested_by")),
    QueueOperation.BULK_PUT_LOCKS: OperationShape(required=("locks", "requested_by")),
    QueueOperation.GET_LOCK: _QUEUE,
    QueueOperation.DELETE_LOCK: _QUEUE,
    QueueOperation.DELETE_ALL_LOCKS: _NONE,
    QueueOperation.BULK_DELETE_LOCKS: OperationShape(required=("locks",)),
    QueueOperation.GET_QUEUES: _FILTER,
    QueueOperation.GET_QUEUES_COUNT: _FILTER,
    QueueOperation.GET_QUEUE_ITEMS_COUNT: _QUEUE,
}


def build_operation(operation: QueueOperation, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return a message for operation, with payload attached verbatim if given."""
    if payload is None:
        return QueueRequest(operation=operation).to_message()
    return QueueRequest(operation=operation, payload=dict(payload)).to_message()


def build(operation: QueueOperation, **fields: Any) -> dict[str, Any]:
    """Return a message for operation from keyword fields.

    Fields passed as None are treated as absent. Defaults from the
    operation's shape are applied, body fields go to the top level, and the
    payload is attached only if it ends up non-empty.

    Raises:
        TypeError: A field is not part of the operation's shape, or a
            required field is missing.
        pydantic.ValidationError: A field has the wrong type.
    """
    shape = OPERATION_SHAPES[operation]

    unknown = sorted(set(fields) - set(shape.accepted))
    if unknown:
        raise TypeError(f"{operation.value} does not accept: {', '.join(unknown)}")

    values = dict(shape.defaults)
    values.update({name: value for name, value in fields.items() if value is not None})

    missing = [name for name in shape.required if name not in values]
    if missing:
        raise TypeError(f"{operation.value} requires: {', '.join(missing)}")

    if shape.passthrough:
        return build_operation(operation, values.get("configuration"))

    envelope: dict[str, Any] = {"operation": operation}
    for name in BODY_FIELDS:
        if name in values:
            envelope[name] = values.pop(name)
    if values:
        envelope["payload"] = QueuePayload(**values).to_payload()
    return QueueRequest(**envelope).to_message()


def _names(names: Iterable[str], field: str) -> list[str]:
    """Return names as a list; a bare string is rejected, not split into characters."""
    if isinstance(names, (str, bytes)):
        raise TypeError(f"{field} must be a collection of names, not a single string")
    return list(names)


def build_get_configuration_operation() -> dict[str, Any]:
    """Ask the engine for its current configuration."""
    return build(QueueOperation.GET_CONFIGURATION)


def build_set_configuration_operation(configuration: Mapping[str, Any]) -> dict[str, Any]:
    """The configuration mapping is the payload, unchanged."""
    return build(QueueOperation.SET_CONFIGURATION, configuration=configuration)


def build_check_operation() -> dict[str, Any]:
    """Ask the engine to run its queue check."""
    return build(QueueOperation.CHECK)


def build_reset_operation() -> dict[str, Any]:
    """Ask the engine to reset."""
    return build(QueueOperation.RESET)


def build_stop_operation() -> dict[str, Any]:
    """Ask the engine to stop."""
    return build(QueueOperation.STOP)


def build_enqueue_operation(queue_name: str, message: str) -> dict[str, Any]:
    """Enqueue message; the body sits next to the payload, not inside it."""
    return build(QueueOperation.ENQUEUE, queue_name=queue_name, message=message)


def build_locked_enqueue_operation(queue_name: str, message: str, requested_by: str) -> dict[str, Any]:
    """Enqueue message and lock the queue for requested_by."""
    return build(
        QueueOperation.LOCKED_ENQUEUE,
        queue_name=queue_name,
        message=message,
        requested_by=requested_by,
    )


def build_get_queue_items_operation(queue_name: str, limit: str) -> dict[str, Any]:
    """limit is passed on as text; the engine parses it."""
    return build(QueueOperation.GET_QUEUE_ITEMS, queue_name=queue_name, limit=limit)


def build_add_queue_item_operation(queue_name: str, buffer: str) -> dict[str, Any]:
    """Append buffer to the queue without enqueue semantics."""
    return build(QueueOperation.ADD_QUEUE_ITEM, queue_name=queue_name, buffer=buffer)


def build_get_queue_item_operation(queue_name: str, index: int) -> dict[str, Any]:
    """Read the item at index."""
    return build(QueueOperation.GET_QUEUE_ITEM, queue_name=queue_name, index=index)


def build_replace_queue_item_operation(queue_name: str, index: int, buffer: str) -> dict[str, Any]:
    """Overwrite the item at index with buffer."""
    return build(QueueOperation.REPLACE_QUEUE_ITEM, queue_name=queue_name, index=index, buffer=buffer)


def build_delete_queue_item_operation(queue_name: str, index: int) -> dict[str, Any]:
    """Remove the item at index."""
    return build(QueueOperation.DELETE_QUEUE_ITEM, queue_name=queue_name, index=index)


def build_delete_all_queue_items_operation(queue_name: str, unlock: bool = False) -> dict[str, Any]:
    """Clear the queue; with unlock, release its lock too."""
    return build(QueueOperation.DELETE_ALL_QUEUE_ITEMS, queue_name=queue_name, unlock=unlock)


def build_bulk_delete_queues_operation(queues: Iterable[str]) -> dict[str, Any]:
    """Delete every queue in queues."""
    return build(QueueOperation.BULK_DELETE_QUEUES, queues=_names(queues, "queues"))


def build_get_queues_operation(filter_pattern: str | None = None) -> dict[str, Any]:
    """Only None leaves the filter out; an empty pattern is still sent."""
    return build(QueueOperation.GET_QUEUES, filter=filter_pattern)


def build_get_queues_count_operation(filter_pattern: str | None = None) -> dict[str, Any]:
    """Only None leaves the filter out; an empty pattern is still sent."""
    return build(QueueOperation.GET_QUEUES_COUNT, filter=filter_pattern)


def build_get_queue_items_count_operation(queue_name: str) -> dict[str, Any]:
    """Count the items in the queue."""
    return build(QueueOperation.GET_QUEUE_ITEMS_COUNT, queue_name=queue_name)


def build_get_lock_operation(queue_name: str) -> dict[str, Any]:
    """Read the lock held on the queue, if any."""
    return build(QueueOperation.GET_LOCK, queue_name=queue_name)


def build_delete_lock_operation(queue_name: str) -> dict[str, Any]:
    """Release the lock on the queue."""
    return build(QueueOperation.DELETE_LOCK, queue_name=queue_name)


def build_delete_all_locks_operation() -> dict[str, Any]:
    """Release every lock."""
    return build(QueueOperation.DELETE_ALL_LOCKS)


def build_bulk_delete_locks_operation(locks: Iterable[str]) -> dict[str, Any]:
    """Release every lock in locks."""
    return build(QueueOperation.BULK_DELETE_LOCKS, locks=_names(locks, "locks"))


def build_put_lock_operation(queue_name: str, requested_by: str) -> dict[str, Any]:
    """Lock the queue for requested_by."""
    return build(QueueOperation.PUT_LOCK, queue_name=queue_name, requested_by=requested_by)


def build_bulk_put_locks_operation(locks: Iterable[str], requested_by: str) -> dict[str, Any]:
    """Lock every queue in locks; requested_by is shared by all of them."""
    return build(QueueOperation.BULK_PUT_LOCKS, locks=_names(locks, "locks"), requested_by=requested_by)


def build_get_all_locks_operation(filter_pattern: str | None = None) -> dict[str, Any]:
    """Only None leaves the filter out; an empty pattern is still sent."""
    return build(QueueOperation.GET_ALL_LOCKS, filter=filter_pattern)
