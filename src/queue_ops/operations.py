"""Operations supported by the queue engine.

The catalog is closed: every operation a client may request is a member of
:class:`QueueOperation`. Some operations were renamed over time; their old
spelling is kept as a legacy name and still resolves, together with a
deprecation notice the caller can surface or ignore.
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """The operation table contains ambiguous names."""


class QueueOperation(str, Enum):
    """A queue engine operation. The value is the canonical name."""

    def __new__(cls, canonical_name: str, legacy_name: str | None = None) -> "QueueOperation":
        obj = str.__new__(cls, canonical_name)
        obj._value_ = canonical_name
        obj.legacy_name = legacy_name
        return obj

    ENQUEUE = "enqueue"
    LOCKED_ENQUEUE = "lockedEnqueue"
    GET_CONFIGURATION = "getConfiguration"
    SET_CONFIGURATION = "setConfiguration"
    CHECK = "check"
    RESET = "reset"
    STOP = "stop"
    GET_QUEUE_ITEMS = ("getQueueItems", "getListRange")
    ADD_QUEUE_ITEM = ("addQueueItem", "addItem")
    DELETE_QUEUE_ITEM = ("deleteQueueItem", "deleteItem")
    GET_QUEUE_ITEM = ("getQueueItem", "getItem")
    REPLACE_QUEUE_ITEM = ("replaceQueueItem", "replaceItem")
    DELETE_ALL_QUEUE_ITEMS = "deleteAllQueueItems"
    BULK_DELETE_QUEUES = "bulkDeleteQueues"
    GET_ALL_LOCKS = "getAllLocks"
    PUT_LOCK = "putLock"
    BULK_PUT_LOCKS = "bulkPutLocks"
    GET_LOCK = "getLock"
    DELETE_LOCK = "deleteLock"
    DELETE_ALL_LOCKS = "deleteAllLocks"
    BULK_DELETE_LOCKS = "bulkDeleteLocks"
    GET_QUEUES = "getQueues"
    GET_QUEUES_COUNT = "getQueuesCount"
    GET_QUEUE_ITEMS_COUNT = "getQueueItemsCount"

    @property
    def has_legacy_name(self) -> bool:
        return self.legacy_name is not None


class DeprecationNotice(BaseModel):
    """Emitted when an operation was requested by its legacy name."""

    model_config = ConfigDict(frozen=True)

    legacy_name: str = Field(..., description="Spelling that was used")
    canonical_name: str = Field(..., description="Spelling to use instead")

    @property
    def message(self) -> str:
        return (
            "Legacy queue operation used. This may be removed in future releases. "
            f"Use '{self.canonical_name}' instead of '{self.legacy_name}'"
        )


class Resolution(BaseModel):
    """A resolved operation, plus a deprecation notice for legacy spellings."""

    model_config = ConfigDict(frozen=True)

    operation: QueueOperation
    deprecation: DeprecationNotice | None = None

    @property
    def is_legacy(self) -> bool:
        return self.deprecation is not None


# str.lower() applies full case mapping; U+0130 is the only character whose
# lowercase expands to more than one character.
_SIMPLE_LOWER = {"\u0130": "i"}


def fold_case(name: str) -> str:
    """Fold name one character at a time, upper-casing then lower-casing.

    Two names fold equal exactly when every pair of characters matches
    ignoring case, so "reſet" and "GETİTEM" match "reset" and "getItem".
    Characters whose case mapping would expand are kept as they are.
    """
    folded = []
    for char in name:
        upper = char.upper()
        if len(upper) != 1:
            upper = char
        lower = _SIMPLE_LOWER.get(upper) or upper.lower()
        if len(lower) != 1:
            lower = upper
        folded.append(lower)
    return "".join(folded)


def check_catalog() -> None:
    """Raise CatalogError unless every canonical and legacy name is unambiguous.

    Names are compared case-insensitively, the same way :func:`resolve`
    matches them.
    """
    seen: dict[str, QueueOperation] = {}
    names = [(op.value, op) for op in QueueOperation]
    names += [(op.legacy_name, op) for op in QueueOperation if op.has_legacy_name]
    for name, op in names:
        if not name:
            raise CatalogError(f"Empty name for operation {op.value}")
        key = fold_case(name)
        if key in seen:
            raise CatalogError(f"Name '{name}' of {op.value} collides with {seen[key].value}")
        seen[key] = op


check_catalog()

_CANONICAL: dict[str, QueueOperation] = {fold_case(op.value): op for op in QueueOperation}
_LEGACY: dict[str, QueueOperation] = {
    fold_case(op.legacy_name): op for op in QueueOperation if op.has_legacy_name
}


def resolve(name: str) -> Resolution | None:
    """Resolve an operation name, canonical or legacy, ignoring case.

    Returns None when nothing matches. A legacy match carries a
    DeprecationNotice; resolution succeeds either way.
    """
    if not isinstance(name, str):
        return None
    key = fold_case(name)
    op = _CANONICAL.get(key)
    if op is not None:
        return Resolution(operation=op)
    op = _LEGACY.get(key)
    if op is not None:
        notice = DeprecationNotice(legacy_name=op.legacy_name, canonical_name=op.value)
        return Resolution(operation=op, deprecation=notice)
    return None


def lookup(name: str, warn: bool = True) -> QueueOperation | None:
    """Return the operation for name, logging a warning for legacy names."""
    resolution = resolve(name)
    if resolution is None:
        return None
    if resolution.deprecation is not None and warn:
        logger.warning(resolution.deprecation.message)
    return resolution.operation
