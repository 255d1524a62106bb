"""Queue operation data transfer objects.

Defines the shape of request messages sent to the queue engine: the payload
vocabulary and the request envelope.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from queue_ops import fields
from queue_ops.operations import QueueOperation


class QueuePayload(BaseModel):
    """Operation-specific arguments of a request.

    Fields can be given by their Python names or their wire keys. Only fields
    that were explicitly set end up in the dumped payload, so ``filter=""`` is
    kept while an absent filter is not.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    queue_name: str | None = Field(None, alias=fields.QUEUENAME, description="Name of the queue")
    index: int | None = Field(None, alias=fields.INDEX, strict=True, description="Position of an item in the queue")
    limit: str | None = Field(None, alias=fields.LIMIT, description="Maximum number of items, as given")
    buffer: str | None = Field(None, alias=fields.BUFFER, description="Item content")
    filter: str | None = Field(None, alias=fields.FILTER, description="Queue or lock name pattern")
    unlock: bool | None = Field(None, alias=fields.UNLOCK, strict=True, description="Release the queue lock as well")
    queues: list[str] | None = Field(None, alias=fields.QUEUES, description="Queue names")
    locks: list[str] | None = Field(None, alias=fields.LOCKS, description="Lock names")
    requested_by: str | None = Field(None, alias=fields.REQUESTED_BY, description="Requestor identity")

    def to_payload(self) -> dict[str, Any]:
        """Return the wire form, keyed by protocol field names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class QueueRequest(BaseModel):
    """A request envelope: operation, optional payload, optional message body.

    The body only exists for enqueue operations and lives next to the
    payload, not inside it.
    """

    operation: QueueOperation = Field(..., description="Requested operation")
    payload: dict[str, Any] | None = Field(None, description="Operation arguments")
    message: str | None = Field(None, description="Enqueued message body")

    def to_message(self) -> dict[str, Any]:
        """Return the request as an ordered mapping ready for the wire."""
        message: dict[str, Any] = {fields.OPERATION: self.operation.value}
        if self.payload is not None:
            message[fields.PAYLOAD] = self.payload
        if "message" in self.model_fields_set:
            message[fields.MESSAGE] = self.message
        return message
