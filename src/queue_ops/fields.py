"""Field keys and sentinel values of the queue operation protocol.

Keep these in one place; every producer and consumer of queue messages must
agree on them byte-for-byte.
"""

# Envelope
OPERATION = "operation"
PAYLOAD = "payload"
MESSAGE = "message"

# Payload
QUEUENAME = "queuename"
INDEX = "index"
LIMIT = "limit"
BUFFER = "buffer"
FILTER = "filter"
UNLOCK = "unlock"
QUEUES = "queues"
LOCKS = "locks"
REQUESTED_BY = "requestedBy"

# Responses (produced by the queue engine, reserved here)
STATUS = "status"
VALUE = "value"
INFO = "info"
COUNT = "count"
ERROR_TYPE = "errorType"
TIMESTAMP = "timestamp"
BULK_DELETE = "bulkDelete"
PROCESSOR_DELAY_MAX = "processorDelayMax"

# Sentinels
OK = "ok"
ERROR = "error"
BAD_INPUT = "bad input"
NO_SUCH_LOCK = "No such lock"
