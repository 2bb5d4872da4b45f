# tasktracker/core/errors.py
"""Error taxonomy shared by the store, the queue and the HTTP layer.

Each error carries the status code and the short plain-text message the
HTTP layer responds with. The worker never surfaces errors to a client.
"""


class TaskTrackerError(Exception):
    http_status: int = 500
    default_message: str = "internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskTrackerError):
    """Bad client input (HTTP 400)."""

    http_status = 400
    default_message = "invalid input"


class StorageError(TaskTrackerError):
    """Persistence, read or update failure (HTTP 500)."""

    http_status = 500
    default_message = "storage failure"


class QueueClosedError(TaskTrackerError):
    """The task queue was closed; raised to producers during shutdown."""

    http_status = 503
    default_message = "service shutting down"
