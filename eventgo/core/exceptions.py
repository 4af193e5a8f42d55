"""Custom exception classes for the EventGo backend.

Routes raise ``HTTPException`` directly. These are raised by helpers that do
not know about HTTP; ``eventgo.main`` maps them to JSON responses.
"""


class EventGoError(Exception):
    """Base exception for all EventGo errors."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(EventGoError):
    """Raised when a requested row or object does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        """Initialize the exception.

        Args:
            entity: Human readable entity name, e.g. "Event".
            entity_id: The id that was looked up.
        """
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")


class PermissionDeniedError(EventGoError):
    """Raised when the caller may not touch a row."""

    status_code = 403


class StorageError(EventGoError):
    """Raised when the object store rejects or fails an operation."""

    status_code = 500
