"""Error taxonomy shared by every service.

Services raise these instead of ``HTTPException``; ``casedesk.main``
registers the handlers that turn them into responses.
"""
from typing import Optional, Union


class CasedeskError(Exception):
    """Base class for errors raised by the core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CasedeskError):
    """Caller input violates a required invariant (empty name, blank status...)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(CasedeskError):
    """A referenced Case or Document does not exist."""

    def __init__(self, resource: str, resource_id: Union[int, str]):
        super().__init__(f"{resource} {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id


class StoreError(CasedeskError):
    """The underlying persistence operation failed. Never retried inside the core."""

    def __init__(self, operation: str):
        super().__init__(f"Storage operation failed: {operation}")
        self.operation = operation
