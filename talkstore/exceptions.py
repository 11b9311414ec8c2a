"""
Exceptions raised by the talk store.

Store-level failures (transport errors from httpx, APIError from
postgrest) are not wrapped and reach the caller unchanged.
"""

from typing import Optional


class TalkStoreError(Exception):
    """Base exception for all talk store errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class TalkNotFoundError(TalkStoreError):
    """Raised when a talk id does not exist in the store."""

    def __init__(self, talk_id: str):
        self.talk_id = talk_id
        super().__init__(message=f"Talk not found: {talk_id}", details={"talk_id": talk_id})


class ConcurrencyViolationError(TalkStoreError):
    """Raised when the stored version no longer matches the expected token."""

    def __init__(self, talk_id: str, expected: str, actual: Optional[str] = None):
        message = f"Version mismatch for {talk_id}: expected {expected}"
        if actual:
            message += f", found {actual}"
        super().__init__(
            message=message,
            details={"talk_id": talk_id, "expected": expected, "actual": actual},
        )


class TalkConflictError(TalkStoreError):
    """Raised when an update is rejected because the caller's copy is stale.

    The underlying ConcurrencyViolationError is chained as __cause__.
    """

    def __init__(self, talk_id: str, message: str):
        self.talk_id = talk_id
        super().__init__(message=message, details={"talk_id": talk_id})


class StoreConfigurationError(TalkStoreError):
    """Raised when store credentials are missing from the environment."""

    def __init__(self, missing: list):
        super().__init__(
            message=f"Missing store settings: {', '.join(missing)}",
            details={"missing": list(missing)},
        )
