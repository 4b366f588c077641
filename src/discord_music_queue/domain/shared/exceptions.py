"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ResolveError(DomainError):
    """Raised when a query cannot be turned into a playable track."""

    def __init__(self, query: str, message: str | None = None) -> None:
        msg = message or f"Could not resolve '{query}'"
        super().__init__(msg, code="RESOLVE_ERROR")
        self.query = query


class QueueIndexError(DomainError, IndexError):
    """Raised when a queue position cannot be used for the requested operation."""

    def __init__(self, position: int, message: str) -> None:
        super().__init__(message, code="QUEUE_INDEX_ERROR")
        self.position = position


class QueuePositionOutOfRangeError(QueueIndexError):
    """Raised when a 1-based queue position lies outside the queue."""

    def __init__(self, position: int, size: int, message: str | None = None) -> None:
        msg = message or f"Position {position} does not exist in queue!"
        super().__init__(position, msg)
        self.size = size


class CurrentTrackRemovalError(QueueIndexError):
    """Raised when asked to remove the track that is currently playing."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(1, message or "Cannot remove the current track! Use skip instead")


class InvalidStateError(DomainError):
    """Raised when an operation is invalid in the current playback state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code="INVALID_STATE")
        self.operation = operation
        self.current_state = current_state


class EngineError(DomainError):
    """Raised when the audio engine fails to bind, stop, pause, resume or disconnect."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        msg = message or f"Audio engine failed during '{operation}'"
        super().__init__(msg, code="ENGINE_ERROR")
        self.operation = operation
