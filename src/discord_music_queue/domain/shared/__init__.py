"""
Shared Domain Kernel

Contains types and exceptions shared across the package.
"""

from discord_music_queue.domain.shared.exceptions import (
    CurrentTrackRemovalError,
    DomainError,
    EngineError,
    InvalidStateError,
    QueueIndexError,
    QueuePositionOutOfRangeError,
    ResolveError,
)

__all__ = [
    "DomainError",
    "ResolveError",
    "QueueIndexError",
    "QueuePositionOutOfRangeError",
    "CurrentTrackRemovalError",
    "InvalidStateError",
    "EngineError",
]
