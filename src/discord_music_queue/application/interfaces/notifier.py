"""Port interface for announcing playback transitions to users."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_music_queue.domain.shared.types import SessionIdField

if TYPE_CHECKING:
    from ...domain.music.entities import Track


class PlaybackNotifier(ABC):
    """Interface for "now playing" announcements."""

    @abstractmethod
    async def now_playing(self, session_id: SessionIdField, track: "Track") -> None:
        """Announce that ``track`` started playing in the session."""
        ...
