"""DTOs returned by the music command service."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from ...domain.music.entities import Track
from ...domain.shared.types import PositiveInt


class PlayStatus(Enum):
    """What a play command did."""

    NOW_PLAYING = "now_playing"
    ADDED_TO_QUEUE = "added_to_queue"


class SkipStatus(Enum):
    """What a skip command did."""

    NOW_PLAYING = "now_playing"
    QUEUE_ENDED = "queue_ended"


class PlayResult(BaseModel):
    status: PlayStatus
    track: Track
    position: PositiveInt = 1

    @property
    def started(self) -> bool:
        return self.status == PlayStatus.NOW_PLAYING

    @classmethod
    def now_playing(cls, track: Track) -> PlayResult:
        return cls(status=PlayStatus.NOW_PLAYING, track=track)

    @classmethod
    def added_to_queue(cls, track: Track, position: int) -> PlayResult:
        return cls(status=PlayStatus.ADDED_TO_QUEUE, track=track, position=position)


class SkipResult(BaseModel):
    status: SkipStatus
    skipped_track: Track | None = None
    next_track: Track | None = None

    @property
    def queue_ended(self) -> bool:
        return self.status == SkipStatus.QUEUE_ENDED

    @property
    def message(self) -> str:
        skipped = self.skipped_track.title if self.skipped_track else "track"
        if self.next_track:
            return f"Skipped: {skipped}. Now playing: {self.next_track.title}"
        return f"Skipped: {skipped}. Queue ended."

    @classmethod
    def now_playing(cls, skipped_track: Track | None, next_track: Track) -> SkipResult:
        return cls(
            status=SkipStatus.NOW_PLAYING,
            skipped_track=skipped_track,
            next_track=next_track,
        )

    @classmethod
    def ended(cls, skipped_track: Track | None) -> SkipResult:
        return cls(status=SkipStatus.QUEUE_ENDED, skipped_track=skipped_track)
