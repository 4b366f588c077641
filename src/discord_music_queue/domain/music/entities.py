"""Core domain entities for the music bounded context."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from discord_music_queue.domain.shared.exceptions import (
    CurrentTrackRemovalError,
    QueuePositionOutOfRangeError,
)
from discord_music_queue.domain.shared.types import (
    DurationSeconds,
    HttpUrlStr,
    NonEmptyStr,
    TrackTitleStr,
)


class Track(BaseModel):
    """Immutable value object representing one resolved, playable queue entry.

    ``source_handle`` is opaque to the domain: whatever the audio resolver
    produced and the audio engine knows how to bind.
    """

    model_config = ConfigDict(frozen=True, strict=True, arbitrary_types_allowed=True)

    title: TrackTitleStr
    duration_seconds: DurationSeconds
    thumbnail_url: HttpUrlStr | None = None
    source_handle: Any = Field(default=None, repr=False, exclude=True)

    # Display metadata
    webpage_url: HttpUrlStr | None = None
    requested_by_name: NonEmptyStr | None = None

    @property
    def duration_formatted(self) -> str:
        """Format duration as M:SS or H:MM:SS."""
        hours, remainder = divmod(self.duration_seconds, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @property
    def display_title(self) -> str:
        return f"{self.title} [{self.duration_formatted}]"

    def with_requester(self, user_name: NonEmptyStr) -> Track:
        """Return a copy of this track with requester metadata populated."""
        return self.model_copy(update={"requested_by_name": user_name})


class TrackQueue(BaseModel):
    """Ordered FIFO of tracks for one voice session.

    Position 0 (the head, position 1 for users) is the track bound to the
    audio engine, or about to be bound. Callers must hold the owning
    session's lock for every operation.
    """

    model_config = ConfigDict(strict=True)

    tracks: list[Track] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tracks)

    def size(self) -> int:
        return len(self.tracks)

    def is_empty(self) -> bool:
        return not self.tracks

    def has_next(self) -> bool:
        """True when a track is waiting behind the head."""
        return len(self.tracks) > 1

    def add(self, track: Track) -> bool:
        """Append a track and report whether the queue was empty before."""
        was_empty = not self.tracks
        self.tracks.append(track)
        return was_empty

    def peek_head(self) -> Track | None:
        return self.tracks[0] if self.tracks else None

    def advance(self) -> Track | None:
        """Drop the head and return the new head, or None if nothing is left."""
        if self.tracks:
            self.tracks.pop(0)
        return self.peek_head()

    def remove_at(self, position: int) -> Track:
        """Remove the track at a 1-based position.

        Raises:
            CurrentTrackRemovalError: For position 1, the playing track.
            QueuePositionOutOfRangeError: For positions outside ``[1, size]``.
        """
        if position == 1:
            raise CurrentTrackRemovalError()
        if not 1 <= position <= len(self.tracks):
            raise QueuePositionOutOfRangeError(position, len(self.tracks))
        return self.tracks.pop(position - 1)

    def clear(self) -> int:
        """Empty the queue and return the number of tracks dropped."""
        count = len(self.tracks)
        self.tracks.clear()
        return count

    def snapshot(self) -> list[Track]:
        return list(self.tracks)

    def total_duration_seconds(self) -> int:
        return sum(track.duration_seconds for track in self.tracks)
