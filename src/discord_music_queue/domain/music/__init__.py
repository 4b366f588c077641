"""
Music Bounded Context

Domain logic for tracks, the per-session queue and playback states.
"""

from discord_music_queue.domain.music.entities import Track, TrackQueue
from discord_music_queue.domain.music.value_objects import PlaybackState, TransitionOutcome

__all__ = [
    # Entities
    "Track",
    "TrackQueue",
    # Value Objects
    "PlaybackState",
    "TransitionOutcome",
]
