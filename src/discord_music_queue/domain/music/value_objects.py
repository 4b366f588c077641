"""Immutable value objects for the music bounded context."""

from __future__ import annotations

from enum import Enum


class PlaybackState(Enum):
    """Playback state of a session's controller.

    State transitions:
    - IDLE -> PLAYING (start)
    - PLAYING -> PLAYING (skip or track end with a next track)
    - PLAYING -> IDLE (skip or track end on the last track, engine failure)
    """

    IDLE = "idle"
    PLAYING = "playing"

    def can_transition_to(self, target: PlaybackState) -> bool:
        """Check if transition to target state is valid."""
        valid_transitions = {
            PlaybackState.IDLE: {PlaybackState.PLAYING},
            PlaybackState.PLAYING: {PlaybackState.PLAYING, PlaybackState.IDLE},
        }
        return target in valid_transitions.get(self, set())

    @property
    def is_playing(self) -> bool:
        return self == PlaybackState.PLAYING


class TransitionOutcome(Enum):
    """What a track-end signal or skip did to the session."""

    ADVANCED = "advanced"  # Next head bound
    TORN_DOWN = "torn_down"  # Queue exhausted, engine disconnected
    STALE = "stale"  # Generation mismatch, discarded
