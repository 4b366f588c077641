"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from discord_music_queue.application.interfaces.audio_engine import (
    AudioEngine,
    EngineHandle,
    TrackEndListener,
)
from discord_music_queue.application.interfaces.audio_resolver import AudioResolver
from discord_music_queue.application.interfaces.notifier import PlaybackNotifier

__all__ = [
    "AudioEngine",
    "EngineHandle",
    "TrackEndListener",
    "AudioResolver",
    "PlaybackNotifier",
]
