"""Audio infrastructure - yt-dlp resolver and discord.py voice engine."""

from discord_music_queue.infrastructure.audio.discord_engine import (
    DiscordAudioEngine,
    DiscordEngineHandle,
)
from discord_music_queue.infrastructure.audio.models import (
    AudioFormatInfo,
    StreamSource,
    YtDlpOpts,
    YtDlpTrackInfo,
)
from discord_music_queue.infrastructure.audio.ytdlp_resolver import YtDlpResolver

__all__ = [
    "AudioFormatInfo",
    "DiscordAudioEngine",
    "DiscordEngineHandle",
    "StreamSource",
    "YtDlpOpts",
    "YtDlpResolver",
    "YtDlpTrackInfo",
]
