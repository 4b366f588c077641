"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Discord (bot, cog, notifier, embeds)
- Audio (yt-dlp resolution, FFmpeg streaming through voice clients)
"""

from discord_music_queue.infrastructure.audio.discord_engine import DiscordAudioEngine
from discord_music_queue.infrastructure.discord.bot import create_bot

__all__ = [
    "create_bot",
    "DiscordAudioEngine",
]
