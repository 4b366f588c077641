"""PlaybackNotifier posting "Now playing" embeds in the session's text channel."""

from __future__ import annotations

import logging
from collections.abc import Callable

import discord

from discord_music_queue.application.interfaces.notifier import PlaybackNotifier
from discord_music_queue.domain.music.entities import Track
from discord_music_queue.domain.shared.messages import LogTemplates
from discord_music_queue.infrastructure.discord.embeds import now_playing_embed

logger = logging.getLogger(__name__)

ChannelLookup = Callable[[int], int | None]


class DiscordNotifier(PlaybackNotifier):
    """Announces track starts in whichever text channel last issued ``play``."""

    def __init__(self, bot: discord.Client, channel_lookup: ChannelLookup) -> None:
        self._bot = bot
        self._channel_lookup = channel_lookup

    async def now_playing(self, session_id: int, track: Track) -> None:
        channel_id = self._channel_lookup(session_id)
        channel = self._bot.get_channel(channel_id) if channel_id is not None else None
        if not isinstance(channel, discord.abc.Messageable):
            logger.debug(LogTemplates.NOTIFIER_CHANNEL_MISSING, session_id)
            return

        await channel.send(embed=now_playing_embed(track))
