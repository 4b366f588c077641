"""Prefix-command music cog delegating to the music command service."""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from discord.ext import commands

from discord_music_queue.domain.shared.exceptions import (
    CurrentTrackRemovalError,
    EngineError,
    InvalidStateError,
    QueuePositionOutOfRangeError,
    ResolveError,
)
from discord_music_queue.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_music_queue.infrastructure.discord.embeds import (
    added_to_queue_embed,
    help_embed,
    paused_embed,
    queue_embed,
    removed_embed,
    unpaused_embed,
)
from discord_music_queue.utils.reply import parse_position

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @property
    def _prefix(self) -> str:
        return self.container.settings.discord.command_prefix

    @commands.command(name="play")
    @commands.guild_only()
    async def play(self, ctx: commands.Context, *, query: str = "") -> None:
        """Play a link or search result, or queue it behind the current track."""
        assert ctx.guild is not None

        voice = getattr(ctx.author, "voice", None)
        if voice is None or voice.channel is None:
            await ctx.send(DiscordUIMessages.NOT_IN_VOICE)
            return

        query = query.strip()
        if not query:
            await ctx.send(DiscordUIMessages.PLAY_USAGE)
            return

        try:
            async with ctx.typing():
                result = await self.container.music_service.on_play(
                    ctx.guild.id,
                    query,
                    text_channel_id=ctx.channel.id,
                    requested_by=ctx.author.display_name,
                    connect=partial(
                        self.container.audio_engine.ensure_connected,
                        ctx.guild.id,
                        voice.channel.id,
                    ),
                )
        except ResolveError as exc:
            logger.info(LogTemplates.COMMAND_RESOLVE_FAILED, ctx.guild.id, exc)
            await ctx.send(DiscordUIMessages.PLAY_FAILED)
            return
        except EngineError as exc:
            if exc.operation == "connect":
                logger.warning(LogTemplates.COMMAND_VOICE_JOIN_FAILED, ctx.guild.id, exc)
                await ctx.send(DiscordUIMessages.COULD_NOT_JOIN_VOICE)
            else:
                await ctx.send(DiscordUIMessages.ENGINE_FAILED)
            return

        # A started track is announced by the notifier.
        if not result.started:
            await ctx.send(embed=added_to_queue_embed(result.track, result.position))

    @commands.command(name="skip")
    @commands.guild_only()
    async def skip(self, ctx: commands.Context) -> None:
        """Skip the current track."""
        assert ctx.guild is not None

        try:
            result = await self.container.music_service.on_skip(ctx.guild.id)
        except InvalidStateError:
            await ctx.send(DiscordUIMessages.NOTHING_PLAYING)
            return
        except EngineError:
            await ctx.send(DiscordUIMessages.ENGINE_FAILED)
            return

        title = result.skipped_track.title if result.skipped_track else "track"
        if result.queue_ended:
            await ctx.send(DiscordUIMessages.SKIPPED_QUEUE_ENDED.format(title=title))
        else:
            await ctx.send(DiscordUIMessages.SKIPPED_NOW_PLAYING.format(title=title))

    @commands.command(name="queue")
    @commands.guild_only()
    async def queue(self, ctx: commands.Context) -> None:
        """Show the queue, head first."""
        assert ctx.guild is not None

        tracks = await self.container.music_service.list_queue(ctx.guild.id)
        if not tracks:
            await ctx.send(DiscordUIMessages.QUEUE_EMPTY)
            return

        await ctx.send(embed=queue_embed(tracks))

    @commands.command(name="remove")
    @commands.guild_only()
    async def remove(self, ctx: commands.Context, position: str = "") -> None:
        """Remove the track at a 1-based queue position."""
        assert ctx.guild is not None

        if not position.strip():
            await ctx.send(DiscordUIMessages.REMOVE_USAGE)
            return

        index = parse_position(position)
        if index is None:
            await ctx.send(DiscordUIMessages.REMOVE_NOT_A_NUMBER)
            return

        try:
            track = await self.container.music_service.on_remove(ctx.guild.id, index)
        except CurrentTrackRemovalError:
            await ctx.send(DiscordUIMessages.REMOVE_CURRENT_TRACK.format(prefix=self._prefix))
            return
        except QueuePositionOutOfRangeError:
            await ctx.send(DiscordUIMessages.REMOVE_OUT_OF_RANGE.format(position=index))
            return

        await ctx.send(embed=removed_embed(track))

    @commands.command(name="pause")
    @commands.guild_only()
    async def pause(self, ctx: commands.Context) -> None:
        """Pause the current track."""
        assert ctx.guild is not None

        try:
            track = await self.container.music_service.on_pause(ctx.guild.id)
        except InvalidStateError:
            await ctx.send(DiscordUIMessages.NOTHING_PLAYING)
            return
        except EngineError:
            await ctx.send(DiscordUIMessages.ENGINE_FAILED)
            return

        await ctx.send(embed=paused_embed(track))

    @commands.command(name="unpause", aliases=["resume"])
    @commands.guild_only()
    async def unpause(self, ctx: commands.Context) -> None:
        """Resume the current track."""
        assert ctx.guild is not None

        try:
            track = await self.container.music_service.on_unpause(ctx.guild.id)
        except InvalidStateError:
            await ctx.send(DiscordUIMessages.NOTHING_PLAYING)
            return
        except EngineError:
            await ctx.send(DiscordUIMessages.ENGINE_FAILED)
            return

        await ctx.send(embed=unpaused_embed(track))

    @commands.command(name="help")
    async def help(self, ctx: commands.Context) -> None:
        """List the available commands."""
        await ctx.send(embed=help_embed(self._prefix))


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError("Container not found on bot instance")

    await bot.add_cog(MusicCog(bot, container))

