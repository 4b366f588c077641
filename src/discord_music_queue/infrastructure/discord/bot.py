"""MusicBot: the commands.Bot that owns the container, the music cog and shutdown."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from discord_music_queue.domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ...config.container import Container
    from ...config.settings import Settings

logger = logging.getLogger(__name__)

EXTENSIONS: tuple[str, ...] = ("discord_music_queue.infrastructure.discord.cogs.music_cog",)
SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)
SHUTDOWN_TIMEOUT_SECONDS = 30.0


class MusicBot(commands.Bot):
    def __init__(
        self,
        container: Container,
        settings: Settings,
        **kwargs,
    ) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        intents.voice_states = True
        intents.guilds = True

        super().__init__(
            command_prefix=settings.discord.command_prefix,
            intents=intents,
            help_command=None,
            **kwargs,
        )

        self.container = container
        self.settings = settings
        self._shutdown_requested = asyncio.Event()
        container.set_bot(self)

    async def setup_hook(self) -> None:
        logger.info(LogTemplates.BOT_SETUP)
        for extension in EXTENSIONS:
            await self.load_extension(extension)
            logger.info(LogTemplates.BOT_COG_LOADED, extension)
        logger.info(LogTemplates.BOT_SETUP_COMPLETE)

    async def on_ready(self) -> None:
        logger.info(
            LogTemplates.BOT_READY,
            self.user,  # type: ignore
            self.user.id,  # type: ignore
        )
        logger.info(LogTemplates.BOT_CONNECTED_GUILDS, len(self.guilds))

        activity = discord.Activity(
            type=discord.ActivityType.listening,
            name=DiscordUIMessages.PRESENCE.format(prefix=self.settings.discord.command_prefix),
        )
        await self.change_presence(activity=activity)

    async def on_guild_remove(self, guild: discord.Guild) -> None:
        logger.info(LogTemplates.BOT_GUILD_REMOVED, guild.id)
        await self.container.session_registry.discard(guild.id)

    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError) -> None:
        """Prefix-command error handler for anything the cog did not turn into a reply."""
        if isinstance(error, commands.CommandNotFound):
            return

        original = getattr(error, "original", error)
        logger.error(
            LogTemplates.BOT_COMMAND_ERROR,
            getattr(ctx.command, "name", "<unknown>"),
            original,
        )

        try:
            await ctx.send(DiscordUIMessages.COMMAND_ERROR.format(error=original))
        except discord.HTTPException:
            logger.warning(LogTemplates.BOT_ERROR_MESSAGE_SEND_FAILED)

    async def close(self) -> None:
        """Stop every session's stream, then leave voice and close the gateway."""
        if self.is_closed():
            return

        logger.info(LogTemplates.BOT_SHUTTING_DOWN)
        stopped = await self.container.session_registry.discard_all()
        logger.info(LogTemplates.BOT_SESSIONS_STOPPED, stopped)

        for vc in list(self.voice_clients):
            try:
                await vc.disconnect(force=True)
            except discord.DiscordException as e:
                logger.warning(LogTemplates.BOT_VOICE_DISCONNECT_FAILED, e)

        await super().close()
        logger.info(LogTemplates.BOT_SHUTDOWN_COMPLETE)

    def request_shutdown(self) -> None:
        """Ask :meth:`serve` to close the bot. Safe to call from a signal handler."""
        self._shutdown_requested.set()

    def run_until_signal(
        self, token: str, *, shutdown_timeout: float = SHUTDOWN_TIMEOUT_SECONDS
    ) -> None:
        """Blocking entry point: serve until SIGINT or SIGTERM."""
        asyncio.run(self.serve(token, shutdown_timeout=shutdown_timeout))

    async def serve(
        self, token: str, *, shutdown_timeout: float = SHUTDOWN_TIMEOUT_SECONDS
    ) -> None:
        """Run the gateway until it stops on its own or a shutdown is requested.

        A requested shutdown gets ``shutdown_timeout`` seconds to close cleanly
        before the gateway task is cancelled. Login and gateway errors propagate.
        """
        loop = asyncio.get_running_loop()
        for sig in SHUTDOWN_SIGNALS:
            loop.add_signal_handler(sig, self.request_shutdown)
        try:
            async with self:
                await self._serve_until_shutdown(token, shutdown_timeout)
        finally:
            for sig in SHUTDOWN_SIGNALS:
                loop.remove_signal_handler(sig)

    async def _serve_until_shutdown(self, token: str, shutdown_timeout: float) -> None:
        gateway = asyncio.create_task(self.start(token))
        shutdown = asyncio.create_task(self._shutdown_requested.wait())
        done, _ = await asyncio.wait({gateway, shutdown}, return_when=asyncio.FIRST_COMPLETED)

        if gateway in done:
            shutdown.cancel()
            gateway.result()
            return

        logger.info(LogTemplates.BOT_SHUTDOWN_REQUESTED)
        try:
            async with asyncio.timeout(shutdown_timeout):
                await self.close()
        except TimeoutError:
            logger.warning(LogTemplates.BOT_SHUTDOWN_TIMEOUT, shutdown_timeout)

        if not gateway.done():
            gateway.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await gateway


def create_bot(container: Container, settings: Settings) -> MusicBot:
    return MusicBot(container=container, settings=settings)
