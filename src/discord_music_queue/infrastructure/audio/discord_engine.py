"""AudioEngine implementation streaming through discord.py voice clients and FFmpeg."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

import discord

from discord_music_queue.application.interfaces.audio_engine import (
    AudioEngine,
    EngineHandle,
    TrackEndListener,
)
from discord_music_queue.config.settings import AudioSettings
from discord_music_queue.domain.shared.exceptions import EngineError
from discord_music_queue.domain.shared.messages import ErrorMessages, LogTemplates
from discord_music_queue.infrastructure.audio.models import StreamSource

logger = logging.getLogger(__name__)


def _ffmpeg_header_option(headers: dict[str, str]) -> str:
    if not headers:
        return ""
    joined = "".join(f"{key}: {value}\r\n" for key, value in headers.items())
    return f'-headers "{joined}"'


class DiscordEngineHandle(EngineHandle):
    """One FFmpeg stream playing on a voice client.

    discord.py calls :meth:`after_playback` on its audio player thread when
    the stream ends (naturally, on error, or because it was stopped). The
    subscribed listener is then scheduled on the event loop exactly once. If
    the stream ended before anyone subscribed, the listener fires on
    subscription instead.
    """

    def __init__(
        self,
        guild_id: int,
        voice_client: discord.VoiceClient,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self._guild_id = guild_id
        self._vc = voice_client
        self._loop = loop
        self._lock = threading.Lock()
        self._listener: TrackEndListener | None = None
        self._generation: int | None = None
        self._ended = False
        self._fired = False

    @property
    def ended(self) -> bool:
        return self._ended

    def subscribe(self, listener: TrackEndListener, generation: int) -> None:
        with self._lock:
            self._listener = listener
            self._generation = generation
            fire_now = self._ended and not self._fired
            if fire_now:
                self._fired = True

        if fire_now:
            self._schedule(listener, generation)

    def after_playback(self, error: Exception | None = None) -> None:
        logger.debug(LogTemplates.ENGINE_TRACK_ENDED, self._guild_id, error)
        if error:
            logger.warning(LogTemplates.ENGINE_PLAYBACK_ERROR, self._guild_id, error)

        with self._lock:
            self._ended = True
            if self._listener is None or self._generation is None or self._fired:
                return
            self._fired = True
            listener, generation = self._listener, self._generation

        self._schedule(listener, generation)

    def _schedule(self, listener: TrackEndListener, generation: int) -> None:
        asyncio.run_coroutine_threadsafe(listener(generation), self._loop)

    def stop(self) -> None:
        try:
            self._vc.stop()
        except discord.DiscordException as exc:
            raise EngineError("stop", str(exc)) from exc

    def pause(self) -> None:
        try:
            self._vc.pause()
        except discord.DiscordException as exc:
            raise EngineError("pause", str(exc)) from exc

    def resume(self) -> None:
        try:
            self._vc.resume()
        except discord.DiscordException as exc:
            raise EngineError("resume", str(exc)) from exc


class DiscordAudioEngine(AudioEngine):
    """Joins voice channels and plays StreamSource handles through FFmpeg."""

    def __init__(self, bot: discord.Client, settings: AudioSettings | None = None) -> None:
        self._bot = bot
        self._settings = settings or AudioSettings()
        self._ffmpeg_options = self._settings.ffmpeg_options
        self._connect_timeout = self._settings.connect_timeout_seconds

    def _get_voice_client(self, guild_id: int) -> discord.VoiceClient | None:
        guild = self._bot.get_guild(guild_id)
        if not guild:
            return None

        vc = guild.voice_client
        return vc if isinstance(vc, discord.VoiceClient) else None

    def _get_voice_channel(
        self, guild_id: int, channel_id: int
    ) -> tuple[discord.Guild, discord.VoiceChannel | discord.StageChannel]:
        guild = self._bot.get_guild(guild_id)
        if not guild:
            raise EngineError(
                "connect", ErrorMessages.GUILD_NOT_FOUND.format(guild_id=guild_id)
            )

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, discord.VoiceChannel | discord.StageChannel):
            raise EngineError(
                "connect", ErrorMessages.CHANNEL_NOT_VOICE.format(channel_id=channel_id)
            )
        return guild, channel

    async def ensure_connected(self, guild_id: int, channel_id: int) -> None:
        """Connect if not connected, move if in a different channel.

        Raises:
            EngineError: The guild or channel is unusable, or joining failed.
        """
        vc = self._get_voice_client(guild_id)

        if vc and not vc.is_connected():
            logger.warning(LogTemplates.VOICE_STALE_CLEANUP, guild_id)
            try:
                await self.disconnect(guild_id)
            except EngineError as exc:
                raise EngineError("connect", exc.message) from exc
            vc = None

        if vc and vc.channel and vc.channel.id == channel_id:
            return

        guild, channel = self._get_voice_channel(guild_id, channel_id)
        try:
            async with asyncio.timeout(self._connect_timeout):
                if vc:
                    await vc.move_to(channel)
                else:
                    await channel.connect(self_deaf=True)
        except TimeoutError as exc:
            raise EngineError(
                "connect", ErrorMessages.VOICE_CONNECT_TIMEOUT.format(channel_id=channel_id)
            ) from exc
        except discord.Forbidden as exc:
            raise EngineError(
                "connect", ErrorMessages.VOICE_NO_PERMISSION.format(channel_id=channel_id)
            ) from exc
        except discord.DiscordException as exc:
            raise EngineError("connect", str(exc)) from exc

        await self._ensure_self_deaf(guild, channel)
        if vc:
            logger.info(LogTemplates.VOICE_MOVED, channel.name)
        else:
            logger.info(LogTemplates.VOICE_CONNECTED, channel.name, guild.name)

    async def _ensure_self_deaf(
        self,
        guild: discord.Guild,
        channel: discord.VoiceChannel | discord.StageChannel,
    ) -> None:
        try:
            await guild.change_voice_state(channel=channel, self_deaf=True)
        except discord.DiscordException as exc:
            logger.debug(LogTemplates.VOICE_SELF_DEAFEN_FAILED, guild.id, exc)

    async def bind(self, session_id: int, source_handle: Any) -> DiscordEngineHandle:
        if not isinstance(source_handle, StreamSource):
            raise EngineError(
                "bind",
                ErrorMessages.UNSUPPORTED_SOURCE.format(type_name=type(source_handle).__name__),
            )

        vc = self._get_voice_client(session_id)
        if vc is None or not vc.is_connected():
            raise EngineError("bind", ErrorMessages.NOT_CONNECTED.format(guild_id=session_id))

        handle = DiscordEngineHandle(session_id, vc, asyncio.get_running_loop())
        try:
            # Any previous stream's after-callback carries an outdated generation.
            if vc.is_playing() or vc.is_paused():
                vc.stop()

            audio = discord.FFmpegPCMAudio(
                source_handle.stream_url,
                before_options=self._before_options(source_handle),
                options=self._ffmpeg_options.get("options", ""),
            )
            vc.play(audio, after=handle.after_playback)
        except discord.DiscordException as exc:
            raise EngineError("bind", str(exc)) from exc

        logger.debug(LogTemplates.ENGINE_BOUND, session_id)
        return handle

    def _before_options(self, source: StreamSource) -> str:
        base = self._ffmpeg_options.get("before_options", "")
        headers = _ffmpeg_header_option(source.http_headers)
        return f"{base} {headers}".strip()

    async def disconnect(self, session_id: int) -> None:
        vc = self._get_voice_client(session_id)
        if vc is None:
            return

        try:
            async with asyncio.timeout(self._connect_timeout):
                await vc.disconnect(force=True)
        except (TimeoutError, discord.DiscordException) as exc:
            raise EngineError("disconnect", str(exc) or None) from exc

        logger.info(LogTemplates.VOICE_DISCONNECTED, session_id)
