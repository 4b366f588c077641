"""Dependency Injection Container

Builds the resolver, audio engine, notifier, session registry and command
service on first access and caches them for the life of the bot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.interfaces.audio_resolver import AudioResolver
    from ..application.interfaces.notifier import PlaybackNotifier
    from ..application.services.music_service import MusicCommandService
    from ..application.services.session_registry import SessionRegistry
    from ..infrastructure.audio.discord_engine import DiscordAudioEngine
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed. The engine and
    the notifier need the bot, so :meth:`set_bot` must be called first.
    """

    settings: Settings
    _bot: Bot | None = None

    _audio_resolver: AudioResolver | None = None
    _audio_engine: DiscordAudioEngine | None = None
    _notifier: PlaybackNotifier | None = None
    _session_registry: SessionRegistry | None = None
    _music_service: MusicCommandService | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Infrastructure Adapters ===

    @property
    def audio_resolver(self) -> AudioResolver:
        """Get the audio resolver."""
        if self._audio_resolver is None:
            from ..infrastructure.audio.ytdlp_resolver import YtDlpResolver

            self._audio_resolver = YtDlpResolver(self.settings.audio)
        return self._audio_resolver

    @property
    def audio_engine(self) -> DiscordAudioEngine:
        """Get the discord.py audio engine."""
        if self._audio_engine is None:
            from ..infrastructure.audio.discord_engine import DiscordAudioEngine

            self._audio_engine = DiscordAudioEngine(self.bot, self.settings.audio)
        return self._audio_engine

    @property
    def notifier(self) -> PlaybackNotifier:
        """Get the "now playing" notifier; it posts to each session's text channel."""
        if self._notifier is None:
            from ..infrastructure.discord.notifier import DiscordNotifier

            self._notifier = DiscordNotifier(
                self.bot, lambda session_id: self.session_registry.text_channel_for(session_id)
            )
        return self._notifier

    # === Application Services ===

    @property
    def session_registry(self) -> SessionRegistry:
        """Get the per-guild session registry."""
        if self._session_registry is None:
            from ..application.services.session_registry import SessionRegistry

            self._session_registry = SessionRegistry(
                engine=self.audio_engine, notifier=self.notifier
            )
        return self._session_registry

    @property
    def music_service(self) -> MusicCommandService:
        """Get the command service the cog delegates to."""
        if self._music_service is None:
            from ..application.services.music_service import MusicCommandService

            self._music_service = MusicCommandService(
                session_registry=self.session_registry,
                audio_resolver=self.audio_resolver,
            )
        return self._music_service


def create_container(settings: Settings | None = None) -> Container:
    """Create a new container, loading settings from the environment if none are given."""
    if settings is None:
        from .settings import get_settings

        settings = get_settings()

    return Container(settings=settings)
