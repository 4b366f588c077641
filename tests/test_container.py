"""
Unit Tests for Dependency Injection Container

Tests for:
- Bot instance management (set_bot, bot property, error when not set)
- Lazy initialization and caching of every component
- Wiring: the registry's engine and notifier, the notifier's channel lookup
- create_container loading settings when none are given
"""

from unittest.mock import MagicMock, Mock, patch

import pytest

from discord_music_queue.application.services.music_service import MusicCommandService
from discord_music_queue.application.services.session_registry import SessionRegistry
from discord_music_queue.config.container import Container, create_container
from discord_music_queue.config.settings import AudioSettings, Settings
from discord_music_queue.infrastructure.audio.discord_engine import DiscordAudioEngine
from discord_music_queue.infrastructure.audio.ytdlp_resolver import YtDlpResolver
from discord_music_queue.infrastructure.discord.notifier import DiscordNotifier


@pytest.fixture
def mock_settings():
    """Mock Settings object."""
    settings = Mock(spec=Settings)
    settings.audio = AudioSettings()
    return settings


@pytest.fixture
def container(mock_settings):
    return Container(settings=mock_settings)


@pytest.fixture
def mock_bot():
    bot = MagicMock()
    bot.user.id = 123456789
    return bot


class TestBotManagement:
    def test_bot_not_set_raises(self, container):
        with pytest.raises(RuntimeError, match="set_bot"):
            _ = container.bot

    def test_set_bot(self, container, mock_bot):
        container.set_bot(mock_bot)

        assert container.bot is mock_bot

    def test_engine_requires_bot(self, container):
        with pytest.raises(RuntimeError):
            _ = container.audio_engine


class TestLazyComponents:
    def test_audio_resolver_does_not_need_bot(self, container):
        resolver = container.audio_resolver

        assert isinstance(resolver, YtDlpResolver)
        assert container.audio_resolver is resolver

    def test_audio_engine_cached(self, container, mock_bot):
        container.set_bot(mock_bot)

        engine = container.audio_engine

        assert isinstance(engine, DiscordAudioEngine)
        assert container.audio_engine is engine

    def test_session_registry_wiring(self, container, mock_bot):
        container.set_bot(mock_bot)

        registry = container.session_registry

        assert isinstance(registry, SessionRegistry)
        assert container.session_registry is registry
        assert isinstance(container.notifier, DiscordNotifier)

    def test_music_service_cached(self, container, mock_bot):
        container.set_bot(mock_bot)

        service = container.music_service

        assert isinstance(service, MusicCommandService)
        assert container.music_service is service

    def test_sessions_created_with_container_notifier(self, container, mock_bot):
        container.set_bot(mock_bot)

        session = container.session_registry.get_or_create(1)

        assert session.controller._notifier is container.notifier


class TestNotifierChannelLookup:
    @pytest.mark.asyncio
    async def test_notifier_uses_session_text_channel(self, container, mock_bot, sample_track):
        container.set_bot(mock_bot)
        container.session_registry.get_or_create(1, text_channel_id=555)
        mock_bot.get_channel.return_value = None

        await container.notifier.now_playing(1, sample_track)

        mock_bot.get_channel.assert_called_once_with(555)

    @pytest.mark.asyncio
    async def test_notifier_without_session_skips_lookup(self, container, mock_bot, sample_track):
        container.set_bot(mock_bot)

        await container.notifier.now_playing(99, sample_track)

        mock_bot.get_channel.assert_not_called()


class TestCreateContainer:
    def test_uses_given_settings(self, mock_settings):
        container = create_container(mock_settings)

        assert container.settings is mock_settings

    def test_loads_settings_when_missing(self, mock_settings):
        with patch(
            "discord_music_queue.config.settings.get_settings", return_value=mock_settings
        ):
            container = create_container()

        assert container.settings is mock_settings
