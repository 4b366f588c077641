"""Tests for the "Now playing" notifier."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from discord_music_queue.infrastructure.discord.notifier import DiscordNotifier


@pytest.fixture
def bot():
    return MagicMock()


@pytest.mark.asyncio
async def test_posts_embed_to_session_channel(bot, sample_track):
    channel = MagicMock(spec=discord.TextChannel)
    channel.send = AsyncMock()
    bot.get_channel.return_value = channel
    notifier = DiscordNotifier(bot, lambda session_id: 555)

    await notifier.now_playing(1, sample_track)

    bot.get_channel.assert_called_once_with(555)
    embed = channel.send.call_args.kwargs["embed"]
    assert embed.title == "Now playing"
    assert embed.fields[0].value == "Test Track"


@pytest.mark.asyncio
async def test_no_channel_recorded(bot, sample_track):
    notifier = DiscordNotifier(bot, lambda session_id: None)

    await notifier.now_playing(1, sample_track)

    bot.get_channel.assert_not_called()


@pytest.mark.asyncio
async def test_channel_gone(bot, sample_track):
    bot.get_channel.return_value = None
    notifier = DiscordNotifier(bot, lambda session_id: 555)

    await notifier.now_playing(1, sample_track)

    bot.get_channel.assert_called_once_with(555)


@pytest.mark.asyncio
async def test_send_failure_propagates(bot, sample_track):
    channel = MagicMock(spec=discord.TextChannel)
    channel.send = AsyncMock(side_effect=discord.HTTPException(MagicMock(status=403), "nope"))
    bot.get_channel.return_value = channel
    notifier = DiscordNotifier(bot, lambda session_id: 555)

    with pytest.raises(discord.HTTPException):
        await notifier.now_playing(1, sample_track)
