"""Embed builders for command replies and playback announcements."""

from __future__ import annotations

from collections.abc import Sequence

import discord

from discord_music_queue.domain.music.entities import Track
from discord_music_queue.domain.shared.messages import DiscordUIMessages
from discord_music_queue.utils.reply import format_duration, truncate

# Keeps the description under the 4096-character embed limit.
QUEUE_MAX_LINES = 25


def _track_embed(title: str, track: Track, color: discord.Color) -> discord.Embed:
    embed = discord.Embed(title=title, color=color, url=track.webpage_url)
    embed.add_field(name=DiscordUIMessages.FIELD_TITLE, value=truncate(track.title), inline=False)
    embed.add_field(
        name=DiscordUIMessages.FIELD_DURATION, value=track.duration_formatted, inline=True
    )
    if track.requested_by_name:
        embed.add_field(
            name=DiscordUIMessages.FIELD_REQUESTED_BY, value=track.requested_by_name, inline=True
        )
    if track.thumbnail_url:
        embed.set_thumbnail(url=track.thumbnail_url)
    return embed


def now_playing_embed(track: Track) -> discord.Embed:
    return _track_embed(DiscordUIMessages.EMBED_NOW_PLAYING, track, discord.Color.blue())


def added_to_queue_embed(track: Track, position: int) -> discord.Embed:
    embed = _track_embed(DiscordUIMessages.EMBED_ADDED_TO_QUEUE, track, discord.Color.blue())
    embed.add_field(name=DiscordUIMessages.FIELD_POSITION, value=str(position), inline=True)
    return embed


def queue_embed(tracks: Sequence[Track]) -> discord.Embed:
    """One line per track, ``position: title [M:SS]``, head first."""
    lines = [
        DiscordUIMessages.QUEUE_LINE.format(
            position=position, title=truncate(track.title), duration=track.duration_formatted
        )
        for position, track in enumerate(tracks[:QUEUE_MAX_LINES], start=1)
    ]
    hidden = len(tracks) - QUEUE_MAX_LINES
    if hidden > 0:
        lines.append(DiscordUIMessages.QUEUE_MORE.format(count=hidden))

    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_QUEUE,
        description="\n".join(lines),
        color=discord.Color.red(),
    )
    total = sum(track.duration_seconds for track in tracks)
    footer = DiscordUIMessages.QUEUE_FOOTER.format(
        count=len(tracks), duration=format_duration(total)
    )
    embed.set_footer(text=footer)
    return embed


def removed_embed(track: Track) -> discord.Embed:
    return discord.Embed(
        title=DiscordUIMessages.EMBED_REMOVED,
        description=track.display_title,
        color=discord.Color.fuchsia(),
    )


def paused_embed(track: Track) -> discord.Embed:
    return discord.Embed(
        title=DiscordUIMessages.EMBED_PAUSED,
        description=track.title,
        color=discord.Color.dark_green(),
    )


def unpaused_embed(track: Track) -> discord.Embed:
    return discord.Embed(
        title=DiscordUIMessages.EMBED_UNPAUSED,
        description=track.title,
        color=discord.Color.dark_green(),
    )


def help_embed(prefix: str) -> discord.Embed:
    embed = discord.Embed(title=DiscordUIMessages.EMBED_HELP, color=discord.Color.orange())
    for usage, description in (
        ("play <link or query>", DiscordUIMessages.HELP_PLAY),
        ("skip", DiscordUIMessages.HELP_SKIP),
        ("queue", DiscordUIMessages.HELP_QUEUE),
        ("remove <position>", DiscordUIMessages.HELP_REMOVE),
        ("pause", DiscordUIMessages.HELP_PAUSE),
        ("unpause", DiscordUIMessages.HELP_UNPAUSE),
        ("help", DiscordUIMessages.HELP_HELP),
    ):
        embed.add_field(name=f"{prefix}{usage}", value=description, inline=False)
    return embed
