"""Tests for the embed builders used by the music cog and notifier."""

import discord

from conftest import make_track
from discord_music_queue.infrastructure.discord.embeds import (
    QUEUE_MAX_LINES,
    added_to_queue_embed,
    help_embed,
    now_playing_embed,
    queue_embed,
    removed_embed,
)


class TestTrackEmbeds:
    def test_now_playing(self, sample_track):
        embed = now_playing_embed(sample_track)

        assert embed.title == "Now playing"
        assert embed.color == discord.Color.blue()
        assert embed.url == "https://youtube.com/watch?v=test123"
        assert embed.thumbnail.url == "https://example.com/thumb.jpg"
        assert [(f.name, f.value) for f in embed.fields] == [
            ("Title", "Test Track"),
            ("Duration", "3:00"),
        ]

    def test_requester_field(self):
        track = make_track("Song", requested_by_name="alice")

        embed = now_playing_embed(track)

        assert ("Requested by", "alice") in [(f.name, f.value) for f in embed.fields]

    def test_no_thumbnail(self):
        embed = now_playing_embed(make_track("Song"))

        assert embed.thumbnail.url is None

    def test_added_to_queue_position(self):
        embed = added_to_queue_embed(make_track("Song"), 4)

        assert embed.title == "Added to queue"
        assert embed.fields[-1].name == "Position"
        assert embed.fields[-1].value == "4"


class TestQueueEmbed:
    def test_lines_in_order(self):
        tracks = [make_track("First", 3725), make_track("Second", 42)]

        embed = queue_embed(tracks)

        assert embed.color == discord.Color.red()
        assert embed.description.splitlines() == ["1: First [1:02:05]", "2: Second [0:42]"]

    def test_long_queue_is_cut(self):
        tracks = [make_track(f"T{i}", 10) for i in range(QUEUE_MAX_LINES + 5)]

        embed = queue_embed(tracks)
        lines = embed.description.splitlines()

        assert len(lines) == QUEUE_MAX_LINES + 1
        assert lines[-1] == "...and 5 more"
        assert embed.footer.text == f"{QUEUE_MAX_LINES + 5} track(s), 5:00 total"


def test_removed_embed():
    embed = removed_embed(make_track("Gone", 65))

    assert embed.title == "Removed from queue"
    assert embed.description == "Gone [1:05]"
    assert embed.color == discord.Color.fuchsia()


def test_help_uses_prefix():
    embed = help_embed("?")

    assert embed.fields[0].name == "?play <link or query>"
    assert len(embed.fields) == 7
