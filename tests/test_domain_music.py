"""
Unit Tests for the Music Domain

Tests for:
- Track validation, immutability and formatting
- TrackQueue ordering, advance, remove_at and clear
- PlaybackState transitions
"""

import pytest
from pydantic import ValidationError

from conftest import make_track
from discord_music_queue.domain.music.entities import Track, TrackQueue
from discord_music_queue.domain.music.value_objects import PlaybackState
from discord_music_queue.domain.shared.exceptions import (
    CurrentTrackRemovalError,
    QueueIndexError,
    QueuePositionOutOfRangeError,
)

# =============================================================================
# Track
# =============================================================================


class TestTrack:
    def test_create_minimal(self):
        track = Track(title="Song", duration_seconds=61)

        assert track.title == "Song"
        assert track.thumbnail_url is None
        assert track.source_handle is None

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Track(title="", duration_seconds=10)

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            Track(title="Song", duration_seconds=-1)

    def test_thumbnail_must_be_http(self):
        with pytest.raises(ValidationError):
            Track(title="Song", duration_seconds=1, thumbnail_url="ftp://example.com/x.jpg")

    def test_is_frozen(self):
        track = make_track()

        with pytest.raises(ValidationError):
            track.title = "Other"

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0, "0:00"), (5, "0:05"), (65, "1:05"), (600, "10:00"), (3725, "1:02:05")],
    )
    def test_duration_formatted(self, seconds, expected):
        assert make_track(duration=seconds).duration_formatted == expected

    def test_display_title(self):
        assert make_track("Song", 125).display_title == "Song [2:05]"

    def test_with_requester_returns_copy(self):
        track = make_track()

        tagged = track.with_requester("alice")

        assert tagged.requested_by_name == "alice"
        assert track.requested_by_name is None
        assert tagged.source_handle == track.source_handle

    def test_source_handle_not_serialized(self):
        track = make_track(source_handle=object())

        assert "source_handle" not in track.model_dump()


# =============================================================================
# TrackQueue
# =============================================================================


class TestTrackQueue:
    def test_add_reports_was_empty(self):
        queue = TrackQueue()

        assert queue.add(make_track("a")) is True
        assert queue.add(make_track("b")) is False

    def test_add_keeps_insertion_order(self):
        queue = TrackQueue()
        titles = [f"t{i}" for i in range(5)]
        for title in titles:
            queue.add(make_track(title))

        assert queue.size() == 5
        assert len(queue) == 5
        assert [t.title for t in queue.snapshot()] == titles

    def test_peek_head_empty(self):
        assert TrackQueue().peek_head() is None

    def test_has_next(self):
        queue = TrackQueue()
        queue.add(make_track("a"))
        assert queue.has_next() is False

        queue.add(make_track("b"))
        assert queue.has_next() is True

    def test_advance_returns_second_element(self):
        queue = TrackQueue()
        for title in ("a", "b", "c"):
            queue.add(make_track(title))

        new_head = queue.advance()

        assert new_head.title == "b"
        assert queue.size() == 2
        assert queue.peek_head().title == "b"

    def test_advance_single_element_empties_queue(self):
        queue = TrackQueue()
        queue.add(make_track("a"))

        assert queue.advance() is None
        assert queue.is_empty()

    def test_advance_on_empty_queue_is_noop(self):
        queue = TrackQueue()

        assert queue.advance() is None
        assert queue.is_empty()

    @pytest.mark.parametrize("position", [2, 3, 4])
    def test_remove_at_removes_exactly_that_track(self, position):
        queue = TrackQueue()
        titles = ["a", "b", "c", "d"]
        for title in titles:
            queue.add(make_track(title))

        removed = queue.remove_at(position)

        assert removed.title == titles[position - 1]
        expected = titles[: position - 1] + titles[position:]
        assert [t.title for t in queue.snapshot()] == expected

    def test_remove_at_head_fails(self):
        queue = TrackQueue()
        queue.add(make_track("a"))
        queue.add(make_track("b"))

        with pytest.raises(CurrentTrackRemovalError):
            queue.remove_at(1)
        assert queue.size() == 2

    def test_remove_at_head_fails_even_when_empty(self):
        with pytest.raises(CurrentTrackRemovalError):
            TrackQueue().remove_at(1)

    @pytest.mark.parametrize("position", [0, -1, 4, 100])
    def test_remove_at_out_of_range(self, position):
        queue = TrackQueue()
        for title in ("a", "b", "c"):
            queue.add(make_track(title))

        with pytest.raises(QueuePositionOutOfRangeError) as exc_info:
            queue.remove_at(position)

        assert exc_info.value.size == 3
        assert str(exc_info.value) == f"Position {position} does not exist in queue!"
        assert queue.size() == 3

    def test_queue_index_errors_are_index_errors(self):
        with pytest.raises(IndexError):
            TrackQueue().remove_at(5)
        assert issubclass(CurrentTrackRemovalError, QueueIndexError)

    def test_clear_returns_count(self):
        queue = TrackQueue()
        queue.add(make_track("a"))
        queue.add(make_track("b"))

        assert queue.clear() == 2
        assert queue.is_empty()

    def test_snapshot_is_a_copy(self):
        queue = TrackQueue()
        queue.add(make_track("a"))

        snap = queue.snapshot()
        snap.clear()

        assert queue.size() == 1

    def test_total_duration(self):
        queue = TrackQueue()
        queue.add(make_track("a", 100))
        queue.add(make_track("b", 50))

        assert queue.total_duration_seconds() == 150


# =============================================================================
# PlaybackState
# =============================================================================


class TestPlaybackState:
    def test_idle_can_only_start(self):
        assert PlaybackState.IDLE.can_transition_to(PlaybackState.PLAYING)
        assert not PlaybackState.IDLE.can_transition_to(PlaybackState.IDLE)

    def test_playing_can_rebind_or_stop(self):
        assert PlaybackState.PLAYING.can_transition_to(PlaybackState.PLAYING)
        assert PlaybackState.PLAYING.can_transition_to(PlaybackState.IDLE)

    def test_is_playing(self):
        assert PlaybackState.PLAYING.is_playing
        assert not PlaybackState.IDLE.is_playing
