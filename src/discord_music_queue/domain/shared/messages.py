"""Centralized message constants for error messages, log templates and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Playback state
    START_REQUIRES_HEAD = "start() requires the given track to be the queue head"
    NOT_CONNECTED = "Not connected to voice in guild {guild_id}"
    UNSUPPORTED_SOURCE = "Cannot play source handle of type {type_name}"

    # Voice connection
    GUILD_NOT_FOUND = "Guild {guild_id} is not available"
    CHANNEL_NOT_VOICE = "Channel {channel_id} is not a voice channel"
    VOICE_CONNECT_TIMEOUT = "Timed out joining voice channel {channel_id}"
    VOICE_NO_PERMISSION = "No permission to join voice channel {channel_id}"

    # Resolution
    NO_RESULTS = "No results for '{query}'"
    NO_TITLE = "Result for '{query}' has no title"
    NO_STREAM_URL = "No stream URL found for '{query}'"

    # Configuration
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN (or MUSIC_TOKEN) environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Playback transitions
    TRACK_STARTED = "Now playing %r (generation %s)"
    TRACK_FINISHED = "Track finished: %r"
    TRACK_SKIPPED = "Skipped %r"
    TRACK_END_STALE = "Discarding stale track-end signal (signal=%s, current=%s)"
    TRACK_END_HANDLED = "Track end in guild %s (generation %s): %s"
    TRACK_END_TRANSITION_FAILED = "Track-end transition failed in guild %s: %s"
    PLAYBACK_PAUSED = "Playback paused"
    PLAYBACK_RESUMED = "Playback resumed"
    QUEUE_EXHAUSTED = "Queue exhausted, leaving voice"
    NOTIFY_FAILED = "Failed to announce %r"

    # Queue
    QUEUE_ENQUEUED = "Queued %r at position %s in guild %s"
    QUEUE_REMOVED = "Removed %r from position %s in guild %s"

    # Engine
    ENGINE_FAILURE = "Audio engine failed during %s: %s"
    ENGINE_DISCONNECT_AFTER_FAILURE = "Disconnect after engine failure also failed: %s"
    ENGINE_DISCONNECT_ON_TEARDOWN_FAILED = "Leaving voice after the queue ended failed: %s"
    ENGINE_STOP_ON_SHUTDOWN_FAILED = "Stopping playback on shutdown failed: %s"
    ENGINE_TRACK_ENDED = "Stream ended in guild %s (error=%r)"
    ENGINE_PLAYBACK_ERROR = "Playback error in guild %s: %s"
    ENGINE_BOUND = "Streaming started in guild %s"

    # Sessions
    SESSION_CREATED = "Created session for guild %s"
    SESSION_DISCARDED = "Discarded session for guild %s"
    SESSION_NOT_FOUND = "No session for guild %s, ignoring track end"

    # Voice
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_MOVED = "Moved to voice channel %s"
    VOICE_STALE_CLEANUP = "Found stale voice client in guild %s, cleaning up"
    VOICE_SELF_DEAFEN_FAILED = "Failed to self-deafen in guild %s: %r"

    # yt-dlp
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract info from %s"
    YTDLP_FAILED_SEARCH = "Failed to search for %r"
    YTDLP_RESOLVED = "Resolved %r to %r"

    # Notifier
    NOTIFIER_CHANNEL_MISSING = "No text channel to announce in for guild %s"

    # Startup
    LOGGING_CONFIG_FALLBACK = "Could not load %s, logging to stdout with defaults"
    SETTINGS_INVALID = "Invalid configuration: %s"

    # Bot lifecycle
    BOT_STARTING = "Starting Discord music queue bot in {environment} mode"
    BOT_SETUP = "Setting up bot..."
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STOPPED = "Bot stopped successfully"
    BOT_FATAL_ERROR = "Bot stopped on an unhandled error"
    BOT_SHUTDOWN_REQUESTED = "Shutdown requested, closing..."
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_SESSIONS_STOPPED = "Stopped %s session(s)"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_GUILD_REMOVED = "Removed from guild %s"
    BOT_COMMAND_ERROR = "Command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"
    BOT_VOICE_DISCONNECT_FAILED = "Failed to disconnect voice client on close: %s"

    # Commands
    COMMAND_VOICE_JOIN_FAILED = "Could not join voice in guild %s: %s"
    COMMAND_RESOLVE_FAILED = "Resolve failed in guild %s: %s"


class DiscordUIMessages:
    """User-facing strings for replies and embeds."""

    # Command replies
    NOT_IN_VOICE = "Not in a voice channel"
    PLAY_USAGE = "You need to provide a link or search query!"
    REMOVE_USAGE = "You need to provide a queue position"
    REMOVE_NOT_A_NUMBER = "Queue position must be a number"
    REMOVE_CURRENT_TRACK = "Cannot remove the current track! Use {prefix}skip instead"
    REMOVE_OUT_OF_RANGE = "Position {position} does not exist in queue!"
    PLAY_FAILED = "Error playing track D:"
    COULD_NOT_JOIN_VOICE = "I couldn't join your voice channel."
    NOTHING_PLAYING = "Nothing is playing right now."
    QUEUE_EMPTY = "The queue is empty."
    SKIPPED_QUEUE_ENDED = "Skipped **{title}**. The queue is empty, leaving voice."
    SKIPPED_NOW_PLAYING = "Skipped **{title}**."
    ENGINE_FAILED = "Playback failed and the queue was cleared."
    COMMAND_ERROR = "An error occurred: {error}"

    # Embed titles
    EMBED_NOW_PLAYING = "Now playing"
    EMBED_ADDED_TO_QUEUE = "Added to queue"
    EMBED_QUEUE = "Queue"
    EMBED_REMOVED = "Removed from queue"
    EMBED_PAUSED = "Paused"
    EMBED_UNPAUSED = "Unpaused"
    EMBED_HELP = "Help"

    # Embed fields
    FIELD_TITLE = "Title"
    FIELD_DURATION = "Duration"
    FIELD_POSITION = "Position"
    FIELD_REQUESTED_BY = "Requested by"
    QUEUE_LINE = "{position}: {title} [{duration}]"
    QUEUE_FOOTER = "{count} track(s), {duration} total"
    QUEUE_MORE = "...and {count} more"

    # Presence
    PRESENCE = "{prefix}play"

    # Help
    HELP_PLAY = "Plays a track from a link or search query, or queues it if something is playing"
    HELP_SKIP = "Skips the current track"
    HELP_QUEUE = "Shows the queue"
    HELP_REMOVE = "Removes the track at the given queue position"
    HELP_PAUSE = "Pauses the current track"
    HELP_UNPAUSE = "Resumes the current track"
    HELP_HELP = "Shows this message"
