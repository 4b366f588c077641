"""AudioResolver implementation using yt-dlp for URL resolution and search."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Final, cast

from pydantic import ValidationError
from yt_dlp import YoutubeDL

from discord_music_queue.application.interfaces.audio_resolver import AudioResolver
from discord_music_queue.config.settings import AudioSettings
from discord_music_queue.domain.music.entities import Track
from discord_music_queue.domain.shared.exceptions import ResolveError
from discord_music_queue.domain.shared.messages import ErrorMessages, LogTemplates
from discord_music_queue.infrastructure.audio.models import (
    LOG_QUERY_TRUNCATE,
    AudioFormatInfo,
    StreamSource,
    YtDlpOpts,
    YtDlpTrackInfo,
)

logger = logging.getLogger(__name__)

URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^https?://")


class YtDlpResolver(AudioResolver):
    """Turns a link or a free-text query into a Track backed by a StreamSource.

    Anything starting with ``http`` is extracted as a URL; everything else is
    searched and the first hit is used.
    """

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._base_opts = YtDlpOpts(format=self._settings.ytdlp_format)

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    def is_url(self, query: str) -> bool:
        return bool(URL_PATTERN.match(query.strip()))

    async def resolve(self, query: str) -> Track:
        query = query.strip()
        if self.is_url(query):
            info = await asyncio.to_thread(self._extract_info_sync, query)
        else:
            info = await asyncio.to_thread(self._search_sync, query)

        track = self._info_to_track(query, info)
        logger.info(LogTemplates.YTDLP_RESOLVED, query[:LOG_QUERY_TRUNCATE], track.title)
        return track

    # ─────────────────────────────────────────────────────────────────
    # Blocking helpers (run in a worker thread)
    # ─────────────────────────────────────────────────────────────────

    def _extract_info_sync(self, url: str) -> YtDlpTrackInfo:
        try:
            with YoutubeDL(params=cast(Any, self._get_opts().model_dump())) as ydl:
                data = ydl.extract_info(url, download=False)
        except Exception as exc:
            logger.exception(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url[:LOG_QUERY_TRUNCATE])
            raise ResolveError(url) from exc

        if not isinstance(data, dict):
            raise ResolveError(url, ErrorMessages.NO_RESULTS.format(query=url))
        return self._parse_info(data)

    def _search_sync(self, query: str) -> YtDlpTrackInfo:
        try:
            with YoutubeDL(params=cast(Any, self._get_opts().model_dump())) as ydl:
                data = ydl.extract_info(f"ytsearch1:{query}", download=False)
        except Exception as exc:
            logger.exception(LogTemplates.YTDLP_FAILED_SEARCH, query)
            raise ResolveError(query) from exc

        entries = data.get("entries") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            entries = []
        first = next((e for e in entries if isinstance(e, dict)), None)
        if first is None:
            raise ResolveError(query, ErrorMessages.NO_RESULTS.format(query=query))
        return self._parse_info(first)

    # ─────────────────────────────────────────────────────────────────
    # Conversion
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _parse_info(data: dict[str, Any]) -> YtDlpTrackInfo:
        return YtDlpTrackInfo.model_validate(dict(data))

    def _info_to_track(self, query: str, info: YtDlpTrackInfo) -> Track:
        if info.title is None:
            raise ResolveError(query, ErrorMessages.NO_TITLE.format(query=query))

        stream_url = self._extract_stream_url(info)
        if stream_url is None:
            raise ResolveError(query, ErrorMessages.NO_STREAM_URL.format(query=query))

        try:
            return Track(
                title=info.title,
                duration_seconds=info.duration or 0,
                thumbnail_url=info.thumbnail,
                webpage_url=info.webpage_url,
                source_handle=StreamSource(
                    stream_url=stream_url, http_headers=info.http_headers
                ),
            )
        except ValidationError as exc:
            raise ResolveError(query, str(exc)) from exc

    @classmethod
    def _extract_stream_url(cls, info: YtDlpTrackInfo) -> str | None:
        if info.url:
            return info.url
        return cls._extract_stream_from_formats(info.formats)

    @staticmethod
    def _extract_stream_from_formats(formats: list[AudioFormatInfo]) -> str | None:
        audio_formats = [f for f in formats if f.acodec != "none" and f.url]
        if audio_formats:
            return audio_formats[-1].url
        return None
