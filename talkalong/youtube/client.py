"""YouTube Data API client for episode metadata and channel suggestions."""
import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests

from talkalong.models import EpisodeMeta, VideoSummary
from talkalong.youtube.timestamp import parse_iso8601_duration

logger = logging.getLogger(__name__)

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
DEFAULT_TITLE = "YouTube Video"

# Episodes short enough for one practice session
MIN_SUGGESTION_SECONDS = 600
MAX_SUGGESTION_SECONDS = 960
MAX_SUGGESTIONS = 8


@dataclass
class ChannelVideo:
    """A search hit from a channel listing."""
    video_id: str
    title: str
    thumbnail: Optional[str] = None
    published_at: Optional[str] = None


def default_thumbnail(video_id: str) -> str:
    return f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"


class YouTubeClient:
    """Client for the YouTube Data API v3."""

    def __init__(self, api_key: Optional[str] = None, session: Optional[requests.Session] = None, timeout: float = 10.0):
        self.session = session or requests.Session()
        self.api_key = api_key or os.environ.get("YOUTUBE_API_KEY")
        self.timeout = timeout

    def _get(self, endpoint: str, params: dict) -> dict:
        response = self.session.get(
            f"{YOUTUBE_API_BASE}/{endpoint}",
            params={**params, "key": self.api_key},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def fetch_video_meta(self, video_id: str) -> EpisodeMeta:
        """
        Fetch title and duration for a single video.

        Falls back to a generic title and zero duration when no API key is
        configured, the video does not exist, or the API call fails.

        Args:
            video_id: YouTube video ID.

        Returns:
            EpisodeMeta for the video.
        """
        fallback = EpisodeMeta(title=DEFAULT_TITLE, duration_sec=0)
        if not self.api_key:
            return fallback

        try:
            data = self._get("videos", {"id": video_id, "part": "snippet,contentDetails"})
        except (requests.RequestException, ValueError) as e:
            logger.warning("YouTube metadata request failed for %s: %s", video_id, e)
            return fallback

        items = data.get("items") or []
        if not items:
            logger.info("YouTube video not found: %s", video_id)
            return fallback

        item = items[0]
        snippet = item.get("snippet", {})
        thumbnails = snippet.get("thumbnails", {})
        thumbnail = (thumbnails.get("high") or thumbnails.get("medium") or {}).get("url")
        return EpisodeMeta(
            title=snippet.get("title") or DEFAULT_TITLE,
            duration_sec=parse_iso8601_duration(item.get("contentDetails", {}).get("duration", "")),
            thumbnail=thumbnail,
        )

    def fetch_video_metas(self, video_ids: list[str]) -> dict[str, int]:
        """
        Fetch durations for a batch of videos in one request.

        Args:
            video_ids: Up to 50 YouTube video IDs.

        Returns:
            Dict mapping video ID to duration in seconds. Empty on failure.
        """
        if not self.api_key or not video_ids:
            return {}

        try:
            data = self._get("videos", {"id": ",".join(video_ids), "part": "contentDetails"})
        except (requests.RequestException, ValueError) as e:
            logger.warning("YouTube batch metadata request failed: %s", e)
            return {}

        durations = {}
        for item in data.get("items") or []:
            video_id = item.get("id")
            duration = item.get("contentDetails", {}).get("duration")
            if not video_id or not duration:
                continue
            durations[video_id] = parse_iso8601_duration(duration)
        return durations

    def search_channel_videos(self, channel_id: str, max_results: int = 10) -> list[ChannelVideo]:
        """
        List the newest medium-length embeddable videos on a channel.

        Args:
            channel_id: YouTube channel ID.
            max_results: Maximum number of search hits.

        Returns:
            List of ChannelVideo objects, empty when unconfigured or on failure.
        """
        if not self.api_key:
            return []

        try:
            data = self._get("search", {
                "channelId": channel_id,
                "part": "snippet",
                "order": "date",
                "type": "video",
                "videoDuration": "medium",
                "videoEmbeddable": "true",
                "maxResults": max_results,
            })
        except (requests.RequestException, ValueError) as e:
            logger.warning("YouTube channel search failed for %s: %s", channel_id, e)
            return []

        videos = []
        for item in data.get("items") or []:
            video_id = (item.get("id") or {}).get("videoId")
            snippet = item.get("snippet") or {}
            title = snippet.get("title")
            if not video_id or not title:
                continue
            thumbnails = snippet.get("thumbnails") or {}
            thumbnail = (thumbnails.get("medium") or thumbnails.get("high") or {}).get("url")
            videos.append(ChannelVideo(
                video_id=video_id,
                title=title,
                thumbnail=thumbnail,
                published_at=snippet.get("publishedAt"),
            ))
        return videos

    def get_suggestions(self, channel_id: str, max_results: int = MAX_SUGGESTIONS) -> list[VideoSummary]:
        """
        Suggest episodes from a channel that fit a 10-16 minute session.

        Durations come from one batched lookup; videos missing from the
        batch are looked up individually.

        Args:
            channel_id: YouTube channel ID.
            max_results: Number of channel videos to consider.

        Returns:
            VideoSummary list filtered to 600-960 seconds, at most 8 items.
        """
        items = self.search_channel_videos(channel_id, max_results)
        if not items:
            return []

        durations = self.fetch_video_metas([item.video_id for item in items])

        suggestions = []
        for item in items:
            duration_sec = durations.get(item.video_id, 0)
            if not duration_sec:
                duration_sec = self.fetch_video_meta(item.video_id).duration_sec

            if not MIN_SUGGESTION_SECONDS <= duration_sec <= MAX_SUGGESTION_SECONDS:
                continue

            suggestions.append(VideoSummary(
                video_id=item.video_id,
                title=item.title,
                duration_sec=duration_sec,
                thumbnail=item.thumbnail or default_thumbnail(item.video_id),
                published_at=item.published_at,
            ))

        return suggestions[:MAX_SUGGESTIONS]
