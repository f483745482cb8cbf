"""YouTube integration for Talkalong."""
from .client import (
    YouTubeClient,
    ChannelVideo,
    default_thumbnail,
)
from .captions import (
    CaptionClient,
    parse_webvtt,
    snippets_to_webvtt,
)
from .timestamp import (
    parse_vtt_timecode,
    parse_iso8601_duration,
    format_prompt_timestamp,
    extract_video_id,
    resolve_video_id,
)

__all__ = [
    # Client
    "YouTubeClient",
    "ChannelVideo",
    "default_thumbnail",
    # Captions
    "CaptionClient",
    "parse_webvtt",
    "snippets_to_webvtt",
    # Timestamps
    "parse_vtt_timecode",
    "parse_iso8601_duration",
    "format_prompt_timestamp",
    "extract_video_id",
    "resolve_video_id",
]
