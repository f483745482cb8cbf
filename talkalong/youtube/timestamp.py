"""Timecode, duration and video ID parsing for YouTube and WebVTT inputs."""
import re
from typing import Optional, Union
from urllib.parse import urlparse, parse_qs

VTT_TIMECODE_PATTERN = re.compile(
    r"(?P<hours>\d{2}):(?P<minutes>\d{2}):(?P<seconds>\d{2})\.(?P<millis>\d{3})"
)
ISO8601_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")
VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")


def parse_vtt_timecode(text: str) -> Optional[float]:
    """
    Parse a WebVTT timecode (HH:MM:SS.mmm) into seconds.

    Args:
        text: Text containing a timecode, e.g. "00:01:02.500".

    Returns:
        Seconds as a float (no rounding), or None if no timecode matches.
    """
    if not text:
        return None

    match = VTT_TIMECODE_PATTERN.search(text)
    if not match:
        return None

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds"))
    millis = int(match.group("millis"))
    return hours * 3600 + minutes * 60 + seconds + millis / 1000


def parse_iso8601_duration(text: str) -> int:
    """
    Parse an ISO 8601 duration string (e.g., PT1H30M15S) to seconds.

    Missing components count as zero. Malformed input yields 0 rather
    than an error.

    Args:
        text: ISO 8601 duration like "PT1H30M15S" or "PT45M".

    Returns:
        Duration in whole seconds.
    """
    if not text:
        return 0

    match = ISO8601_DURATION_PATTERN.search(text)
    if not match:
        return 0

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)

    return hours * 3600 + minutes * 60 + seconds


def format_prompt_timestamp(seconds: Union[float, int]) -> str:
    """Format seconds as mm:ss for transcript lines in LLM prompts."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def extract_video_id(youtube_url: str) -> Optional[str]:
    """
    Extract video ID from a YouTube URL.

    Supports various YouTube URL formats:
    - https://www.youtube.com/watch?v=VIDEO_ID
    - https://youtu.be/VIDEO_ID
    - https://www.youtube.com/embed/VIDEO_ID
    - https://www.youtube.com/shorts/VIDEO_ID

    Args:
        youtube_url: A YouTube URL string.

    Returns:
        The video ID if found, None otherwise.
    """
    if not youtube_url:
        return None

    parsed = urlparse(youtube_url)

    # Handle youtu.be short URLs
    if parsed.netloc in ("youtu.be", "www.youtu.be"):
        video_id = parsed.path.lstrip("/").split("/")[0]
        if video_id:
            return video_id
        return None

    if parsed.netloc in ("youtube.com", "www.youtube.com", "m.youtube.com"):
        if parsed.path == "/watch":
            video_ids = parse_qs(parsed.query).get("v")
            if video_ids:
                return video_ids[0]

        match = re.match(r"^/(embed|v|shorts)/([^/?]+)", parsed.path)
        if match:
            return match.group(2)

    return None


def resolve_video_id(value: Optional[str]) -> Optional[str]:
    """
    Resolve user input (URL or bare ID) to a YouTube video ID.

    Returns:
        An 11-character video ID, or None if the input is not recognizable.
    """
    if not value or not isinstance(value, str):
        return None

    value = value.strip()
    if VIDEO_ID_PATTERN.match(value):
        return value

    video_id = extract_video_id(value)
    if video_id and VIDEO_ID_PATTERN.match(video_id):
        return video_id
    return None
