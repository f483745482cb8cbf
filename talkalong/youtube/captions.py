"""YouTube caption fetching and WebVTT parsing."""
import logging
import re
from typing import Optional
from xml.etree.ElementTree import ParseError

import requests
from youtube_transcript_api import (
    YouTubeTranscriptApi,
    CouldNotRetrieveTranscript,
    NoTranscriptFound,
)

from talkalong.models import TranscriptEntry
from talkalong.youtube.timestamp import parse_vtt_timecode

logger = logging.getLogger(__name__)

CUE_SEPARATOR = "-->"


def _clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def parse_webvtt(document: str) -> list[TranscriptEntry]:
    """
    Parse a WebVTT caption document into a time-ordered transcript.

    Blocks are separated by blank lines. Each usable block has a
    "start --> end" line followed by one or more text lines. Blocks
    without a parseable start time or without text are skipped.

    Args:
        document: Full caption document text.

    Returns:
        TranscriptEntry list sorted by ts (stable for equal timestamps).
        Empty when nothing could be parsed.
    """
    if not document:
        return []

    blocks = [block.strip() for block in document.replace("\r\n", "\n").split("\n\n")]

    entries = []
    for block in blocks:
        if not block:
            continue

        lines = [line for line in block.split("\n") if line]
        if len(lines) < 2:
            continue

        time_line_index = next(
            (i for i, line in enumerate(lines) if CUE_SEPARATOR in line), None
        )
        if time_line_index is None:
            continue

        start_raw = lines[time_line_index].split(CUE_SEPARATOR)[0].strip()
        ts = parse_vtt_timecode(start_raw)
        if ts is None:
            continue

        text = _clean_text(" ".join(lines[time_line_index + 1:]))
        if not text:
            continue

        entries.append(TranscriptEntry(text=text, ts=ts))

    # sorted() is stable, so equal timestamps keep document order
    return sorted(entries, key=lambda entry: entry.ts)


def format_vtt_timecode(seconds: float) -> str:
    """Format seconds as a WebVTT timecode (HH:MM:SS.mmm)."""
    total_millis = max(0, int(round(seconds * 1000)))
    hours, remainder = divmod(total_millis, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, millis = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def snippets_to_webvtt(snippets: list[dict]) -> str:
    """
    Render caption snippets as a WebVTT document.

    Args:
        snippets: Dicts with 'text', 'start' and 'duration' (seconds).

    Returns:
        WebVTT document text with a header line.
    """
    blocks = ["WEBVTT"]
    for snippet in snippets:
        start = float(snippet["start"])
        end = start + float(snippet.get("duration", 0))
        text = snippet.get("text", "").strip()
        blocks.append(f"{format_vtt_timecode(start)} --> {format_vtt_timecode(end)}\n{text}")
    return "\n\n".join(blocks) + "\n"


class CaptionClient:
    """Client for fetching YouTube caption tracks as WebVTT documents."""

    def __init__(self, languages: Optional[list[str]] = None, api: Optional[YouTubeTranscriptApi] = None):
        """
        Initialize the caption client.

        Args:
            languages: Preferred caption languages in order (default: ['en']).
            api: Transcript API instance (created lazily if omitted).
        """
        self.languages = languages or ["en"]
        self._api = api

    @property
    def api(self) -> YouTubeTranscriptApi:
        if self._api is None:
            self._api = YouTubeTranscriptApi()
        return self._api

    def fetch_webvtt(self, video_id: str) -> Optional[str]:
        """
        Fetch a caption track for a video and render it as WebVTT.

        Manually created tracks are preferred over auto-generated ones.

        Args:
            video_id: YouTube video ID.

        Returns:
            WebVTT document, or None if no captions are available.
        """
        try:
            transcript_list = self.api.list(video_id)

            transcript = None
            try:
                transcript = transcript_list.find_manually_created_transcript(self.languages)
            except NoTranscriptFound:
                try:
                    transcript = transcript_list.find_generated_transcript(self.languages)
                except NoTranscriptFound:
                    return None

            fetched = transcript.fetch()
            snippets = fetched.to_raw_data()
        except CouldNotRetrieveTranscript as e:
            logger.info("No captions for %s: %s", video_id, type(e).__name__)
            return None
        except requests.RequestException as e:
            logger.warning("Caption request failed for %s: %s", video_id, e)
            return None
        except ParseError as e:
            logger.warning("Malformed caption track for %s: %s", video_id, e)
            return None

        if not snippets:
            return None
        return snippets_to_webvtt(snippets)

    def fetch_transcript(self, video_id: str) -> list[TranscriptEntry]:
        """Fetch captions and parse them into transcript entries."""
        document = self.fetch_webvtt(video_id)
        if not document:
            return []
        return parse_webvtt(document)
