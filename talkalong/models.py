"""Episode, transcript and highlight data types with their JSON wire shapes."""
import math
from dataclasses import dataclass, field
from typing import Optional


def coerce_ts(value) -> float:
    """Convert a loosely-typed timestamp to a finite float, or 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        ts = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(ts):
        return 0.0
    return ts


@dataclass
class TranscriptEntry:
    text: str
    ts: float

    def to_dict(self) -> dict:
        return {"text": self.text, "ts": self.ts}

    @classmethod
    def from_dict(cls, data: dict) -> "TranscriptEntry":
        """Build an entry from request JSON, trimming text and coercing ts."""
        text = data.get("text")
        return cls(
            text=text.strip() if isinstance(text, str) else "",
            ts=coerce_ts(data.get("ts")),
        )


@dataclass(frozen=True)
class EpisodeMeta:
    title: str
    duration_sec: int = 0
    thumbnail: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"title": self.title, "durationSec": self.duration_sec}
        if self.thumbnail:
            data["thumbnail"] = self.thumbnail
        return data


@dataclass
class HighlightPair:
    ts: float
    child_line: str
    partner_line: str
    context: str
    tip: str

    def to_dict(self) -> dict:
        return {
            "ts": self.ts,
            "childLine": self.child_line,
            "partnerLine": self.partner_line,
            "context": self.context,
            "tip": self.tip,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HighlightPair":
        return cls(
            ts=coerce_ts(data.get("ts")),
            child_line=str(data.get("childLine") or ""),
            partner_line=str(data.get("partnerLine") or ""),
            context=str(data.get("context") or ""),
            tip=str(data.get("tip") or ""),
        )


@dataclass
class EpisodeAnalysis:
    highlight_pairs: list[HighlightPair] = field(default_factory=list)
    summary: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"highlightPairs": [pair.to_dict() for pair in self.highlight_pairs]}
        if self.summary is not None:
            data["summary"] = self.summary
        if self.notes is not None:
            data["notes"] = self.notes
        return data


@dataclass
class VideoSummary:
    """One suggested episode for the picker."""
    video_id: str
    title: str
    duration_sec: int
    thumbnail: str
    published_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "videoId": self.video_id,
            "title": self.title,
            "durationSec": self.duration_sec,
            "thumbnail": self.thumbnail,
            "publishedAt": self.published_at,
        }
