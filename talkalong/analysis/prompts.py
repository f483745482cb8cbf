"""System prompt and user prompt template for highlight selection."""
import json
from typing import Optional

from talkalong.models import EpisodeMeta, TranscriptEntry
from talkalong.youtube.timestamp import format_prompt_timestamp

SYSTEM_PROMPT = (
    "You are a playful English tutor helping families practice short Peppa Pig "
    "phrases together. Respond in JSON following the provided schema."
)

RESPONSE_LAYOUT = {
    "highlightPairs": [
        {
            "ts": 12,
            "childLine": "Peppa shows me her toy.",
            "partnerLine": "Let's try saying it together!",
            "context": "Use this line to encourage sharing vocabulary.",
            "tip": "Exaggerate the vowels to make it easier to hear.",
        }
    ],
    "summary": "Short summary of the episode focus.",
    "notes": "Optional coaching notes.",
}

DEFAULT_EPISODE_TITLE = "Unknown Peppa Pig episode"


def format_transcript_lines(entries: list[TranscriptEntry], limit: int) -> str:
    """Render the last `limit` entries as "[mm:ss] text" lines."""
    if limit <= 0:
        return ""
    return "\n".join(
        f"[{format_prompt_timestamp(entry.ts)}] {entry.text}"
        for entry in entries[-limit:]
    )


def make_user_prompt(transcript_text: str, meta: Optional[EpisodeMeta] = None) -> str:
    """Build the user prompt containing episode details and transcript lines."""
    title = meta.title if meta is not None and meta.title else DEFAULT_EPISODE_TITLE
    duration = meta.duration_sec if meta is not None else 0

    return "\n".join([
        f"Video title: {title}",
        f"Video duration: {duration} seconds",
        "",
        "Audience: Korean parent practicing English with a 4-year-old child.",
        "Goal: pick playful highlight phrases that are short, positive, and easy to repeat.",
        "Constraints:",
        "- Use only the provided transcript lines verbatim.",
        "- Provide exactly one playful partner response per child line.",
        "- Context and tips should be concise and encouraging. Keep under 140 characters.",
        "",
        "Return a strict JSON object with this layout (no markdown, no commentary):",
        json.dumps(RESPONSE_LAYOUT, indent=2),
        "",
        "Transcript:",
        transcript_text,
    ])
