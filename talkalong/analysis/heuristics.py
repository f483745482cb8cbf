"""Template-based highlight pairs and practice feedback.

Used whenever no language model is configured or the model call fails.
Output depends only on the input, so identical transcripts always yield
identical highlights.
"""
import re
from dataclasses import dataclass
from typing import Optional

from talkalong.models import (
    EpisodeAnalysis,
    EpisodeMeta,
    HighlightPair,
    TranscriptEntry,
    coerce_ts,
)

DEFAULT_HIGHLIGHT_LIMIT = 10

ENCOURAGEMENTS = [
    "Praise the effort and repeat slowly together.",
    "Clap along to the rhythm to help with pronunciation.",
    "Switch roles and let your child lead the phrase.",
    "Add gestures to make the line easier to remember.",
    "Turn it into a short chant and repeat three times.",
    "Use a soft voice first, then a brave voice.",
    "Try saying the line while acting it out.",
    "Ask what the line might mean and rephrase together.",
    "Highlight the key word by stretching it out.",
    "Celebrate with a high-five after repeating.",
]

CONTEXT_TEMPLATES = [
    "Peppa is sharing a playful moment, so echo the line and everyone joins the fun.",
    "This line is great for turn-taking practice between Peppa and Buddy.",
    "Use this moment to emphasize kind, friendly language.",
    "Great opportunity to focus on clear pronunciation of the key words.",
    "Try repeating the phrase with different expressions to build confidence.",
]


def clean_text(text: str) -> str:
    """Collapse internal whitespace and trim."""
    return re.sub(r"\s+", " ", text or "").strip()


def build_partner_line(original: str) -> str:
    if not original:
        return "Let’s try that line together!"
    return f"Let’s say: “{original}”"


def build_heuristic_analysis(
    transcript: list[TranscriptEntry],
    meta: Optional[EpisodeMeta] = None,
    limit: int = DEFAULT_HIGHLIGHT_LIMIT,
) -> EpisodeAnalysis:
    """
    Pick highlight pairs from a transcript without a language model.

    The first `limit` non-empty lines become child lines; context and tip
    rotate through fixed template lists by position.

    Args:
        transcript: Time-ordered transcript entries.
        meta: Episode metadata, used for the summary line.
        limit: Maximum number of highlight pairs.

    Returns:
        EpisodeAnalysis with min(limit, non-empty entries) pairs.
    """
    meaningful = []
    for entry in transcript:
        text = clean_text(entry.text)
        if text:
            meaningful.append((coerce_ts(entry.ts), text))

    highlights = []
    for i, (ts, text) in enumerate(meaningful[:max(0, limit)]):
        highlights.append(HighlightPair(
            ts=ts,
            child_line=text,
            partner_line=build_partner_line(text),
            context=CONTEXT_TEMPLATES[i % len(CONTEXT_TEMPLATES)],
            tip=ENCOURAGEMENTS[i % len(ENCOURAGEMENTS)],
        ))

    if meta is not None and meta.title:
        summary = f"Highlights for “{meta.title}” using locally captured Whisper phrases."
    else:
        summary = "Highlights generated from the latest Whisper transcript."

    return EpisodeAnalysis(highlight_pairs=highlights, summary=summary)


@dataclass
class AttemptFeedback:
    score: int
    message: str
    tip: str

    def to_dict(self) -> dict:
        return {"score": self.score, "message": self.message, "tip": self.tip}


def build_attempt_feedback(expected: str, attempt: str) -> AttemptFeedback:
    """
    Score a practice attempt by word overlap with the expected line.

    Score is the share of attempt words found in the expected line,
    relative to the expected word count, as 0-100.
    """
    target_words = [w for w in clean_text(expected).lower().split(" ") if w]
    attempt_words = [w for w in clean_text(attempt).lower().split(" ") if w]

    if not target_words or not attempt_words:
        return AttemptFeedback(
            score=0,
            message="먼저 한 구절을 골라 함께 읽어보세요!",
            tip="짧은 문장을 선택해서 천천히 따라 읽도록 도와주세요.",
        )

    target_set = set(target_words)
    matches = sum(1 for word in attempt_words if word in target_set)
    # Repeated words can push the ratio past 1
    score = min(100, int(matches / len(target_words) * 100 + 0.5))

    if score >= 80:
        message = "너무 잘했어요! 거의 완벽하게 따라 했어요!"
        tip = "이번에는 감정을 넣어서 연기하듯 말해볼까요?"
    elif score >= 50:
        message = "좋은 시도였어요! 조금만 더 또렷하게 말해볼까요?"
        tip = "모음 소리를 길게 늘려 말하면 훨씬 또렷해져요."
    else:
        message = "처음에는 어렵지만 괜찮아요. 천천히 한 단어씩 따라 해봐요."
        tip = "아이와 함께 입모양을 크게 하면서 천천히 따라 해보세요."

    return AttemptFeedback(score=score, message=message, tip=tip)
