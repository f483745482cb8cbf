"""Chooses between the language model and the heuristic for highlight analysis."""
import json
import logging
from dataclasses import dataclass
from typing import Literal, Optional

from talkalong.analysis.heuristics import build_heuristic_analysis
from talkalong.analysis.prompts import SYSTEM_PROMPT, format_transcript_lines, make_user_prompt
from talkalong.models import EpisodeAnalysis, EpisodeMeta, HighlightPair, TranscriptEntry

logger = logging.getLogger(__name__)

DEFAULT_TRANSCRIPT_LIMIT = 24

# Fallback reasons
EMPTY_TRANSCRIPT = "empty_transcript"
NOT_CONFIGURED = "not_configured"
PROVIDER_ERROR = "provider_error"


class AnalysisError(Exception):
    """The language model produced no usable analysis."""
    pass


@dataclass
class AnalysisResult:
    """Outcome of an analysis: primary (model) or fallback (heuristic)."""
    kind: Literal["primary", "fallback"]
    analysis: EpisodeAnalysis
    reason: Optional[str] = None
    error: Optional[str] = None

    @property
    def source(self) -> str:
        return "llm" if self.kind == "primary" else "heuristic"

    @property
    def is_fallback(self) -> bool:
        return self.kind == "fallback"


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding markdown code fence if present."""
    raw = raw.strip()
    if "```" in raw:
        start = raw.find("```") + 3
        if raw[start:].startswith("json"):
            start += 4
        end = raw.rfind("```")
        if end >= start:
            raw = raw[start:end].strip()
        else:
            raw = raw[start:].strip()
    return raw


def parse_analysis(raw: str) -> EpisodeAnalysis:
    """
    Parse a model response into an EpisodeAnalysis.

    Raises:
        AnalysisError: If the text is empty, not a JSON object, or has no
            highlight pairs.
    """
    text = strip_code_fences(raw or "")
    if not text:
        raise AnalysisError("Language model returned an empty response")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise AnalysisError(f"Language model returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AnalysisError(f"Expected JSON object, got {type(data).__name__}")

    raw_pairs = data.get("highlightPairs")
    if not isinstance(raw_pairs, list):
        raise AnalysisError("Language model response has no highlightPairs list")

    pairs = [HighlightPair.from_dict(item) for item in raw_pairs if isinstance(item, dict)]
    if not pairs:
        raise AnalysisError("Language model returned zero highlight pairs")

    summary = data.get("summary")
    notes = data.get("notes")
    return EpisodeAnalysis(
        highlight_pairs=pairs,
        summary=summary if isinstance(summary, str) else None,
        notes=notes if isinstance(notes, str) else None,
    )


class AnalysisOrchestrator:
    """Produces highlight analysis, degrading to heuristics on any model failure."""

    def __init__(self, provider=None, transcript_limit: int = DEFAULT_TRANSCRIPT_LIMIT):
        """
        Initialize the orchestrator.

        Args:
            provider: Object with complete(system, prompt) -> str, or None
                      when no language model is configured.
            transcript_limit: Number of trailing transcript lines sent to
                              the model.
        """
        self.provider = provider
        self.transcript_limit = transcript_limit

    @property
    def llm_available(self) -> bool:
        return self.provider is not None

    def analyze(
        self,
        transcript: list[TranscriptEntry],
        meta: Optional[EpisodeMeta] = None,
    ) -> AnalysisResult:
        """
        Analyze a transcript into highlight pairs.

        Never raises for provider failures: the heuristic result is
        returned instead, with the failure message in `error`.
        """
        if not transcript:
            return AnalysisResult(
                kind="fallback",
                analysis=EpisodeAnalysis(highlight_pairs=[], summary="No transcript provided."),
                reason=EMPTY_TRANSCRIPT,
            )

        if not self.llm_available:
            return AnalysisResult(
                kind="fallback",
                analysis=build_heuristic_analysis(transcript, meta),
                reason=NOT_CONFIGURED,
            )

        try:
            analysis = self._request_analysis(transcript, meta)
        except Exception as e:
            logger.warning("Falling back to heuristic analysis: %s", e)
            return AnalysisResult(
                kind="fallback",
                analysis=build_heuristic_analysis(transcript, meta),
                reason=PROVIDER_ERROR,
                error=str(e) or type(e).__name__,
            )

        logger.info("Language model returned %d highlight pairs", len(analysis.highlight_pairs))
        return AnalysisResult(kind="primary", analysis=analysis)

    def _request_analysis(
        self,
        transcript: list[TranscriptEntry],
        meta: Optional[EpisodeMeta],
    ) -> EpisodeAnalysis:
        transcript_text = format_transcript_lines(transcript, self.transcript_limit)
        if not transcript_text:
            raise AnalysisError("Transcript prompt is empty")

        raw = self.provider.complete(SYSTEM_PROMPT, make_user_prompt(transcript_text, meta))
        return parse_analysis(raw)
