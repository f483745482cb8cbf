"""Provider wiring for the HTTP layer."""
from dataclasses import dataclass
from typing import Optional

from flask import current_app

from talkalong.analysis.llm import get_provider
from talkalong.analysis.orchestrator import AnalysisOrchestrator
from talkalong.transcription.whisper import get_transcriber
from talkalong.youtube.captions import CaptionClient
from talkalong.youtube.client import YouTubeClient

EXTENSION_KEY = "talkalong"


@dataclass
class Services:
    youtube: YouTubeClient
    captions: CaptionClient
    orchestrator: AnalysisOrchestrator
    transcriber: Optional[object] = None
    channel_id: Optional[str] = None


def build_services(config) -> Services:
    """Construct every external collaborator from configuration."""
    return Services(
        youtube=YouTubeClient(api_key=config.YOUTUBE_API_KEY),
        captions=CaptionClient(),
        orchestrator=AnalysisOrchestrator(
            provider=get_provider(config),
            transcript_limit=config.LLM_TRANSCRIPT_LIMIT,
        ),
        transcriber=get_transcriber(config),
        channel_id=config.YOUTUBE_CHANNEL_ID,
    )


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
