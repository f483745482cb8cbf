import pytest
from unittest.mock import MagicMock

from talkalong.analysis.orchestrator import AnalysisOrchestrator
from talkalong.api.app import create_app
from talkalong.api.services import Services
from talkalong.models import EpisodeMeta


@pytest.fixture
def services():
    """Services with mocked YouTube, captions and speech-to-text; heuristic analysis."""
    youtube = MagicMock()
    youtube.fetch_video_meta.return_value = EpisodeMeta(title="Muddy Puddles", duration_sec=660)
    youtube.get_suggestions.return_value = []
    captions = MagicMock()
    captions.fetch_webvtt.return_value = None
    return Services(
        youtube=youtube,
        captions=captions,
        orchestrator=AnalysisOrchestrator(provider=None),
        transcriber=MagicMock(),
        channel_id="UCpeppa",
    )


@pytest.fixture
def app(services):
    app = create_app(services=services)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
