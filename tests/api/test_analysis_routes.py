"""Tests for the /analyze endpoints."""
import json

import pytest
from unittest.mock import MagicMock

from talkalong.analysis.heuristics import build_heuristic_analysis
from talkalong.analysis.orchestrator import AnalysisOrchestrator
from talkalong.models import EpisodeMeta, TranscriptEntry

VTT = """WEBVTT

00:00:01.000 --> 00:00:02.000
I'm Peppa Pig.

00:00:03.000 --> 00:00:04.000
This is my little brother, George.
"""

LLM_JSON = json.dumps({
    "highlightPairs": [{
        "ts": 1,
        "childLine": "I'm Peppa Pig.",
        "partnerLine": "And I'm Daddy Pig!",
        "context": "Introductions.",
        "tip": "Point to yourself.",
    }],
    "summary": "Introductions.",
})


def use_provider(services, **kwargs):
    provider = MagicMock()
    if "side_effect" in kwargs:
        provider.complete.side_effect = kwargs["side_effect"]
    else:
        provider.complete.return_value = kwargs.get("response", LLM_JSON)
    services.orchestrator = AnalysisOrchestrator(provider=provider)
    return provider


# ---------------------------------------------------------------------------
# GET /analyze
# ---------------------------------------------------------------------------

@pytest.mark.unit
def test_get_missing_video_id(client):
    response = client.get("/analyze")
    assert response.status_code == 400
    assert response.json == {"error": "Missing videoId query parameter."}


@pytest.mark.unit
def test_get_invalid_video_id(client):
    response = client.get("/analyze?videoId=abc")
    assert response.status_code == 400


@pytest.mark.unit
def test_get_without_captions(client, services):
    response = client.get("/analyze?videoId=abc123def45")

    assert response.status_code == 200
    assert response.json["meta"] == {"title": "Muddy Puddles", "durationSec": 660}
    assert "No captions found" in response.json["message"]
    assert "highlightPairs" not in response.json
    services.captions.fetch_webvtt.assert_called_once_with("abc123def45")


@pytest.mark.unit
def test_get_with_captions_uses_heuristic(client, services):
    services.captions.fetch_webvtt.return_value = VTT

    response = client.get("/analyze?videoId=https://youtu.be/abc123def45")

    assert response.status_code == 200
    pairs = response.json["highlightPairs"]
    assert [p["childLine"] for p in pairs] == ["I'm Peppa Pig.", "This is my little brother, George."]
    assert [p["ts"] for p in pairs] == [1.0, 3.0]
    assert response.json["analysis"]["highlightPairs"] == pairs
    assert response.json["message"].startswith("Quick preview generated locally")


@pytest.mark.unit
def test_get_with_captions_uses_llm(client, services):
    services.captions.fetch_webvtt.return_value = VTT
    use_provider(services)

    response = client.get("/analyze?videoId=abc123def45")

    assert response.json["highlightPairs"][0]["partnerLine"] == "And I'm Daddy Pig!"
    assert response.json["message"].startswith("Used available captions")


# ---------------------------------------------------------------------------
# POST /analyze
# ---------------------------------------------------------------------------

TRANSCRIPT = [{"text": "hello", "ts": 0}, {"text": "friend", "ts": 10}]


@pytest.mark.unit
def test_post_missing_video_id(client):
    response = client.post("/analyze", json={"transcript": TRANSCRIPT})
    assert response.status_code == 400
    assert response.json == {"error": "Missing videoId in request body."}


@pytest.mark.unit
def test_post_invalid_video_id(client):
    response = client.post("/analyze", json={"videoId": "???", "transcript": TRANSCRIPT})
    assert response.status_code == 400


@pytest.mark.unit
@pytest.mark.parametrize("transcript", [None, [], "hello", {"text": "hi"}])
def test_post_requires_transcript_list(client, transcript):
    response = client.post("/analyze", json={"videoId": "abc123def45", "transcript": transcript})

    assert response.status_code == 400
    assert response.json == {"error": "Transcript must contain at least one entry."}


@pytest.mark.unit
def test_post_blank_entries_rejected(client):
    response = client.post("/analyze", json={
        "videoId": "abc123def45",
        "transcript": [{"text": "   ", "ts": 0}, {"ts": 3}, "junk"],
    })

    assert response.status_code == 400
    assert response.json == {"error": "Transcript entries were empty after cleaning."}


@pytest.mark.unit
def test_post_non_json_body(client):
    response = client.post("/analyze", data="hello", content_type="text/plain")
    assert response.status_code == 400


@pytest.mark.unit
def test_post_heuristic_when_unconfigured(client):
    response = client.post("/analyze", json={"videoId": "abc123def45", "transcript": TRANSCRIPT})

    assert response.status_code == 200
    body = response.json
    assert body["source"] == "heuristic"
    assert "warning" not in body
    assert [p["childLine"] for p in body["highlightPairs"]] == ["hello", "friend"]
    assert body["meta"]["title"] == "Muddy Puddles"


@pytest.mark.unit
def test_post_llm_success(client, services):
    use_provider(services)

    response = client.post("/analyze", json={"videoId": "abc123def45", "transcript": TRANSCRIPT})

    assert response.json["source"] == "llm"
    assert response.json["analysis"]["summary"] == "Introductions."


@pytest.mark.unit
def test_post_provider_failure_matches_heuristic(client, services):
    use_provider(services, side_effect=RuntimeError("upstream 500"))

    response = client.post("/analyze", json={"videoId": "abc123def45", "transcript": TRANSCRIPT})

    expected = build_heuristic_analysis(
        [TranscriptEntry("hello", 0.0), TranscriptEntry("friend", 10.0)],
        EpisodeMeta(title="Muddy Puddles", duration_sec=660),
    ).to_dict()
    assert response.status_code == 200
    assert response.json["source"] == "heuristic"
    assert response.json["warning"] == "upstream 500"
    assert response.json["analysis"] == expected


@pytest.mark.unit
def test_post_entries_are_trimmed_and_coerced(client, services):
    provider = use_provider(services)

    client.post("/analyze", json={
        "videoId": "abc123def45",
        "transcript": [{"text": "  hello  ", "ts": "later"}, {"text": "", "ts": 5}],
    })

    prompt = provider.complete.call_args[0][1]
    assert "[00:00] hello" in prompt


@pytest.mark.unit
def test_post_array_body_rejected(client):
    response = client.post("/analyze", json=[{"videoId": "abc123def45", "transcript": TRANSCRIPT}])

    assert response.status_code == 400
    assert response.json == {"error": "Missing videoId in request body."}
