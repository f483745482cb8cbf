"""Highlight analysis endpoints."""
import logging

from flask import Blueprint, jsonify, request

from talkalong.analysis.heuristics import build_heuristic_analysis
from talkalong.api.services import get_services
from talkalong.models import TranscriptEntry
from talkalong.youtube.captions import parse_webvtt
from talkalong.youtube.timestamp import resolve_video_id

logger = logging.getLogger(__name__)

analysis_api = Blueprint("analysis_api", __name__, url_prefix="/analyze")


@analysis_api.route("", methods=["GET"])
def preview_analysis():
    """
    Quick highlight preview from the video's published captions.

    Query params:
        videoId: YouTube video ID or URL.

    Returns:
        JSON with meta plus analysis/highlightPairs when captions exist,
        otherwise meta and a message asking for live capture.
    """
    raw_video_id = request.args.get("videoId", "").strip()
    if not raw_video_id:
        return jsonify({"error": "Missing videoId query parameter."}), 400

    video_id = resolve_video_id(raw_video_id)
    if not video_id:
        return jsonify({"error": "Invalid videoId. Paste a YouTube URL or video ID."}), 400

    services = get_services()
    meta = services.youtube.fetch_video_meta(video_id)

    document = services.captions.fetch_webvtt(video_id)
    transcript = parse_webvtt(document) if document else []
    if not transcript:
        return jsonify({
            "meta": meta.to_dict(),
            "message": "No captions found. Play the video and let Whisper capture live audio for highlights.",
        })

    result = services.orchestrator.analyze(transcript, meta)
    if result.source == "llm":
        message = "Used available captions for a quick preview. Whisper capture will add more detail."
    else:
        message = "Quick preview generated locally. Whisper capture will refine the highlights."

    analysis = result.analysis.to_dict()
    return jsonify({
        "meta": meta.to_dict(),
        "analysis": analysis,
        "highlightPairs": analysis["highlightPairs"],
        "message": message,
    })


@analysis_api.route("", methods=["POST"])
def analyze_transcript():
    """
    Pick highlight pairs from a captured transcript.

    Body:
        videoId: YouTube video ID or URL.
        transcript: List of {text, ts} entries.

    Returns:
        JSON with meta, analysis, highlightPairs, source and, when the
        language model failed, a warning.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    raw_video_id = data.get("videoId")
    if not raw_video_id:
        return jsonify({"error": "Missing videoId in request body."}), 400

    video_id = resolve_video_id(raw_video_id)
    if not video_id:
        return jsonify({"error": "Invalid videoId. Paste a YouTube URL or video ID."}), 400

    raw_transcript = data.get("transcript")
    if not isinstance(raw_transcript, list) or not raw_transcript:
        return jsonify({"error": "Transcript must contain at least one entry."}), 400

    cleaned = [
        TranscriptEntry.from_dict(item)
        for item in raw_transcript
        if isinstance(item, dict)
    ]
    cleaned = [entry for entry in cleaned if entry.text]
    if not cleaned:
        return jsonify({"error": "Transcript entries were empty after cleaning."}), 400

    services = get_services()
    meta = services.youtube.fetch_video_meta(video_id)
    result = services.orchestrator.analyze(cleaned, meta)

    if not result.analysis.highlight_pairs:
        heuristic = build_heuristic_analysis(cleaned, meta).to_dict()
        return jsonify({
            "meta": meta.to_dict(),
            "analysis": heuristic,
            "highlightPairs": heuristic["highlightPairs"],
            "message": "Unable to create highlight pairs automatically.",
        })

    analysis = result.analysis.to_dict()
    response = {
        "meta": meta.to_dict(),
        "analysis": analysis,
        "highlightPairs": analysis["highlightPairs"],
        "source": result.source,
    }
    if result.error:
        response["warning"] = result.error
    return jsonify(response)
