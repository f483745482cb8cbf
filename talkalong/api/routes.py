from flask import Blueprint, jsonify, request

from talkalong import __version__
from talkalong.analysis.heuristics import build_attempt_feedback
from talkalong.api.services import get_services

api = Blueprint("api", __name__)


@api.route("/health")
def health():
    """Liveness check."""
    return jsonify({"status": "ok"})


@api.route("/version")
def version():
    """Return current API version."""
    return jsonify({"version": __version__})


@api.route("/suggestions")
def suggestions():
    """
    Suggest 10-16 minute episodes from the configured channel.

    Returns:
        JSON with up to 8 videos: videoId, title, durationSec, thumbnail,
        publishedAt. Empty list when YouTube is unconfigured or failing.
    """
    services = get_services()
    videos = services.youtube.get_suggestions(services.channel_id)
    return jsonify({"videos": [video.to_dict() for video in videos]})


@api.route("/feedback", methods=["POST"])
def feedback():
    """
    Score a practice attempt against the expected line.

    Body:
        expected: The highlight line being practiced.
        attempt: What the child said.

    Returns:
        JSON with score (0-100), message and tip.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "expected and attempt fields are required."}), 400

    expected = data.get("expected")
    attempt = data.get("attempt")

    if not isinstance(expected, str) or not isinstance(attempt, str) or not expected or not attempt:
        return jsonify({"error": "expected and attempt fields are required."}), 400

    return jsonify(build_attempt_feedback(expected, attempt).to_dict())
