"""Speech-to-text endpoint for captured audio slices."""
import logging

from flask import Blueprint, jsonify, request

from talkalong.api.services import get_services
from talkalong.transcription.whisper import TranscriptionError

logger = logging.getLogger(__name__)

stt_api = Blueprint("stt_api", __name__, url_prefix="/stt")


@stt_api.route("", methods=["POST"])
def transcribe_slice():
    """
    Transcribe one uploaded audio slice.

    Form data:
        audio: The audio file (webm, wav, mp4, ...).

    Returns:
        JSON {text}. 503 when no transcription provider is configured.
        Provider failures return empty text with a warning.
    """
    upload = request.files.get("audio")
    if upload is None:
        return jsonify({"error": 'Missing audio file in form-data field "audio".'}), 400

    transcriber = get_services().transcriber
    if transcriber is None:
        return jsonify({
            "error": "Whisper transcription is not configured on the server.",
            "message": "Set OPENAI_API_KEY to enable live transcription.",
        }), 503

    audio = upload.read()
    filename = upload.filename or "audio.webm"
    try:
        text = transcriber.transcribe(audio, filename)
    except TranscriptionError as e:
        logger.warning("Transcription of %s (%d bytes) failed: %s", filename, len(audio), e)
        return jsonify({"text": "", "warning": "Transcription failed."})

    return jsonify({"text": text})
