"""Speech-to-text providers."""
from .whisper import OpenAITranscriber, HttpTranscriber, TranscriptionError, get_transcriber

__all__ = [
    "OpenAITranscriber",
    "HttpTranscriber",
    "TranscriptionError",
    "get_transcriber",
]
