"""Speech-to-text for captured audio slices."""
import logging
from typing import Optional

import openai
import requests

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "audio.webm"


class TranscriptionError(Exception):
    """Error transcribing an audio slice."""
    pass


class OpenAITranscriber:
    """Transcribes short audio clips with the OpenAI transcription API."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini-transcribe", client: Optional[openai.OpenAI] = None):
        """
        Initialize the transcriber.

        Args:
            api_key: OpenAI API key.
            model: Transcription model name.
            client: Preconfigured OpenAI client (created lazily if omitted).
        """
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self) -> openai.OpenAI:
        if self._client is None:
            self._client = openai.OpenAI(api_key=self.api_key)
        return self._client

    def transcribe(self, audio: bytes, filename: str = DEFAULT_FILENAME) -> str:
        """
        Transcribe one audio clip.

        Args:
            audio: Encoded audio bytes (webm, wav, mp4, ...).
            filename: Name whose extension tells the API the container format.

        Returns:
            Trimmed transcript text, possibly empty.

        Raises:
            TranscriptionError: If the API call fails.
        """
        try:
            response = self.client.audio.transcriptions.create(
                file=(filename or DEFAULT_FILENAME, audio),
                model=self.model,
            )
        except openai.OpenAIError as e:
            raise TranscriptionError(f"Transcription failed: {e}") from e
        return (response.text or "").strip()


class HttpTranscriber:
    """Transcribes slices through a running Talkalong server's /stt endpoint."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def transcribe(self, audio: bytes, filename: str = DEFAULT_FILENAME) -> str:
        """
        Post a slice as multipart field "audio" and return the text.

        Raises:
            TranscriptionError: On connection errors or non-2xx responses.
        """
        try:
            response = self.session.post(
                f"{self.base_url}/stt",
                files={"audio": (filename or DEFAULT_FILENAME, audio)},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TranscriptionError(f"Could not reach transcription server: {e}") from e

        if response.status_code >= 400:
            try:
                detail = response.json().get("error", "")
            except ValueError:
                detail = response.text[:200]
            raise TranscriptionError(f"Transcription server returned {response.status_code}: {detail}")

        return (response.json().get("text") or "").strip()


def get_transcriber(config) -> Optional[OpenAITranscriber]:
    """
    Factory function to get the server-side transcriber.

    Returns:
        OpenAITranscriber, or None when OPENAI_API_KEY is not configured.
    """
    if not config.OPENAI_API_KEY:
        return None
    return OpenAITranscriber(api_key=config.OPENAI_API_KEY, model=config.WHISPER_MODEL)
