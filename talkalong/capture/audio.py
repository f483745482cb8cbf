"""Audio sources for the capture pipeline."""
import io
import logging
import os

import numpy as np
import soundfile as sf

from talkalong.capture.errors import UnsupportedFormatError

logger = logging.getLogger(__name__)


class AudioStream:
    """An open audio input. read_slice() returns audio captured since the last call."""

    def read_slice(self) -> bytes:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class AudioRecorder:
    """Acquires audio input streams."""

    # Container extension of the encoded slices, used as the upload filename
    file_extension = ".webm"

    def open(self) -> AudioStream:
        """
        Acquire an input stream.

        Raises:
            PermissionError: Access to the input was denied.
            NoInputDeviceError / FileNotFoundError: No input is available.
            UnsupportedFormatError: The input cannot be recorded.
        """
        raise NotImplementedError


class FileAudioStream(AudioStream):
    """Plays back decoded samples one slice per read."""

    def __init__(self, samples: np.ndarray, samplerate: int, slice_seconds: float):
        self.samples = samples
        self.samplerate = samplerate
        self.slice_frames = max(1, int(slice_seconds * samplerate))
        self._cursor = 0
        self._closed = False

    @property
    def position(self) -> float:
        """Seconds of audio handed out so far."""
        return self._cursor / self.samplerate

    @property
    def exhausted(self) -> bool:
        return self._closed or self._cursor >= len(self.samples)

    def read_slice(self) -> bytes:
        """Return the next slice encoded as 16-bit WAV, or b"" when done."""
        if self.exhausted:
            return b""

        end = min(len(self.samples), self._cursor + self.slice_frames)
        chunk = self.samples[self._cursor:end]
        self._cursor = end

        buffer = io.BytesIO()
        sf.write(buffer, chunk, self.samplerate, format="WAV", subtype="PCM_16")
        return buffer.getvalue()

    def close(self) -> None:
        self._closed = True


class FileAudioRecorder(AudioRecorder):
    """
    Uses an audio file as the capture input.

    Stands in for a microphone when replaying a recorded session; the
    stream position doubles as the playback clock.
    """

    file_extension = ".wav"

    def __init__(self, path: str, slice_seconds: float = 8.0):
        self.path = path
        self.slice_seconds = slice_seconds
        self.stream = None

    @property
    def position(self) -> float:
        if self.stream is None:
            return 0.0
        return self.stream.position

    def open(self) -> FileAudioStream:
        if not os.path.exists(self.path):
            raise FileNotFoundError(f"Audio file not found: {self.path}")

        try:
            samples, samplerate = sf.read(self.path, dtype="float32")
        except sf.LibsndfileError as e:
            raise UnsupportedFormatError(str(e)) from e

        if samples.ndim > 1:
            samples = samples.mean(axis=1)

        logger.info(
            "Opened %s (%.1fs at %d Hz)", self.path, len(samples) / samplerate, samplerate
        )
        self.stream = FileAudioStream(samples, samplerate, self.slice_seconds)
        return self.stream
