"""Live capture pipeline: audio slices -> serialized transcription -> ordered transcript."""
import logging
import math
import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from talkalong.capture.errors import classify_capture_error
from talkalong.capture.transcript import TranscriptBuffer
from talkalong.capture.work_queue import TranscriptionQueue
from talkalong.models import TranscriptEntry

logger = logging.getLogger(__name__)

SLICE_MS = 8000


class CaptureState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"


@dataclass
class AudioSlice:
    """One finalized slice waiting for transcription."""
    session_id: str
    generation: int
    index: int
    start_ts: float  # playback position when the slice began
    audio: bytes
    filename: str


class CapturePipeline:
    """
    Records audio in fixed slices and builds a transcript aligned to playback.

    Slice boundaries come from the playback clock at hand-off time, so each
    transcript entry is stamped with the video position where its slice
    started. Transcription runs on a single worker in slice order.
    """

    def __init__(
        self,
        recorder,
        transcriber,
        clock: Optional[Callable[[], float]] = None,
        transcript: Optional[TranscriptBuffer] = None,
        slice_ms: int = SLICE_MS,
        on_entry: Optional[Callable[[TranscriptEntry], None]] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            recorder: AudioRecorder providing open() -> AudioStream.
            transcriber: Object with transcribe(audio, filename) -> str.
            clock: Returns the current playback position in seconds.
            transcript: Shared transcript buffer (a new one if omitted).
            slice_ms: Slice length in milliseconds.
            on_entry: Called with each entry added to the transcript.
        """
        self.recorder = recorder
        self.transcriber = transcriber
        self.clock = clock
        self.transcript = transcript if transcript is not None else TranscriptBuffer()
        self.slice_ms = slice_ms
        self.on_entry = on_entry

        self.state = CaptureState.IDLE
        self.session_id: Optional[str] = None
        self.video_id: Optional[str] = None
        self._stream = None
        self._slice_index = 0
        self._slice_start = 0.0
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._ticker: Optional[threading.Thread] = None
        self.queue = TranscriptionQueue(self._transcribe_slice)

    @property
    def is_recording(self) -> bool:
        return self.state == CaptureState.RECORDING

    def _playback_position(self, fallback: float) -> float:
        if self.clock is None:
            return fallback
        try:
            value = self.clock()
        except Exception as e:
            logger.warning("Playback clock unavailable: %s", e)
            return fallback
        if value is None:
            return fallback
        try:
            value = float(value)
        except (TypeError, ValueError):
            return fallback
        if not math.isfinite(value):
            return fallback
        return max(0.0, value)

    def start(self, video_id: str) -> str:
        """
        Start recording for a video.

        Args:
            video_id: Video being played; required.

        Returns:
            The new session ID.

        Raises:
            ValueError: If no video ID is given (nothing is acquired).
            CaptureError: If the audio input could not be opened.
        """
        if not video_id or not str(video_id).strip():
            raise ValueError("A video ID is required to start capture")

        if self.is_recording:
            self.stop(wait=False)

        stream = None
        try:
            stream = self.recorder.open()
            with self._lock:
                self._stream = stream
                self.session_id = uuid.uuid4().hex
                self.video_id = video_id
                self._slice_index = 0
                self._slice_start = self._playback_position(0.0)
                self._stop_event = threading.Event()
                self._ticker = threading.Thread(
                    target=self._tick,
                    args=(self._stop_event,),
                    name=f"capture-{self.session_id[:8]}",
                    daemon=True,
                )
                self.state = CaptureState.RECORDING
                self._ticker.start()
        except Exception as e:
            if stream is not None:
                try:
                    stream.close()
                except Exception as close_error:
                    logger.warning("Error releasing audio input: %s", close_error)
            with self._lock:
                self._stream = None
                self._ticker = None
                self.state = CaptureState.IDLE
            error = classify_capture_error(e)
            logger.warning("Could not start capture (%s): %s", error.kind.value, e)
            raise error from e

        logger.info("Capture started for %s (session %s)", video_id, self.session_id)
        return self.session_id

    def _tick(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.slice_ms / 1000):
            try:
                self.hand_off()
            except Exception:
                logger.exception("Failed to hand off audio slice")

    def _finalize_slice(self) -> Optional[AudioSlice]:
        # Caller holds self._lock
        if self._stream is None:
            return None

        audio = self._stream.read_slice()
        if not audio:
            return None

        start = self._slice_start
        self._slice_start = self._playback_position(start + self.slice_ms / 1000)
        index = self._slice_index
        self._slice_index += 1
        extension = getattr(self.recorder, "file_extension", ".webm")
        return AudioSlice(
            session_id=self.session_id,
            generation=self.transcript.generation,
            index=index,
            start_ts=start,
            audio=audio,
            filename=f"chunk-{index}{extension}",
        )

    def hand_off(self) -> Optional[AudioSlice]:
        """
        Finalize the in-progress slice and enqueue it for transcription.

        Returns:
            The enqueued slice, or None when not recording or no audio
            was captured.
        """
        with self._lock:
            if not self.is_recording:
                return None
            audio_slice = self._finalize_slice()

        if audio_slice is not None:
            self.queue.submit(audio_slice)
        return audio_slice

    def stop(self, wait: bool = True, timeout: Optional[float] = None) -> bool:
        """
        Stop recording and release the audio input.

        The final partial slice is still enqueued. In-flight and queued
        transcriptions keep running.

        Args:
            wait: Block until every enqueued slice has settled.
            timeout: Maximum seconds to wait for the drain.

        Returns:
            True if the queue is drained (or wait is False).
        """
        with self._lock:
            ticker = self._ticker if self.is_recording else None
            self._stop_event.set()

        if ticker is not None and ticker is not threading.current_thread():
            ticker.join()

        audio_slice = None
        with self._lock:
            if self.is_recording:
                try:
                    audio_slice = self._finalize_slice()
                finally:
                    try:
                        self._stream.close()
                    except Exception as e:
                        logger.warning("Error releasing audio input: %s", e)
                    self._stream = None
                    self._ticker = None
                    self.state = CaptureState.IDLE
                    logger.info(
                        "Capture stopped for %s after %d slices", self.video_id, self._slice_index
                    )

        if audio_slice is not None:
            self.queue.submit(audio_slice)

        if wait:
            return self.drain(timeout)
        return True

    def drain(self, timeout: Optional[float] = None) -> bool:
        """Wait until every enqueued slice has been transcribed or dropped."""
        return self.queue.drain(timeout)

    def reset(self) -> int:
        """Clear the transcript for a new video; late results are discarded."""
        return self.transcript.clear()

    def close(self) -> None:
        """Stop capture and shut down the transcription worker."""
        self.stop(wait=False)
        self.queue.close()

    def _transcribe_slice(self, audio_slice: AudioSlice) -> None:
        try:
            text = self.transcriber.transcribe(audio_slice.audio, audio_slice.filename)
        except Exception as e:
            logger.warning(
                "Dropping slice %d at %.1fs: %s", audio_slice.index, audio_slice.start_ts, e
            )
            return

        text = (text or "").strip()
        if not text:
            return

        entry = TranscriptEntry(text=text, ts=audio_slice.start_ts)
        if not self.transcript.insert(entry, generation=audio_slice.generation):
            logger.info(
                "Discarding slice %d of session %s from a cleared transcript",
                audio_slice.index,
                audio_slice.session_id,
            )
            return

        logger.info('Recognized at %.1fs: "%s"', entry.ts, text)
        if self.on_entry is not None:
            self.on_entry(entry)
