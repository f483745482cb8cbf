"""Live audio capture aligned to video playback."""
from .audio import AudioRecorder, AudioStream, FileAudioRecorder
from .errors import (
    CaptureError,
    CaptureErrorKind,
    NoInputDeviceError,
    UnsupportedFormatError,
    classify_capture_error,
)
from .pipeline import AudioSlice, CapturePipeline, CaptureState, SLICE_MS
from .transcript import TranscriptBuffer
from .work_queue import TranscriptionQueue

__all__ = [
    "AudioRecorder",
    "AudioStream",
    "FileAudioRecorder",
    "CaptureError",
    "CaptureErrorKind",
    "NoInputDeviceError",
    "UnsupportedFormatError",
    "classify_capture_error",
    "AudioSlice",
    "CapturePipeline",
    "CaptureState",
    "SLICE_MS",
    "TranscriptBuffer",
    "TranscriptionQueue",
]
