"""Capture failures grouped into categories a parent can act on."""
from enum import Enum


class CaptureErrorKind(str, Enum):
    PERMISSION = "permission"
    NO_DEVICE = "no_device"
    UNSUPPORTED_FORMAT = "unsupported_format"
    UNKNOWN = "unknown"


MESSAGES = {
    CaptureErrorKind.PERMISSION: "Microphone permission was denied. Allow access to start Whisper capture.",
    CaptureErrorKind.NO_DEVICE: "No microphone was found. Check your input device settings.",
    CaptureErrorKind.UNSUPPORTED_FORMAT: "The selected audio recording format is not supported on this device.",
    CaptureErrorKind.UNKNOWN: "Could not access the microphone.",
}


class NoInputDeviceError(Exception):
    """No audio input device is available."""
    pass


class UnsupportedFormatError(Exception):
    """The audio input cannot be recorded in a supported format."""
    pass


class CaptureError(Exception):
    """Starting capture failed; carries a user-facing category and message."""

    def __init__(self, kind: CaptureErrorKind, message: str = None):
        self.kind = kind
        self.message = message or MESSAGES[kind]
        super().__init__(self.message)


def classify_capture_error(exc: BaseException) -> CaptureError:
    """Map a low-level acquisition error to a CaptureError."""
    if isinstance(exc, CaptureError):
        return exc
    if isinstance(exc, PermissionError):
        kind = CaptureErrorKind.PERMISSION
    elif isinstance(exc, (NoInputDeviceError, FileNotFoundError)):
        kind = CaptureErrorKind.NO_DEVICE
    elif isinstance(exc, UnsupportedFormatError) or "Invalid constraint" in str(exc):
        kind = CaptureErrorKind.UNSUPPORTED_FORMAT
    else:
        kind = CaptureErrorKind.UNKNOWN
    return CaptureError(kind)
