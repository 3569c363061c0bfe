"""Error codes and error handling utilities for Organizze preferences."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for preference operations."""

    # Theme errors
    THEME_UNKNOWN = auto()

    # Wallpaper errors
    MEDIA_UNSUPPORTED = auto()
    PAYLOAD_TOO_LARGE = auto()
    DECODE_FAILED = auto()

    # Persistence errors
    PERSIST_WRITE_FAILED = auto()
    PERSIST_QUOTA_EXCEEDED = auto()

    # Snapshot errors
    SNAPSHOT_INVALID = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.THEME_UNKNOWN: "Theme not found. Pick one of the available themes.",
    ErrorCode.MEDIA_UNSUPPORTED: "Please upload an image file.",
    ErrorCode.PAYLOAD_TOO_LARGE: "File size must be less than 5MB.",
    ErrorCode.DECODE_FAILED: "Error reading file. The upload may be corrupt or incomplete.",
    ErrorCode.PERSIST_WRITE_FAILED: "Could not save preferences. They will reset next session.",
    ErrorCode.PERSIST_QUOTA_EXCEEDED: "Preference storage is full. Try a smaller wallpaper.",
    ErrorCode.SNAPSHOT_INVALID: "Settings file is invalid or unreadable.",
}


@dataclass
class PreferenceError(Exception):
    """Base exception for preference operations with error code and context."""

    code: ErrorCode
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class InvalidThemeError(PreferenceError):
    """Raised when a theme identifier is not in the registry."""

    def __init__(self, theme_id: object) -> None:
        super().__init__(
            ErrorCode.THEME_UNKNOWN,
            message=f"Theme not found: {theme_id!r}",
            details={"theme_id": theme_id},
        )
        self.theme_id = theme_id


class UnsupportedMediaError(PreferenceError):
    """Raised when an upload is not an image."""

    def __init__(self, mime_type: object) -> None:
        super().__init__(ErrorCode.MEDIA_UNSUPPORTED, details={"mime_type": mime_type})
        self.mime_type = mime_type


class PayloadTooLargeError(PreferenceError):
    """Raised when an upload exceeds the wallpaper size ceiling."""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(
            ErrorCode.PAYLOAD_TOO_LARGE,
            details={"size_bytes": size_bytes, "limit_bytes": limit_bytes},
        )
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class DecodeError(PreferenceError):
    """Raised when upload bytes cannot be read into a data URI."""

    def __init__(self, reason: str, *, request_id: int | None = None) -> None:
        details: dict[str, Any] = {"reason": reason}
        if request_id is not None:
            details["request_id"] = request_id
        super().__init__(ErrorCode.DECODE_FAILED, details=details)
        self.reason = reason
        self.request_id = request_id


class PersistenceWriteError(PreferenceError):
    """Raised by the persisted store when a write does not land."""

    def __init__(self, key: str, reason: str, *, quota: bool = False) -> None:
        code = ErrorCode.PERSIST_QUOTA_EXCEEDED if quota else ErrorCode.PERSIST_WRITE_FAILED
        super().__init__(code, details={"key": key, "reason": reason})
        self.key = key
        self.reason = reason


class SnapshotError(PreferenceError):
    """Raised when a settings snapshot file cannot be used."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(ErrorCode.SNAPSHOT_INVALID, details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


def classify_exception(exc: Exception, *, key: str = "") -> PreferenceError:
    """Classify a generic exception into a PreferenceError with appropriate code."""
    if isinstance(exc, PreferenceError):
        return exc
    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if "quota" in exc_str or "no space left" in exc_str or "disk full" in exc_str:
        return PersistenceWriteError(key, exc_str, quota=True)
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return PersistenceWriteError(key, exc_str)
    if key and isinstance(exc, OSError):
        return PersistenceWriteError(key, exc_str)
    if isinstance(exc, (OSError, ValueError, EOFError)):
        return DecodeError(f"{exc_name}: {exc}")

    return PreferenceError(
        ErrorCode.PERSIST_WRITE_FAILED if key else ErrorCode.DECODE_FAILED,
        message=f"{exc_name}: {exc}",
        details={"original": exc_str},
    )


def format_error_for_user(error: PreferenceError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, PreferenceError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\n💡 {error.suggestion}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
