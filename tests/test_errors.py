"""Tests for organizze.errors."""

from organizze.errors import (
    DecodeError,
    ErrorCode,
    InvalidThemeError,
    PayloadTooLargeError,
    PersistenceWriteError,
    PreferenceError,
    UnsupportedMediaError,
    classify_exception,
    format_error_for_user,
)


def test_taxonomy_codes_and_messages():
    assert InvalidThemeError("neon").code is ErrorCode.THEME_UNKNOWN
    assert "neon" in str(InvalidThemeError("neon"))
    assert UnsupportedMediaError("text/plain").message == "Please upload an image file."
    assert PayloadTooLargeError(10, 5).message == "File size must be less than 5MB."
    assert DecodeError("boom").code is ErrorCode.DECODE_FAILED
    assert PersistenceWriteError("theme", "full", quota=True).code is ErrorCode.PERSIST_QUOTA_EXCEEDED


def test_all_subclass_preference_error():
    for error in (
        InvalidThemeError("x"),
        UnsupportedMediaError("x"),
        PayloadTooLargeError(1, 0),
        DecodeError("x"),
        PersistenceWriteError("k", "x"),
    ):
        assert isinstance(error, PreferenceError)


def test_to_dict():
    data = PayloadTooLargeError(6, 5).to_dict()
    assert data["code"] == "PAYLOAD_TOO_LARGE"
    assert data["details"] == {"size_bytes": 6, "limit_bytes": 5}


def test_classify_exception():
    quota = classify_exception(OSError("No space left on device"), key="wallpaperImage")
    assert isinstance(quota, PersistenceWriteError)
    assert quota.code is ErrorCode.PERSIST_QUOTA_EXCEEDED

    denied = classify_exception(PermissionError("denied"), key="theme")
    assert isinstance(denied, PersistenceWriteError)

    assert isinstance(classify_exception(OSError("bad read")), DecodeError)
    assert classify_exception(RuntimeError("odd")).message == "RuntimeError: odd"


def test_format_error_for_user():
    text = format_error_for_user(UnsupportedMediaError("text/plain"))
    assert text == "Please upload an image file."
    assert "Error reading file" in format_error_for_user(ValueError("broken"))
