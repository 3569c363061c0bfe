"""Worker that decodes an uploaded image into a data URI."""

from __future__ import annotations

import base64
from typing import BinaryIO, TypedDict, Union

from organizze.errors import DecodeError
from organizze.workers.base_worker import BaseWorker

WallpaperSource = Union[bytes, bytearray, memoryview, BinaryIO]


class DecodedWallpaper(TypedDict):
    request_id: int
    data_uri: str
    mime: str
    size: int


def encode_data_uri(data: bytes, mime_type: str) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def read_source(source: WallpaperSource) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if not hasattr(source, "read"):
        raise ValueError("No file provided")
    data = source.read()
    if not isinstance(data, (bytes, bytearray)):
        raise ValueError(f"stream returned {type(data).__name__}, expected bytes")
    return bytes(data)


class WallpaperDecodeWorker(BaseWorker):
    """Reads upload bytes and encodes them as a ``data:`` URI."""

    def __init__(
        self,
        *,
        request_id: int,
        source: WallpaperSource,
        mime_type: str,
        size_bytes: int,
    ) -> None:
        super().__init__()
        self._request_id = request_id
        self._source = source
        self._mime_type = mime_type
        self._size_bytes = size_bytes

    @property
    def request_id(self) -> int:
        return self._request_id

    def run(self) -> None:
        self.started.emit()
        try:
            data = read_source(self._source)
        except (OSError, ValueError) as exc:
            self.error.emit(DecodeError(f"{type(exc).__name__}: {exc}", request_id=self._request_id))
            return
        if len(data) != self._size_bytes:
            self.error.emit(
                DecodeError(
                    f"read {len(data)} bytes, expected {self._size_bytes}",
                    request_id=self._request_id,
                )
            )
            return

        result: DecodedWallpaper = {
            "request_id": self._request_id,
            "data_uri": encode_data_uri(data, self._mime_type),
            "mime": self._mime_type,
            "size": len(data),
        }
        self.finished.emit(result)
