from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Iterator, Protocol

from ..core.exceptions import CameraUnavailable

_DATA_URI = re.compile(r"^data:image/[\w.+-]+;base64,")


class CameraStream(Protocol):
    def capture(self) -> str:
        """Grab one frame as an image data URI."""

        raise NotImplementedError

    def release(self) -> None:
        raise NotImplementedError


class Camera(Protocol):
    def open(self) -> CameraStream:
        raise NotImplementedError


@contextmanager
def camera_session(camera: Camera) -> Iterator[CameraStream]:
    """Open the stream on entry and release it on every exit path."""

    try:
        stream = camera.open()
    except OSError as e:
        raise CameraUnavailable("ไม่สามารถเปิดกล้องได้ โปรดอนุญาตสิทธิ์กล้อง") from e

    try:
        yield stream
    finally:
        stream.release()


class UploadedFrameStream:
    def __init__(self, data_uri: str):
        self._data_uri = data_uri
        self.released = False

    def capture(self) -> str:
        if self.released:
            raise CameraUnavailable("กล้องถูกปิดไปแล้ว")
        return self._data_uri

    def release(self) -> None:
        self.released = True


class UploadedFrameCamera:
    """Camera backed by the frame the browser already captured and posted."""

    def __init__(self, data_uri: str):
        self._data_uri = (data_uri or "").strip()
        self.stream: UploadedFrameStream | None = None

    def open(self) -> UploadedFrameStream:
        if not _DATA_URI.match(self._data_uri):
            raise CameraUnavailable("ไม่พบภาพจากกล้อง")
        self.stream = UploadedFrameStream(self._data_uri)
        return self.stream
