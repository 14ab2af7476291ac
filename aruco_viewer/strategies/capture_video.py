from typing import Any

import cv2

from ..viewer_types import Frame
from .capture_base import CaptureOpenError, FrameSource, StreamExhausted


class VideoFileCapture(FrameSource):
    """Offline input: frames from a recorded video file, in order."""

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.cap: Any = None

    def start(self) -> None:
        self.cap = cv2.VideoCapture(str(self.path))
        if not self.cap.isOpened():
            self.cap.release()
            self.cap = None
            raise CaptureOpenError(f"Failed to open video file: {self.path}")
        self.idx = 0

    def read(self) -> Frame | None:
        if self.cap is None or not self.cap.grab():
            raise StreamExhausted(self.path)
        ok, img = self.cap.retrieve()
        if not ok or img is None or img.size == 0:
            raise StreamExhausted(self.path)
        return self._wrap(img)

    def stop(self) -> None:
        if self.cap is not None:
            self.cap.release()
            self.cap = None
