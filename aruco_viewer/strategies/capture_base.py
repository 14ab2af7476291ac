"""Frame source abstraction shared by the live camera and video file inputs.

A source is used as a context manager: entering starts it, leaving stops
it. A source whose ``start()`` raised is never stopped.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

import numpy as np

from ..viewer_types import Frame


class CaptureOpenError(RuntimeError):
    """The frame source could not be opened or started."""


class StreamExhausted(Exception):
    """The frame source has no more frames (end of file)."""


class FrameSource(ABC):
    def __init__(self) -> None:
        self.idx = 0

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def read(self) -> Frame | None:
        """Return the next frame, or None when this pull had no image.

        Raises:
            StreamExhausted: when the input has ended.
        """
        ...

    @abstractmethod
    def stop(self) -> None: ...

    def _wrap(self, image: np.ndarray) -> Frame:
        self.idx += 1
        ts = time.strftime("%Y-%m-%dT%H:%M:%S")
        return Frame(self.idx, ts, image)

    def __enter__(self) -> "FrameSource":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
