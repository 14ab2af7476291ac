from typing import Any, Optional

import numpy as np

from ..viewer_types import Frame
from .capture_base import CaptureOpenError, FrameSource


def _load_realsense() -> Any:
    try:
        import pyrealsense2 as rs  # type: ignore
    except Exception as exc:  # pragma: no cover - optional dependency
        raise CaptureOpenError(
            "Live camera requested but pyrealsense2 is not installed. "
            "Install with: pip install pyrealsense2 (or pass -v <video>)"
        ) from exc
    return rs


class RealSenseCapture(FrameSource):
    """Live input: the color stream of an Intel RealSense camera."""

    def __init__(self, width: int, height: int, fps: int, rs_module: Optional[Any] = None):
        super().__init__()
        self.width = width
        self.height = height
        self.fps = fps
        self._rs = rs_module
        self.pipe: Any = None

    def start(self) -> None:
        rs = self._rs if self._rs is not None else _load_realsense()
        self._rs = rs

        pipe = rs.pipeline()
        cfg = rs.config()
        cfg.enable_stream(rs.stream.color, self.width, self.height, rs.format.bgr8, self.fps)
        try:
            pipe.start(cfg)
        except rs.error as e:
            raise CaptureOpenError(
                f"RealSense error calling {e.get_failed_function()}"
                f"({e.get_failed_args()}):\n{e}"
            ) from e
        self.pipe = pipe
        self.idx = 0

    def read(self) -> Frame | None:
        frames = self.pipe.wait_for_frames()
        color = frames.get_color_frame()
        if not color:
            return None
        # the SDK reuses the buffer once the frameset is released
        img = np.asanyarray(color.get_data()).copy()
        return self._wrap(img)

    def stop(self) -> None:
        if self.pipe is not None:
            self.pipe.stop()
            self.pipe = None
