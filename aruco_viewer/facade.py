import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .strategies.capture_base import FrameSource, StreamExhausted
from .strategies.display import ESC_KEY


@dataclass
class ViewerSummary:
    frames_processed: int
    frames_skipped: int
    markers_seen: int
    stop_reason: str


def _fmt_vec(v) -> str:
    a = np.asarray(v, dtype=float).reshape(-1)
    return "[" + ", ".join(f"{x:.6g}" for x in a) + "]"


class ViewerFacade:
    """Acquire -> detect -> (estimate) -> annotate -> display, until ESC or end of input."""

    def __init__(
        self,
        source: FrameSource,
        detector,
        overlay,
        display,
        logger: logging.Logger,
        localizer=None,  # pose tool only
        wait_ms: int = 1,
        max_frames: Optional[int] = None,
    ):
        self.source = source
        self.det = detector
        self.overlay = overlay
        self.display = display
        self.log = logger
        self.loc = localizer
        self.wait_ms = wait_ms
        self.max_frames = max_frames

    def run(self) -> ViewerSummary:
        frames = 0
        skipped = 0
        markers = 0
        reason = "end_of_stream"

        try:
            with self.source as src:
                self.log.info("stream started: %s", type(src).__name__)
                while True:
                    if self.max_frames and frames >= self.max_frames:
                        reason = "max_frames"
                        break

                    try:
                        f = src.read()
                    except StreamExhausted:
                        reason = "end_of_stream"
                        break
                    if f is None:
                        skipped += 1
                        continue

                    dets = self.det.detect(f)
                    poses = []
                    if self.loc is not None and dets:
                        poses = self.loc.estimate(dets)
                        self.log.info(
                            "Translation: %s\tRotation: %s",
                            _fmt_vec(poses[0].tvec),
                            _fmt_vec(poses[0].rvec),
                        )

                    draw = self.overlay.draw(f.image, dets, poses)
                    self.display.show(draw)

                    self.log.debug("frame=%d dets=%d", f.idx, len(dets))
                    frames += 1
                    markers += len(dets)

                    if self.display.poll_key(self.wait_ms) == ESC_KEY:
                        reason = "escape"
                        break
        finally:
            self.display.close()

        self.log.info(
            "summary frames=%d skipped=%d markers=%d stop=%s",
            frames, skipped, markers, reason,
        )
        return ViewerSummary(frames, skipped, markers, reason)
