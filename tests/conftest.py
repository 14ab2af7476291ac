import logging

import cv2
import numpy as np
import pytest

from aruco_viewer.strategies.capture_base import FrameSource, StreamExhausted
from aruco_viewer.strategies.display import NO_KEY
from aruco_viewer.logging_utils import ToolNameFilter
from aruco_viewer.viewer_types import CameraIntrinsics

# Synthetic pinhole camera: f=600px, principal point at the image centre.
FOCAL_PX = 600.0
IMAGE_W, IMAGE_H = 640, 480


def render_marker(dict_id, marker_id, side_px, top_left=(260, 180), size=(IMAGE_W, IMAGE_H)):
    """White BGR canvas with one axis-aligned marker pasted at ``top_left``."""
    dictionary = cv2.aruco.getPredefinedDictionary(dict_id)
    if hasattr(cv2.aruco, "generateImageMarker"):
        marker = cv2.aruco.generateImageMarker(dictionary, marker_id, side_px)
    else:
        marker = cv2.aruco.drawMarker(dictionary, marker_id, side_px)
    w, h = size
    x, y = top_left
    canvas = np.full((h, w), 255, dtype=np.uint8)
    canvas[y:y + side_px, x:x + side_px] = marker
    return cv2.cvtColor(canvas, cv2.COLOR_GRAY2BGR)


@pytest.fixture(autouse=True)
def fresh_tool_loggers():
    """Tool handlers bind sys.stdout/sys.stderr when created; rebuild them per test."""
    def _clear():
        for name in ("aruco_viewer.detect", "aruco_viewer.pose"):
            log = logging.getLogger(name)
            for h in list(log.handlers):
                if any(isinstance(f, ToolNameFilter) for f in h.filters):
                    log.removeHandler(h)
    _clear()
    yield
    _clear()


@pytest.fixture
def intrinsics():
    K = np.array(
        [[FOCAL_PX, 0.0, IMAGE_W / 2], [0.0, FOCAL_PX, IMAGE_H / 2], [0.0, 0.0, 1.0]]
    )
    return CameraIntrinsics(K, np.zeros((5, 1)))


@pytest.fixture
def calib_file(tmp_path, intrinsics):
    path = tmp_path / "calibration_params.yml"
    fs = cv2.FileStorage(str(path), cv2.FILE_STORAGE_WRITE)
    fs.write("camera_matrix", intrinsics.camera_matrix)
    fs.write("distortion_coefficients", intrinsics.dist_coeffs)
    fs.release()
    return path


@pytest.fixture
def marker_image():
    """DICT_4X4_50 id 7, 120px wide, top-left at (260, 180)."""
    return render_marker(cv2.aruco.DICT_4X4_50, 7, 120)


class FakeSource(FrameSource):
    def __init__(self, images, repeat=False):
        """Serve queued images; a None entry emulates a missing color frame."""
        super().__init__()
        self.images = list(images)
        self.repeat = repeat
        self.starts = 0
        self.stops = 0

    def start(self):
        self.starts += 1

    def read(self):
        if not self.images:
            raise StreamExhausted("fake")
        img = self.images[0] if self.repeat else self.images.pop(0)
        if img is None:
            return None
        return self._wrap(img)

    def stop(self):
        self.stops += 1


class FakeDisplay:
    def __init__(self, keys=()):
        """Replay ``keys`` one per poll, then report no key."""
        self.keys = list(keys)
        self.shown = []
        self.polls = []
        self.closed = False

    def show(self, image):
        self.shown.append(image)

    def poll_key(self, timeout_ms):
        self.polls.append(timeout_ms)
        return self.keys.pop(0) if self.keys else NO_KEY

    def close(self):
        self.closed = True


class FakeRsError(Exception):
    def get_failed_function(self):
        return "rs2_pipeline_start_with_config"

    def get_failed_args(self):
        return "pipe:0x1, config:0x2"


class FakeColorFrame:
    def __init__(self, image):
        self.image = image

    def get_data(self):
        return self.image


class FakeFrameset:
    def __init__(self, image):
        self.image = image

    def get_color_frame(self):
        # the SDK returns a falsy frame when the sub-frame is missing
        return FakeColorFrame(self.image) if self.image is not None else None


class FakePipeline:
    def __init__(self, images, fail_start=False):
        self.images = list(images)
        self.fail_start = fail_start
        self.started_with = None
        self.stopped = 0

    def start(self, cfg):
        if self.fail_start:
            raise FakeRsError("No device connected")
        self.started_with = cfg

    def wait_for_frames(self):
        return FakeFrameset(self.images.pop(0))

    def stop(self):
        self.stopped += 1


class FakeRsConfig:
    def __init__(self):
        self.streams = []

    def enable_stream(self, *args):
        self.streams.append(args)


class FakeRealSense:
    """Just enough of the pyrealsense2 surface for RealSenseCapture."""

    error = FakeRsError

    class stream:
        color = "color"

    class format:
        bgr8 = "bgr8"

    def __init__(self, images=(), fail_start=False):
        self.pipe = FakePipeline(images, fail_start)
        self.configs = []

    def pipeline(self):
        return self.pipe

    def config(self):
        cfg = FakeRsConfig()
        self.configs.append(cfg)
        return cfg


@pytest.fixture
def write_video(tmp_path):
    def _write(images, name="clip.avi", fps=10):
        path = tmp_path / name
        h, w = images[0].shape[:2]
        writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (w, h))
        if not writer.isOpened():
            pytest.skip("OpenCV build cannot write MJPG video")
        for img in images:
            writer.write(img)
        writer.release()
        return path

    return _write
