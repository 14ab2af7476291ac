from .config import ViewerConfig
from .services.calib import load_calib
from .strategies.annotate import MarkerOverlay, PoseOverlay
from .strategies.capture_base import FrameSource
from .strategies.capture_realsense import RealSenseCapture
from .strategies.capture_video import VideoFileCapture
from .strategies.detect_aruco import ArucoDetect
from .strategies.display import NullDisplay, OpenCVWindow
from .strategies.localize_pnp import PnPLocalize


def select_source(config: ViewerConfig) -> FrameSource:
    # recorded file when -v is given, live camera otherwise
    if config.video_path:
        return VideoFileCapture(config.video_path)
    return RealSenseCapture(config.width, config.height, config.fps)


class StrategyFactory:
    @staticmethod
    def from_config(config: ViewerConfig, with_pose: bool = False):
        det = ArucoDetect(config.dictionary_id)

        # Calibration is only needed to solve poses
        loc = None
        if with_pose:
            intr = load_calib(config.calibration_path)
            loc = PnPLocalize(intr, config.marker_length_m)
            overlay = PoseOverlay(intr.camera_matrix, intr.dist_coeffs, config.axis_length_m)
        else:
            overlay = MarkerOverlay()

        display = NullDisplay() if config.headless else OpenCVWindow(config.window_name)
        src = select_source(config)

        return src, det, loc, overlay, display
