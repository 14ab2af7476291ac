import argparse
import sys
from typing import Optional, Sequence

from .config import ViewerConfig, detect_defaults, load_config, pose_defaults
from .facade import ViewerFacade
from .factory import StrategyFactory
from .logging_utils import setup_logger
from .strategies.capture_base import CaptureOpenError
from .strategies.localize_pnp import valid_marker_length

DICT_HELP = (
    "dictionary id: DICT_4X4_50=0, DICT_4X4_100=1, DICT_4X4_250=2, "
    "DICT_4X4_1000=3, DICT_5X5_50=4, ..., DICT_7X7_1000=15, "
    "DICT_ARUCO_ORIGINAL=16, DICT_APRILTAG_16h5=17, ..., DICT_APRILTAG_36h11=20"
)


class ViewerArgumentParser(argparse.ArgumentParser):
    """argparse with exit status 1 on bad arguments."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser(description: str, with_pose: bool) -> argparse.ArgumentParser:
    ap = ViewerArgumentParser(description=description)
    ap.add_argument("-d", "--dictionary", type=int, help=DICT_HELP)
    if with_pose:
        ap.add_argument("-l", "--marker-length", type=float,
                        help="Actual marker side length in meters")
    ap.add_argument("-v", "--video",
                    help="Offline video file; the RealSense color stream is used when omitted")
    ap.add_argument("--config", help="Path to JSON/YAML config")
    ap.add_argument("--calib", help="Camera calibration file (camera_matrix, distortion_coefficients)")
    ap.add_argument("--headless", action="store_true", help="Do not open a window")
    ap.add_argument("--max-frames", type=int)
    return ap


def _resolve_config(ap, args, base: ViewerConfig) -> ViewerConfig:
    cfg = base
    if args.config:
        try:
            cfg = load_config(args.config, base)
        except (FileNotFoundError, ValueError) as exc:
            ap.error(str(exc))
    cfg.apply_overrides(
        dictionary_id=args.dictionary,
        marker_length_m=getattr(args, "marker_length", None),
        video_path=args.video,
        calibration_path=args.calib,
        headless=True if args.headless else None,
        max_frames=args.max_frames,
    )
    if cfg.dictionary_id is None:
        ap.error("the following arguments are required: -d/--dictionary")
    return cfg


def _run(tool: str, cfg: ViewerConfig, with_pose: bool) -> int:
    logger = setup_logger(tool)
    logger.info("config: %s", cfg.as_dict())

    try:
        src, det, loc, overlay, display = StrategyFactory.from_config(cfg, with_pose)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    facade = ViewerFacade(
        src, det, overlay, display, logger,
        localizer=loc,
        wait_ms=cfg.wait_ms,
        max_frames=cfg.max_frames,
    )
    try:
        facade.run()
    except CaptureOpenError as exc:
        logger.error("%s", exc)
        return 1
    return 0


def detect_main(argv: Optional[Sequence[str]] = None) -> int:
    ap = _build_parser("Detect ArUco marker images", with_pose=False)
    args = ap.parse_args(argv)
    cfg = _resolve_config(ap, args, detect_defaults())
    return _run("detect", cfg, with_pose=False)


def pose_main(argv: Optional[Sequence[str]] = None) -> int:
    ap = _build_parser("Pose estimation of ArUco marker images", with_pose=True)
    args = ap.parse_args(argv)
    cfg = _resolve_config(ap, args, pose_defaults())

    if cfg.marker_length_m is None:
        ap.error("the following arguments are required: -l/--marker-length")
    if not valid_marker_length(cfg.marker_length_m):
        print("Marker length must be a positive value in meter", file=sys.stderr)
        return 1

    return _run("pose", cfg, with_pose=True)
