import cv2
import numpy as np

from ..viewer_types import Frame, Detection

# OpenCV's predefined dictionary ids, in id order.
DICT_NAMES = [
    "4X4_50", "4X4_100", "4X4_250", "4X4_1000",
    "5X5_50", "5X5_100", "5X5_250", "5X5_1000",
    "6X6_50", "6X6_100", "6X6_250", "6X6_1000",
    "7X7_50", "7X7_100", "7X7_250", "7X7_1000",
    "ARUCO_ORIGINAL",
    "APRILTAG_16h5", "APRILTAG_25h9", "APRILTAG_36h10", "APRILTAG_36h11",
]


def dict_code(dictionary) -> int:
    """Resolve a numeric id or a name like ``4x4_50`` / ``DICT_4X4_50``."""
    if isinstance(dictionary, (int, np.integer)):
        code = int(dictionary)
        if not 0 <= code < len(DICT_NAMES):
            raise ValueError(
                f"Unknown dictionary id {code} (expected 0..{len(DICT_NAMES) - 1})"
            )
        return code

    key = (dictionary or "").strip()
    if key.isdigit():
        return dict_code(int(key))
    if key.upper().startswith("DICT_"):
        key = key[5:]
    for code, name in enumerate(DICT_NAMES):
        if name.upper() == key.upper():
            return code
    raise ValueError(f"Unknown dictionary name: {dictionary!r}")


def get_dict(dictionary):
    """
    Predefined ArUco/AprilTag dictionary by id or name.
    Works on OpenCV >= 4.7 (getPredefinedDictionary) and older (Dictionary_get).
    """
    code = dict_code(dictionary)
    if hasattr(cv2.aruco, "getPredefinedDictionary"):
        return cv2.aruco.getPredefinedDictionary(code)
    return cv2.aruco.Dictionary_get(code)


def _make_params():
    """Create detector parameters across OpenCV versions."""
    if hasattr(cv2.aruco, "DetectorParameters_create"):
        return cv2.aruco.DetectorParameters_create()
    return cv2.aruco.DetectorParameters()


class ArucoDetect:
    """
    Strategy: detect ArUco markers in a frame.
    Returns a list[Detection], one (marker_id, corners) pair per marker, in
    library order. Pose is estimated later by the Localize strategy.
    """
    def __init__(self, dictionary=16):
        self.dictionary = get_dict(dictionary)
        self.params = _make_params()
        self._detector = None
        # Prefer the newer ArucoDetector API if present
        if hasattr(cv2.aruco, "ArucoDetector"):
            self._detector = cv2.aruco.ArucoDetector(self.dictionary, self.params)

    def detect(self, f: Frame) -> list[Detection]:
        if self._detector is not None:
            corners, ids, _rej = self._detector.detectMarkers(f.image)
        else:
            corners, ids, _rej = cv2.aruco.detectMarkers(
                f.image, self.dictionary, parameters=self.params
            )

        dets: list[Detection] = []
        if ids is not None and len(ids) > 0:
            for i, mid in enumerate(ids.flatten()):
                c = np.asarray(corners[i], dtype=np.float32).reshape(4, 2)
                dets.append(Detection(int(mid), c))
        return dets
