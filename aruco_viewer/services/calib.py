from pathlib import Path

import cv2
import numpy as np

from ..viewer_types import CameraIntrinsics


def load_calib(path: str) -> CameraIntrinsics:
    if not Path(path).exists():
        raise FileNotFoundError(f"Calibration file not found: {path}")
    fs = cv2.FileStorage(str(path), cv2.FILE_STORAGE_READ)
    try:
        K = fs.getNode("camera_matrix").mat()
        dist = fs.getNode("distortion_coefficients").mat()
    finally:
        fs.release()
    if K is None or np.size(K) != 9:
        raise ValueError(f"{path}: camera_matrix missing or not 3x3")
    if dist is None or np.size(dist) == 0:
        raise ValueError(f"{path}: distortion_coefficients missing")
    return CameraIntrinsics(
        np.asarray(K, dtype=np.float64).reshape(3, 3),
        np.asarray(dist, dtype=np.float64).reshape(-1, 1),
    )
