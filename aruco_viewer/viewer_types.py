from dataclasses import dataclass
from typing import Any

@dataclass
class Frame:
    idx: int
    ts_iso: str
    image: Any  # numpy array, HxWx3 BGR

@dataclass
class Detection:
    marker_id: int
    corners: Any  # (4,2) float32 ndarray

@dataclass
class Pose:
    rvec: Any  # (3,) axis-angle
    tvec: Any  # (3,) metres

@dataclass(frozen=True)
class CameraIntrinsics:
    camera_matrix: Any  # 3x3
    dist_coeffs: Any
