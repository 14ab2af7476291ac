import math

import cv2, numpy as np
from ..viewer_types import CameraIntrinsics, Detection, Pose


def marker_object_points(length: float) -> np.ndarray:
    """Square corners in the marker frame, same order as the detected corners."""
    h = length / 2.0
    return np.array(
        [[-h, h, 0.0], [h, h, 0.0], [h, -h, 0.0], [-h, -h, 0.0]],
        dtype=np.float32,
    )


def valid_marker_length(length: float) -> bool:
    return length > 0 and math.isfinite(length)


class PnPLocalize:
    def __init__(self, intrinsics: CameraIntrinsics, marker_length_m: float):
        if marker_length_m is None or not valid_marker_length(marker_length_m):
            raise ValueError("Marker length must be a positive value in meter")
        self.K, self.dist, self.L = intrinsics.camera_matrix, intrinsics.dist_coeffs, marker_length_m
        self._obj = marker_object_points(marker_length_m)

    def estimate(self, detections: list[Detection]) -> list[Pose]:
        poses = []
        # one solve per marker, no aggregation
        for det in detections:
            img_pts = np.asarray(det.corners, dtype=np.float32).reshape(4, 2)
            _ok, rvec, tvec = cv2.solvePnP(
                self._obj, img_pts, self.K, self.dist, flags=cv2.SOLVEPNP_IPPE_SQUARE
            )
            poses.append(Pose(rvec.reshape(3), tvec.reshape(3)))
        return poses
