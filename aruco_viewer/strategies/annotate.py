import cv2
import numpy as np

from ..viewer_types import Detection, Pose

TEXT_COLOR = (124, 252, 0)
TEXT_ROWS = (("x", (10, 30)), ("y", (10, 50)), ("z", (10, 70)))


def draw_text(image, label: str, value: float, org) -> None:
    cv2.putText(
        image,
        f"{label}: {value:8.4f}",
        org,
        cv2.FONT_HERSHEY_SIMPLEX,
        0.6,
        TEXT_COLOR,
        2,
        cv2.LINE_AA,
    )


def _as_arrays(dets: list[Detection]):
    ids = np.array([d.marker_id for d in dets], dtype=np.int32).reshape(-1, 1)
    corners = [np.asarray(d.corners, dtype=np.float32).reshape(1, 4, 2) for d in dets]
    return ids, corners


class MarkerOverlay:
    """Outlines and ids of every detected marker."""

    def draw(self, image, dets: list[Detection], poses=None):
        draw = image.copy()
        if dets:
            ids, corners = _as_arrays(dets)
            cv2.aruco.drawDetectedMarkers(draw, corners, ids)
        return draw


class PoseOverlay(MarkerOverlay):
    """Marker outlines, an axis gizmo per pose, and the first marker's x/y/z.

    Only the first marker's translation is printed; with several markers in
    view the readout does not say which one it belongs to.
    """

    def __init__(self, camera_matrix, dist_coeffs, axis_length_m: float = 0.1):
        self.K = camera_matrix
        self.dist = dist_coeffs
        self.axis_length_m = axis_length_m

    def draw(self, image, dets: list[Detection], poses=None):
        draw = super().draw(image, dets)
        poses: list[Pose] = poses or []
        for pose in poses:
            cv2.drawFrameAxes(draw, self.K, self.dist, pose.rvec, pose.tvec, self.axis_length_m)
        if poses:
            t = np.asarray(poses[0].tvec).reshape(3)
            for (label, org), value in zip(TEXT_ROWS, t):
                draw_text(draw, label, float(value), org)
        return draw
