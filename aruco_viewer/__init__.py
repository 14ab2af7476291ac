"""ArUco marker detection and pose-estimation viewers."""

from .config import ViewerConfig
from .facade import ViewerFacade

__all__ = ["ViewerConfig", "ViewerFacade"]
