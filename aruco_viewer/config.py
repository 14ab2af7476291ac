from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Optional


@dataclass
class ViewerConfig:
    dictionary_id: Optional[int | str] = None
    marker_length_m: Optional[float] = None
    video_path: Optional[str] = None
    calibration_path: str = "calibration_params.yml"
    width: int = 1280
    height: int = 720
    fps: int = 30
    wait_ms: int = 1
    window_name: str = "Detected markers"
    axis_length_m: float = 0.1
    headless: bool = False
    max_frames: Optional[int] = None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    def apply_overrides(self, **kwargs: Any) -> "ViewerConfig":
        for key, value in kwargs.items():
            if value is not None and hasattr(self, key):
                setattr(self, key, value)
        return self


def detect_defaults() -> ViewerConfig:
    return ViewerConfig()


def pose_defaults() -> ViewerConfig:
    return ViewerConfig(
        width=640,
        height=480,
        wait_ms=10,
        window_name="Pose estimation",
    )


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        import yaml  # type: ignore
    except Exception as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "YAML config requested but PyYAML is not installed. "
            "Install with: pip install pyyaml"
        ) from exc
    with path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("YAML config root must be a mapping")
    return data


def _optional(value: Any, cast) -> Any:
    if value is None:
        return None
    return cast(value)


def load_config(path: str | Path, base: Optional[ViewerConfig] = None) -> ViewerConfig:
    """Read a JSON/YAML config file on top of ``base`` (or the detector preset)."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")

    if p.suffix.lower() in {".yaml", ".yml"}:
        raw = _load_yaml(p)
    else:
        with p.open("r", encoding="utf-8") as fp:
            raw = json.load(fp)

    if not isinstance(raw, dict):
        raise ValueError("Config root must be a JSON/YAML object")

    cfg = base if base is not None else detect_defaults()
    dict_raw = raw.get("dictionary_id", cfg.dictionary_id)
    if isinstance(dict_raw, str) and dict_raw.strip().isdigit():
        dict_raw = int(dict_raw)
    cfg.dictionary_id = dict_raw
    cfg.marker_length_m = _optional(raw.get("marker_length_m", cfg.marker_length_m), float)
    cfg.video_path = _optional(raw.get("video_path", cfg.video_path), str)
    cfg.calibration_path = str(raw.get("calibration_path", cfg.calibration_path))
    cfg.width = int(raw.get("width", cfg.width))
    cfg.height = int(raw.get("height", cfg.height))
    cfg.fps = int(raw.get("fps", cfg.fps))
    cfg.wait_ms = int(raw.get("wait_ms", cfg.wait_ms))
    cfg.window_name = str(raw.get("window_name", cfg.window_name))
    cfg.axis_length_m = float(raw.get("axis_length_m", cfg.axis_length_m))
    cfg.headless = bool(raw.get("headless", cfg.headless))
    cfg.max_frames = _optional(raw.get("max_frames", cfg.max_frames), int)
    return cfg
