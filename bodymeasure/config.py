from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Ear-to-eye vertical gap multiplier used to extrapolate the top of the head.
# Uncalibrated heuristic; override via measurement.head_height_ratio.
HEAD_HEIGHT_RATIO = 1.5

CONFIG_ENV_VAR = "BODYMEASURE_CONFIG"


@dataclass(frozen=True)
class MeasurementConfig:
	head_height_ratio: float = HEAD_HEIGHT_RATIO
	# Keypoints scoring below this are treated as absent. 0.0 keeps every keypoint.
	min_score: float = 0.0
	# If False, a detection missing any of the four segments is not scaled at all.
	allow_partial_calibration: bool = False
	# Used by the API/CLI when the caller does not send a height.
	default_height_cm: float = 160.0


@dataclass(frozen=True)
class PoseConfig:
	backend: str = "mediapipe"
	model_complexity: int = 1
	min_detection_confidence: float = 0.5


@dataclass(frozen=True)
class OverlayConfig:
	min_score: float = 0.3
	point_radius: int = 5
	line_thickness: int = 2
	jpeg_quality: int = 90


@dataclass(frozen=True)
class ApiConfig:
	max_upload_bytes: int = 10 * 1024 * 1024
	cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class AppConfig:
	measurement: MeasurementConfig = field(default_factory=MeasurementConfig)
	pose: PoseConfig = field(default_factory=PoseConfig)
	overlay: OverlayConfig = field(default_factory=OverlayConfig)
	api: ApiConfig = field(default_factory=ApiConfig)


_CONFIG_PATH: Optional[Path] = None
_CONFIG_CACHE: Optional[AppConfig] = None


def _repo_root() -> Path:
	# bodymeasure/config.py -> repo root is one level up.
	return Path(__file__).resolve().parents[1]


def get_default_config_path() -> Path:
	env = (os.environ.get(CONFIG_ENV_VAR) or "").strip()
	if env:
		return Path(env).expanduser().resolve()
	return _repo_root() / "config.json"


def set_config_path(path: str | Path) -> None:
	"""
	Override the config path and drop the cached config.
	Intended for the CLI and tests; the server normally uses the default path.
	"""
	global _CONFIG_PATH
	global _CONFIG_CACHE
	_CONFIG_PATH = Path(path).expanduser().resolve()
	_CONFIG_CACHE = None


def _deep_get(d: Dict[str, Any], keys: list[str], default: Any = None) -> Any:
	cur: Any = d
	for k in keys:
		if not isinstance(cur, dict):
			return default
		cur = cur.get(k)
	return cur if cur is not None else default


def _as_int(v: Any, default: int) -> int:
	try:
		return int(v)
	except (TypeError, ValueError):
		return int(default)


def _as_bool(v: Any, default: bool) -> bool:
	if isinstance(v, bool):
		return v
	if isinstance(v, (int, float)):
		return bool(v)
	if isinstance(v, str):
		return v.strip().lower() in ("1", "true", "yes", "on")
	return bool(default)


def _as_str(v: Any, default: str = "") -> str:
	return str(v) if v is not None else str(default)


def _as_float(v: Any, default: float) -> float:
	try:
		return float(v)
	except (TypeError, ValueError):
		return float(default)


def _as_str_list(v: Any, default: List[str]) -> List[str]:
	if isinstance(v, str):
		v = [v]
	if not isinstance(v, list):
		return list(default)
	out = [str(x).strip() for x in v if str(x).strip()]
	return out or list(default)


def load_config(path: Optional[str | Path] = None) -> AppConfig:
	p = Path(path).expanduser().resolve() if path else (_CONFIG_PATH or get_default_config_path())
	if not p.exists():
		# Defaults-only config; app can still run.
		return AppConfig()
	try:
		raw = json.loads(p.read_text(encoding="utf-8"))
	except (OSError, ValueError) as e:
		logger.warning("[Config] Could not read %s (%s); using defaults.", p, e)
		return AppConfig()

	if not isinstance(raw, dict):
		logger.warning("[Config] %s is not a JSON object; using defaults.", p)
		return AppConfig()

	head_ratio = _as_float(_deep_get(raw, ["measurement", "head_height_ratio"], HEAD_HEIGHT_RATIO), HEAD_HEIGHT_RATIO)
	min_score = _as_float(_deep_get(raw, ["measurement", "min_score"], 0.0), 0.0)
	allow_partial = _as_bool(_deep_get(raw, ["measurement", "allow_partial_calibration"], False), False)
	default_height = _as_float(_deep_get(raw, ["measurement", "default_height_cm"], 160.0), 160.0)

	pose_backend = _as_str(_deep_get(raw, ["pose", "backend"], "mediapipe"), "mediapipe").strip().lower()
	model_complexity = _as_int(_deep_get(raw, ["pose", "model_complexity"], 1), 1)
	min_det_conf = _as_float(_deep_get(raw, ["pose", "min_detection_confidence"], 0.5), 0.5)

	ov_min_score = _as_float(_deep_get(raw, ["overlay", "min_score"], 0.3), 0.3)
	ov_radius = _as_int(_deep_get(raw, ["overlay", "point_radius"], 5), 5)
	ov_thickness = _as_int(_deep_get(raw, ["overlay", "line_thickness"], 2), 2)
	ov_quality = _as_int(_deep_get(raw, ["overlay", "jpeg_quality"], 90), 90)

	max_upload = _as_int(_deep_get(raw, ["api", "max_upload_bytes"], 10 * 1024 * 1024), 10 * 1024 * 1024)
	cors_origins = _as_str_list(_deep_get(raw, ["api", "cors_origins"], ["*"]), ["*"])

	return AppConfig(
		measurement=MeasurementConfig(
			head_height_ratio=head_ratio if head_ratio >= 0.0 else HEAD_HEIGHT_RATIO,
			min_score=min(1.0, max(0.0, min_score)),
			allow_partial_calibration=allow_partial,
			default_height_cm=default_height if default_height > 0.0 else 160.0,
		),
		pose=PoseConfig(
			backend=pose_backend or "mediapipe",
			model_complexity=min(2, max(0, model_complexity)),
			min_detection_confidence=min(1.0, max(0.0, min_det_conf)),
		),
		overlay=OverlayConfig(
			min_score=min(1.0, max(0.0, ov_min_score)),
			point_radius=ov_radius if ov_radius > 0 else 5,
			line_thickness=ov_thickness if ov_thickness > 0 else 2,
			jpeg_quality=min(100, max(1, ov_quality)),
		),
		api=ApiConfig(
			max_upload_bytes=max_upload if max_upload > 0 else 10 * 1024 * 1024,
			cors_origins=cors_origins,
		),
	)


def get_config() -> AppConfig:
	global _CONFIG_CACHE
	if _CONFIG_CACHE is None:
		_CONFIG_CACHE = load_config()
	return _CONFIG_CACHE
