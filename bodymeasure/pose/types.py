from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple


@dataclass(frozen=True)
class Point2D:
	"""
	A derived 2D position in pixel coordinates (midpoint or extrapolation).
	Carries no confidence score.
	"""

	x: float
	y: float


@dataclass(frozen=True)
class Keypoint:
	"""
	A single named 2D keypoint in pixel coordinates.
	"""

	name: str
	x_px: float
	y_px: float
	score: float  # confidence/visibility [0..1] best-effort

	@property
	def point(self) -> Point2D:
		return Point2D(self.x_px, self.y_px)


@dataclass(frozen=True)
class Detection:
	"""
	One detected person in one image.

	- Keypoints keep the provider's order; names are expected to be unique but
	  this is not enforced (lookups take the first match).
	- width/height describe the source image and are 0 when unknown.
	"""

	keypoints: Tuple[Keypoint, ...] = field(default_factory=tuple)
	backend: str = ""
	width: int = 0
	height: int = 0

	def names(self) -> Tuple[str, ...]:
		return tuple(k.name for k in self.keypoints)


def keypoint_from_dict(item: Mapping[str, Any]) -> Keypoint:
	"""Build a Keypoint from a `{name, x, y, score}` mapping (score defaults to 1.0)."""
	score = item.get("score")
	return Keypoint(
		name=str(item["name"]),
		x_px=float(item["x"]),
		y_px=float(item["y"]),
		score=float(score) if score is not None else 1.0,
	)


def detection_from_dicts(
	items: Iterable[Mapping[str, Any]],
	backend: str = "external",
	width: int = 0,
	height: int = 0,
) -> Detection:
	"""
	Build a Detection from the wire shape emitted by browser pose models
	(a list of `{name, x, y, score}` objects).
	"""
	return Detection(
		keypoints=tuple(keypoint_from_dict(it) for it in items),
		backend=backend,
		width=int(width),
		height=int(height),
	)


def detection_to_dict(detection: Detection) -> Dict[str, Any]:
	return {
		"backend": detection.backend,
		"width": detection.width,
		"height": detection.height,
		"keypoints": [
			{"name": k.name, "x": k.x_px, "y": k.y_px, "score": k.score}
			for k in detection.keypoints
		],
	}
