"""
Body segments and their pixel lengths.

Each segment runs between two derived anchor points and may be routed through
fixed waypoints to approximate a curved body contour as a polyline.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from bodymeasure.config import HEAD_HEIGHT_RATIO
from bodymeasure.geometry import curved_distance, estimate_top_of_head, midpoint
from bodymeasure.landmarks import LandmarkSet
from bodymeasure.pose.types import Point2D

logger = logging.getLogger(__name__)

HEAD = "head"
UPPER_BODY = "upperBody"
LOWER_BODY = "lowerBody"
HIP_TO_KNEE = "hipToKnee"
KNEE_TO_ANKLE = "kneeToAnkle"


@dataclass(frozen=True)
class BodyPoints:
	"""Anchor and waypoint positions derived from one detection."""

	nose: Optional[Point2D] = None
	head_top: Optional[Point2D] = None
	shoulder_mid: Optional[Point2D] = None
	hip_mid: Optional[Point2D] = None
	knee_mid: Optional[Point2D] = None
	ankle_mid: Optional[Point2D] = None


@dataclass(frozen=True)
class Segment:
	name: str
	start: str
	end: str
	waypoints: Tuple[str, ...] = ()


# Order matters: it is the top-to-bottom order used when summing the body height.
# The upper-body route revisits its own start (shoulder_mid). That detour is kept
# as-is so lengths stay comparable with existing results.
SEGMENTS: Tuple[Segment, ...] = (
	Segment(HEAD, "head_top", "shoulder_mid", ("nose",)),
	Segment(UPPER_BODY, "shoulder_mid", "hip_mid", ("nose", "shoulder_mid")),
	Segment(HIP_TO_KNEE, "hip_mid", "knee_mid", ("hip_mid",)),
	Segment(KNEE_TO_ANKLE, "knee_mid", "ankle_mid", ()),
)

SEGMENT_WAYPOINTS: Dict[str, Tuple[str, ...]] = {s.name: s.waypoints for s in SEGMENTS}


def derive_body_points(landmarks: LandmarkSet, head_height_ratio: float = HEAD_HEIGHT_RATIO) -> BodyPoints:
	get = landmarks.resolve
	nose = get("nose")
	return BodyPoints(
		nose=nose.point if nose is not None else None,
		head_top=estimate_top_of_head(
			get("left_ear"),
			get("right_ear"),
			get("left_eye"),
			get("right_eye"),
			ratio=head_height_ratio,
		),
		shoulder_mid=midpoint(get("left_shoulder"), get("right_shoulder")),
		hip_mid=midpoint(get("left_hip"), get("right_hip")),
		knee_mid=midpoint(get("left_knee"), get("right_knee")),
		ankle_mid=midpoint(get("left_ankle"), get("right_ankle")),
	)


def segment_length_px(segment: Segment, points: BodyPoints) -> Optional[float]:
	return curved_distance(
		getattr(points, segment.start),
		getattr(points, segment.end),
		[getattr(points, name) for name in segment.waypoints],
	)


def segment_lengths_px(points: BodyPoints) -> Dict[str, Optional[float]]:
	"""Pixel length per segment name; None where an anchor is missing."""
	lengths = {seg.name: segment_length_px(seg, points) for seg in SEGMENTS}
	logger.debug("[Segments] pixel lengths: %s", lengths)
	return lengths
