"""
Pure 2D geometry on optional points.

Every function propagates absence: if a required input is None the result is
None, never a zero-filled point or distance.
"""
from __future__ import annotations

import math
from typing import Optional, Sequence, Union

from bodymeasure.config import HEAD_HEIGHT_RATIO
from bodymeasure.pose.types import Keypoint, Point2D

PointLike = Union[Point2D, Keypoint]


def as_point(p: Optional[PointLike]) -> Optional[Point2D]:
	if p is None:
		return None
	if isinstance(p, Keypoint):
		return p.point
	return p


def midpoint(a: Optional[PointLike], b: Optional[PointLike]) -> Optional[Point2D]:
	pa, pb = as_point(a), as_point(b)
	if pa is None or pb is None:
		return None
	return Point2D((pa.x + pb.x) / 2.0, (pa.y + pb.y) / 2.0)


def estimate_top_of_head(
	left_ear: Optional[PointLike],
	right_ear: Optional[PointLike],
	left_eye: Optional[PointLike],
	right_eye: Optional[PointLike],
	ratio: float = HEAD_HEIGHT_RATIO,
) -> Optional[Point2D]:
	"""
	Extrapolate the crown of the head from ear and eye positions.

	The head height is `ratio` times the vertical ear-to-eye gap, and the crown
	sits straight above the ear midpoint (image y axis only, no tilt
	correction). Needs all four keypoints.
	"""
	ear_mid = midpoint(left_ear, right_ear)
	eye_mid = midpoint(left_eye, right_eye)
	if ear_mid is None or eye_mid is None:
		return None
	head_height = float(ratio) * abs(ear_mid.y - eye_mid.y)
	return Point2D(ear_mid.x, ear_mid.y - head_height)


def distance(a: Point2D, b: Point2D) -> float:
	dx = b.x - a.x
	dy = b.y - a.y
	return math.sqrt(dx * dx + dy * dy)


def curved_distance(
	start: Optional[PointLike],
	end: Optional[PointLike],
	control_points: Sequence[Optional[PointLike]] = (),
) -> Optional[float]:
	"""
	Length of the polyline start -> cp1 -> ... -> end.

	Absent control points are skipped; an absent start or end makes the whole
	distance absent. With no control points this is the straight-line distance.
	"""
	p_start, p_end = as_point(start), as_point(end)
	if p_start is None or p_end is None:
		return None

	total = 0.0
	prev = p_start
	for cp in control_points:
		p = as_point(cp)
		if p is None:
			continue
		total += distance(prev, p)
		prev = p
	total += distance(prev, p_end)
	return total
