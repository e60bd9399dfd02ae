"""
Pose overlay: keypoints, skeleton and the estimated head top drawn on a copy
of the source image.
"""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from bodymeasure.config import HEAD_HEIGHT_RATIO, OverlayConfig
from bodymeasure.geometry import estimate_top_of_head, midpoint
from bodymeasure.landmarks import LandmarkSet
from bodymeasure.pose.skeleton import SKELETON_CONNECTIONS
from bodymeasure.pose.types import Detection, Point2D

# BGR
KEYPOINT_COLOR = (0, 0, 255)
SKELETON_COLOR = (255, 0, 0)
HEAD_TOP_COLOR = (0, 128, 0)


def _px(p: Point2D) -> Tuple[int, int]:
	return int(round(p.x)), int(round(p.y))


def draw_pose_overlay(
	bgr: np.ndarray,
	detections: Sequence[Detection],
	config: Optional[OverlayConfig] = None,
	head_height_ratio: float = HEAD_HEIGHT_RATIO,
) -> np.ndarray:
	cfg = config or OverlayConfig()
	out = bgr.copy()
	for det in detections:
		for kp in det.keypoints:
			if kp.score > cfg.min_score:
				cv2.circle(out, _px(kp.point), cfg.point_radius, KEYPOINT_COLOR, -1)

		lm = LandmarkSet.from_detection(det)
		for start_name, end_name in SKELETON_CONNECTIONS:
			a, b = lm.resolve(start_name), lm.resolve(end_name)
			if a is None or b is None or a.score <= cfg.min_score or b.score <= cfg.min_score:
				continue
			cv2.line(out, _px(a.point), _px(b.point), SKELETON_COLOR, cfg.line_thickness)

		# Head top ignores scores, matching the measurement.
		left_ear, right_ear = lm.resolve("left_ear"), lm.resolve("right_ear")
		top = estimate_top_of_head(
			left_ear,
			right_ear,
			lm.resolve("left_eye"),
			lm.resolve("right_eye"),
			ratio=head_height_ratio,
		)
		ear_mid = midpoint(left_ear, right_ear)
		if top is None or ear_mid is None:
			continue
		cv2.circle(out, _px(top), cfg.point_radius, HEAD_TOP_COLOR, -1)
		cv2.line(out, _px(ear_mid), _px(top), HEAD_TOP_COLOR, 1)
	return out
