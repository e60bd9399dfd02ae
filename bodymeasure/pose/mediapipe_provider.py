from __future__ import annotations

import logging
from typing import List

from bodymeasure.errors import ProviderFailure
from bodymeasure.pose.base import PoseProvider
from bodymeasure.pose.skeleton import COCO17_NAMES
from bodymeasure.pose.types import Detection, Keypoint

logger = logging.getLogger(__name__)


class MediaPipePoseProvider(PoseProvider):
	"""
	MediaPipe Pose provider that outputs the COCO-17 keypoint set.

	Notes:
	- Runs in static-image mode; MediaPipe finds at most one person, so the
	  result is either [] or a single Detection.
	- MediaPipe uses normalized coordinates; we convert to pixel space.
	- `visibility` is used as score (best-effort).
	"""

	def __init__(
		self,
		model_complexity: int = 1,
		min_detection_confidence: float = 0.5,
	) -> None:
		try:
			import mediapipe as mp  # type: ignore
		except ImportError as e:
			raise RuntimeError(
				"MediaPipe is not installed. Install pose deps with: pip install '.[pose]'"
			) from e

		solutions = getattr(mp, "solutions", None)
		if solutions is None or not hasattr(solutions, "pose"):
			raise RuntimeError("This MediaPipe build has no legacy 'solutions.pose' API; install a release that still ships it")

		self._mp = mp
		self._pose = solutions.pose.Pose(
			static_image_mode=True,
			model_complexity=int(model_complexity),
			enable_segmentation=False,
			min_detection_confidence=float(min_detection_confidence),
		)

	def name(self) -> str:
		return "mediapipe_pose"

	def infer_rgb(self, rgb) -> List[Detection]:
		# rgb: HxWx3
		h, w = int(rgb.shape[0]), int(rgb.shape[1])
		try:
			res = self._pose.process(rgb)
		except Exception as e:
			raise ProviderFailure(f"MediaPipe inference failed: {e!r}") from e
		if not res or not getattr(res, "pose_landmarks", None):
			return []

		lm = res.pose_landmarks.landmark
		# COCO names map 1:1 onto MediaPipe's upper-case landmark enum names.
		PL = self._mp.solutions.pose.PoseLandmark
		keypoints: List[Keypoint] = []
		for name in COCO17_NAMES:
			p = lm[int(PL[name.upper()])]
			keypoints.append(
				Keypoint(
					name=name,
					x_px=float(p.x) * float(w),
					y_px=float(p.y) * float(h),
					score=float(getattr(p, "visibility", 0.0) or 0.0),
				)
			)
		logger.debug("[Pose] %s found 1 person in %dx%d image", self.name(), w, h)
		return [Detection(keypoints=tuple(keypoints), backend=self.name(), width=w, height=h)]

	def close(self) -> None:
		try:
			if self._pose:
				self._pose.close()
		except Exception as e:
			logger.debug("[Pose] close failed: %r", e)
