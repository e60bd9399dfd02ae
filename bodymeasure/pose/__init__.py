"""
Pose estimation layer.

Defines the model-agnostic Keypoint/Detection types and provider adapters
(e.g., MediaPipe Pose) so the pose stack can be swapped without touching the
measurement engine.
"""

from bodymeasure.config import PoseConfig
from bodymeasure.pose.base import PoseProvider


def create_provider(cfg: PoseConfig) -> PoseProvider:
	"""
	Build the configured provider. Raises RuntimeError if the backend is
	unknown or its dependencies are not installed.
	"""
	backend = (cfg.backend or "").strip().lower()
	if backend == "mediapipe":
		from bodymeasure.pose.mediapipe_provider import MediaPipePoseProvider

		return MediaPipePoseProvider(
			model_complexity=cfg.model_complexity,
			min_detection_confidence=cfg.min_detection_confidence,
		)
	raise RuntimeError(f"Unknown pose backend: {cfg.backend!r}")
