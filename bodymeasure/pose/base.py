from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from bodymeasure.pose.types import Detection


class PoseProvider(ABC):
	"""
	Model adapter interface.

	Implementations take an RGB image (H,W,3 uint8) and return zero or more
	Detections, one per person found. Failures should surface as
	`bodymeasure.errors.ProviderFailure`.
	"""

	@abstractmethod
	def name(self) -> str: ...

	@abstractmethod
	def infer_rgb(self, rgb) -> List[Detection]: ...

	@abstractmethod
	def close(self) -> None: ...
