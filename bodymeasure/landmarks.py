from __future__ import annotations

from typing import Dict, Iterator, Mapping, Optional

from bodymeasure.pose.types import Detection, Keypoint


class LandmarkSet(Mapping[str, Keypoint]):
	"""
	Name-keyed view of one Detection, built once per detection.

	Lookups never raise: a missing (or low-score) keypoint resolves to None.
	When a name appears more than once, the first occurrence wins.
	"""

	def __init__(self, keypoints: Dict[str, Keypoint]) -> None:
		self._by_name = keypoints

	@classmethod
	def from_detection(cls, detection: Detection, min_score: float = 0.0) -> "LandmarkSet":
		by_name: Dict[str, Keypoint] = {}
		for kp in detection.keypoints:
			if kp.name in by_name:
				continue
			if float(kp.score) < min_score:
				continue
			by_name[kp.name] = kp
		return cls(by_name)

	def resolve(self, name: str) -> Optional[Keypoint]:
		return self._by_name.get(name)

	def __getitem__(self, name: str) -> Keypoint:
		return self._by_name[name]

	def __iter__(self) -> Iterator[str]:
		return iter(self._by_name)

	def __len__(self) -> int:
		return len(self._by_name)


def resolve_landmark(detection: Detection, name: str) -> Optional[Keypoint]:
	"""One-off lookup; prefer LandmarkSet when resolving several names."""
	for kp in detection.keypoints:
		if kp.name == name:
			return kp
	return None
