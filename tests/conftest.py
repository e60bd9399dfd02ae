"""
Shared fixtures.

The reference body is an upright figure on the x=100 line:
  ears (90,50)/(110,50), eyes (95,70)/(105,70)  -> head top (100,20)
  nose (100,60)
  shoulders -> (100,100), hips -> (100,200), knees -> (100,300), ankles -> (100,400)

Pixel lengths: head 80, upperBody 180, hipToKnee 100, kneeToAnkle 100 (total 460).
"""
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from bodymeasure.pose.types import Detection, Keypoint, detection_to_dict

FULL_BODY: Dict[str, Tuple[float, float]] = {
	"nose": (100.0, 60.0),
	"left_eye": (95.0, 70.0),
	"right_eye": (105.0, 70.0),
	"left_ear": (90.0, 50.0),
	"right_ear": (110.0, 50.0),
	"left_shoulder": (80.0, 100.0),
	"right_shoulder": (120.0, 100.0),
	"left_hip": (90.0, 200.0),
	"right_hip": (110.0, 200.0),
	"left_knee": (90.0, 300.0),
	"right_knee": (110.0, 300.0),
	"left_ankle": (90.0, 400.0),
	"right_ankle": (110.0, 400.0),
}


def make_detection(
	points: Optional[Dict[str, Tuple[float, float]]] = None,
	drop: Iterable[str] = (),
	scores: Optional[Dict[str, float]] = None,
) -> Detection:
	pts = dict(FULL_BODY if points is None else points)
	for name in drop:
		pts.pop(name, None)
	scores = scores or {}
	return Detection(
		keypoints=tuple(Keypoint(name, x, y, scores.get(name, 0.9)) for name, (x, y) in pts.items()),
		backend="test",
		width=200,
		height=450,
	)


def keypoint_dicts(detection: Detection) -> List[dict]:
	return detection_to_dict(detection)["keypoints"]


@pytest.fixture
def full_detection() -> Detection:
	return make_detection()
