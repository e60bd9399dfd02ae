"""
Measurement pipeline: detection + known height -> segment lengths in cm.

    landmarks -> body points -> segment pixel lengths -> pixel/cm ratio -> record

Everything here is a pure function of its inputs; the calibration height is
always passed explicitly.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from bodymeasure.calibration import pixel_to_cm_ratio, total_height_px, validate_height
from bodymeasure.config import MeasurementConfig
from bodymeasure.errors import DegenerateCalibration
from bodymeasure.landmarks import LandmarkSet
from bodymeasure.pose.types import Detection
from bodymeasure.segments import (
	HEAD,
	HIP_TO_KNEE,
	KNEE_TO_ANKLE,
	LOWER_BODY,
	SEGMENTS,
	UPPER_BODY,
	derive_body_points,
	segment_lengths_px,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
	# Lengths are non-negative, so floor(x + 0.5) rounds .5 upwards.
	return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class MeasurementRecord:
	"""
	Rounded segment lengths in centimeters. Missing segments stay None and are
	left out of `to_dict()`.
	"""

	head: Optional[int] = None
	upper_body: Optional[int] = None
	lower_body: Optional[int] = None
	hip_to_knee: Optional[int] = None
	knee_to_ankle: Optional[int] = None
	pixel_to_cm_ratio: Optional[float] = None
	missing_segments: Tuple[str, ...] = ()

	@property
	def complete(self) -> bool:
		return not self.missing_segments

	def to_dict(self) -> Dict[str, int]:
		values = {
			HEAD: self.head,
			UPPER_BODY: self.upper_body,
			LOWER_BODY: self.lower_body,
			HIP_TO_KNEE: self.hip_to_knee,
			KNEE_TO_ANKLE: self.knee_to_ankle,
		}
		return {k: v for k, v in values.items() if v is not None}


def assemble_record(
	lengths_px: Mapping[str, Optional[float]],
	ratio: float,
	missing_segments: Sequence[str] = (),
) -> MeasurementRecord:
	def scaled(name: str) -> Optional[int]:
		v = lengths_px.get(name)
		return round_half_up(v * ratio) if v is not None else None

	hip_knee = lengths_px.get(HIP_TO_KNEE)
	knee_ankle = lengths_px.get(KNEE_TO_ANKLE)
	lower_body = None
	if hip_knee is not None and knee_ankle is not None:
		# Scale the combined length and round once; adding the rounded halves can be off by one.
		lower_body = round_half_up((hip_knee + knee_ankle) * ratio)

	return MeasurementRecord(
		head=scaled(HEAD),
		upper_body=scaled(UPPER_BODY),
		lower_body=lower_body,
		hip_to_knee=scaled(HIP_TO_KNEE) if lower_body is not None else None,
		knee_to_ankle=scaled(KNEE_TO_ANKLE) if lower_body is not None else None,
		pixel_to_cm_ratio=ratio,
		missing_segments=tuple(missing_segments),
	)


def measure_detection(
	detection: Detection,
	height_cm: float,
	config: Optional[MeasurementConfig] = None,
) -> MeasurementRecord:
	"""
	Measure one detected person.

	Raises DegenerateCalibration when no scale can be derived. A detection that
	lacks some segments yields a record listing them in `missing_segments`;
	unless `allow_partial_calibration` is set, such a record carries no lengths
	since a scale fitted to part of the body would be misleading.
	"""
	cfg = config or MeasurementConfig()
	height = validate_height(height_cm)

	landmarks = LandmarkSet.from_detection(detection, min_score=cfg.min_score)
	points = derive_body_points(landmarks, head_height_ratio=cfg.head_height_ratio)
	lengths = segment_lengths_px(points)
	missing = [seg.name for seg in SEGMENTS if lengths[seg.name] is None]

	if missing and (not cfg.allow_partial_calibration or len(missing) == len(SEGMENTS)):
		logger.warning("[Measure] Missing segments %s; not calibrating this detection.", ", ".join(missing))
		return MeasurementRecord(missing_segments=tuple(missing))

	total_px = total_height_px(lengths.values())
	ratio = pixel_to_cm_ratio(height, total_px)
	logger.debug("[Measure] total=%.2f px, ratio=%.5f cm/px", total_px, ratio)
	if missing:
		logger.warning("[Measure] Calibrating on partial body (missing %s).", ", ".join(missing))
	return assemble_record(lengths, ratio, missing)


@dataclass(frozen=True)
class MeasurementOutcome:
	"""Result for one detection in a multi-detection pass."""

	index: int
	record: Optional[MeasurementRecord] = None
	error: Optional[str] = None

	def to_dict(self) -> Dict[str, Any]:
		if self.record is None:
			return {"index": self.index, "error": self.error, "code": "DEGENERATE_CALIBRATION"}
		return {
			"index": self.index,
			"measurements": self.record.to_dict(),
			"missing_segments": list(self.record.missing_segments),
			"pixel_to_cm_ratio": self.record.pixel_to_cm_ratio,
		}


def measure_detections(
	detections: Sequence[Detection],
	height_cm: float,
	config: Optional[MeasurementConfig] = None,
) -> List[MeasurementOutcome]:
	"""Measure each detection independently; a degenerate one does not stop the rest."""
	out: List[MeasurementOutcome] = []
	for i, det in enumerate(detections):
		try:
			out.append(MeasurementOutcome(index=i, record=measure_detection(det, height_cm, config)))
		except DegenerateCalibration as e:
			logger.warning("[Measure] Detection %d: %s", i, e)
			out.append(MeasurementOutcome(index=i, error=str(e)))
	return out
