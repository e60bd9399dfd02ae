from __future__ import annotations

import math
from typing import Iterable, Optional

from bodymeasure.errors import DegenerateCalibration


def total_height_px(lengths: Iterable[Optional[float]]) -> float:
	"""Sum of the present segment lengths."""
	return float(sum(v for v in lengths if v is not None))


def validate_height(height_cm: float) -> float:
	try:
		h = float(height_cm)
	except (TypeError, ValueError) as e:
		raise DegenerateCalibration(f"Calibration height is not a number: {height_cm!r}") from e
	if not math.isfinite(h) or h <= 0.0:
		raise DegenerateCalibration(f"Calibration height must be positive, got {height_cm!r}", height_cm=h)
	return h


def pixel_to_cm_ratio(height_cm: float, total_px: float) -> float:
	"""
	Centimeters per pixel, calibrated against the subject's stated height.

	Raises DegenerateCalibration when the height is not a positive finite
	number or the body collapses to zero pixels.
	"""
	h = validate_height(height_cm)
	px = float(total_px)
	if not math.isfinite(px) or px <= 0.0:
		raise DegenerateCalibration(f"Body spans {total_px!r} px; cannot derive a scale", height_cm=h, total_px=px)
	return h / px
