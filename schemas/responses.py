"""Pydantic response models for API docs."""
from typing import Dict, List, Optional

from pydantic import BaseModel


class ProportionsModel(BaseModel):
	total_height_cm: Optional[int] = None
	upper_lower_ratio: Optional[str] = None
	upper_body_pct: Optional[float] = None
	lower_body_pct: Optional[float] = None


class MeasurementResult(BaseModel):
	"""Per-detection result. Either `measurements` or `error` is set."""

	index: int
	measurements: Optional[Dict[str, int]] = None
	missing_segments: Optional[List[str]] = None
	pixel_to_cm_ratio: Optional[float] = None
	proportions: Optional[ProportionsModel] = None
	analysis: Optional[str] = None
	error: Optional[str] = None
	code: Optional[str] = None


class MeasureResponse(BaseModel):
	"""Response from POST /api/measure and /api/measure/image."""

	height_cm: float
	detections: int
	results: List[MeasurementResult]
	detail: Optional[str] = None


class StatusResponse(BaseModel):
	version: str
	provider: Optional[str] = None
	provider_error: Optional[str] = None
	analyzer: Optional[str] = None
	default_height_cm: float
	head_height_ratio: float
