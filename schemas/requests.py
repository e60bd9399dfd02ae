"""Pydantic request body models."""
from typing import List, Optional

from pydantic import BaseModel, Field


class KeypointPayload(BaseModel):
	"""One named keypoint in image pixel coordinates."""

	name: str = Field(..., description="Anatomical name, e.g. 'left_shoulder'")
	x: float = Field(..., description="Pixel column")
	y: float = Field(..., description="Pixel row (grows downwards)")
	score: float = Field(1.0, ge=0.0, le=1.0, description="Model confidence")


class DetectionPayload(BaseModel):
	"""Keypoints of one person as emitted by the pose model."""

	keypoints: List[KeypointPayload] = Field(default_factory=list)
	width: int = Field(0, ge=0, description="Source image width, if known")
	height: int = Field(0, ge=0, description="Source image height, if known")


class MeasureRequest(BaseModel):
	"""Request body for POST /api/measure."""

	height_cm: Optional[float] = Field(None, description="Person's real height in cm; config default if omitted")
	detections: List[DetectionPayload] = Field(..., description="Zero or more detected persons")
