"""Pydantic request/response models for API validation and docs."""
from schemas.requests import (
	DetectionPayload,
	KeypointPayload,
	MeasureRequest,
)
from schemas.responses import (
	MeasureResponse,
	MeasurementResult,
	ProportionsModel,
	StatusResponse,
)

__all__ = [
	"DetectionPayload",
	"KeypointPayload",
	"MeasureRequest",
	"MeasureResponse",
	"MeasurementResult",
	"ProportionsModel",
	"StatusResponse",
]
