"""Measurement API. Routes: /api/status, /api/measure, /api/measure/image, /api/overlay."""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from app_state import AppState
from bodymeasure import __version__
from bodymeasure.analysis import analyze_best_effort
from bodymeasure.config import AppConfig
from bodymeasure.errors import ProviderFailure
from bodymeasure.imaging import bgr_to_rgb, decode_image, encode_jpeg
from bodymeasure.measurements import measure_detections
from bodymeasure.overlay import draw_pose_overlay
from bodymeasure.pose.types import Detection, Keypoint
from bodymeasure.proportions import summarize_proportions
from deps import get_state
from schemas import DetectionPayload, MeasureRequest, MeasureResponse, StatusResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["measure"])

PROVIDER_FAILED_DETAIL = "Pose provider failed; treated as no person detected."


def _detection_from_payload(payload: DetectionPayload) -> Detection:
	return Detection(
		keypoints=tuple(Keypoint(name=k.name, x_px=k.x, y_px=k.y, score=k.score) for k in payload.keypoints),
		backend="external",
		width=payload.width,
		height=payload.height,
	)


def _height_or_default(cfg: AppConfig, height_cm: Optional[float]) -> float:
	return float(height_cm) if height_cm is not None else cfg.measurement.default_height_cm


def _measure(
	detections: Sequence[Detection],
	height_cm: float,
	cfg: AppConfig,
	analysis_image: Optional[bytes] = None,
	state: Optional[AppState] = None,
) -> List[Dict[str, Any]]:
	results: List[Dict[str, Any]] = []
	for outcome in measure_detections(detections, height_cm, cfg.measurement):
		entry = outcome.to_dict()
		if outcome.record is not None:
			entry["proportions"] = summarize_proportions(outcome.record).to_dict()
			if analysis_image is not None and state is not None and outcome.record.complete:
				entry["analysis"] = analyze_best_effort(state.analyzer, outcome.record, analysis_image)
		results.append(entry)
	return results


def _infer(state: AppState, bgr: np.ndarray) -> List[Detection]:
	with state.provider_lock:
		return state.provider.infer_rgb(bgr_to_rgb(bgr))


async def _read_image(state: AppState, image: UploadFile) -> np.ndarray:
	data = await image.read()
	if len(data) > state.cfg.api.max_upload_bytes:
		raise HTTPException(status_code=413, detail="Image too large")
	bgr = decode_image(data)
	if bgr is None:
		raise HTTPException(status_code=400, detail="Could not decode image. Upload a JPG or PNG.")
	return bgr


async def _detect(state: AppState, bgr: np.ndarray) -> Tuple[List[Detection], Optional[str]]:
	"""Run the provider off the event loop. Provider failure counts as zero detections."""
	if state.provider is None:
		raise HTTPException(
			status_code=503,
			detail=f"Pose provider not available: {state.provider_error or 'not configured'}",
		)
	try:
		return await run_in_threadpool(_infer, state, bgr), None
	except ProviderFailure as e:
		logger.error("[Measure] %s", e)
		return [], PROVIDER_FAILED_DETAIL


@router.get("/api/status", response_model=StatusResponse)
async def status(state: AppState = Depends(get_state)):
	"""Service version, pose provider availability and measurement defaults."""
	return {
		"version": __version__,
		"provider": state.provider.name() if state.provider else None,
		"provider_error": state.provider_error,
		"analyzer": state.analyzer.name() if state.analyzer else None,
		"default_height_cm": state.cfg.measurement.default_height_cm,
		"head_height_ratio": state.cfg.measurement.head_height_ratio,
	}


@router.post("/api/measure", response_model=MeasureResponse, response_model_exclude_none=True)
async def measure_keypoints(payload: MeasureRequest, state: AppState = Depends(get_state)):
	"""
	Measure keypoints produced by an external pose model (e.g. in the browser).
	A degenerate detection yields an `error` entry; the others are still measured.
	"""
	height = _height_or_default(state.cfg, payload.height_cm)
	detections = [_detection_from_payload(d) for d in payload.detections]
	return {
		"height_cm": height,
		"detections": len(detections),
		"results": _measure(detections, height, state.cfg),
	}


@router.post("/api/measure/image", response_model=MeasureResponse, response_model_exclude_none=True)
async def measure_image(
	image: UploadFile = File(...),
	height_cm: Optional[float] = Form(None),
	analyze: bool = Form(False),
	state: AppState = Depends(get_state),
):
	"""
	POST multipart/form-data:
	  - image (REQUIRED): full-body photo, roughly frontal and upright
	  - height_cm (OPTIONAL): person's height in cm; config default if omitted
	  - analyze (OPTIONAL): attach a qualitative description if an analyzer is configured
	"""
	bgr = await _read_image(state, image)
	detections, detail = await _detect(state, bgr)
	height = _height_or_default(state.cfg, height_cm)

	analysis_image = None
	if analyze and state.analyzer is not None and detections:
		analysis_image = await run_in_threadpool(encode_jpeg, bgr, state.cfg.overlay.jpeg_quality)

	if not detections and detail is None:
		detail = "No person detected. Make sure your full body is visible."
	return {
		"height_cm": height,
		"detections": len(detections),
		"results": _measure(detections, height, state.cfg, analysis_image, state),
		"detail": detail,
	}


@router.post("/api/overlay")
async def overlay(image: UploadFile = File(...), state: AppState = Depends(get_state)):
	"""Return the photo as JPEG with keypoints, skeleton and estimated head top drawn on it."""
	bgr = await _read_image(state, image)
	detections, detail = await _detect(state, bgr)
	if not detections:
		raise HTTPException(status_code=404, detail=detail or "No person detected")
	cfg = state.cfg
	annotated = draw_pose_overlay(bgr, detections, cfg.overlay, head_height_ratio=cfg.measurement.head_height_ratio)
	jpeg = await run_in_threadpool(encode_jpeg, annotated, cfg.overlay.jpeg_quality)
	return Response(
		content=jpeg,
		media_type="image/jpeg",
		headers={"Cache-Control": "no-store"},
	)
