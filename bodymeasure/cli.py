"""
Command-line measurement.

	python -m bodymeasure.cli --image person.jpg --height-cm 172
	python -m bodymeasure.cli --keypoints pose.json --height-cm 172

`--keypoints` takes either a list of `{name, x, y, score}` objects (one
person) or a list of such lists / `{"keypoints": [...]}` objects.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from bodymeasure import __version__
from bodymeasure.config import get_config, set_config_path
from bodymeasure.errors import ProviderFailure
from bodymeasure.measurements import measure_detections
from bodymeasure.pose.types import Detection, detection_from_dicts
from bodymeasure.proportions import summarize_proportions

logger = logging.getLogger(__name__)


def _detections_from_json(raw: Any) -> List[Detection]:
	if isinstance(raw, dict):
		raw = raw.get("detections", [raw])
	if not isinstance(raw, list):
		raise ValueError("Keypoint file must contain a list")
	if raw and isinstance(raw[0], dict) and "name" in raw[0]:
		return [detection_from_dicts(raw)]
	out = []
	for item in raw:
		kps = item.get("keypoints", []) if isinstance(item, dict) else item
		out.append(detection_from_dicts(kps))
	return out


def _detections_from_image(path: str, overlay_path: Optional[str]) -> List[Detection]:
	from bodymeasure.imaging import bgr_to_rgb, encode_jpeg, load_image
	from bodymeasure.pose import create_provider

	cfg = get_config()
	bgr = load_image(path)
	provider = create_provider(cfg.pose)
	try:
		detections = provider.infer_rgb(bgr_to_rgb(bgr))
	except ProviderFailure as e:
		logger.error("[CLI] Pose provider failed: %s", e)
		detections = []
	finally:
		provider.close()

	if overlay_path:
		from bodymeasure.overlay import draw_pose_overlay

		annotated = draw_pose_overlay(
			bgr, detections, cfg.overlay, head_height_ratio=cfg.measurement.head_height_ratio
		)
		Path(overlay_path).write_bytes(encode_jpeg(annotated, cfg.overlay.jpeg_quality))
		logger.info("[CLI] Overlay written to %s", overlay_path)
	return detections


def run(args: argparse.Namespace) -> Dict[str, Any]:
	if args.config:
		set_config_path(args.config)
	cfg = get_config()
	height = args.height_cm if args.height_cm is not None else cfg.measurement.default_height_cm

	if args.keypoints:
		raw = json.loads(Path(args.keypoints).read_text(encoding="utf-8"))
		detections = _detections_from_json(raw)
	else:
		detections = _detections_from_image(args.image, args.overlay)

	results = []
	for outcome in measure_detections(detections, height, cfg.measurement):
		entry = outcome.to_dict()
		if outcome.record is not None:
			entry["proportions"] = summarize_proportions(outcome.record).to_dict()
		results.append(entry)
	return {"height_cm": height, "detections": len(detections), "results": results}


def main(argv: Optional[List[str]] = None) -> int:
	p = argparse.ArgumentParser(description="Estimate body-segment lengths from pose keypoints.")
	src = p.add_mutually_exclusive_group(required=True)
	src.add_argument("--image", help="Image of one person (runs the configured pose provider)")
	src.add_argument("--keypoints", help="JSON file with keypoints from an external pose model")
	p.add_argument("--height-cm", type=float, default=None, help="Person's real height in cm")
	p.add_argument("--config", default=None, help="Path to config.json")
	p.add_argument("--overlay", default=None, help="Write an annotated JPEG here (--image only)")
	p.add_argument("--debug", action="store_true", help="Enable debug logging.")
	p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	args = p.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.debug else logging.INFO,
		format="%(levelname)s:%(name)s:%(message)s",
	)

	try:
		out = run(args)
	except (OSError, ValueError, RuntimeError) as e:
		logger.error("[CLI] %s", e)
		return 1
	print(json.dumps(out, indent=2))
	return 0


if __name__ == "__main__":
	sys.exit(main())
