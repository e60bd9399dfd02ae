"""Image decode/encode helpers around OpenCV."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import cv2
import numpy as np


def decode_image(data: bytes) -> Optional[np.ndarray]:
	"""Decode JPEG/PNG bytes into a BGR array; None if the bytes are not an image."""
	if not data:
		return None
	buf = np.frombuffer(data, np.uint8)
	return cv2.imdecode(buf, cv2.IMREAD_COLOR)


def load_image(path: str | Path) -> np.ndarray:
	p = Path(path)
	if not p.is_file():
		raise FileNotFoundError(f"Image not found: {p}")
	# imdecode copes with unicode paths where imread does not.
	img = decode_image(p.read_bytes())
	if img is None:
		raise ValueError(f"Failed to read image: {p}")
	return img


def bgr_to_rgb(bgr: np.ndarray) -> np.ndarray:
	return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)


def encode_jpeg(bgr: np.ndarray, quality: int = 90) -> bytes:
	ok, buf = cv2.imencode(".jpg", bgr, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
	if not ok:
		raise ValueError("JPEG encoding failed")
	return buf.tobytes()
