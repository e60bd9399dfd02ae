"""
Body-segment measurement package.

Turns 2D pose keypoints plus a known total height into real-world segment
lengths (head, upper body, lower body, hip-to-knee, knee-to-ankle).
"""

from pathlib import Path


def _read_version() -> str:
	try:
		vf = Path(__file__).resolve().parents[1] / "VERSION"
		if vf.exists():
			val = vf.read_text(encoding="utf-8").strip()
			if val:
				return val
	except OSError:
		pass
	return "0.1.0"


__version__ = _read_version()
