"""
Explicit app state. Created in lifespan, attached to app.state.state; injected
into routes via Depends(get_state).
"""
import threading
from typing import Any, Optional

from bodymeasure.analysis import BodyTypeAnalyzer
from bodymeasure.config import AppConfig
from bodymeasure.pose.base import PoseProvider


class AppState:
	"""
	Holds the read-only runtime collaborators. Nothing here changes per request;
	the calibration height always travels with the request itself.
	"""

	cfg: Optional[AppConfig] = None

	# Pose provider (None if its backend could not be loaded).
	provider: Optional[PoseProvider] = None
	provider_error: Optional[str] = None

	# Optional qualitative-description sink.
	analyzer: Optional[BodyTypeAnalyzer] = None

	# MediaPipe graphs are not safe to call from several threads at once.
	provider_lock: Any

	def __init__(self, cfg: Optional[AppConfig] = None) -> None:
		self.cfg = cfg
		self.provider_lock = threading.Lock()
