"""Exceptions raised by the measurement engine and its collaborators."""


class MeasurementError(Exception):
	"""Base class for measurement failures."""


class DegenerateCalibration(MeasurementError):
	"""
	The pixel->cm ratio is undefined for this detection.

	Raised when the calibration height is not a positive finite number or the
	summed segment length in pixels is zero. Fatal for one detection only.
	"""

	def __init__(self, message: str, height_cm: float = 0.0, total_px: float = 0.0) -> None:
		super().__init__(message)
		self.height_cm = height_cm
		self.total_px = total_px


class ProviderFailure(MeasurementError):
	"""The pose provider is unavailable or failed on an image."""
