"""
Qualitative body-type description (downstream sink).

The analyzer receives finished measurements plus the source image and returns
free text. It never feeds back into measurement, and its failures are reduced
to a fixed message.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from bodymeasure.measurements import MeasurementRecord
from bodymeasure.proportions import ProportionSummary, summarize_proportions

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "Error analyzing body type. Please try again."


class BodyTypeAnalyzer(ABC):
	"""Adapter for a generative model that describes a body from an image."""

	@abstractmethod
	def name(self) -> str: ...

	@abstractmethod
	def describe(self, prompt: str, image_jpeg: bytes) -> str: ...


def _fmt(v) -> str:
	return "N/A" if v is None else str(v)


def _pct(v) -> str:
	return "N/A" if v is None else f"{v:.1f}%"


def build_analysis_prompt(record: MeasurementRecord, summary: Optional[ProportionSummary] = None) -> str:
	s = summary or summarize_proportions(record)
	return "\n".join(
		[
			"Analyze this person's body type based on the following measurements:",
			f"- Total Height: {_fmt(s.total_height_cm)} cm",
			f"- Head Height: {_fmt(record.head)} cm",
			f"- Upper Body: {_fmt(record.upper_body)} cm",
			f"- Lower Body: {_fmt(record.lower_body)} cm",
			f"- Upper:Lower Ratio: {_fmt(s.upper_lower_ratio)}",
			f"- Upper Body Ratio: {_pct(s.upper_body_pct)}",
			f"- Lower Body Ratio: {_pct(s.lower_body_pct)}",
			"",
			"Please provide:",
			"1. Body type classification",
			"2. Brief description of the body proportions",
			"3. Any notable characteristics",
		]
	)


def analyze_best_effort(
	analyzer: Optional[BodyTypeAnalyzer],
	record: MeasurementRecord,
	image_jpeg: bytes,
) -> Optional[str]:
	"""Return the analyzer's text, None without an analyzer, or a fixed message on error."""
	if analyzer is None:
		return None
	prompt = build_analysis_prompt(record)
	try:
		return analyzer.describe(prompt, image_jpeg)
	except Exception as e:
		logger.error("[Analysis] %s failed: %r", analyzer.name(), e)
		return ANALYSIS_FAILED_MESSAGE
