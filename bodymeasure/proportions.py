from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from bodymeasure.measurements import MeasurementRecord


@dataclass(frozen=True)
class ProportionSummary:
	"""
	General proportions shown next to the detailed measurements.

	- total_height_cm: head + upper body + lower body
	- upper_lower_ratio: upper:lower reduced by their gcd, e.g. "3:4"
	- *_pct: share of total height, one decimal
	"""

	total_height_cm: Optional[int] = None
	upper_lower_ratio: Optional[str] = None
	upper_body_pct: Optional[float] = None
	lower_body_pct: Optional[float] = None

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)


def reduced_ratio(upper: int, lower: int) -> Optional[str]:
	divisor = math.gcd(int(upper), int(lower))
	if divisor == 0:
		return None
	return f"{upper // divisor}:{lower // divisor}"


def summarize_proportions(record: MeasurementRecord) -> ProportionSummary:
	upper, lower, head = record.upper_body, record.lower_body, record.head
	if upper is None or lower is None:
		return ProportionSummary()

	ratio = reduced_ratio(upper, lower)
	if head is None:
		return ProportionSummary(upper_lower_ratio=ratio)

	total = head + upper + lower
	if total <= 0:
		return ProportionSummary(total_height_cm=total, upper_lower_ratio=ratio)
	return ProportionSummary(
		total_height_cm=total,
		upper_lower_ratio=ratio,
		upper_body_pct=round(100.0 * upper / total, 1),
		lower_body_pct=round(100.0 * lower / total, 1),
	)
