from bodymeasure.measurements import MeasurementRecord
from bodymeasure.proportions import ProportionSummary, reduced_ratio, summarize_proportions


def test_summary_for_reference_body():
	rec = MeasurementRecord(head=30, upper_body=67, lower_body=74, hip_to_knee=37, knee_to_ankle=37)
	s = summarize_proportions(rec)
	assert s.total_height_cm == 171
	assert s.upper_lower_ratio == "67:74"
	assert s.upper_body_pct == 39.2
	assert s.lower_body_pct == 43.3


def test_ratio_is_reduced_by_gcd():
	assert reduced_ratio(60, 80) == "3:4"
	assert reduced_ratio(50, 50) == "1:1"
	assert reduced_ratio(0, 0) is None


def test_summary_without_lower_body_is_empty():
	assert summarize_proportions(MeasurementRecord(head=30, upper_body=67)) == ProportionSummary()


def test_summary_without_head_keeps_ratio_only():
	s = summarize_proportions(MeasurementRecord(upper_body=60, lower_body=80))
	assert s.upper_lower_ratio == "3:4"
	assert s.total_height_cm is None
	assert s.upper_body_pct is None


def test_summary_to_dict_keys():
	assert set(ProportionSummary().to_dict()) == {
		"total_height_cm",
		"upper_lower_ratio",
		"upper_body_pct",
		"lower_body_pct",
	}
