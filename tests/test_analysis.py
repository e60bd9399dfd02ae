from bodymeasure.analysis import (
	ANALYSIS_FAILED_MESSAGE,
	BodyTypeAnalyzer,
	analyze_best_effort,
	build_analysis_prompt,
)
from bodymeasure.measurements import MeasurementRecord

RECORD = MeasurementRecord(head=30, upper_body=67, lower_body=74, hip_to_knee=37, knee_to_ankle=37)


class EchoAnalyzer(BodyTypeAnalyzer):
	def __init__(self):
		self.calls = []

	def name(self) -> str:
		return "echo"

	def describe(self, prompt: str, image_jpeg: bytes) -> str:
		self.calls.append((prompt, image_jpeg))
		return "Balanced proportions."


class BrokenAnalyzer(BodyTypeAnalyzer):
	def name(self) -> str:
		return "broken"

	def describe(self, prompt: str, image_jpeg: bytes) -> str:
		raise ConnectionError("upstream timed out")


def test_prompt_lists_measurements_and_proportions():
	prompt = build_analysis_prompt(RECORD)
	assert "- Total Height: 171 cm" in prompt
	assert "- Head Height: 30 cm" in prompt
	assert "- Upper:Lower Ratio: 67:74" in prompt
	assert "- Upper Body Ratio: 39.2%" in prompt
	assert "- Lower Body Ratio: 43.3%" in prompt
	assert prompt.rstrip().endswith("3. Any notable characteristics")


def test_prompt_marks_missing_values():
	prompt = build_analysis_prompt(MeasurementRecord())
	assert "- Head Height: N/A cm" in prompt
	assert "- Upper Body Ratio: N/A" in prompt


def test_analyzer_receives_prompt_and_image():
	a = EchoAnalyzer()
	assert analyze_best_effort(a, RECORD, b"jpeg") == "Balanced proportions."
	prompt, image = a.calls[0]
	assert image == b"jpeg"
	assert prompt == build_analysis_prompt(RECORD)


def test_analyzer_failure_becomes_fixed_message():
	assert analyze_best_effort(BrokenAnalyzer(), RECORD, b"") == ANALYSIS_FAILED_MESSAGE


def test_no_analyzer_means_no_analysis():
	assert analyze_best_effort(None, RECORD, b"") is None
