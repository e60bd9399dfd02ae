import math

import pytest

from bodymeasure.calibration import pixel_to_cm_ratio, total_height_px, validate_height
from bodymeasure.errors import DegenerateCalibration, MeasurementError


def test_ratio_is_height_over_pixels():
	assert pixel_to_cm_ratio(170.0, 460.0) == 170.0 / 460.0


def test_total_skips_absent_segments():
	assert total_height_px([80.0, None, 100.0, 100.0]) == 280.0
	assert total_height_px([]) == 0.0


@pytest.mark.parametrize("height", [0.0, -170.0, math.nan, math.inf, "tall", None])
def test_bad_height_is_degenerate(height):
	with pytest.raises(DegenerateCalibration):
		pixel_to_cm_ratio(height, 460.0)


@pytest.mark.parametrize("total_px", [0.0, -1.0, math.nan])
def test_zero_pixel_body_is_degenerate(total_px):
	with pytest.raises(DegenerateCalibration) as exc:
		pixel_to_cm_ratio(170.0, total_px)
	assert exc.value.height_cm == 170.0


def test_degenerate_calibration_is_a_measurement_error():
	assert issubclass(DegenerateCalibration, MeasurementError)


def test_validate_height_accepts_numeric_strings():
	assert validate_height("172.5") == 172.5
