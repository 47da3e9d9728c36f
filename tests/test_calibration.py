import pytest
import reportlab.pdfbase.pdfmetrics

import sheet_label_engine.calibrate
import sheet_label_engine.config
import sheet_label_engine.metrics


CalibrationError = sheet_label_engine.calibrate.CalibrationError
TextMetrics = sheet_label_engine.metrics.TextMetrics


class ZeroWidthMetrics(TextMetrics):
	"""
	Output engine that measures every string as zero wide.
	"""

	def string_width(self, text: str, font_name: str, font_size: float) -> float:
		return 0.0


#============================================
def test_calibration_matches_benchmark() -> None:
	"""
	The factor scales the benchmark string to exactly 26mm.
	"""
	metrics = TextMetrics()
	factor = sheet_label_engine.calibrate.calibrate(metrics)
	width_pt = reportlab.pdfbase.pdfmetrics.stringWidth("CX464 - 74X107", "Helvetica-Bold", 10.0)
	width_mm = width_pt * 25.4 / 72.0
	assert factor == pytest.approx(26.0 / width_mm)
	calibrated = metrics.string_width("CX464 - 74X107", "Helvetica-Bold", 10.0 * factor)
	assert calibrated == pytest.approx(26.0)


#============================================
def test_calibration_is_deterministic() -> None:
	"""
	Repeated calibration in one process returns the same factor.
	"""
	metrics = TextMetrics()
	factors = {sheet_label_engine.calibrate.calibrate(metrics) for _ in range(5)}
	assert len(factors) == 1
	assert factors == {sheet_label_engine.calibrate.calibrate(TextMetrics())}


#============================================
def test_zero_width_benchmark_fails_loudly() -> None:
	"""
	A degenerate measurement raises instead of dividing by zero.
	"""
	with pytest.raises(CalibrationError):
		sheet_label_engine.calibrate.calibrate(ZeroWidthMetrics())


#============================================
def test_missing_benchmark_font_fails_loudly() -> None:
	"""
	An unknown bold font surfaces as a calibration error.
	"""
	metrics = TextMetrics(font_bold="NoSuchFont-Bold")
	with pytest.raises(CalibrationError):
		sheet_label_engine.calibrate.calibrate(metrics)
