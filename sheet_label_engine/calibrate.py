"""
Font calibration against the physical benchmark width.
"""

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.config
import sheet_label_engine.metrics


BENCHMARK_TEXT = sle.config.BENCHMARK_TEXT
BENCHMARK_WIDTH_MM = sle.config.BENCHMARK_WIDTH_MM
BENCHMARK_SIZE = sle.config.BENCHMARK_SIZE


class CalibrationError(RuntimeError):
	"""
	The output engine cannot measure the benchmark string.
	"""


#============================================
def calibrate(metrics: sle.metrics.TextMetrics) -> float:
	"""
	Compute the font size multiplier for an output engine.

	The benchmark string in bold at the reference size must measure
	BENCHMARK_WIDTH_MM. Nominal sizes are multiplied by the returned
	factor before they reach the canvas.

	Args:
		metrics: Text metrics of the output engine.

	Returns:
		Calibration factor.
	"""
	font_name = metrics.font_bold
	try:
		measured = metrics.string_width(BENCHMARK_TEXT, font_name, BENCHMARK_SIZE)
	except KeyError as error:
		raise CalibrationError(f"Benchmark font unavailable: {font_name}") from error
	if measured <= 0.0:
		raise CalibrationError(
			f"Benchmark measured {measured:.4f}mm in {font_name}, cannot calibrate"
		)
	return BENCHMARK_WIDTH_MM / measured
