"""
Shrink-to-fit font sizing and greedy line wrapping.
"""

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.config
import sheet_label_engine.metrics


TextMetrics = sle.metrics.TextMetrics

FIT_FLOOR_SIZE = sle.config.FIT_FLOOR_SIZE
FIT_STEP_SIZE = sle.config.FIT_STEP_SIZE
LINE_SPACING = sle.config.LINE_SPACING


#============================================
def measure_lines(
	lines: list[str],
	metrics: TextMetrics,
	font_name: str,
	font_size: float,
) -> float:
	"""
	Measure the widest of several lines.

	Args:
		lines: Candidate lines.
		metrics: Output engine metrics.
		font_name: Font name.
		font_size: Font size in points.

	Returns:
		Maximum width in millimeters, 0.0 for no lines.
	"""
	if not lines:
		return 0.0
	return max(metrics.string_width(line, font_name, font_size) for line in lines)


#============================================
def fit_font_size(
	text: str | list[str],
	max_width: float,
	start_size: float,
	metrics: TextMetrics,
	font_name: str,
	factor: float = 1.0,
	floor_size: float = FIT_FLOOR_SIZE,
	step_size: float = FIT_STEP_SIZE,
) -> float:
	"""
	Reduce a nominal font size until the text fits a width.

	Sizes are nominal; each is multiplied by the calibration factor
	before measuring. The floor wins over the width, so the result may
	still overflow when the text is too long.

	Args:
		text: Single line or list of lines sized as a group.
		max_width: Available width in millimeters.
		start_size: Nominal starting size in points.
		metrics: Output engine metrics.
		font_name: Font name.
		factor: Calibration factor.
		floor_size: Smallest nominal size.
		step_size: Decrement per pass.

	Returns:
		Nominal font size in points.
	"""
	lines = [text] if isinstance(text, str) else list(text)
	size = start_size
	width = measure_lines(lines, metrics, font_name, size * factor)
	while width > max_width and size > floor_size:
		size = max(floor_size, round(size - step_size, 6))
		width = measure_lines(lines, metrics, font_name, size * factor)
	return size


#============================================
def fits_width(
	text: str | list[str],
	max_width: float,
	size: float,
	metrics: TextMetrics,
	font_name: str,
	factor: float = 1.0,
) -> bool:
	lines = [text] if isinstance(text, str) else list(text)
	return measure_lines(lines, metrics, font_name, size * factor) <= max_width


#============================================
def wrap_text_to_width(
	text: str,
	metrics: TextMetrics,
	font_name: str,
	font_size: float,
	max_width: float,
) -> list[str]:
	"""
	Greedily wrap text on whitespace to fit within a max width.

	A single word wider than max_width stays on its own line.

	Args:
		text: Input text.
		metrics: Output engine metrics.
		font_name: Font name for width calculation.
		font_size: Font size in points, as handed to the canvas.
		max_width: Maximum line width in millimeters.

	Returns:
		Wrapped lines.
	"""
	words = text.split()
	if not words:
		return []
	lines: list[str] = []
	current = ""
	for word in words:
		candidate = word if not current else f"{current} {word}"
		width = metrics.string_width(candidate, font_name, font_size)
		if width <= max_width or not current:
			current = candidate
			continue
		lines.append(current)
		current = word
	if current:
		lines.append(current)
	return lines


#============================================
def block_height(line_count: int, size: float, factor: float = 1.0) -> float:
	"""
	Height in millimeters of a stack of equally sized lines.
	"""
	return line_count * sle.config.points_to_mm(size * factor) * LINE_SPACING


#============================================
def fit_wrapped_text(
	text: str,
	max_width: float,
	max_height: float,
	start_size: float,
	metrics: TextMetrics,
	font_name: str,
	factor: float = 1.0,
	floor_size: float = FIT_FLOOR_SIZE,
	step_size: float = FIT_STEP_SIZE,
) -> tuple[list[str], float]:
	"""
	Wrap and shrink text until the stacked block fits a box.

	The text is re-wrapped at every candidate size, so smaller sizes
	put more words on each line. The floor wins over the box.

	Args:
		text: Input text.
		max_width: Available width in millimeters.
		max_height: Available height in millimeters.
		start_size: Nominal starting size in points.
		metrics: Output engine metrics.
		font_name: Font name.
		factor: Calibration factor.
		floor_size: Smallest nominal size.
		step_size: Decrement per pass.

	Returns:
		Tuple of (lines, nominal font size).
	"""
	size = start_size
	while True:
		lines = wrap_text_to_width(text, metrics, font_name, size * factor, max_width)
		if not lines:
			return ([], size)
		width = measure_lines(lines, metrics, font_name, size * factor)
		height = block_height(len(lines), size, factor)
		if (width <= max_width and height <= max_height) or size <= floor_size:
			return (lines, size)
		size = max(floor_size, round(size - step_size, 6))
