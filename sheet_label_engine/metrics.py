"""
Text measurement against the PDF output engine.
"""

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.config


DEFAULT_FONT_REGULAR = sle.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = sle.config.DEFAULT_FONT_BOLD


class TextMetrics:
	"""
	Millimeter text metrics backed by ReportLab font tables.

	Every call takes the font and size explicitly; nothing is carried
	between calls.
	"""

	def __init__(
		self,
		font_regular: str = DEFAULT_FONT_REGULAR,
		font_bold: str = DEFAULT_FONT_BOLD,
	) -> None:
		self.font_regular = font_regular
		self.font_bold = font_bold

	def font_for(self, bold: bool) -> str:
		if bold:
			return self.font_bold
		return self.font_regular

	def string_width(self, text: str, font_name: str, font_size: float) -> float:
		"""
		Measure a string.

		Args:
			text: Text to measure.
			font_name: ReportLab font name.
			font_size: Font size in points, as handed to the canvas.

		Returns:
			Width in millimeters.
		"""
		width = reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size)
		return sle.config.points_to_mm(width)

	def ascent(self, font_name: str, font_size: float) -> float:
		ascent = reportlab.pdfbase.pdfmetrics.getAscent(font_name) * font_size / 1000.0
		return sle.config.points_to_mm(ascent)

	def descent(self, font_name: str, font_size: float) -> float:
		# negative below the baseline
		descent = reportlab.pdfbase.pdfmetrics.getDescent(font_name) * font_size / 1000.0
		return sle.config.points_to_mm(descent)
