"""
Cell layout and drawing for one queue item.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.config
import sheet_label_engine.fit
import sheet_label_engine.items
import sheet_label_engine.metrics


GridGeometry = sle.config.GridGeometry
TextMetrics = sle.metrics.TextMetrics
ProductItem = sle.items.ProductItem
MeasurementItem = sle.items.MeasurementItem
QueueItem = sle.items.QueueItem

ALIGN_LEFT = sle.config.ALIGN_LEFT
ALIGN_CENTER = sle.config.ALIGN_CENTER
CELL_PADDING = sle.config.CELL_PADDING
LINE_SPACING = sle.config.LINE_SPACING
PRICE_SIZE_RATIO = sle.config.PRICE_SIZE_RATIO
NOTE_SIZE_RATIO = sle.config.NOTE_SIZE_RATIO
VOLTAGE_NUMBER_RATIO = sle.config.VOLTAGE_NUMBER_RATIO
VOLTS_LABEL_RATIO = sle.config.VOLTS_LABEL_RATIO
VOLTS_LABEL_TEXT = sle.config.VOLTS_LABEL_TEXT
VOLTAGE_ZONE_GAP = sle.config.VOLTAGE_ZONE_GAP
VOLTAGE_ZONE_INSET = sle.config.VOLTAGE_ZONE_INSET
TEXT_COLOR = sle.config.TEXT_COLOR
NOTE_COLOR = sle.config.NOTE_COLOR
OUTLINE_COLOR = sle.config.OUTLINE_COLOR
OUTLINE_WIDTH = sle.config.OUTLINE_WIDTH
VOLTAGE_BORDER_COLOR = sle.config.VOLTAGE_BORDER_COLOR
VOLTAGE_BORDER_WIDTH = sle.config.VOLTAGE_BORDER_WIDTH


@dataclasses.dataclass(frozen=True)
class TextStyle:
	font_name: str
	font_size: float
	color: tuple[float, float, float]


@dataclasses.dataclass(frozen=True)
class TextRun:
	text: str
	x: float
	baseline: float
	width: float
	max_width: float
	nominal_size: float
	style: TextStyle

	@property
	def overflows(self) -> bool:
		return self.width > self.max_width + 1e-9


@dataclasses.dataclass(frozen=True)
class BoxRun:
	x: float
	y: float
	width: float
	height: float
	radius: float
	stroke_color: tuple[float, float, float]
	line_width: float


@dataclasses.dataclass(frozen=True)
class CellLayout:
	slot: int
	x: float
	y: float
	boxes: tuple[BoxRun, ...]
	texts: tuple[TextRun, ...]


@dataclasses.dataclass(frozen=True)
class LineSpec:
	text: str
	font_name: str
	nominal_size: float
	color: tuple[float, float, float]


@dataclasses.dataclass(frozen=True)
class Zone:
	x: float
	y: float
	width: float
	height: float


#============================================
def compute_align_offset(available: float, width: float, align: str) -> float:
	"""
	Compute a horizontal alignment offset.

	Args:
		available: Available width.
		width: Text width.
		align: ALIGN_LEFT or ALIGN_CENTER.

	Returns:
		Offset in millimeters.
	"""
	if align == ALIGN_LEFT:
		return 0.0
	return max(0.0, (available - width) / 2.0)


#============================================
def stack_lines(
	specs: list[LineSpec],
	zone: Zone,
	align: str,
	metrics: TextMetrics,
	factor: float,
) -> list[TextRun]:
	"""
	Stack lines top to bottom, centered vertically as one block.

	Each line takes LINE_SPACING times its font size; its glyph box
	(ascent to descent) is centered in that pitch.

	Args:
		specs: Lines with nominal sizes.
		zone: Area to place the block in.
		align: Horizontal alignment within the zone.
		metrics: Output engine metrics.
		factor: Calibration factor.

	Returns:
		Positioned text runs.
	"""
	pitches = []
	for spec in specs:
		size_mm = sle.config.points_to_mm(spec.nominal_size * factor)
		pitches.append(size_mm * LINE_SPACING)
	line_top = zone.y + (zone.height - sum(pitches)) / 2.0

	runs: list[TextRun] = []
	for spec, pitch in zip(specs, pitches):
		font_size = spec.nominal_size * factor
		ascent = metrics.ascent(spec.font_name, font_size)
		descent = metrics.descent(spec.font_name, font_size)
		baseline = line_top + (pitch + ascent + descent) / 2.0
		width = metrics.string_width(spec.text, spec.font_name, font_size)
		text_x = zone.x + compute_align_offset(zone.width, width, align)
		runs.append(
			TextRun(
				text=spec.text,
				x=text_x,
				baseline=baseline,
				width=width,
				max_width=zone.width,
				nominal_size=spec.nominal_size,
				style=TextStyle(spec.font_name, font_size, spec.color),
			)
		)
		line_top += pitch
	return runs


#============================================
def product_line_specs(
	item: ProductItem,
	max_width: float,
	base_size: float,
	metrics: TextMetrics,
	factor: float,
) -> list[LineSpec]:
	"""
	Build the title / price / note lines, each fit on its own.

	Empty fields are left out of the stack.
	"""
	candidates = [
		(item.sku.upper(), metrics.font_bold, 1.0, TEXT_COLOR),
		(item.price, metrics.font_regular, PRICE_SIZE_RATIO, TEXT_COLOR),
		(item.note.upper(), metrics.font_regular, NOTE_SIZE_RATIO, NOTE_COLOR),
	]
	specs: list[LineSpec] = []
	for text, font_name, ratio, color in candidates:
		if not text.strip():
			continue
		size = sle.fit.fit_font_size(text, max_width, base_size * ratio, metrics, font_name, factor)
		specs.append(LineSpec(text, font_name, size, color))
	return specs


#============================================
def layout_voltage_badge(
	item: ProductItem,
	cell_x: float,
	cell_y: float,
	geometry: GridGeometry,
	base_size: float,
	metrics: TextMetrics,
	factor: float,
) -> tuple[BoxRun, list[TextRun]]:
	"""
	Lay out the bordered right half holding the voltage number and VOLTS.

	Args:
		item: Product item with a voltage set.
		cell_x: Cell left edge.
		cell_y: Cell top edge.
		geometry: Sheet geometry.
		base_size: Nominal base size for the item.
		metrics: Output engine metrics.
		factor: Calibration factor.

	Returns:
		Tuple of (border box, text runs).
	"""
	box = BoxRun(
		x=cell_x + geometry.cell_width / 2.0,
		y=cell_y + CELL_PADDING,
		width=geometry.cell_width / 2.0 - CELL_PADDING,
		height=geometry.cell_height - 2.0 * CELL_PADDING,
		radius=geometry.corner_radius,
		stroke_color=VOLTAGE_BORDER_COLOR,
		line_width=VOLTAGE_BORDER_WIDTH,
	)
	inner = Zone(
		x=box.x + VOLTAGE_ZONE_INSET,
		y=box.y,
		width=box.width - 2.0 * VOLTAGE_ZONE_INSET,
		height=box.height,
	)
	number = item.voltage.rstrip("V")
	number_size = sle.fit.fit_font_size(
		number,
		inner.width,
		base_size * VOLTAGE_NUMBER_RATIO,
		metrics,
		metrics.font_bold,
		factor,
	)
	specs = [
		LineSpec(number, metrics.font_bold, number_size, TEXT_COLOR),
		LineSpec(VOLTS_LABEL_TEXT, metrics.font_bold, number_size * VOLTS_LABEL_RATIO, TEXT_COLOR),
	]
	return (box, stack_lines(specs, inner, ALIGN_CENTER, metrics, factor))


#============================================
def layout_cell(
	item: QueueItem,
	slot: int,
	cell_x: float,
	cell_y: float,
	geometry: GridGeometry,
	base_size: float,
	text_align: str,
	show_outline: bool,
	metrics: TextMetrics,
	factor: float,
) -> CellLayout:
	"""
	Compute every box and text run for one cell.

	Args:
		item: Queue item.
		slot: Slot index within the page.
		cell_x: Cell left edge in millimeters.
		cell_y: Cell top edge in millimeters.
		geometry: Sheet geometry.
		base_size: Nominal base size (custom size or the kind default).
		text_align: Global alignment, ALIGN_LEFT or ALIGN_CENTER.
		show_outline: Whether to outline the cell.
		metrics: Output engine metrics.
		factor: Calibration factor.

	Returns:
		CellLayout.
	"""
	boxes: list[BoxRun] = []
	texts: list[TextRun] = []
	if show_outline:
		boxes.append(
			BoxRun(
				x=cell_x,
				y=cell_y,
				width=geometry.cell_width,
				height=geometry.cell_height,
				radius=geometry.corner_radius,
				stroke_color=OUTLINE_COLOR,
				line_width=OUTLINE_WIDTH,
			)
		)

	full_zone = Zone(
		x=cell_x + CELL_PADDING,
		y=cell_y,
		width=geometry.cell_width - 2.0 * CELL_PADDING,
		height=geometry.cell_height,
	)

	if isinstance(item, ProductItem):
		if item.has_voltage:
			# split layout ignores the global alignment
			left_zone = Zone(
				x=cell_x + CELL_PADDING,
				y=cell_y,
				width=geometry.cell_width / 2.0 - VOLTAGE_ZONE_GAP - CELL_PADDING,
				height=geometry.cell_height,
			)
			specs = product_line_specs(item, left_zone.width, base_size, metrics, factor)
			texts.extend(stack_lines(specs, left_zone, ALIGN_LEFT, metrics, factor))
			box, badge_runs = layout_voltage_badge(
				item, cell_x, cell_y, geometry, base_size, metrics, factor,
			)
			boxes.append(box)
			texts.extend(badge_runs)
		else:
			specs = product_line_specs(item, full_zone.width, base_size, metrics, factor)
			texts.extend(stack_lines(specs, full_zone, text_align, metrics, factor))
	else:
		text = item.text.upper()
		font_name = metrics.font_bold
		if item.wrap_lines:
			lines, size = sle.fit.fit_wrapped_text(
				text, full_zone.width, full_zone.height, base_size, metrics, font_name, factor,
			)
		else:
			lines = [text] if text.strip() else []
			size = sle.fit.fit_font_size(text, full_zone.width, base_size, metrics, font_name, factor)
		if lines:
			specs = [LineSpec(line, font_name, size, TEXT_COLOR) for line in lines]
			texts.extend(stack_lines(specs, full_zone, text_align, metrics, factor))

	return CellLayout(
		slot=slot,
		x=cell_x,
		y=cell_y,
		boxes=tuple(boxes),
		texts=tuple(texts),
	)


#============================================
def draw_box_run(
	pdf: reportlab.pdfgen.canvas.Canvas,
	box: BoxRun,
	page_height: float,
) -> None:
	"""
	Stroke a rounded rectangle given in top-left millimeters.
	"""
	to_pt = sle.config.mm_to_points
	pdf.setStrokeColorRGB(*box.stroke_color)
	pdf.setLineWidth(to_pt(box.line_width))
	pdf.roundRect(
		to_pt(box.x),
		to_pt(page_height - box.y - box.height),
		to_pt(box.width),
		to_pt(box.height),
		to_pt(box.radius),
		stroke=1,
		fill=0,
	)


#============================================
def draw_text_run(
	pdf: reportlab.pdfgen.canvas.Canvas,
	run: TextRun,
	page_height: float,
) -> None:
	"""
	Draw one text run with its own font, size and color.
	"""
	to_pt = sle.config.mm_to_points
	pdf.setFillColorRGB(*run.style.color)
	pdf.setFont(run.style.font_name, run.style.font_size)
	pdf.drawString(to_pt(run.x), to_pt(page_height - run.baseline), run.text)


#============================================
def draw_cell(
	pdf: reportlab.pdfgen.canvas.Canvas,
	layout: CellLayout,
	page_height: float,
) -> None:
	"""
	Draw a cell layout, boxes first so borders never cover text.

	Args:
		pdf: ReportLab canvas.
		layout: Cell layout.
		page_height: Page height in millimeters.
	"""
	for box in layout.boxes:
		draw_box_run(pdf, box, page_height)
	for run in layout.texts:
		draw_text_run(pdf, run, page_height)
