"""
Document assembly: calibration, pagination, drawing and serialization.
"""

# Standard Library
import io
import json
import pathlib

# PIP3 modules
import pypdf
import reportlab.pdfgen.canvas

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.calibrate
import sheet_label_engine.cell
import sheet_label_engine.config
import sheet_label_engine.items
import sheet_label_engine.metrics
import sheet_label_engine.paginate


GridGeometry = sle.config.GridGeometry
RenderOptions = sle.config.RenderOptions
RenderResult = sle.config.RenderResult
SheetPlan = sle.paginate.SheetPlan
TextMetrics = sle.metrics.TextMetrics
QueueItem = sle.items.QueueItem

DEFAULT_GRID = sle.config.DEFAULT_GRID
BENCHMARK_TEXT = sle.config.BENCHMARK_TEXT
BENCHMARK_WIDTH_MM = sle.config.BENCHMARK_WIDTH_MM
BENCHMARK_SIZE = sle.config.BENCHMARK_SIZE


#============================================
def new_canvas(buffer: io.BytesIO, geometry: GridGeometry) -> reportlab.pdfgen.canvas.Canvas:
	"""
	Create a canvas sized to the sheet page.

	Args:
		buffer: Output buffer.
		geometry: Sheet geometry.

	Returns:
		ReportLab canvas.
	"""
	page_size = (
		sle.config.mm_to_points(geometry.page_width),
		sle.config.mm_to_points(geometry.page_height),
	)
	# invariant keeps creation date and document id fixed between renders
	return reportlab.pdfgen.canvas.Canvas(buffer, pagesize=page_size, invariant=1)


#============================================
def plan_document(
	items: list[QueueItem],
	kind: str,
	options: RenderOptions,
	geometry: GridGeometry = DEFAULT_GRID,
	metrics: TextMetrics | None = None,
	verbose: bool = False,
) -> SheetPlan:
	"""
	Calibrate the output engine and lay out every page.

	Args:
		items: Queue snapshot in print order.
		kind: Document record kind.
		options: Render options.
		geometry: Sheet geometry.
		metrics: Output engine metrics, ReportLab Helvetica by default.
		verbose: Print progress.

	Returns:
		SheetPlan.
	"""
	if metrics is None:
		metrics = TextMetrics()
	factor = sle.calibrate.calibrate(metrics)
	if verbose:
		print(f"Calibration factor: {factor:.6f}")
	return sle.paginate.paginate(list(items), kind, geometry, options, metrics, factor, verbose=verbose)


#============================================
def draw_sheet_plan(
	pdf: reportlab.pdfgen.canvas.Canvas,
	plan: SheetPlan,
	geometry: GridGeometry,
) -> None:
	"""
	Draw every planned page, starting a new page between them.

	Args:
		pdf: ReportLab canvas.
		plan: Sheet plan.
		geometry: Sheet geometry.
	"""
	for page in plan.pages:
		for layout in page.cells:
			sle.cell.draw_cell(pdf, layout, geometry.page_height)
		# close every page so blank ones are still written by save()
		pdf.showPage()


#============================================
def draw_calibration_page(
	pdf: reportlab.pdfgen.canvas.Canvas,
	geometry: GridGeometry,
	metrics: TextMetrics,
	factor: float,
) -> None:
	"""
	Draw all cell outlines plus a benchmark ruler.

	The benchmark string is drawn at its calibrated size under a bar of
	BENCHMARK_WIDTH_MM, so both should print the same length.

	Args:
		pdf: ReportLab canvas.
		geometry: Sheet geometry.
		metrics: Output engine metrics.
		factor: Calibration factor.
	"""
	to_pt = sle.config.mm_to_points
	page_height = geometry.page_height
	pdf.setLineWidth(0.3)
	pdf.setStrokeColorRGB(0.6, 0.6, 0.6)
	for slot in range(geometry.labels_per_page):
		x, y = geometry.slot_origin(slot)
		pdf.roundRect(
			to_pt(x),
			to_pt(page_height - y - geometry.cell_height),
			to_pt(geometry.cell_width),
			to_pt(geometry.cell_height),
			to_pt(geometry.corner_radius),
			stroke=1,
			fill=0,
		)

	ruler_x = geometry.margin_left
	ruler_y = geometry.margin_top * 0.35
	tick = 1.0
	pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
	pdf.setLineWidth(0.6)
	bar_y = to_pt(page_height - ruler_y)
	pdf.line(to_pt(ruler_x), bar_y, to_pt(ruler_x + BENCHMARK_WIDTH_MM), bar_y)
	for end_x in (ruler_x, ruler_x + BENCHMARK_WIDTH_MM):
		pdf.line(
			to_pt(end_x),
			to_pt(page_height - ruler_y - tick),
			to_pt(end_x),
			to_pt(page_height - ruler_y + tick),
		)
	pdf.setFillColorRGB(0.0, 0.0, 0.0)
	pdf.setFont(metrics.font_regular, 6)
	pdf.drawString(
		to_pt(ruler_x + BENCHMARK_WIDTH_MM + 2.0),
		to_pt(page_height - ruler_y - 0.8),
		f"{BENCHMARK_WIDTH_MM:g} mm",
	)
	pdf.setFont(metrics.font_bold, BENCHMARK_SIZE * factor)
	pdf.drawString(to_pt(ruler_x), to_pt(page_height - geometry.margin_top * 0.8), BENCHMARK_TEXT)


#============================================
def build_calibration_page(
	geometry: GridGeometry,
	metrics: TextMetrics,
	factor: float,
) -> pypdf.PageObject:
	"""
	Build a calibration sheet page.

	Args:
		geometry: Sheet geometry.
		metrics: Output engine metrics.
		factor: Calibration factor.

	Returns:
		PDF page object.
	"""
	buffer = io.BytesIO()
	pdf = new_canvas(buffer, geometry)
	draw_calibration_page(pdf, geometry, metrics, factor)
	pdf.save()
	buffer.seek(0)
	reader = pypdf.PdfReader(buffer)
	return reader.pages[0]


#============================================
def prepend_page(data: bytes, first_page: pypdf.PageObject) -> bytes:
	"""
	Insert a page in front of a serialized PDF.

	Args:
		data: PDF bytes.
		first_page: Page to insert.

	Returns:
		New PDF bytes.
	"""
	writer = pypdf.PdfWriter()
	writer.add_page(first_page)
	reader = pypdf.PdfReader(io.BytesIO(data))
	for page in reader.pages:
		writer.add_page(page)
	output = io.BytesIO()
	writer.write(output)
	return output.getvalue()


#============================================
def render_document(
	items: list[QueueItem],
	kind: str,
	options: RenderOptions,
	geometry: GridGeometry = DEFAULT_GRID,
	metrics: TextMetrics | None = None,
	calibration_page: bool = False,
	verbose: bool = False,
) -> RenderResult:
	"""
	Render a queue snapshot into print-ready PDF bytes.

	Args:
		items: Queue snapshot in print order.
		kind: Document record kind.
		options: Render options.
		geometry: Sheet geometry.
		metrics: Output engine metrics, ReportLab Helvetica by default.
		calibration_page: Put a calibration sheet in front.
		verbose: Print progress.

	Returns:
		RenderResult.
	"""
	if metrics is None:
		metrics = TextMetrics()
	plan = plan_document(items, kind, options, geometry, metrics, verbose=verbose)

	buffer = io.BytesIO()
	pdf = new_canvas(buffer, geometry)
	draw_sheet_plan(pdf, plan, geometry)
	pdf.save()
	data = buffer.getvalue()

	pages = len(plan.pages)
	if calibration_page:
		page = build_calibration_page(geometry, metrics, plan.calibration_factor)
		data = prepend_page(data, page)
		pages += 1

	return RenderResult(
		data=data,
		pages=pages,
		placed_labels=plan.placed_labels,
		start_offset=plan.start_offset,
		labels_per_page=plan.labels_per_page,
		calibration_factor=plan.calibration_factor,
		overflow_runs=plan.overflow_runs,
	)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	inputs: list[pathlib.Path],
	kind: str,
	result: RenderResult,
	options: RenderOptions,
	geometry: GridGeometry,
	metrics: TextMetrics,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		inputs: Input spreadsheet files.
		kind: Document record kind.
		result: Render result.
		options: Render options.
		geometry: Sheet geometry.
		metrics: Output engine metrics.
	"""
	data = {
		"inputs": [str(path) for path in inputs],
		"kind": kind,
		"labels_per_page": result.labels_per_page,
		"placed_labels": result.placed_labels,
		"start_offset": result.start_offset,
		"pages": result.pages,
		"overflow_runs": result.overflow_runs,
		"calibration_factor": result.calibration_factor,
		"options": {
			"show_outline": options.show_outline,
			"text_align": options.text_align,
		},
		"layout": {
			"columns": geometry.columns,
			"rows": geometry.rows,
			"cell_width": geometry.cell_width,
			"cell_height": geometry.cell_height,
			"margin_left": geometry.margin_left,
			"margin_top": geometry.margin_top,
			"column_gap": geometry.column_gap,
			"row_gap": geometry.row_gap,
			"corner_radius": geometry.corner_radius,
			"page_width": geometry.page_width,
			"page_height": geometry.page_height,
		},
		"fonts": {
			"regular": metrics.font_regular,
			"bold": metrics.font_bold,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
