"""
CLI entry points for spreadsheet to label sheet conversion.
"""

# Standard Library
import argparse
import dataclasses
import pathlib
import time

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.config
import sheet_label_engine.items
import sheet_label_engine.metrics
import sheet_label_engine.render
import sheet_label_engine.spreadsheet


RenderOptions = sle.config.RenderOptions
LabelQueue = sle.items.LabelQueue

DEFAULT_GRID = sle.config.DEFAULT_GRID


#============================================
def clamp_start_offset(value: int, labels_per_page: int) -> int:
	"""
	Clamp a start offset to one sheet.

	Args:
		value: Requested leading empty slots.
		labels_per_page: Slots per page.

	Returns:
		Offset in [0, labels_per_page - 1].
	"""
	return max(0, min(value, labels_per_page - 1))


#============================================
def build_options(args: argparse.Namespace) -> RenderOptions:
	"""
	Build render options from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderOptions.
	"""
	start_offset = clamp_start_offset(args.start_offset, DEFAULT_GRID.labels_per_page)
	if start_offset != args.start_offset:
		print(f"Start offset clamped to {start_offset}")
	return RenderOptions(
		show_outline=args.draw_outlines,
		start_offset=start_offset,
		text_align=args.text_align,
	)


#============================================
def build_queue(args: argparse.Namespace, paths: list[pathlib.Path]) -> LabelQueue:
	"""
	Load spreadsheet rows into a queue in print order.

	Args:
		args: Parsed argparse namespace.
		paths: Spreadsheet paths.

	Returns:
		LabelQueue.
	"""
	queue = LabelQueue(args.kind)
	rows = []
	for path in paths:
		items = sle.spreadsheet.read_items(path, args.kind)
		print(f"{path.name}: {len(items)} rows")
		rows.extend(items)
	if args.font_size is not None:
		rows = [dataclasses.replace(item, custom_font_size=args.font_size) for item in rows]
	# queue.add prepends, so walk backwards to keep sheet order
	for item in reversed(rows):
		queue.add(item, args.quantity)
	return queue


#============================================
def parse_args() -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render spreadsheet rows onto 7x18 label sheets.")
	parser.add_argument("inputs", nargs="*", help="XLSX files.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-t", "--write-template", dest="template_path", default=None, help="Write an import template and exit.")

	content_group = parser.add_argument_group("Content")
	content_group.add_argument("-k", "--kind", dest="kind", choices=("product", "measure"), default="product", help="Record kind of the rows.")
	content_group.add_argument("-q", "--quantity", dest="quantity", type=int, default=1, help="Copies per row.")
	content_group.add_argument("-f", "--font-size", dest="font_size", type=float, default=None, help="Nominal font size for every label.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-d", "--draw-outlines", dest="draw_outlines", action="store_true", help="Draw cell outlines.")
	layout_group.add_argument("-D", "--no-draw-outlines", dest="draw_outlines", action="store_false", help="Disable cell outlines.")
	layout_group.add_argument("-s", "--start-offset", dest="start_offset", type=int, default=0, help="Empty cells before the first label.")
	layout_group.add_argument("-a", "--align", dest="text_align", choices=("left", "center"), default="center", help="Text alignment.")
	layout_group.add_argument("-c", "--calibration", dest="calibration", action="store_true", help="Add a calibration page.")
	layout_group.add_argument("-C", "--no-calibration", dest="calibration", action="store_false", help="Disable calibration page.")

	parser.set_defaults(
		draw_outlines=False,
		calibration=False,
	)

	args = parser.parse_args()
	if args.template_path is None:
		if not args.inputs:
			parser.error("at least one XLSX input is required")
		if args.output_path is None:
			parser.error("-o/--output is required")
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run the full pipeline from spreadsheets to a PDF sheet.

	Args:
		args: Parsed argparse namespace.
	"""
	if args.template_path is not None:
		path = sle.spreadsheet.write_template(pathlib.Path(args.template_path), args.kind)
		print(f"Template written: {path}")
		return

	print("Spreadsheet to label sheet pipeline")
	print(f"Output PDF: {args.output_path}")
	print(f"Kind: {args.kind}")
	print(f"Draw outlines: {args.draw_outlines}")
	print(f"Calibration: {args.calibration}")
	print(f"Align: {args.text_align}")

	start_time = time.perf_counter()
	paths = [pathlib.Path(entry).expanduser().resolve() for entry in args.inputs]
	queue = build_queue(args, paths)
	print(f"Labels queued: {len(queue)}")

	options = build_options(args)
	metrics = sle.metrics.TextMetrics()
	render_start = time.perf_counter()
	result = sle.render.render_document(
		list(queue.snapshot()),
		args.kind,
		options,
		DEFAULT_GRID,
		metrics,
		calibration_page=args.calibration,
		verbose=True,
	)
	render_end = time.perf_counter()

	output_path = pathlib.Path(args.output_path)
	output_path.write_bytes(result.data)
	print(f"Pages written: {result.pages}")
	print(f"Labels placed: {result.placed_labels}")
	if result.overflow_runs > 0:
		print(f"Text runs wider than their cell at minimum size: {result.overflow_runs}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	sle.render.write_manifest(
		pathlib.Path(manifest_path),
		paths,
		sle.config.normalize_kind(args.kind),
		result,
		options,
		DEFAULT_GRID,
		metrics,
	)

	total_time = time.perf_counter() - start_time
	print(
		"Timing: render={:.2f}s total={:.2f}s".format(
			render_end - render_start,
			total_time,
		)
	)
	print(f"Manifest written: {manifest_path}")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
