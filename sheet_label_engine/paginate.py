"""
Slot assignment and page planning for the label queue.
"""

# Standard Library
import dataclasses

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.cell
import sheet_label_engine.config
import sheet_label_engine.items
import sheet_label_engine.metrics


GridGeometry = sle.config.GridGeometry
RenderOptions = sle.config.RenderOptions
CellLayout = sle.cell.CellLayout
QueueItem = sle.items.QueueItem
TextMetrics = sle.metrics.TextMetrics

PROGRESS_BAR_WIDTH = sle.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = sle.config.PROGRESS_UPDATE_EVERY


@dataclasses.dataclass(frozen=True)
class SlotAssignment:
	slot: int
	page: int
	row: int
	column: int
	x: float
	y: float
	item: QueueItem


@dataclasses.dataclass
class PagePlan:
	index: int
	cells: list[CellLayout]


@dataclasses.dataclass
class SheetPlan:
	kind: str
	pages: list[PagePlan]
	labels_per_page: int
	start_offset: int
	calibration_factor: float

	@property
	def placed_labels(self) -> int:
		return sum(len(page.cells) for page in self.pages)

	@property
	def overflow_runs(self) -> int:
		count = 0
		for page in self.pages:
			for cell in page.cells:
				count += sum(1 for run in cell.texts if run.overflows)
		return count


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"\r{prefix} [{bar}] {current}/{total} ({percent}%)", end="", flush=True)


#============================================
def count_pages(item_count: int, start_offset: int, labels_per_page: int) -> int:
	"""
	Number of pages for a queue, never less than one.

	Args:
		item_count: Queue length.
		start_offset: Leading empty slots.
		labels_per_page: Slots per page.

	Returns:
		Page count.
	"""
	total_slots = item_count + start_offset
	pages = (total_slots + labels_per_page - 1) // labels_per_page
	return max(1, pages)


#============================================
def assign_slots(
	items: list[QueueItem],
	geometry: GridGeometry,
	start_offset: int,
) -> list[SlotAssignment]:
	"""
	Assign queue items to sheet slots in queue order.

	The first start_offset slots stay empty; they produce no assignment.

	Args:
		items: Queue items in print order.
		geometry: Sheet geometry.
		start_offset: Leading empty slots.

	Returns:
		One SlotAssignment per item.
	"""
	labels_per_page = geometry.labels_per_page
	assignments: list[SlotAssignment] = []
	for index, item in enumerate(items):
		absolute = start_offset + index
		page, slot = divmod(absolute, labels_per_page)
		row, column = geometry.slot_position(slot)
		x, y = geometry.slot_origin(slot)
		assignments.append(
			SlotAssignment(slot=slot, page=page, row=row, column=column, x=x, y=y, item=item)
		)
	return assignments


#============================================
def paginate(
	items: list[QueueItem],
	kind: str,
	geometry: GridGeometry,
	options: RenderOptions,
	metrics: TextMetrics,
	factor: float,
	verbose: bool = False,
) -> SheetPlan:
	"""
	Lay out every queue item on its page.

	Args:
		items: Queue items in print order, all of the given kind.
		kind: Document record kind.
		geometry: Sheet geometry.
		options: Render options.
		metrics: Output engine metrics.
		factor: Calibration factor.
		verbose: Print a progress bar.

	Returns:
		SheetPlan with one PagePlan per page.
	"""
	kind = sle.config.normalize_kind(kind)
	for item in items:
		if item.kind != kind:
			raise ValueError(f"Item {item.item_id} is {item.kind}, document is {kind}")
	default_size = sle.config.default_font_size(kind)
	page_count = count_pages(len(items), options.start_offset, geometry.labels_per_page)
	pages = [PagePlan(index=index, cells=[]) for index in range(page_count)]

	assignments = assign_slots(items, geometry, options.start_offset)
	total = len(assignments)
	for index, assignment in enumerate(assignments, start=1):
		item = assignment.item
		base_size = item.custom_font_size or default_size
		layout = sle.cell.layout_cell(
			item,
			assignment.slot,
			assignment.x,
			assignment.y,
			geometry,
			base_size,
			options.text_align,
			options.show_outline,
			metrics,
			factor,
		)
		pages[assignment.page].cells.append(layout)
		if verbose and (index % PROGRESS_UPDATE_EVERY == 0 or index == total):
			print_progress("Cells", index, total)
	if verbose and total > 0:
		print()

	return SheetPlan(
		kind=kind,
		pages=pages,
		labels_per_page=geometry.labels_per_page,
		start_offset=options.start_offset,
		calibration_factor=factor,
	)
