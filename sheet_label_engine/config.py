"""
Shared configuration and constants.
"""

import dataclasses


POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4
PT_TO_MM = MM_PER_INCH / POINTS_PER_INCH

PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0

COLUMNS = 7
ROWS = 18
DEFAULT_CELL_WIDTH = 26.0
DEFAULT_CELL_HEIGHT = 15.0
DEFAULT_LEFT_MARGIN = 8.0
DEFAULT_TOP_MARGIN = 13.0
DEFAULT_COLUMN_GAP = 2.0
DEFAULT_ROW_GAP = 0.0
DEFAULT_CORNER_RADIUS = 0.5

KIND_PRODUCT = "PRODUCT"
KIND_MEASURE = "MEASURE"
RECORD_KINDS = (KIND_PRODUCT, KIND_MEASURE)

VOLTAGE_NONE = "NONE"
VOLTAGE_127 = "127V"
VOLTAGE_220 = "220V"
VOLTAGES = (VOLTAGE_NONE, VOLTAGE_127, VOLTAGE_220)

ALIGN_LEFT = "LEFT"
ALIGN_CENTER = "CENTER"
TEXT_ALIGNMENTS = (ALIGN_LEFT, ALIGN_CENTER)

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
DEFAULT_PRODUCT_SIZE = 8.5
DEFAULT_MEASURE_SIZE = 14.0

# calibration benchmark: this string in bold at 10pt prints 26mm wide
BENCHMARK_TEXT = "CX464 - 74X107"
BENCHMARK_WIDTH_MM = 26.0
BENCHMARK_SIZE = 10.0

FIT_FLOOR_SIZE = 3.5
FIT_STEP_SIZE = 0.3

PRICE_SIZE_RATIO = 1.0
NOTE_SIZE_RATIO = 0.75
VOLTAGE_NUMBER_RATIO = 1.6
VOLTS_LABEL_RATIO = 0.35
VOLTS_LABEL_TEXT = "VOLTS"

CELL_PADDING = 1.0
VOLTAGE_ZONE_GAP = 0.5
VOLTAGE_ZONE_INSET = 0.5
LINE_SPACING = 1.1

TEXT_COLOR = (0.0, 0.0, 0.0)
NOTE_COLOR = (120 / 255.0, 120 / 255.0, 120 / 255.0)
OUTLINE_COLOR = (220 / 255.0, 220 / 255.0, 220 / 255.0)
OUTLINE_WIDTH = 0.05
VOLTAGE_BORDER_COLOR = (0.0, 0.0, 0.0)
VOLTAGE_BORDER_WIDTH = 0.2

PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 25
DOWNLOAD_PREFIX = "labels_print"


@dataclasses.dataclass(frozen=True)
class GridGeometry:
	columns: int
	rows: int
	cell_width: float
	cell_height: float
	margin_left: float
	margin_top: float
	column_gap: float
	row_gap: float
	corner_radius: float
	page_width: float = PAGE_WIDTH_MM
	page_height: float = PAGE_HEIGHT_MM

	def __post_init__(self) -> None:
		if self.columns <= 0 or self.rows <= 0:
			raise ValueError(f"Grid needs positive columns and rows, got {self.columns}x{self.rows}")
		if self.cell_width <= 0.0 or self.cell_height <= 0.0:
			raise ValueError(
				f"Cell size must be positive, got {self.cell_width}x{self.cell_height}"
			)
		for name in ("margin_left", "margin_top", "column_gap", "row_gap", "corner_radius"):
			if getattr(self, name) < 0.0:
				raise ValueError(f"{name} must not be negative")
		if self.page_width <= 0.0 or self.page_height <= 0.0:
			raise ValueError("Page size must be positive")

	@property
	def labels_per_page(self) -> int:
		return self.columns * self.rows

	def slot_position(self, slot: int) -> tuple[int, int]:
		"""
		Map a slot index within a page to (row, column).

		Args:
			slot: Slot index, 0-based, within one page.

		Returns:
			Tuple of (row, column).
		"""
		return (slot // self.columns, slot % self.columns)

	def slot_origin(self, slot: int) -> tuple[float, float]:
		"""
		Map a slot index within a page to the cell top-left corner.

		Args:
			slot: Slot index, 0-based, within one page.

		Returns:
			Tuple of (x, y) in millimeters from the top-left page origin.
		"""
		row, col = self.slot_position(slot)
		x = self.margin_left + col * (self.cell_width + self.column_gap)
		y = self.margin_top + row * (self.cell_height + self.row_gap)
		return (x, y)


DEFAULT_GRID = GridGeometry(
	columns=COLUMNS,
	rows=ROWS,
	cell_width=DEFAULT_CELL_WIDTH,
	cell_height=DEFAULT_CELL_HEIGHT,
	margin_left=DEFAULT_LEFT_MARGIN,
	margin_top=DEFAULT_TOP_MARGIN,
	column_gap=DEFAULT_COLUMN_GAP,
	row_gap=DEFAULT_ROW_GAP,
	corner_radius=DEFAULT_CORNER_RADIUS,
)


@dataclasses.dataclass(frozen=True)
class RenderOptions:
	show_outline: bool = False
	start_offset: int = 0
	text_align: str = ALIGN_CENTER

	def __post_init__(self) -> None:
		if self.start_offset < 0:
			raise ValueError(f"start_offset must be >= 0, got {self.start_offset}")
		# frozen dataclass, so normalize through object.__setattr__
		object.__setattr__(self, "text_align", normalize_align(self.text_align))


@dataclasses.dataclass
class RenderResult:
	data: bytes
	pages: int
	placed_labels: int
	start_offset: int
	labels_per_page: int
	calibration_factor: float
	overflow_runs: int


#============================================
def normalize_align(value: str) -> str:
	"""
	Normalize a text alignment string.

	Args:
		value: Alignment like "left" or "Center".

	Returns:
		ALIGN_LEFT or ALIGN_CENTER.
	"""
	normalized = value.strip().upper()
	if normalized not in TEXT_ALIGNMENTS:
		raise ValueError(f"Unsupported text alignment: {value!r}")
	return normalized


#============================================
def normalize_kind(value: str) -> str:
	"""
	Normalize a record kind string.

	Args:
		value: Kind like "product" or "MEASURE".

	Returns:
		KIND_PRODUCT or KIND_MEASURE.
	"""
	normalized = value.strip().upper()
	if normalized not in RECORD_KINDS:
		raise ValueError(f"Unsupported record kind: {value!r}")
	return normalized


#============================================
def default_font_size(kind: str) -> float:
	"""
	Default nominal font size for a record kind.
	"""
	if normalize_kind(kind) == KIND_PRODUCT:
		return DEFAULT_PRODUCT_SIZE
	return DEFAULT_MEASURE_SIZE


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to points.

	Args:
		value: Millimeters value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH / MM_PER_INCH


#============================================
def points_to_mm(value: float) -> float:
	"""
	Convert points to millimeters.

	Args:
		value: Points value.

	Returns:
		Millimeters value.
	"""
	return value * PT_TO_MM
