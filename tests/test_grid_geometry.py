import pytest

import sheet_label_engine.config


DEFAULT_GRID = sheet_label_engine.config.DEFAULT_GRID
GridGeometry = sheet_label_engine.config.GridGeometry


#============================================
def compute_cell_box(
	grid: GridGeometry,
	slot: int,
) -> tuple[float, float, float, float]:
	"""
	Compute the bounding box for a label slot.

	Args:
		grid: Sheet geometry.
		slot: Slot index within a page.

	Returns:
		Tuple of (x0, y0, x1, y1) in millimeters from the top-left corner.
	"""
	x, y = grid.slot_origin(slot)
	return (x, y, x + grid.cell_width, y + grid.cell_height)


#============================================
def test_default_grid_shape() -> None:
	"""
	The shipped sheet holds 7x18 cells of 26x15mm.
	"""
	assert DEFAULT_GRID.columns == 7
	assert DEFAULT_GRID.rows == 18
	assert DEFAULT_GRID.labels_per_page == 126
	assert DEFAULT_GRID.cell_width == 26.0
	assert DEFAULT_GRID.cell_height == 15.0
	assert DEFAULT_GRID.corner_radius == 0.5


#============================================
def test_slot_coordinate_exactness() -> None:
	"""
	Slot 8 lands on row 1, column 1 at (36mm, 28mm).
	"""
	assert DEFAULT_GRID.slot_position(8) == (1, 1)
	assert DEFAULT_GRID.slot_origin(8) == (36.0, 28.0)
	assert DEFAULT_GRID.slot_origin(0) == (8.0, 13.0)
	assert DEFAULT_GRID.slot_origin(6) == (8.0 + 6 * 28.0, 13.0)
	assert DEFAULT_GRID.slot_origin(125) == (8.0 + 6 * 28.0, 13.0 + 17 * 15.0)


#============================================
def test_grid_boxes_within_page() -> None:
	"""
	Ensure all label slots are on-page.
	"""
	for slot in range(DEFAULT_GRID.labels_per_page):
		x0, y0, x1, y1 = compute_cell_box(DEFAULT_GRID, slot)
		assert 0.0 <= x0 < x1 <= DEFAULT_GRID.page_width
		assert 0.0 <= y0 < y1 <= DEFAULT_GRID.page_height


#============================================
def test_grid_boxes_non_overlapping() -> None:
	"""
	Ensure adjacent slots do not overlap.
	"""
	epsilon = 0.001
	columns = DEFAULT_GRID.columns
	for col in range(columns - 1):
		left_box = compute_cell_box(DEFAULT_GRID, col)
		right_box = compute_cell_box(DEFAULT_GRID, col + 1)
		assert right_box[0] >= left_box[2] - epsilon

	for row in range(DEFAULT_GRID.rows - 1):
		upper_box = compute_cell_box(DEFAULT_GRID, row * columns)
		lower_box = compute_cell_box(DEFAULT_GRID, (row + 1) * columns)
		assert lower_box[1] >= upper_box[3] - epsilon


#============================================
def test_invalid_geometry_rejected() -> None:
	"""
	Non-positive cell sizes and negative gaps fail at construction.
	"""
	with pytest.raises(ValueError):
		GridGeometry(0, 18, 26.0, 15.0, 8.0, 13.0, 2.0, 0.0, 0.5)
	with pytest.raises(ValueError):
		GridGeometry(7, 18, 0.0, 15.0, 8.0, 13.0, 2.0, 0.0, 0.5)
	with pytest.raises(ValueError):
		GridGeometry(7, 18, 26.0, 15.0, 8.0, 13.0, -1.0, 0.0, 0.5)
