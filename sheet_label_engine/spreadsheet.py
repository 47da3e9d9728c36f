"""
Spreadsheet import and template export for the label queue.
"""

# Standard Library
import pathlib

# PIP3 modules
import openpyxl

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.config
import sheet_label_engine.items


QueueItem = sle.items.QueueItem

KIND_PRODUCT = sle.config.KIND_PRODUCT
KIND_MEASURE = sle.config.KIND_MEASURE

# header -> item field
PRODUCT_COLUMNS = {
	"SKU": "sku",
	"PRECO": "price",
	"CX_INNER": "note",
}
MEASURE_COLUMNS = {
	"MEDIDA": "text",
}
TEMPLATE_NAMES = {
	KIND_PRODUCT: "modelo_produto.xlsx",
	KIND_MEASURE: "modelo_medida.xlsx",
}


class ImportShapeError(ValueError):
	"""
	The sheet has none of the columns expected for the record kind.
	"""


#============================================
def columns_for(kind: str) -> dict[str, str]:
	if sle.config.normalize_kind(kind) == KIND_PRODUCT:
		return PRODUCT_COLUMNS
	return MEASURE_COLUMNS


#============================================
def cell_text(value: object) -> str:
	"""
	Convert a spreadsheet cell value to label text.

	Args:
		value: Raw cell value from openpyxl.

	Returns:
		Stripped text, empty for None.
	"""
	if value is None:
		return ""
	if isinstance(value, float) and value.is_integer():
		value = int(value)
	return str(value).strip()


#============================================
def map_header(header_row: tuple, columns: dict[str, str]) -> dict[int, str]:
	"""
	Map column positions to item field names.

	Args:
		header_row: First sheet row.
		columns: Expected header names.

	Returns:
		Field name by column index.
	"""
	positions: dict[int, str] = {}
	for index, value in enumerate(header_row):
		name = cell_text(value).upper()
		if name in columns:
			positions[index] = columns[name]
	return positions


#============================================
def read_items(path: pathlib.Path, kind: str) -> list[QueueItem]:
	"""
	Read queue items from the first sheet of a workbook.

	Rows whose relevant cells are all empty are dropped.

	Args:
		path: .xlsx file path.
		kind: Record kind of the rows.

	Returns:
		Items in sheet order.
	"""
	kind = sle.config.normalize_kind(kind)
	columns = columns_for(kind)
	workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
	try:
		sheet = workbook.worksheets[0]
		rows = sheet.iter_rows(values_only=True)
		header_row = next(rows, None)
		if header_row is None:
			return []
		positions = map_header(header_row, columns)
		if not positions:
			expected = ", ".join(columns)
			raise ImportShapeError(f"{path.name}: no {kind} columns found (expected {expected})")
		items: list[QueueItem] = []
		for row in rows:
			fields = {name: "" for name in columns.values()}
			for index, name in positions.items():
				if index < len(row):
					fields[name] = cell_text(row[index])
			item = sle.items.build_item(kind, fields)
			if sle.items.is_blank(item):
				continue
			items.append(item)
		return items
	finally:
		workbook.close()


#============================================
def write_template(path: pathlib.Path, kind: str) -> pathlib.Path:
	"""
	Write an empty import template with the header row.

	Args:
		path: Output file, or a directory to use the default name.
		kind: Record kind.

	Returns:
		Written file path.
	"""
	kind = sle.config.normalize_kind(kind)
	if path.is_dir():
		path = path / TEMPLATE_NAMES[kind]
	workbook = openpyxl.Workbook()
	sheet = workbook.active
	sheet.title = "Template"
	sheet.append(list(columns_for(kind)))
	workbook.save(path)
	return path
