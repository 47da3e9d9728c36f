import openpyxl
import pytest

import sheet_label_engine.items
import sheet_label_engine.spreadsheet


ProductItem = sheet_label_engine.items.ProductItem
MeasurementItem = sheet_label_engine.items.MeasurementItem


#============================================
def write_workbook(path, rows: list[list]) -> None:
	workbook = openpyxl.Workbook()
	sheet = workbook.active
	for row in rows:
		sheet.append(row)
	workbook.save(path)


#============================================
def test_read_product_rows(tmp_path) -> None:
	"""
	Product rows map by header name and keep sheet order.
	"""
	path = tmp_path / "produtos.xlsx"
	write_workbook(path, [
		["CX_INNER", "sku", "PRECO", "OTHER"],
		["CX 12", "AB-12", "R$ 10,90", "skip"],
		[None, None, None, "only ignored column"],
		[4.0, "cd-34", 7.5, None],
	])
	items = sheet_label_engine.spreadsheet.read_items(path, "PRODUCT")
	assert all(isinstance(item, ProductItem) for item in items)
	assert [(item.sku, item.price, item.note) for item in items] == [
		("AB-12", "R$ 10,90", "CX 12"),
		("cd-34", "7.5", "4"),
	]
	assert all(item.voltage == "NONE" for item in items)


#============================================
def test_read_measure_rows(tmp_path) -> None:
	path = tmp_path / "medidas.xlsx"
	write_workbook(path, [
		["MEDIDA"],
		["  60x60  "],
		[None],
		[120],
	])
	items = sheet_label_engine.spreadsheet.read_items(path, "measure")
	assert [item.text for item in items] == ["60x60", "120"]
	assert all(isinstance(item, MeasurementItem) for item in items)
	assert len({item.item_id for item in items}) == 2


#============================================
def test_wrong_headers_rejected(tmp_path) -> None:
	"""
	A product sheet read as measurements has no usable column.
	"""
	path = tmp_path / "produtos.xlsx"
	write_workbook(path, [["SKU", "PRECO"], ["A", "1"]])
	with pytest.raises(sheet_label_engine.spreadsheet.ImportShapeError):
		sheet_label_engine.spreadsheet.read_items(path, "MEASURE")


#============================================
@pytest.mark.parametrize(
	"kind, expected_name, expected_header",
	[
		("PRODUCT", "modelo_produto.xlsx", ("SKU", "PRECO", "CX_INNER")),
		("MEASURE", "modelo_medida.xlsx", ("MEDIDA",)),
	],
)
def test_write_template(tmp_path, kind: str, expected_name: str, expected_header: tuple) -> None:
	"""
	Templates carry only the header row and read back as empty.
	"""
	path = sheet_label_engine.spreadsheet.write_template(tmp_path, kind)
	assert path.name == expected_name
	workbook = openpyxl.load_workbook(path)
	rows = list(workbook.active.iter_rows(values_only=True))
	workbook.close()
	assert rows == [expected_header]
	assert sheet_label_engine.spreadsheet.read_items(path, kind) == []
