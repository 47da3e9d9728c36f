import argparse

import openpyxl

import sheet_label_engine.cli


#============================================
def test_clamp_start_offset() -> None:
	assert sheet_label_engine.cli.clamp_start_offset(-3, 126) == 0
	assert sheet_label_engine.cli.clamp_start_offset(5, 126) == 5
	assert sheet_label_engine.cli.clamp_start_offset(400, 126) == 125


#============================================
def test_build_queue_keeps_sheet_order(tmp_path) -> None:
	"""
	Quantity repeats each row in place and the font size applies to all rows.
	"""
	path = tmp_path / "produtos.xlsx"
	workbook = openpyxl.Workbook()
	sheet = workbook.active
	sheet.append(["SKU", "PRECO"])
	sheet.append(["FIRST", "1,00"])
	sheet.append(["SECOND", "2,00"])
	workbook.save(path)

	args = argparse.Namespace(kind="product", quantity=2, font_size=7.0)
	queue = sheet_label_engine.cli.build_queue(args, [path])
	snapshot = queue.snapshot()
	assert [item.sku for item in snapshot] == ["FIRST", "FIRST", "SECOND", "SECOND"]
	assert all(item.custom_font_size == 7.0 for item in snapshot)


#============================================
def test_build_options_clamps_offset() -> None:
	args = argparse.Namespace(draw_outlines=True, start_offset=999, text_align="left")
	options = sheet_label_engine.cli.build_options(args)
	assert options.start_offset == 125
	assert options.show_outline is True
	assert options.text_align == "LEFT"
