import re

import pytest

import sheet_label_engine.calibrate
import sheet_label_engine.config
import sheet_label_engine.items
import sheet_label_engine.metrics
import sheet_label_engine.resources


RenderOptions = sheet_label_engine.config.RenderOptions
ProductItem = sheet_label_engine.items.ProductItem
ResourceStore = sheet_label_engine.resources.ResourceStore
ResourceError = sheet_label_engine.resources.ResourceError
PreviewSession = sheet_label_engine.resources.PreviewSession


class ZeroWidthMetrics(sheet_label_engine.metrics.TextMetrics):
	def string_width(self, text: str, font_name: str, font_size: float) -> float:
		return 0.0


#============================================
def test_download_name() -> None:
	assert sheet_label_engine.resources.build_download_name(1700000000.123) == "labels_print_1700000000123.pdf"
	assert re.fullmatch(r"labels_print_\d+\.pdf", sheet_label_engine.resources.build_download_name())


#============================================
def test_render_publish_and_release(tmp_path) -> None:
	"""
	A released handle can no longer be read or saved.
	"""
	store = ResourceStore()
	items = [ProductItem(sku="A", price="1,00")]
	handle = sheet_label_engine.resources.render(store, items, "product", False, 0, "center")
	assert handle in store
	assert handle.pages == 1
	data = store.read(handle)
	assert data.startswith(b"%PDF")
	assert handle.size == len(data)

	path = store.save(handle, tmp_path / "out")
	assert re.fullmatch(r"labels_print_\d+\.pdf", path.name)
	assert path.read_bytes() == data

	sheet_label_engine.resources.release_resource(store, handle)
	assert handle not in store
	with pytest.raises(ResourceError):
		store.read(handle)
	# second release is harmless
	sheet_label_engine.resources.release_resource(store, handle)
	assert len(store) == 0


#============================================
def test_preview_session_keeps_one_handle() -> None:
	"""
	Each refresh releases the document it supersedes.
	"""
	store = ResourceStore()
	session = PreviewSession(store)
	items = [ProductItem(sku="A")]
	first = session.refresh(items, "PRODUCT", RenderOptions())
	second = session.refresh(items, "PRODUCT", RenderOptions(start_offset=1))
	assert first not in store
	assert second in store
	assert session.current == second
	assert len(store) == 1

	session.close()
	assert session.current is None
	assert len(store) == 0


#============================================
def test_failed_refresh_keeps_previous_preview() -> None:
	"""
	A calibration failure leaves the last good preview current.
	"""
	store = ResourceStore()
	session = PreviewSession(store)
	good = session.refresh([ProductItem(sku="A")], "PRODUCT", RenderOptions())
	session.metrics = ZeroWidthMetrics()
	with pytest.raises(sheet_label_engine.calibrate.CalibrationError):
		session.refresh([ProductItem(sku="B")], "PRODUCT", RenderOptions())
	assert session.current == good
	assert good in store
	assert len(store) == 1


#============================================
def test_released_handle_message_is_plain() -> None:
	"""
	The error text prints without KeyError quoting.
	"""
	store = ResourceStore()
	handle = sheet_label_engine.resources.render(store, [], "measure", False, 0, "left")
	store.release(handle)
	with pytest.raises(ResourceError) as error_info:
		store.read(handle)
	assert str(error_info.value) == f"Resource {handle.handle_id} was released"
	assert isinstance(error_info.value, LookupError)
