"""
Resource handles for rendered documents and the live preview session.
"""

# Standard Library
import dataclasses
import pathlib
import time
import uuid

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.config
import sheet_label_engine.items
import sheet_label_engine.metrics
import sheet_label_engine.render


GridGeometry = sle.config.GridGeometry
RenderOptions = sle.config.RenderOptions
RenderResult = sle.config.RenderResult
TextMetrics = sle.metrics.TextMetrics
QueueItem = sle.items.QueueItem

DEFAULT_GRID = sle.config.DEFAULT_GRID
DOWNLOAD_PREFIX = sle.config.DOWNLOAD_PREFIX


class ResourceError(LookupError):
	"""
	A handle was used after it was released.
	"""


@dataclasses.dataclass(frozen=True)
class ResourceHandle:
	handle_id: str
	filename: str
	pages: int
	size: int


#============================================
def build_download_name(timestamp: float | None = None) -> str:
	"""
	Build a timestamp-based PDF file name.

	Args:
		timestamp: Seconds since the epoch, now by default.

	Returns:
		File name like "labels_print_1700000000000.pdf".
	"""
	if timestamp is None:
		timestamp = time.time()
	return f"{DOWNLOAD_PREFIX}_{int(timestamp * 1000)}.pdf"


class ResourceStore:
	"""
	Registry of rendered documents addressed by opaque handles.
	"""

	def __init__(self) -> None:
		self._blobs: dict[str, bytes] = {}

	def __len__(self) -> int:
		return len(self._blobs)

	def __contains__(self, handle: ResourceHandle) -> bool:
		return handle.handle_id in self._blobs

	def publish(self, result: RenderResult) -> ResourceHandle:
		handle = ResourceHandle(
			handle_id=uuid.uuid4().hex,
			filename=build_download_name(),
			pages=result.pages,
			size=len(result.data),
		)
		self._blobs[handle.handle_id] = result.data
		return handle

	def read(self, handle: ResourceHandle) -> bytes:
		if handle.handle_id not in self._blobs:
			raise ResourceError(f"Resource {handle.handle_id} was released")
		return self._blobs[handle.handle_id]

	def save(self, handle: ResourceHandle, directory: pathlib.Path) -> pathlib.Path:
		"""
		Write a document under its download name.

		Args:
			handle: Resource handle.
			directory: Target directory, created if missing.

		Returns:
			Written file path.
		"""
		data = self.read(handle)
		directory.mkdir(parents=True, exist_ok=True)
		path = directory / handle.filename
		path.write_bytes(data)
		return path

	def release(self, handle: ResourceHandle) -> None:
		# releasing twice is a no-op
		self._blobs.pop(handle.handle_id, None)


#============================================
def render(
	store: ResourceStore,
	items: list[QueueItem],
	kind: str,
	show_outline: bool,
	start_offset: int,
	text_align: str,
	geometry: GridGeometry = DEFAULT_GRID,
	metrics: TextMetrics | None = None,
) -> ResourceHandle:
	"""
	Render a queue snapshot and publish it as a resource.

	Args:
		store: Resource registry.
		items: Queue snapshot in print order.
		kind: Document record kind.
		show_outline: Outline every populated cell.
		start_offset: Leading empty slots.
		text_align: "left" or "center".
		geometry: Sheet geometry.
		metrics: Output engine metrics.

	Returns:
		ResourceHandle for the new document.
	"""
	options = RenderOptions(
		show_outline=show_outline,
		start_offset=start_offset,
		text_align=text_align,
	)
	result = sle.render.render_document(items, kind, options, geometry, metrics)
	return store.publish(result)


#============================================
def release_resource(store: ResourceStore, handle: ResourceHandle) -> None:
	store.release(handle)


class PreviewSession:
	"""
	Keeps exactly one current preview document alive.

	A refresh that raises leaves the previous document current.
	"""

	def __init__(
		self,
		store: ResourceStore,
		geometry: GridGeometry = DEFAULT_GRID,
		metrics: TextMetrics | None = None,
	) -> None:
		self.store = store
		self.geometry = geometry
		self.metrics = metrics
		self.current: ResourceHandle | None = None

	def refresh(
		self,
		items: list[QueueItem],
		kind: str,
		options: RenderOptions,
	) -> ResourceHandle:
		"""
		Render a new preview and release the one it replaces.

		Args:
			items: Queue snapshot.
			kind: Document record kind.
			options: Render options.

		Returns:
			The new current handle.
		"""
		result = sle.render.render_document(items, kind, options, self.geometry, self.metrics)
		handle = self.store.publish(result)
		previous = self.current
		self.current = handle
		if previous is not None:
			self.store.release(previous)
		return handle

	def close(self) -> None:
		if self.current is not None:
			self.store.release(self.current)
			self.current = None
