"""
Queue item records and the in-memory label queue.
"""

# Standard Library
import dataclasses
import typing
import uuid

# local repo modules
import sheet_label_engine as sle
import sheet_label_engine.config


KIND_PRODUCT = sle.config.KIND_PRODUCT
KIND_MEASURE = sle.config.KIND_MEASURE
VOLTAGES = sle.config.VOLTAGES
VOLTAGE_NONE = sle.config.VOLTAGE_NONE


#============================================
def new_item_id() -> str:
	"""
	Create an opaque unique item id.
	"""
	return uuid.uuid4().hex


#============================================
def check_font_size(value: float | None) -> None:
	if value is not None and value <= 0.0:
		raise ValueError(f"custom_font_size must be positive, got {value}")


@dataclasses.dataclass(frozen=True)
class ProductItem:
	sku: str = ""
	price: str = ""
	note: str = ""
	voltage: str = VOLTAGE_NONE
	custom_font_size: float | None = None
	item_id: str = dataclasses.field(default_factory=new_item_id)
	kind: typing.ClassVar[str] = KIND_PRODUCT

	def __post_init__(self) -> None:
		voltage = (self.voltage or VOLTAGE_NONE).strip().upper()
		if voltage not in VOLTAGES:
			raise ValueError(f"Unsupported voltage: {self.voltage!r}")
		object.__setattr__(self, "voltage", voltage)
		check_font_size(self.custom_font_size)

	@property
	def has_voltage(self) -> bool:
		return self.voltage != VOLTAGE_NONE


@dataclasses.dataclass(frozen=True)
class MeasurementItem:
	text: str = ""
	wrap_lines: bool = False
	custom_font_size: float | None = None
	item_id: str = dataclasses.field(default_factory=new_item_id)
	kind: typing.ClassVar[str] = KIND_MEASURE

	def __post_init__(self) -> None:
		check_font_size(self.custom_font_size)


QueueItem = ProductItem | MeasurementItem

ITEM_TYPES = {
	KIND_PRODUCT: ProductItem,
	KIND_MEASURE: MeasurementItem,
}


#============================================
def build_item(kind: str, fields: dict[str, typing.Any]) -> QueueItem:
	"""
	Build a queue item of the given kind.

	Fields that belong to the other record kind are ignored.

	Args:
		kind: Record kind, PRODUCT or MEASURE.
		fields: Field values keyed by dataclass field name.

	Returns:
		ProductItem or MeasurementItem.
	"""
	item_type = ITEM_TYPES[sle.config.normalize_kind(kind)]
	names = {field.name for field in dataclasses.fields(item_type)}
	accepted = {key: value for key, value in fields.items() if key in names}
	return item_type(**accepted)


#============================================
def is_blank(item: QueueItem) -> bool:
	"""
	Check whether every text field of an item is empty.
	"""
	if isinstance(item, ProductItem):
		return not (item.sku or item.price or item.note)
	return not item.text


class LabelQueue:
	"""
	Ordered, mutable collection of committed queue items.

	Renders only ever see snapshot() tuples.
	"""

	def __init__(self, kind: str) -> None:
		self.kind = sle.config.normalize_kind(kind)
		self._items: list[QueueItem] = []

	def __len__(self) -> int:
		return len(self._items)

	def _check_kind(self, item: QueueItem) -> None:
		if item.kind != self.kind:
			raise ValueError(f"Queue holds {self.kind} items, got {item.kind}")

	def index_of(self, item_id: str) -> int:
		for index, item in enumerate(self._items):
			if item.item_id == item_id:
				return index
		raise KeyError(item_id)

	def add(self, item: QueueItem, quantity: int = 1) -> list[QueueItem]:
		"""
		Prepend copies of an item, each with a fresh id.

		Args:
			item: Item to copy.
			quantity: Number of copies, at least 1.

		Returns:
			The new items in queue order.
		"""
		self._check_kind(item)
		quantity = max(1, quantity)
		copies = [dataclasses.replace(item, item_id=new_item_id()) for _ in range(quantity)]
		self._items[0:0] = copies
		return copies

	def extend(self, items: list[QueueItem]) -> list[QueueItem]:
		"""
		Prepend imported items with fresh ids, keeping their order.
		"""
		for item in items:
			self._check_kind(item)
		copies = [dataclasses.replace(item, item_id=new_item_id()) for item in items]
		self._items[0:0] = copies
		return copies

	def move(self, item_id: str, target_id: str) -> None:
		"""
		Move an item to the current index of another item.
		"""
		old_index = self.index_of(item_id)
		new_index = self.index_of(target_id)
		if old_index == new_index:
			return
		item = self._items.pop(old_index)
		self._items.insert(new_index, item)

	def update(self, item_id: str, /, **changes: typing.Any) -> QueueItem:
		if "item_id" in changes:
			raise ValueError("item_id cannot be changed")
		index = self.index_of(item_id)
		# dataclasses.replace raises TypeError on fields of the other kind
		updated = dataclasses.replace(self._items[index], **changes)
		self._items[index] = updated
		return updated

	def remove(self, item_id: str) -> None:
		del self._items[self.index_of(item_id)]

	def clear(self) -> None:
		self._items.clear()

	def snapshot(self) -> tuple[QueueItem, ...]:
		return tuple(self._items)
