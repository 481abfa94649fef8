"""Per-sample FORMAT field accessors.

``SAMPLES["NA12878"].GT`` resolves the sample name to its column through
the :class:`SchemaRegistry`, then reads the bound record's FORMAT matrix.
Every handle shares one accessor table, so a FORMAT field declared mid-run
is immediately available on all handles.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, Dict, Iterator

from ..errors import InvalidValueError, UnknownFieldError
from ..io.header import FieldDescriptor
from ..utils import MISSING, format_number, is_missing, is_sequence
from .binding import RecordHolder
from .schema import SchemaRegistry

__all__ = ["FieldAccessor", "SampleHandle", "SampleFields", "format_sample_value"]


@dataclass(frozen=True)
class FieldAccessor:
	"""Get/set capability pair for one declared field."""

	field_id: str
	get: Callable
	set: Callable


def format_sample_value(field_id: str, value) -> str:
	"""Render a Python value as FORMAT text ('.' for missing-like values)."""
	if value is True:
		raise InvalidValueError(f"FORMAT field {field_id} cannot be set to True")
	if is_missing(value):
		return MISSING
	if is_sequence(value):
		items = [format_sample_value(field_id, v) for v in value]
		for item in items:
			if "," in item:
				raise InvalidValueError(f"list item for FORMAT field {field_id} may not contain ',': {item!r}")
		text = ",".join(items)
	elif isinstance(value, float):
		text = format_number(value)
	else:
		text = str(value)
	if ":" in text or any(c.isspace() for c in text):
		raise InvalidValueError(f"FORMAT field {field_id} value may not contain ':' or whitespace: {text!r}")
	return text


class SampleHandle:
	"""FORMAT fields of one sample in the bound record.

	Fields are reachable as attributes (``h.GT``), items (``h["GT"]``) or
	through :meth:`get` / :meth:`set`.
	"""

	__slots__ = ("_name", "_index", "_fields")

	def __init__(self, name: str, index: int, fields: Dict[str, FieldAccessor]):
		object.__setattr__(self, "_name", name)
		object.__setattr__(self, "_index", index)
		object.__setattr__(self, "_fields", fields)

	@property
	def name(self) -> str:
		return self._name

	@property
	def index(self) -> int:
		return self._index

	def _accessor(self, field_id: str) -> FieldAccessor:
		try:
			return self._fields[field_id]
		except KeyError:
			raise UnknownFieldError("FORMAT", field_id) from None

	def get(self, field_id: str) -> str:
		return self._accessor(field_id).get(self._index)

	def set(self, field_id: str, value) -> None:
		self._accessor(field_id).set(self._index, value)

	def __getattr__(self, attr: str):
		if attr.startswith("_"):
			raise AttributeError(attr)
		return self.get(attr)

	def __setattr__(self, attr: str, value) -> None:
		if attr.startswith("_") or attr in ("name", "index"):
			raise AttributeError(f"cannot set {attr!r} on a sample handle")
		self.set(attr, value)

	def __getitem__(self, field_id: str) -> str:
		return self.get(field_id)

	def __setitem__(self, field_id: str, value) -> None:
		self.set(field_id, value)

	def __str__(self) -> str:
		return self._name

	def __repr__(self) -> str:
		return f"SampleHandle({self._name!r}, index={self._index})"


class SampleFields(Mapping):
	"""Ordered mapping of sample name -> :class:`SampleHandle`.

	Lookup of an unknown name raises :class:`~vcf_script.errors.UnknownSampleError`.
	"""

	def __init__(self, registry: SchemaRegistry, holder: RecordHolder):
		self._registry = registry
		self._holder = holder
		self._fields: Dict[str, FieldAccessor] = {}
		for fid in registry.header.formats:
			self._add_accessor(registry.sample_field(fid))
		self._handles = {name: SampleHandle(name, registry.sample_index(name), self._fields)
			for name in registry.samples}
		registry.on_declare("FORMAT", self._add_accessor)

	def _add_accessor(self, descriptor: FieldDescriptor) -> None:
		fid = descriptor.id
		holder = self._holder

		def get(index: int) -> str:
			return holder.record.sample_value(index, fid)

		def set(index: int, value) -> None:
			holder.record.set_sample_value(fid, index, format_sample_value(fid, value))

		self._fields[fid] = FieldAccessor(fid, get, set)

	@property
	def fields(self):
		"""Declared FORMAT field IDs that have accessors."""
		return self._fields.keys()

	def __getitem__(self, name: str) -> SampleHandle:
		self._registry.sample_index(name)
		return self._handles[name]

	def __iter__(self) -> Iterator[str]:
		return iter(self._handles)

	def __len__(self) -> int:
		return len(self._handles)

	def __repr__(self) -> str:
		return f"SampleFields({list(self._handles)!r})"
