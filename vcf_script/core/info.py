"""INFO field accessors.

``INFO.DP`` / ``INFO["DP"]`` read and write the bound record's INFO map
using the declared Number/Type of each field:

- scalar fields read as text, or '.' when absent;
- multi-valued fields read as a list, or ``[]`` when absent;
- flags read as ``True`` / ``False``.

Writing '.', '', ``None``, ``False`` or an empty list removes the field.
"""

from __future__ import annotations

from typing import Iterator

from ..errors import InvalidValueError, UnknownFieldError
from ..io.header import FieldDescriptor
from ..utils import MISSING, format_number, is_missing, is_sequence
from .binding import RecordHolder
from .samples import FieldAccessor
from .schema import SchemaRegistry

__all__ = ["InfoFields", "coerce_info_value"]


def _text(field_id: str, value) -> str:
	text = format_number(value) if isinstance(value, float) else str(value)
	if any(c in text for c in ";\t\n") or (text and text != text.strip()):
		raise InvalidValueError(f"invalid value for INFO field {field_id}: {text!r}")
	return text


def _item(field_id: str, value) -> str:
	if is_missing(value):
		return MISSING
	text = _text(field_id, value)
	if "," in text:
		raise InvalidValueError(f"list item for INFO field {field_id} may not contain ',': {text!r}")
	return text


def coerce_info_value(descriptor: FieldDescriptor, value):
	"""Convert a script value to its stored form; ``None`` means remove the field."""
	fid = descriptor.id
	if is_missing(value):
		return None
	if descriptor.is_flag:
		if value is not True:
			raise InvalidValueError(f"INFO flag {fid} accepts only True or a missing value, got {value!r}")
		return True
	if value is True:
		raise InvalidValueError(f"INFO field {fid} is not a flag and cannot be set to True")
	if descriptor.is_multi_valued:
		if isinstance(value, str):
			return [_text(fid, v) for v in value.split(",")]
		if is_sequence(value):
			return [_item(fid, v) for v in value]
		return [_text(fid, value)]
	if is_sequence(value):
		return ",".join(_item(fid, v) for v in value)
	return _text(fid, value)


class InfoFields:
	"""Field-ID keyed surface over the bound record's INFO map.

	Parameters
	----------
	registry : SchemaRegistry
		Source of declared INFO fields; new declarations extend this surface.
	holder : RecordHolder
		Current-record slot.
	auto_declare : bool
		If True, writing an undeclared field declares it in the header first
		(``Number=.,Type=String``, or a Flag when the value is ``True``).
		Otherwise such writes raise :class:`UnknownFieldError`.
	"""

	def __init__(self, registry: SchemaRegistry, holder: RecordHolder, auto_declare: bool = False):
		object.__setattr__(self, "_registry", registry)
		object.__setattr__(self, "_holder", holder)
		object.__setattr__(self, "_auto_declare", auto_declare)
		object.__setattr__(self, "_fields", {})
		for descriptor in registry.declared_annotation_fields().values():
			self._add_accessor(descriptor)
		registry.on_declare("INFO", self._add_accessor)

	def _add_accessor(self, descriptor: FieldDescriptor) -> None:
		fid = descriptor.id
		holder = self._holder

		def get():
			stored = holder.record.info.get(fid)
			if descriptor.is_flag:
				return stored is not None
			if descriptor.is_multi_valued:
				if stored is None or stored is True:
					return []
				return list(stored) if isinstance(stored, list) else stored.split(",")
			if stored is None or stored is True:
				return MISSING
			return ",".join(stored) if isinstance(stored, list) else stored

		def set(value) -> None:
			stored = coerce_info_value(descriptor, value)
			if stored is None:
				holder.record.info.pop(fid, None)
			else:
				holder.record.info[fid] = stored

		self._fields[fid] = FieldAccessor(fid, get, set)

	def _accessor(self, field_id: str, for_write=None) -> FieldAccessor:
		acc = self._fields.get(field_id)
		if acc is None and for_write is not None and self._auto_declare:
			if for_write is True:
				self._registry.declare_annotation_field(field_id, "0", "Flag", "Added by script")
			else:
				self._registry.declare_annotation_field(field_id, ".", "String", "Added by script")
			acc = self._fields.get(field_id)
		if acc is None:
			raise UnknownFieldError("INFO", field_id)
		return acc

	@property
	def fields(self):
		return self._fields.keys()

	def get(self, field_id: str):
		return self._accessor(field_id).get()

	def set(self, field_id: str, value) -> None:
		if field_id not in self._fields and is_missing(value):
			# Clearing a field nobody declared is a no-op rather than a declaration.
			if self._auto_declare:
				self._holder.record.info.pop(field_id, None)
				return
		self._accessor(field_id, for_write=value).set(value)

	def __getattr__(self, attr: str):
		if attr.startswith("_"):
			raise AttributeError(attr)
		return self.get(attr)

	def __setattr__(self, attr: str, value) -> None:
		if attr.startswith("_"):
			raise AttributeError(f"cannot set {attr!r} on INFO")
		self.set(attr, value)

	def __getitem__(self, field_id: str):
		return self.get(field_id)

	def __setitem__(self, field_id: str, value) -> None:
		self.set(field_id, value)

	def __delitem__(self, field_id: str) -> None:
		self.set(field_id, MISSING)

	def __contains__(self, field_id) -> bool:
		return field_id in self._fields

	def __iter__(self) -> Iterator[str]:
		return iter(list(self._fields))

	def __repr__(self) -> str:
		return f"InfoFields({list(self._fields)!r})"
