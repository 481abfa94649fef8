"""Schema registry: the header's samples and declared fields.

Built once from a :class:`~vcf_script.io.header.VcfHeader`. Sample names map
to column indices through a fixed bijection; INFO and FORMAT declarations
can grow during a run through the idempotent ``declare_*`` methods, which
write through to the shared header so the writer sees the new lines.
"""

from __future__ import annotations

from typing import Callable, Dict, FrozenSet, List
import logging

from ..errors import UnknownSampleError
from ..io.header import FieldDescriptor, VcfHeader

__all__ = ["SchemaRegistry"]

logger = logging.getLogger(__name__)

DeclareListener = Callable[[FieldDescriptor], None]


class SchemaRegistry:
	"""Sample index lookup plus the sets of declared INFO/FORMAT fields.

	Parameters
	----------
	header : VcfHeader
		Shared header; mutated in place when a new field is declared.
	"""

	def __init__(self, header: VcfHeader):
		self.header = header
		self._sample_index: Dict[str, int] = {name: i for i, name in enumerate(header.samples)}
		self._listeners: Dict[str, List[DeclareListener]] = {"INFO": [], "FORMAT": []}

	# -- samples ----------------------------------------------------------
	@property
	def samples(self) -> List[str]:
		return list(self.header.samples)

	def sample_index(self, name: str) -> int:
		try:
			return self._sample_index[name]
		except (KeyError, TypeError):
			raise UnknownSampleError(name) from None

	def has_sample(self, name: str) -> bool:
		return name in self._sample_index

	# -- declared fields --------------------------------------------------
	def declared_sample_fields(self) -> FrozenSet[str]:
		return frozenset(self.header.formats)

	def declared_annotation_fields(self) -> Dict[str, FieldDescriptor]:
		return dict(self.header.info)

	def sample_field(self, field_id: str) -> FieldDescriptor:
		return self.header.formats[field_id]

	def annotation_field(self, field_id: str) -> FieldDescriptor:
		return self.header.info[field_id]

	def on_declare(self, kind: str, listener: DeclareListener) -> None:
		"""Register ``listener`` to be called with each newly declared field of ``kind``."""
		self._listeners[kind].append(listener)

	def declare(self, descriptor: FieldDescriptor) -> bool:
		"""Declare an INFO or FORMAT field. Returns False if it was already declared.

		Re-declaring an existing ID never changes the header; a differing
		definition is logged and ignored (the first declaration wins).
		"""
		if descriptor.kind not in self._listeners:
			raise ValueError(f"cannot declare {descriptor.kind} fields")
		table = self.header.info if descriptor.kind == "INFO" else self.header.formats
		existing = table.get(descriptor.id)
		if existing is not None:
			if not existing.same_definition(descriptor):
				logger.warning("Ignoring redefinition of %s field %s (Number=%s,Type=%s); keeping Number=%s,Type=%s",
					descriptor.kind, descriptor.id, descriptor.number, descriptor.type, existing.number, existing.type)
			return False
		if descriptor.kind == "INFO":
			self.header.ensure_info(descriptor)
		else:
			self.header.ensure_format(descriptor)
		logger.info("Added %s header field %s", descriptor.kind, descriptor.id)
		for listener in self._listeners[descriptor.kind]:
			listener(descriptor)
		return True

	def declare_sample_field(self, field_id: str, number: str = "1", type: str = "String",
			description: str = "") -> bool:
		return self.declare(FieldDescriptor("FORMAT", field_id, number, type, description))

	def declare_annotation_field(self, field_id: str, number: str = "1", type: str = "String",
			description: str = "") -> bool:
		if type == "Flag":
			number = "0"
		return self.declare(FieldDescriptor("INFO", field_id, number, type, description))
