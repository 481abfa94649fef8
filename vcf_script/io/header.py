"""VCF header model.

Keeps generic meta-information lines verbatim and parses the structured
``##FILTER`` / ``##INFO`` / ``##FORMAT`` lines into :class:`FieldDescriptor`
objects so fields can be looked up (and added) by ID.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import re

from ..errors import VcfFormatError

__all__ = ["FieldDescriptor", "VcfHeader", "parse_meta_line", "FIXED_COLUMNS"]

FIXED_COLUMNS = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO"]

_STRUCTURED = re.compile(r'^##(INFO|FORMAT|FILTER)=<(.*)>\s*$')
_KEY_VALUE = re.compile(r'([A-Za-z_][\w.]*)=("(?:[^"\\]|\\.)*"|[^,]*)')


@dataclass
class FieldDescriptor:
	"""Declared INFO/FORMAT/FILTER field.

	Attributes
	----------
	kind : str
		'INFO', 'FORMAT' or 'FILTER'.
	id : str
		Field ID (e.g. DP, GT).
	number : str
		VCF Number value ('1', '0', 'A', 'R', 'G', '.', '2', ...). Unused for FILTER.
	type : str
		VCF Type value (Integer, Float, Flag, Character, String).
	description : str
		Free text description, stored without surrounding quotes.
	"""

	kind: str
	id: str
	number: str = "."
	type: str = "String"
	description: str = ""
	extra: Dict[str, str] = field(default_factory=dict)

	@property
	def is_flag(self) -> bool:
		return self.type == "Flag" or self.number == "0"

	@property
	def is_multi_valued(self) -> bool:
		return self.number not in ("0", "1")

	def same_definition(self, other: "FieldDescriptor") -> bool:
		return (self.kind, self.id, self.number, self.type) == (other.kind, other.id, other.number, other.type)

	def to_line(self) -> str:
		parts = [f"ID={self.id}"]
		if self.kind != "FILTER":
			parts.append(f"Number={self.number}")
			parts.append(f"Type={self.type}")
		desc = self.description.replace('"', '\\"')
		parts.append(f'Description="{desc}"')
		parts.extend(f"{k}={v}" for k, v in self.extra.items())
		return f"##{self.kind}=<{','.join(parts)}>"


def parse_meta_line(line: str) -> FieldDescriptor:
	"""Parse a ``##INFO=<...>``, ``##FORMAT=<...>`` or ``##FILTER=<...>`` line."""
	m = _STRUCTURED.match(line.strip())
	if not m:
		raise VcfFormatError(f"not a structured INFO/FORMAT/FILTER line: {line.strip()!r}")
	kind, body = m.groups()
	values: Dict[str, str] = {}
	for km in _KEY_VALUE.finditer(body):
		k, v = km.groups()
		if len(v) >= 2 and v[0] == '"' and v[-1] == '"':
			v = v[1:-1].replace('\\"', '"')
		values[k] = v
	if "ID" not in values or not values["ID"]:
		raise VcfFormatError(f"missing ID in header line: {line.strip()!r}")
	fd = FieldDescriptor(kind=kind, id=values.pop("ID"), description=values.pop("Description", ""))
	if kind != "FILTER":
		if "Number" not in values or "Type" not in values:
			raise VcfFormatError(f"{kind} line requires Number and Type: {line.strip()!r}")
		fd.number = values.pop("Number")
		fd.type = values.pop("Type")
	fd.extra = values
	return fd


class VcfHeader:
	"""Declared schema for a stream of VCF records.

	Parameters
	----------
	samples : list[str] | None
		Ordered sample column names. Must be unique.
	"""

	def __init__(self, samples: Optional[List[str]] = None, version: str = "VCFv4.2"):
		self.version = version
		self.meta_lines: List[str] = []
		self.filters: Dict[str, FieldDescriptor] = {}
		self.info: Dict[str, FieldDescriptor] = {}
		self.formats: Dict[str, FieldDescriptor] = {}
		self.samples: List[str] = []
		if samples:
			self.set_samples(samples)

	def set_samples(self, samples: List[str]) -> None:
		seen = set()
		for s in samples:
			if s in seen:
				raise VcfFormatError(f"duplicate sample name in header: {s!r}")
			seen.add(s)
		self.samples = list(samples)

	# -- parsing ----------------------------------------------------------
	def add_meta_line(self, line: str) -> "VcfHeader":
		line = line.rstrip("\r\n")
		if line.startswith("##fileformat="):
			self.version = line.split("=", 1)[1]
		elif _STRUCTURED.match(line):
			self._ensure(parse_meta_line(line))
		else:
			self.meta_lines.append(line)
		return self

	def add_column_line(self, line: str) -> "VcfHeader":
		cols = line.rstrip("\r\n").split("\t")
		if cols[:len(FIXED_COLUMNS)] != FIXED_COLUMNS:
			raise VcfFormatError(f"malformed #CHROM header line: {line.rstrip()!r}")
		# FORMAT column then samples
		self.set_samples(cols[len(FIXED_COLUMNS) + 1:])
		return self

	# -- declarations -----------------------------------------------------
	def _table(self, kind: str) -> Dict[str, FieldDescriptor]:
		return {"INFO": self.info, "FORMAT": self.formats, "FILTER": self.filters}[kind]

	def _ensure(self, descriptor: FieldDescriptor) -> bool:
		table = self._table(descriptor.kind)
		if descriptor.id in table:
			return False
		table[descriptor.id] = descriptor
		return True

	def ensure_info(self, descriptor: FieldDescriptor) -> bool:
		"""Add an INFO declaration unless one with that ID exists. Returns True if added."""
		if descriptor.kind != "INFO":
			raise ValueError(f"expected an INFO descriptor, got {descriptor.kind}")
		return self._ensure(descriptor)

	def ensure_format(self, descriptor: FieldDescriptor) -> bool:
		"""Add a FORMAT declaration unless one with that ID exists. Returns True if added."""
		if descriptor.kind != "FORMAT":
			raise ValueError(f"expected a FORMAT descriptor, got {descriptor.kind}")
		return self._ensure(descriptor)

	def ensure_filter(self, descriptor: FieldDescriptor) -> bool:
		if descriptor.kind != "FILTER":
			raise ValueError(f"expected a FILTER descriptor, got {descriptor.kind}")
		return self._ensure(descriptor)

	# -- rendering --------------------------------------------------------
	def column_line(self) -> str:
		cols = list(FIXED_COLUMNS)
		if self.samples:
			cols.append("FORMAT")
			cols.extend(self.samples)
		return "\t".join(cols)

	def to_lines(self) -> List[str]:
		lines = [f"##fileformat={self.version}"]
		lines.extend(self.meta_lines)
		for table in (self.filters, self.info, self.formats):
			lines.extend(fd.to_line() for fd in table.values())
		lines.append(self.column_line())
		return lines

	def __repr__(self) -> str:
		return (f"VcfHeader(samples={len(self.samples)}, info={len(self.info)}, "
			f"format={len(self.formats)}, filter={len(self.filters)})")
