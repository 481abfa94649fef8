"""In-memory VCF record.

A mutable container for one data line: the seven fixed columns, the INFO
map and the per-sample FORMAT matrix. Accessors in :mod:`vcf_script.core`
read and write these attributes in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..utils import MISSING, InfoValue, format_info_field

__all__ = ["VcfRecord"]


@dataclass
class VcfRecord:
	"""Container for a single VCF data line.

	Attributes
	----------
	chrom : str
		Sequence name.
	pos : int
		1-based position.
	ids : List[str]
		Variant identifiers; empty when the ID column is '.'.
	ref : str
		Reference allele.
	alts : List[str]
		Alternate alleles in order; empty when the ALT column is '.'.
	qual : str | None
		QUAL kept as text so it is written back exactly as read; None if '.'.
	filters : List[str]
		FILTER tokens in order; empty when the column is '.'.
	info : Dict[str, str | List[str] | bool]
		INFO map. Lists hold multi-valued fields, ``True`` marks a flag.
	format : Dict[str, List[str]]
		FORMAT key -> one value per sample (missing values are '.').
	num_samples : int
		Number of sample columns.
	"""

	chrom: str
	pos: int
	ref: str
	ids: List[str] = field(default_factory=list)
	alts: List[str] = field(default_factory=list)
	qual: Optional[str] = None
	filters: List[str] = field(default_factory=list)
	info: Dict[str, InfoValue] = field(default_factory=dict)
	format: Dict[str, List[str]] = field(default_factory=dict)
	num_samples: int = 0

	def add_filter(self, token: str) -> "VcfRecord":
		"""Append a FILTER token to the live list."""
		self.filters.append(token)
		return self

	def sample_value(self, sample_index: int, key: str) -> str:
		"""Value of FORMAT ``key`` for a sample, '.' if the key is absent."""
		values = self.format.get(key)
		if values is None or sample_index >= len(values):
			return MISSING
		return values[sample_index]

	def set_sample_value(self, key: str, sample_index: int, value: str) -> "VcfRecord":
		"""Set FORMAT ``key`` for one sample.

		If the key is new to this record it is created with '.' for every
		other sample.
		"""
		if not 0 <= sample_index < self.num_samples:
			raise IndexError(f"sample index {sample_index} out of range for {self.num_samples} samples")
		values = self.format.get(key)
		if values is None:
			values = [MISSING] * self.num_samples
			self.format[key] = values
		while len(values) < self.num_samples:
			values.append(MISSING)
		values[sample_index] = value
		return self

	def _sample_column(self, index: int) -> str:
		out: List[str] = []
		pending: List[str] = []  # trailing missing sub-fields may be omitted
		for values in self.format.values():
			val = values[index] if index < len(values) else MISSING
			if val == MISSING:
				pending.append(val)
			else:
				out.extend(pending)
				pending = []
				out.append(val)
		return ":".join(out) if out else MISSING

	def to_line(self) -> str:
		cols = [
			self.chrom,
			str(self.pos),
			";".join(self.ids) if self.ids else MISSING,
			self.ref,
			",".join(self.alts) if self.alts else MISSING,
			self.qual if self.qual is not None else MISSING,
			";".join(self.filters) if self.filters else MISSING,
			format_info_field(self.info),
		]
		if self.num_samples > 0:
			cols.append(":".join(self.format) if self.format else MISSING)
			cols.extend(self._sample_column(i) for i in range(self.num_samples))
		return "\t".join(cols)

	def __str__(self) -> str:
		return f"{self.chrom}:{self.pos}"
