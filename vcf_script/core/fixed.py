"""Accessors for the fixed VCF columns (CHROM .. FILTER).

Each property dereferences the :class:`RecordHolder` at call time. CHROM,
POS, REF and ALT are read-only; ID, QUAL and FILTER can be rewritten.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import List, Union
import math

from ..errors import InvalidValueError, ReadOnlyFieldError
from ..utils import MISSING, format_number, is_missing, split_tokens, to_number
from .binding import RecordHolder

__all__ = ["FixedFields", "FilterList", "check_filter_token"]


def check_filter_token(token) -> str:
	if not isinstance(token, str) or is_missing(token):
		raise InvalidValueError(f"invalid FILTER token: {token!r}")
	if ";" in token or any(c.isspace() for c in token):
		raise InvalidValueError(f"FILTER token may not contain ';' or whitespace: {token!r}")
	return token


class FilterList(Sequence):
	"""Live view of the bound record's FILTER tokens.

	Reads always reflect the record bound *now*; :meth:`add` appends to it
	without replacing the list. Compares equal to a list or tuple holding
	the same tokens in the same order.
	"""

	__slots__ = ("_holder",)

	def __init__(self, holder: RecordHolder):
		self._holder = holder

	def _tokens(self) -> List[str]:
		return self._holder.record.filters

	def __getitem__(self, index):
		return self._tokens()[index]

	def __len__(self) -> int:
		return len(self._tokens())

	def add(self, token: str) -> None:
		self._holder.record.add_filter(check_filter_token(token))

	def __eq__(self, other) -> bool:
		if isinstance(other, (FilterList, list, tuple)):
			return list(self) == list(other)
		return NotImplemented

	__hash__ = None

	def __repr__(self) -> str:
		return f"FilterList({self._tokens()!r})"


class FixedFields:
	"""Property surface over the fixed columns of the bound record."""

	__slots__ = ("_holder", "_filters")

	def __init__(self, holder: RecordHolder):
		self._holder = holder
		self._filters = FilterList(holder)

	@property
	def _record(self):
		return self._holder.record

	@property
	def CHROM(self) -> str:
		return self._record.chrom

	@CHROM.setter
	def CHROM(self, value) -> None:
		raise ReadOnlyFieldError("CHROM")

	@property
	def POS(self) -> int:
		return self._record.pos

	@POS.setter
	def POS(self, value) -> None:
		raise ReadOnlyFieldError("POS")

	@property
	def ID(self) -> Union[List[str], str]:
		ids = self._record.ids
		return list(ids) if ids else MISSING

	@ID.setter
	def ID(self, value) -> None:
		if value is True:
			raise InvalidValueError("ID cannot be set to True")
		tokens = split_tokens(value)
		for tok in tokens:
			if ";" in tok or any(c.isspace() for c in tok):
				raise InvalidValueError(f"ID may not contain ';' or whitespace: {tok!r}")
		self._record.ids = tokens

	@property
	def REF(self) -> str:
		return self._record.ref

	@REF.setter
	def REF(self, value) -> None:
		raise ReadOnlyFieldError("REF")

	@property
	def ALT(self) -> List[str]:
		return list(self._record.alts)

	@ALT.setter
	def ALT(self, value) -> None:
		raise ReadOnlyFieldError("ALT")

	@property
	def QUAL(self) -> Union[float, str]:
		try:
			val = to_number(self._record.qual)
		except ValueError:
			raise InvalidValueError(f"non-numeric QUAL in record {self._record}: {self._record.qual!r}") from None
		return MISSING if val is None else val

	@QUAL.setter
	def QUAL(self, value) -> None:
		try:
			val = to_number(value)
		except (TypeError, ValueError):
			raise InvalidValueError(f"QUAL must be numeric, got {value!r}") from None
		if val is not None and (math.isnan(val) or math.isinf(val)):
			raise InvalidValueError(f"QUAL must be finite, got {value!r}")
		self._record.qual = None if val is None else format_number(val)

	@property
	def FILTER(self) -> FilterList:
		return self._filters

	@FILTER.setter
	def FILTER(self, value) -> None:
		if value is True:
			raise InvalidValueError("FILTER cannot be set to True")
		if isinstance(value, FilterList):
			value = list(value)
		tokens = [check_filter_token(t) for t in split_tokens(value)]
		record = self._record
		record.filters.clear()
		for tok in tokens:
			record.add_filter(tok)

	def __repr__(self) -> str:
		if not self._holder.bound:
			return "FixedFields(<unbound>)"
		return f"FixedFields({self._record})"
