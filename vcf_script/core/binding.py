"""Current-record slot shared by all accessors."""

from __future__ import annotations

from typing import Optional

from ..io.record import VcfRecord

__all__ = ["RecordHolder"]


class RecordHolder:
	"""Holds the record currently being evaluated.

	Accessors keep a reference to the holder, never to a record, and call
	:attr:`record` on every access so they always see the latest binding.
	"""

	__slots__ = ("_record",)

	def __init__(self, record: Optional[VcfRecord] = None):
		self._record = record

	def bind(self, record: VcfRecord) -> None:
		self._record = record

	@property
	def bound(self) -> bool:
		return self._record is not None

	@property
	def record(self) -> VcfRecord:
		if self._record is None:
			raise RuntimeError("no record is bound")
		return self._record
