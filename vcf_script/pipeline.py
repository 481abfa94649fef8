"""Streaming filter loop: read, bind, evaluate, write."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging

from .core.fixed import check_filter_token
from .io import FieldDescriptor, SimpleVCFReader, VcfWriter
from .script import ScriptedRecordProcessor

__all__ = ["FilterStatistics", "run_filter"]

logger = logging.getLogger(__name__)


@dataclass
class FilterStatistics:
	read: int = 0
	kept: int = 0
	failed: int = 0

	def summary(self) -> str:
		retention = (self.kept / self.read) * 100 if self.read else 0.0
		return f"{self.read:,} records read, {self.kept:,} kept ({retention:.1f}%), {self.failed:,} failed"


def run_filter(
	reader: SimpleVCFReader,
	processor: ScriptedRecordProcessor,
	writer: Optional[VcfWriter] = None,
	*,
	remove_failed: bool = True,
	fail_filter: Optional[str] = None,
) -> FilterStatistics:
	"""Evaluate ``processor`` against every record of ``reader``.

	The header is handed to the processor before it is written, so fields
	declared by begin scripts appear in the output header. Fields declared
	later (from ``record()``) are added to the same header object but the
	header has already been written by then.

	Parameters
	----------
	remove_failed : bool
		Drop records that fail; when False they are written unchanged.
	fail_filter : str | None
		If set, failing records are kept and tagged with this FILTER token
		(implies ``remove_failed=False``).
	"""
	header = reader.read_header()
	processor.set_header(header)
	if fail_filter is not None:
		remove_failed = False
		check_filter_token(fail_filter)
		header.ensure_filter(FieldDescriptor("FILTER", fail_filter, description="Failed script filter"))
	if writer is not None:
		writer.write_header(header)
	stats = FilterStatistics()
	for record in reader.parse():
		stats.read += 1
		processor.set_record(record)
		if processor.accept():
			stats.kept += 1
		else:
			stats.failed += 1
			if fail_filter is not None:
				record.add_filter(fail_filter)
			if remove_failed:
				continue
		if writer is not None:
			writer.write(record)
	processor.end()
	logger.info("Filter finished: %s", stats.summary())
	return stats
