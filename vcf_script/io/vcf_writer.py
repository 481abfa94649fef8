"""Streaming VCF writer (plain, gzipped, or standard output)."""

from __future__ import annotations

from typing import Optional
import gzip
import sys

from .header import VcfHeader
from .record import VcfRecord

__all__ = ["VcfWriter"]


class VcfWriter:
	"""Write a header followed by records.

	Parameters
	----------
	path : str
		Output path; '.gz' suffix selects gzip, '-' writes to standard output.
	"""

	def __init__(self, path: str = "-"):
		self.path = path
		self._fh = None
		self.records_written = 0

	def _open(self):
		if self.path == '-':
			return sys.stdout
		if self.path.endswith('.gz'):
			return gzip.open(self.path, 'wt')
		return open(self.path, 'wt')

	def _handle(self):
		if self._fh is None:
			self._fh = self._open()
		return self._fh

	def write_header(self, header: VcfHeader) -> None:
		fh = self._handle()
		for line in header.to_lines():
			fh.write(line + "\n")

	def write(self, record: VcfRecord) -> None:
		self._handle().write(record.to_line() + "\n")
		self.records_written += 1

	def close(self) -> None:
		if self._fh is None:
			return
		if self._fh is sys.stdout:
			self._fh.flush()
		else:
			self._fh.close()
		self._fh = None

	def __enter__(self) -> "VcfWriter":
		return self

	def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
		self.close()
		return None
