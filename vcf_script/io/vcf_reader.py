"""Lightweight streaming VCF reader.

This intentionally avoids external dependencies (pysam / cyvcf2): records
are parsed into plain :class:`~vcf_script.io.record.VcfRecord` objects that
scripts can read and modify in place before they are written back out.
"""

from __future__ import annotations

from typing import Iterator, List, Optional
import gzip
import logging

from ..errors import VcfFormatError
from ..utils import MISSING, parse_info_field, parse_format_sample, split_tokens
from .header import VcfHeader
from .record import VcfRecord

__all__ = ["SimpleVCFReader", "parse_record_line"]

logger = logging.getLogger(__name__)


def parse_record_line(line: str, header: VcfHeader, line_no: Optional[int] = None) -> VcfRecord:
	"""Parse one tab-separated data line against ``header``.

	INFO values are split into lists for fields the header declares as
	multi-valued; FORMAT values are laid out as one list per key.
	"""
	where = f" (line {line_no})" if line_no is not None else ""
	parts = line.rstrip("\r\n").split("\t")
	n_samples = len(header.samples)
	expected = 8 + (1 + n_samples if n_samples else 0)
	if len(parts) != expected:
		raise VcfFormatError(f"expected {expected} columns, found {len(parts)}{where}")
	chrom, pos, ids, ref, alts, qual, flt, info = parts[:8]
	try:
		pos_val = int(pos)
	except ValueError:
		raise VcfFormatError(f"non-integer POS {pos!r}{where}") from None
	multi = {fid for fid, fd in header.info.items() if fd.is_multi_valued}
	rec = VcfRecord(
		chrom=chrom,
		pos=pos_val,
		ref=ref,
		ids=split_tokens(ids),
		alts=split_tokens(alts, ","),
		qual=None if qual == MISSING else qual,
		filters=split_tokens(flt),
		info=parse_info_field(info, multi),
		num_samples=n_samples,
	)
	if n_samples:
		fmt = parts[8]
		for key in (fmt.split(":") if fmt != MISSING else []):
			rec.format[key] = []
		for sample in parts[9:]:
			for key, val in parse_format_sample(fmt, sample).items():
				rec.format[key].append(val)
	return rec


class SimpleVCFReader:
	"""Minimal streaming VCF reader.

	Parameters
	----------
	path : str
		Path to (optionally gzipped) VCF file.
	max_records : int | None
		Optional limit for testing / faster prototyping.
	"""

	def __init__(self, path: str, max_records: Optional[int] = None):
		self.path = path
		self.max_records = max_records
		self.header: Optional[VcfHeader] = None

	@property
	def samples(self) -> List[str]:
		return self.read_header().samples

	# -- internal helpers -------------------------------------------------
	def _open(self):  # type: ignore[return-type]
		if self.path.endswith('.gz'):
			return gzip.open(self.path, 'rt')
		return open(self.path, 'rt')

	def _consume_header(self, fh) -> int:
		"""Read header lines from ``fh``; returns the number of lines consumed."""
		header = VcfHeader()
		line_no = 0
		for line in fh:
			line_no += 1
			if line.startswith('##'):
				header.add_meta_line(line)
				continue
			if line.startswith('#CHROM'):
				header.add_column_line(line)
				if self.header is None:
					self.header = header
				return line_no
			raise VcfFormatError(f"{self.path}: expected header line, got data at line {line_no}")
		raise VcfFormatError(f"{self.path}: no #CHROM header line found")

	def read_header(self) -> VcfHeader:
		"""Parse (once) and return the header. Later calls return the same object."""
		if self.header is None:
			with self._open() as fh:
				self._consume_header(fh)
		return self.header

	def parse(self) -> Iterator[VcfRecord]:
		"""Yield records in file order.

		Records are parsed against ``self.header`` as it is at the time each
		line is read, so fields declared mid-run are honoured.
		"""
		count = 0
		with self._open() as fh:
			line_no = self._consume_header(fh)
			for line in fh:
				line_no += 1
				if not line.strip():
					continue
				yield parse_record_line(line, self.header, line_no)
				count += 1
				if self.max_records and count >= self.max_records:
					logger.debug("Stopped after %d records (max_records)", count)
					break
