"""The accessor surface handed to user scripts.

A :class:`ScriptSurface` is built once per header. It owns the schema
registry, the current-record slot and every accessor object; the streaming
loop calls :meth:`ScriptSurface.bind` before evaluating each record.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import sys

from ..errors import InvalidValueError
from ..io.header import VcfHeader, parse_meta_line
from ..io.record import VcfRecord
from ..utils import MISSING, is_missing
from .binding import RecordHolder
from .fixed import FixedFields
from .info import InfoFields
from .samples import SampleFields
from .schema import SchemaRegistry
from .version import check_minimum_version

__all__ = ["ScriptSurface", "has"]


def has(value) -> bool:
	"""True if ``value`` is present: not '.', None, False, '' or an empty sequence."""
	return not is_missing(value)


class ScriptSurface:
	"""Registry, record slot and accessors for one header.

	Parameters
	----------
	header : VcfHeader
		Header of the stream; new INFO/FORMAT declarations are written into it.
	version : str | None
		Running engine version for :meth:`check_min_version`; defaults to
		the package version.
	auto_declare_info : bool
		Forwarded to :class:`InfoFields`.
	"""

	def __init__(self, header: VcfHeader, version: Optional[str] = None, auto_declare_info: bool = False):
		if version is None:
			from .. import __version__ as version
		self.version = version
		self.registry = SchemaRegistry(header)
		self.holder = RecordHolder()
		self.fixed = FixedFields(self.holder)
		self.info = InfoFields(self.registry, self.holder, auto_declare=auto_declare_info)
		self.samples = SampleFields(self.registry, self.holder)

	@property
	def header(self) -> VcfHeader:
		return self.registry.header

	def bind(self, record: VcfRecord) -> None:
		if record.num_samples != len(self.registry.samples):
			raise InvalidValueError(
				f"record {record} has {record.num_samples} samples, header has {len(self.registry.samples)}")
		self.holder.bind(record)

	# -- script helpers ---------------------------------------------------
	def check_min_version(self, minimum: str) -> None:
		check_minimum_version(minimum, self.version)

	def ensure_info_header(self, line: str) -> bool:
		"""Declare an INFO field from a full ``##INFO=<...>`` line."""
		descriptor = parse_meta_line(line)
		if descriptor.kind != "INFO":
			raise InvalidValueError(f"expected an ##INFO line, got: {line!r}")
		return self.registry.declare(descriptor)

	def ensure_format_header(self, line: str) -> bool:
		"""Declare a FORMAT field from a full ``##FORMAT=<...>`` line."""
		descriptor = parse_meta_line(line)
		if descriptor.kind != "FORMAT":
			raise InvalidValueError(f"expected a ##FORMAT line, got: {line!r}")
		return self.registry.declare(descriptor)

	def namespace(self) -> Dict[str, Any]:
		"""Global names visible to user scripts."""
		def stderr(*args) -> None:
			print(*args, file=sys.stderr)

		return {
			"rec": self.fixed,
			"INFO": self.info,
			"SAMPLES": self.samples,
			"MISSING": MISSING,
			"VERSION": self.version,
			"has": has,
			"ensure_info_header": self.ensure_info_header,
			"ensure_format_header": self.ensure_format_header,
			"check_min_version": self.check_min_version,
			"stderr": stderr,
		}
