"""Run user-supplied Python against each VCF record.

A script run has three parts, all optional except that at least one must
be given:

- begin scripts, executed once after the header is known (they may define
  helper functions, ``record()`` and ``end()``, declare new header fields
  or call ``check_min_version``);
- a keep expression, evaluated per record; the record is kept if it is truthy;
- a ``record()`` function, called per record; returning ``False`` drops
  the record, any other result (including ``None``) keeps it.

Scripts see the names from :meth:`ScriptSurface.namespace` as globals.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence
import logging

from .core.surface import ScriptSurface
from .errors import ScriptCompileError, ScriptEvaluationError, VcfScriptError
from .io.header import VcfHeader
from .io.record import VcfRecord

__all__ = ["ScriptedRecordProcessor"]

logger = logging.getLogger(__name__)

RECORD_FUNCTION = "record"
END_FUNCTION = "end"


class ScriptedRecordProcessor:
	"""Compile scripts up front, then evaluate them record by record.

	Parameters
	----------
	expression : str | None
		Keep expression (Python expression syntax).
	beginnings : sequence of str
		Begin scripts (Python statements), run in order by :meth:`set_header`.
	version : str | None
		Engine version override (mainly for tests).
	auto_declare_info : bool
		Let ``INFO.X = ...`` declare undeclared fields on the fly.
	"""

	def __init__(self, expression: Optional[str] = None, beginnings: Sequence[str] = (),
			version: Optional[str] = None, auto_declare_info: bool = False):
		self.version = version
		self.auto_declare_info = auto_declare_info
		self._expression = None
		if expression is not None:
			try:
				self._expression = compile(expression, "<expression>", "eval")
			except SyntaxError as e:
				raise ScriptCompileError(f"Could not compile the provided expression\n{e}") from e
		self._beginnings = []
		for i, source in enumerate(beginnings):
			try:
				self._beginnings.append(compile(source, f"<script {i + 1}>", "exec"))
			except SyntaxError as e:
				raise ScriptCompileError(f"Could not compile begin script {i + 1}\n{e}") from e
		self.surface: Optional[ScriptSurface] = None
		self.globals: dict = {}
		self._record_function = None
		self._record: Optional[VcfRecord] = None

	@property
	def has_record_function(self) -> bool:
		return self._record_function is not None

	def set_header(self, header: VcfHeader) -> None:
		"""Build the accessor surface for ``header`` and run the begin scripts.

		Call once per input file, before the first record.
		"""
		self.surface = ScriptSurface(header, version=self.version, auto_declare_info=self.auto_declare_info)
		self.globals = self.surface.namespace()
		for i, code in enumerate(self._beginnings):
			try:
				exec(code, self.globals)
			except VcfScriptError:
				raise
			except Exception as e:
				raise ScriptEvaluationError(f"Error running begin script {i + 1}\n{e}") from e
		fn = self.globals.get(RECORD_FUNCTION)
		self._record_function = fn if callable(fn) else None
		logger.debug("Scripts loaded (expression=%s, record function=%s)",
			self._expression is not None, self.has_record_function)

	def set_record(self, record: VcfRecord) -> None:
		if self.surface is None:
			raise RuntimeError("set_header must be called before set_record")
		self._record = record
		self.surface.bind(record)

	def _run(self, what: str, fn):
		try:
			return fn()
		except VcfScriptError:
			raise
		except Exception as e:
			raise ScriptEvaluationError(f"Could not evaluate {what} on record {self._record}\n{e}") from e

	def invoke_expression(self):
		return self._run("expression", lambda: eval(self._expression, self.globals))

	def invoke_record_function(self):
		return self._run("record function", self._record_function)

	def accept(self) -> bool:
		"""Evaluate the bound record; True means keep."""
		if self._expression is not None and not self.invoke_expression():
			return False
		if self._record_function is not None and self.invoke_record_function() is False:
			return False
		return True

	def end(self) -> None:
		"""Run the script's ``end()`` function, if it defined one."""
		fn = self.globals.get(END_FUNCTION)
		if callable(fn):
			try:
				fn()
			except VcfScriptError:
				raise
			except Exception as e:
				raise ScriptEvaluationError(f"Error running end function\n{e}") from e

	@staticmethod
	def load_sources(values: List[str]) -> List[str]:
		"""Resolve each value to file contents if it names an existing file."""
		out = []
		for v in values:
			p = Path(v)
			out.append(p.read_text() if p.is_file() else v)
		return out
