"""Exception hierarchy for vcf_script.

Every error raised on purpose by the package derives from
:class:`VcfScriptError` so callers (the CLI in particular) can report them
uniformly. Most also derive from the closest builtin so ordinary
``except KeyError`` / ``except ValueError`` code keeps working.
"""

__all__ = [
	"VcfScriptError",
	"UnknownSampleError",
	"UnknownFieldError",
	"InvalidValueError",
	"ReadOnlyFieldError",
	"IncompatibleVersionError",
	"VcfFormatError",
	"ScriptCompileError",
	"ScriptEvaluationError",
]


class VcfScriptError(Exception):
	"""Base class for all vcf_script errors."""


class UnknownSampleError(VcfScriptError, KeyError):
	"""A sample name that is not in the header."""

	def __init__(self, name: str):
		super().__init__(name)
		self.name = name

	def __str__(self) -> str:
		return f"unknown sample: {self.name!r}"


class UnknownFieldError(VcfScriptError, AttributeError):
	"""A field ID that has not been declared in the header."""

	def __init__(self, kind: str, field_id: str):
		super().__init__(f"{kind} field {field_id!r} is not declared in the header")
		self.kind = kind
		self.field_id = field_id


class InvalidValueError(VcfScriptError, ValueError):
	"""A value that cannot be written to the target field."""


class ReadOnlyFieldError(InvalidValueError):
	"""Attempt to write a fixed field that is read-only."""

	def __init__(self, field: str):
		super().__init__(f"{field} is read-only")
		self.field = field


class IncompatibleVersionError(VcfScriptError):
	"""The running engine is older than a script requires."""


class VcfFormatError(VcfScriptError, ValueError):
	"""Malformed VCF input."""


class ScriptCompileError(VcfScriptError):
	"""A user expression or script could not be compiled."""


class ScriptEvaluationError(VcfScriptError):
	"""A user expression or script failed while running against a record."""
