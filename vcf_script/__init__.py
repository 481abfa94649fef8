"""vcf_script – scripted filtering and annotation of VCF records.

Subpackages:
	io        – streaming reader / writer and the header & record models
	core      – field-binding layer exposing record fields to scripts

The usual entry points are re-exported so users can simply::

	from vcf_script import SimpleVCFReader, ScriptedRecordProcessor, run_filter

Scripts see the bound record through ``rec`` (fixed columns), ``INFO`` and
``SAMPLES``; see :mod:`vcf_script.core.surface`.
"""

__version__ = "1.2.0"
__author__ = "Zihao Huang"
__email__ = "zh384@cam.ac.uk"

from .core import ScriptSurface  # noqa: E402
from .errors import VcfScriptError  # noqa: E402
from .io import SimpleVCFReader, VcfHeader, VcfRecord, VcfWriter  # noqa: E402
from .pipeline import FilterStatistics, run_filter  # noqa: E402
from .script import ScriptedRecordProcessor  # noqa: E402

__all__ = [
	"ScriptSurface",
	"VcfScriptError",
	"SimpleVCFReader",
	"VcfHeader",
	"VcfRecord",
	"VcfWriter",
	"FilterStatistics",
	"run_filter",
	"ScriptedRecordProcessor",
	"__version__",
]
