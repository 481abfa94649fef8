"""I/O subpackage.

Exposes a lightweight streaming VCF reader and writer together with the
header and record models the scripting core binds to.
"""

from .header import FieldDescriptor, VcfHeader, parse_meta_line  # noqa: F401
from .record import VcfRecord  # noqa: F401
from .vcf_reader import SimpleVCFReader, parse_record_line  # noqa: F401
from .vcf_writer import VcfWriter  # noqa: F401

__all__ = [
	"FieldDescriptor",
	"VcfHeader",
	"parse_meta_line",
	"VcfRecord",
	"SimpleVCFReader",
	"parse_record_line",
	"VcfWriter",
]
