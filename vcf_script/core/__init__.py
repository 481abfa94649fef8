"""Record field-binding core.

Exposes the fields of the currently bound VCF record as named, readable and
writable accessors:

	schema   – sample index lookup and declared INFO/FORMAT fields
	binding  – the current-record slot
	fixed    – CHROM/POS/ID/REF/ALT/QUAL/FILTER
	samples  – per-sample FORMAT handles
	info     – INFO fields
	version  – minimum version gate
	surface  – everything above wired together for a script
"""

from .binding import RecordHolder  # noqa: F401
from .fixed import FilterList, FixedFields  # noqa: F401
from .info import InfoFields  # noqa: F401
from .samples import FieldAccessor, SampleFields, SampleHandle  # noqa: F401
from .schema import SchemaRegistry  # noqa: F401
from .surface import ScriptSurface, has  # noqa: F401
from .version import check_minimum_version, parse_version  # noqa: F401

__all__ = [
	"RecordHolder",
	"FilterList",
	"FixedFields",
	"InfoFields",
	"FieldAccessor",
	"SampleFields",
	"SampleHandle",
	"SchemaRegistry",
	"ScriptSurface",
	"has",
	"check_minimum_version",
	"parse_version",
]
