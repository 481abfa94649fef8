"""Tabulate accessor values across a VCF stream.

Builds a DataFrame with one row per (kept) record and one column per
requested field, using the same accessor surface that scripts see.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

import pandas as pd

from .core.fixed import FilterList
from .core.surface import ScriptSurface
from .errors import UnknownFieldError
from .io import SimpleVCFReader
from .script import ScriptedRecordProcessor
from .utils import MISSING

__all__ = ["FIXED_FIELDS", "field_table", "resolve_field"]

FIXED_FIELDS = ("CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER")


def resolve_field(surface: ScriptSurface, spec: str) -> Callable[[], object]:
    """Return a zero-argument getter for a field spec.

    Accepted specs: a fixed column name, ``INFO.<id>`` or ``<sample>.<id>``
    (split on the last '.', so sample names may themselves contain dots).
    """
    if spec in FIXED_FIELDS:
        return lambda: getattr(surface.fixed, spec)
    if "." not in spec:
        raise UnknownFieldError("fixed", spec)
    owner, field_id = spec.rsplit(".", 1)
    if owner == "INFO":
        if field_id not in surface.info:
            raise UnknownFieldError("INFO", field_id)
        return lambda: surface.info.get(field_id)
    handle = surface.samples[owner]
    if field_id not in surface.samples.fields:
        raise UnknownFieldError("FORMAT", field_id)
    return lambda: handle.get(field_id)


def _cell(value):
    if isinstance(value, FilterList):
        return ";".join(value) if len(value) else None
    if isinstance(value, list):
        return ",".join(value) if value else None
    if isinstance(value, str) and value == MISSING:
        return None
    return value


def field_table(
    reader: SimpleVCFReader,
    fields: Sequence[str],
    processor: Optional[ScriptedRecordProcessor] = None,
    limit: Optional[int] = None,
) -> pd.DataFrame:
    """Return DataFrame with one column per entry of ``fields``.

    If ``processor`` is given only records it accepts are tabulated (after
    any modifications its scripts make). Missing values become NaN/None.
    """
    header = reader.read_header()
    if processor is not None:
        processor.set_header(header)
        surface = processor.surface
    else:
        surface = ScriptSurface(header)
    getters: Dict[str, Callable[[], object]] = {f: resolve_field(surface, f) for f in fields}

    rows: List[Dict[str, object]] = []
    for rec in reader.parse():
        if processor is not None:
            processor.set_record(rec)
            if not processor.accept():
                continue
        else:
            surface.bind(rec)
        rows.append({name: _cell(get()) for name, get in getters.items()})
        if limit and len(rows) >= limit:
            break
    if processor is not None:
        processor.end()

    df = pd.DataFrame(rows, columns=list(fields))
    # Ensure numeric types where possible
    for col in ("POS", "QUAL"):
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df
