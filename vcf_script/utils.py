"""Small utility helpers used across the vcf_script package.

This module intentionally keeps a tiny surface area of pure-Python helpers that
are easy to unit-test and have no heavy dependencies.
"""
from collections.abc import Sequence
from typing import Dict, List, Optional, Union

MISSING = "."

InfoValue = Union[str, List[str], bool]


def is_missing(value) -> bool:
    """True for the sentinel, ``None``, ``False``, empty strings and empty sequences."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in ("", MISSING)
    if is_sequence(value):
        return len(value) == 0
    return False


def is_sequence(value) -> bool:
    """True for lists, tuples and other non-string sequences (e.g. a live FILTER view)."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def split_tokens(value, sep: str = ";") -> List[str]:
    """Normalise a list or a delimited string into a list of tokens.

    Missing-like values (see :func:`is_missing`) give an empty list.
    Example: 'q10;s50' -> ['q10', 's50']
    """
    if is_missing(value):
        return []
    if is_sequence(value):
        return [str(v) for v in value if not is_missing(v)]
    return [tok for tok in str(value).split(sep) if tok and tok != MISSING]


def parse_info_field(info: str, multi_valued=()) -> Dict[str, InfoValue]:
    """Parse a VCF INFO column (key[=value];... ) into a dict.

    Keys without value map to ``True`` (flags). Keys listed in ``multi_valued``
    have their value split on ',' into a list; everything else is kept as a
    string. An INFO field of '.' returns an empty dict.
    """
    out: Dict[str, InfoValue] = {}
    if not info or info == MISSING:
        return out
    for token in info.split(";"):
        if not token:
            continue
        if "=" in token:
            k, v = token.split("=", 1)
            out[k] = v.split(",") if k in multi_valued else v
        else:
            out[token] = True
    return out


def format_info_field(info: Dict[str, InfoValue]) -> str:
    """Inverse of :func:`parse_info_field`; an empty map renders as '.'."""
    parts = []
    for k, v in info.items():
        if v is True:
            parts.append(k)
        elif isinstance(v, list):
            parts.append(f"{k}={','.join(v)}")
        else:
            parts.append(f"{k}={v}")
    return ";".join(parts) if parts else MISSING


def parse_format_sample(fmt: str, sample: str) -> Dict[str, Optional[str]]:
    """Parse FORMAT and a sample column into a dict mapping keys->values.

    Example: fmt='GT:AD:DP' sample='0/1:10,5:15' -> {'GT':'0/1','AD':'10,5','DP':'15'}
    Trailing sub-fields omitted from the sample column map to '.'.
    """
    keys = fmt.split(":") if fmt and fmt != MISSING else []
    vals = sample.split(":") if sample else []
    out: Dict[str, Optional[str]] = {}
    for i, k in enumerate(keys):
        out[k] = vals[i] if i < len(vals) and vals[i] != "" else MISSING
    return out


def to_number(value) -> Optional[float]:
    """Convert QUAL-like text to float; the sentinel and None give None.

    Raises ValueError for anything else that is not numeric.
    """
    if value is None or value == MISSING:
        return None
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    return float(value)


def format_number(value: float) -> str:
    """Render a number without a redundant trailing '.0' (30.0 -> '30')."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


__all__ = [
    "MISSING",
    "InfoValue",
    "is_missing",
    "is_sequence",
    "split_tokens",
    "parse_info_field",
    "format_info_field",
    "parse_format_sample",
    "to_number",
    "format_number",
]
