"""Minimum engine version check used by scripts."""

from __future__ import annotations

from typing import Tuple
import logging
import re

from ..errors import IncompatibleVersionError, InvalidValueError

__all__ = ["parse_version", "check_minimum_version"]

logger = logging.getLogger(__name__)

_VERSION = re.compile(r'^\s*v?(\d+)\.(\d+)(?:\.(\d+))?')


def parse_version(text: str) -> Tuple[int, ...]:
	"""Parse 'major.minor[.patch]' (trailing text such as '-dev' ignored).

	Returns a 2- or 3-tuple of ints depending on whether patch was given.
	"""
	m = _VERSION.match(str(text))
	if not m:
		raise InvalidValueError(f"malformed version string: {text!r}")
	major, minor, patch = m.groups()
	if patch is None:
		return int(major), int(minor)
	return int(major), int(minor), int(patch)


def check_minimum_version(minimum: str, running: str) -> None:
	"""Raise :class:`IncompatibleVersionError` if ``running`` is older than ``minimum``.

	Components are compared major, minor, then patch. A requirement without
	a patch component is satisfied by any patch level.

	Examples: running '3.12.1' satisfies '3.11' and '3.12', but not '3.12.2' or '4.0'.
	"""
	required = parse_version(minimum)
	current = parse_version(running)
	if len(current) < 3:
		current = current + (0,)
	for want, have in zip(required, current):
		if have > want:
			break
		if have < want:
			raise IncompatibleVersionError(
				f"script requires version {minimum} or later, but this is version {running}")
	logger.debug("Version %s satisfies minimum %s", running, minimum)
