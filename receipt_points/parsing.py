"""Strict parsing for the string-encoded receipt fields.

Python's ``int()`` and ``float()`` are more forgiving than the wire format
allows: they strip surrounding whitespace, accept ``_`` digit separators and
non-ASCII digits. These helpers only accept plain ASCII literals and return
``None`` instead of raising.

``str.strip()`` likewise treats the ASCII separators ``\\x1c``-``\\x1f`` as
whitespace; ``trim_space`` strips only Unicode White_Space characters.
"""

from __future__ import annotations

import math
import re

SPACE_CHARS = (
	"\t\n\v\f\r \x85\xa0\u1680"
	"\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
	"\u2028\u2029\u202f\u205f\u3000"
)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
	r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
	r"|[+-]?(?:inf|infinity|nan)",
	re.IGNORECASE,
)
# hex mantissa needs a binary exponent, e.g. 0x1p-2
_HEX_FLOAT_RE = re.compile(
	r"[+-]?0x(?:[0-9a-f]+(?:\.[0-9a-f]*)?|\.[0-9a-f]+)p[+-]?[0-9]+",
	re.IGNORECASE,
)


def trim_space(raw: str) -> str:
	return raw.strip(SPACE_CHARS)


def parse_int(raw: str) -> int | None:
	if not _INT_RE.fullmatch(raw):
		return None
	return int(raw)


def parse_float(raw: str) -> float | None:
	if _HEX_FLOAT_RE.fullmatch(raw):
		try:
			return float.fromhex(raw)
		except OverflowError:
			return None

	if not _FLOAT_RE.fullmatch(raw):
		return None
	value = float(raw)
	# out-of-range literals overflow to inf; only an explicit inf spelling may
	if math.isinf(value) and "inf" not in raw.lower():
		return None
	return value
