"""Per-round opponent token parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

RESULT_MARKERS = ("W", "D", "L")

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class OpponentToken:
    opponent_id: int | None
    display: str
    result: str | None = None


def parse_leading_int(value: str) -> int | None:
    """Parse the leading base-10 integer of ``value``; ``None`` when there is none."""
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def parse_opponent_token(token: str | None) -> OpponentToken:
    """Resolve a round token such as ``6`` or ``W6`` to its opponent number.

    Byes and typos are expected input, so this never raises: anything that
    does not carry a number yields ``opponent_id=None``.
    """
    if token is None:
        return OpponentToken(opponent_id=None, display="")

    raw = str(token).strip()
    if not raw:
        return OpponentToken(opponent_id=None, display="")

    marker = raw[0].upper()
    if marker in RESULT_MARKERS:
        return OpponentToken(
            opponent_id=parse_leading_int(raw[1:]),
            display=raw,
            result=marker,
        )
    return OpponentToken(opponent_id=parse_leading_int(raw), display=raw)


__all__ = ["OpponentToken", "RESULT_MARKERS", "parse_leading_int", "parse_opponent_token"]
