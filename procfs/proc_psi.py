"""Pressure stall information from /proc/pressure/*."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_FLOAT = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_LINE_TEMPLATE = (
    r"{prefix} *avg10=({f}) *avg60=({f}) *avg300=({f}) *total=(\d+)"
)
_LINE_RES = {
    prefix: re.compile(_LINE_TEMPLATE.format(prefix=prefix, f=_FLOAT))
    for prefix in ("some", "full")
}


@dataclass
class PSILine:
    """Averages (percent over 10, 60 and 300 seconds) and total stall time in µs."""

    avg10: float = 0.0
    avg60: float = 0.0
    avg300: float = 0.0
    total: int = 0


@dataclass
class PSIStats:
    """Share of time some, or all non-idle, tasks were stalled on a resource."""

    some: Optional[PSILine] = None
    full: Optional[PSILine] = None


def _parse_line(prefix: str, line: str) -> PSILine:
    match = _LINE_RES[prefix].match(line)
    if match is None:
        raise ValueError(f"couldn't parse {prefix} pressure line {line!r}")
    avg10, avg60, avg300, total = match.groups()
    return PSILine(float(avg10), float(avg60), float(avg300), int(total))


def parse_psi_stats(resource: str, text: str) -> PSIStats:
    """Parse a pressure file for the named resource.

    Lines with an unknown prefix are ignored; a malformed "some" or "full"
    line raises ValueError.
    """
    stats = PSIStats()
    for line in text.splitlines():
        prefix = line.split(" ")[0]
        if prefix == "some":
            stats.some = _parse_line(prefix, line)
        elif prefix == "full":
            stats.full = _parse_line(prefix, line)
    return stats