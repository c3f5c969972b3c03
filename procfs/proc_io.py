"""I/O statistics of a process from /proc/[pid]/io."""

from __future__ import annotations

import re
from dataclasses import dataclass

_UINT64_LIMIT = 1 << 64
_INT64_LIMIT = 1 << 63

_IO_RE = re.compile(
    r"rchar:[ \t]*\+?(\d+)\n"
    r"wchar:[ \t]*\+?(\d+)\n"
    r"syscr:[ \t]*\+?(\d+)\n"
    r"syscw:[ \t]*\+?(\d+)\n"
    r"read_bytes:[ \t]*\+?(\d+)\n"
    r"write_bytes:[ \t]*\+?(\d+)\n"
    r"cancelled_write_bytes:[ \t]*([+-]?\d+)(?:\n|$)"
)


@dataclass
class ProcIO:
    """Character, syscall and byte counters of a process."""

    rchar: int = 0
    wchar: int = 0
    syscr: int = 0
    syscw: int = 0
    read_bytes: int = 0
    write_bytes: int = 0
    cancelled_write_bytes: int = 0


def parse_proc_io(text: str) -> ProcIO:
    """Parse the contents of /proc/[pid]/io."""
    match = _IO_RE.match(text)
    if match is None:
        raise ValueError("unexpected format of io file")
    *unsigned, cancelled = (int(group) for group in match.groups())
    if any(value >= _UINT64_LIMIT for value in unsigned):
        raise ValueError("io value out of range")
    if not -_INT64_LIMIT <= cancelled < _INT64_LIMIT:
        raise ValueError("io value out of range")
    return ProcIO(*unsigned, cancelled)