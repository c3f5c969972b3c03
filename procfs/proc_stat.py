"""Status of a process from /proc/[pid]/stat."""

from __future__ import annotations

import mmap
import os
import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Union

from procfs.stat import USER_HZ, read_stat

DEFAULT_PROC_ROOT = "/proc"

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_INT64_LIMIT = 1 << 63
_UINT64_LIMIT = 1 << 64

# Fields after the command name, in file order; None marks a skipped column.
_FIELDS: list[tuple[str | None, bool]] = [
    ("ppid", True),
    ("pgrp", True),
    ("session", True),
    ("tty", True),
    ("tpgid", True),
    ("flags", False),
    ("minflt", False),
    ("cminflt", False),
    ("majflt", False),
    ("cmajflt", False),
    ("utime", False),
    ("stime", False),
    ("cutime", False),
    ("cstime", False),
    ("priority", True),
    ("nice", True),
    ("num_threads", True),
    (None, True),
    ("starttime", False),
    ("vsize", False),
    ("rss", True),
]


@dataclass
class ProcStat:
    """Status information of a process; times are in clock ticks."""

    pid: int = 0
    comm: str = ""
    state: str = ""
    ppid: int = 0
    pgrp: int = 0
    session: int = 0
    tty: int = 0
    tpgid: int = 0
    flags: int = 0
    minflt: int = 0
    cminflt: int = 0
    majflt: int = 0
    cmajflt: int = 0
    utime: int = 0
    stime: int = 0
    cutime: int = 0
    cstime: int = 0
    priority: int = 0
    nice: int = 0
    num_threads: int = 0
    starttime: int = 0
    vsize: int = 0
    rss: int = 0
    proc_root: str = field(default=DEFAULT_PROC_ROOT, repr=False, compare=False)

    def virtual_memory(self) -> int:
        """Virtual memory size in bytes."""
        return self.vsize

    def resident_memory(self) -> int:
        """Resident memory size in bytes."""
        return self.rss * mmap.PAGESIZE

    def start_time(self) -> float:
        """Unix timestamp, in seconds, at which the process started."""
        stat = read_stat(os.path.join(self.proc_root, "stat"))
        return float(stat.boot_time) + self.starttime / USER_HZ

    def cpu_time(self) -> float:
        """Total user and system CPU time in seconds."""
        return (self.utime + self.stime) / USER_HZ


def _parse_number(text: str, signed: bool) -> int:
    if signed:
        if not _SIGNED_RE.fullmatch(text):
            raise ValueError(f"expected integer, got {text!r}")
        value = int(text)
        if not -_INT64_LIMIT <= value < _INT64_LIMIT:
            raise ValueError(f"value out of range {text!r}")
        return value
    if not _UNSIGNED_RE.fullmatch(text):
        raise ValueError(f"expected unsigned integer, got {text!r}")
    value = int(text)
    if value >= _UINT64_LIMIT:
        raise ValueError(f"value out of range {text!r}")
    return value


def parse_proc_stat(
    pid: int,
    data: Union[str, bytes],
    proc_root: Union[str, PathLike] = DEFAULT_PROC_ROOT,
) -> ProcStat:
    """Parse the contents of /proc/[pid]/stat.

    proc_root is the proc mount the system-wide stat file is read from by
    start_time.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    left = data.find("(")
    right = data.rfind(")")
    if left < 0 or right < 0:
        raise ValueError(f"unexpected format, couldn't extract comm: {data}")

    tokens = data[right + 2:].split()
    if len(tokens) < len(_FIELDS) + 1:
        raise ValueError("unexpected EOF while parsing process stat")

    values = {}
    for (name, signed), token in zip(_FIELDS, tokens[1:]):
        number = _parse_number(token, signed)
        if name is not None:
            values[name] = number

    return ProcStat(
        pid=pid,
        comm=data[left + 1:right],
        state=tokens[0],
        proc_root=os.fspath(proc_root),
        **values,
    )