"""Resource limits of a process from /proc/[pid]/limits."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Union

_LIMITS_FIELDS = 3
_UNLIMITED = "unlimited"
_DELIMITER = re.compile(r"  +")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_LIMIT = 1 << 63

_LIMIT_NAMES = {
    "Max cpu time": "cpu_time",
    "Max file size": "file_size",
    "Max data size": "data_size",
    "Max stack size": "stack_size",
    "Max core file size": "core_file_size",
    "Max resident set": "resident_set",
    "Max processes": "processes",
    "Max open files": "open_files",
    "Max locked memory": "locked_memory",
    "Max address space": "address_space",
    "Max file locks": "file_locks",
    "Max pending signals": "pending_signals",
    "Max msgqueue size": "msgqueue_size",
    "Max nice priority": "nice_priority",
    "Max realtime priority": "realtime_priority",
    "Max realtime timeout": "realtime_timeout",
}


@dataclass
class ProcLimits:
    """Soft resource limits of a process; -1 means unlimited."""

    cpu_time: int = 0
    file_size: int = 0
    data_size: int = 0
    stack_size: int = 0
    core_file_size: int = 0
    resident_set: int = 0
    processes: int = 0
    open_files: int = 0
    locked_memory: int = 0
    address_space: int = 0
    file_locks: int = 0
    pending_signals: int = 0
    msgqueue_size: int = 0
    nice_priority: int = 0
    realtime_priority: int = 0
    realtime_timeout: int = 0


def parse_limit_value(s: str) -> int:
    """Parse one limit value; "unlimited" becomes -1."""
    if s == _UNLIMITED:
        return -1
    if not _INT_RE.fullmatch(s) or not -_INT64_LIMIT <= int(s) < _INT64_LIMIT:
        raise ValueError(f"couldn't parse value {s}: invalid integer")
    return int(s)


def parse_limits(lines: Union[str, Iterable[str]]) -> ProcLimits:
    """Parse the contents of a limits file, given as text or lines."""
    if isinstance(lines, str):
        lines = lines.splitlines()
    limits = ProcLimits()
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        fields = _DELIMITER.split(line, maxsplit=_LIMITS_FIELDS - 1)
        if len(fields) != _LIMITS_FIELDS:
            raise ValueError(f"couldn't parse limits line {line}")
        attribute = _LIMIT_NAMES.get(fields[0])
        if attribute is not None:
            setattr(limits, attribute, parse_limit_value(fields[1]))
    return limits