"""Scheduler statistics from /proc/schedstat and /proc/[pid]/schedstat."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_CPU_LINE_RE = re.compile(
    r"cpu(\d+) (\d+) (\d+) (\d+) (\d+) (\d+) (\d+) (\d+) (\d+) (\d+)", re.ASCII
)
_PROC_LINE_RE = re.compile(r"(\d+) (\d+) (\d+)", re.ASCII)
_UINT64_LIMIT = 1 << 64


@dataclass
class SchedstatCPU:
    """Values from one "cpu<N>" line of /proc/schedstat."""

    cpu_num: str = ""
    running_nanoseconds: int = 0
    waiting_nanoseconds: int = 0
    run_timeslices: int = 0


@dataclass
class Schedstat:
    """Scheduler statistics of every CPU."""

    cpus: list[SchedstatCPU] = field(default_factory=list)


@dataclass
class ProcSchedstat:
    """Scheduler statistics of one process."""

    running_nanoseconds: int = 0
    waiting_nanoseconds: int = 0
    run_timeslices: int = 0


def _parse_uint64(text: str) -> int:
    value = int(text)
    if value >= _UINT64_LIMIT:
        raise ValueError(f"value out of range {text!r}")
    return value


def parse_schedstat(text: str) -> Schedstat:
    """Parse the contents of /proc/schedstat.

    Lines that are not cpu lines, or whose values do not fit, are skipped.
    """
    stats = Schedstat()
    for line in text.splitlines():
        match = _CPU_LINE_RE.search(line)
        if match is None:
            continue
        try:
            running, waiting, timeslices = (
                _parse_uint64(value) for value in match.group(8, 9, 10)
            )
        except ValueError:
            continue
        stats.cpus.append(
            SchedstatCPU(match.group(1), running, waiting, timeslices)
        )
    return stats


def parse_proc_schedstat(contents: str) -> ProcSchedstat:
    """Parse the contents of /proc/[pid]/schedstat; later lines are ignored."""
    match = _PROC_LINE_RE.search(contents)
    if match is None:
        raise ValueError("could not parse schedstat")
    return ProcSchedstat(*(_parse_uint64(value) for value in match.groups()))