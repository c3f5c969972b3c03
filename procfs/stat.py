"""Kernel and system statistics from /proc/stat."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Union

USER_HZ = 100

_UINT_RE = re.compile(r"[0-9]+")
_UINT64_LIMIT = 1 << 64

_SIMPLE_KEYS = {
    "btime": "boot_time",
    "ctxt": "context_switches",
    "processes": "process_created",
    "procs_running": "processes_running",
    "procs_blocked": "processes_blocked",
}


@dataclass
class CPUStat:
    """Seconds a CPU spent in each of its states."""

    user: float = 0.0
    nice: float = 0.0
    system: float = 0.0
    idle: float = 0.0
    iowait: float = 0.0
    irq: float = 0.0
    softirq: float = 0.0
    steal: float = 0.0
    guest: float = 0.0
    guest_nice: float = 0.0


@dataclass
class SoftIRQStat:
    """Counts of scheduled softirqs by kind."""

    hi: int = 0
    timer: int = 0
    net_tx: int = 0
    net_rx: int = 0
    block: int = 0
    block_io_poll: int = 0
    tasklet: int = 0
    sched: int = 0
    hrtimer: int = 0
    rcu: int = 0


@dataclass
class Stat:
    """Kernel and system statistics."""

    boot_time: int = 0
    cpu_total: CPUStat = field(default_factory=CPUStat)
    cpu: list[CPUStat] = field(default_factory=list)
    irq_total: int = 0
    irq: list[int] = field(default_factory=list)
    context_switches: int = 0
    process_created: int = 0
    processes_running: int = 0
    processes_blocked: int = 0
    softirq_total: int = 0
    softirq: SoftIRQStat = field(default_factory=SoftIRQStat)


def _parse_uint(text: str) -> int:
    if not _UINT_RE.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    value = int(text)
    if value >= _UINT64_LIMIT:
        raise ValueError(f"value out of range {text!r}")
    return value


def _parse_float(text: str) -> float:
    if "_" in text:
        raise ValueError(f"invalid number {text!r}")
    return float(text)


def parse_cpu_stat(line: str) -> tuple[CPUStat, int]:
    """Parse a cpu line; return the stats and the cpu id, or -1 for the total."""
    parts = line.split()
    if not parts:
        raise ValueError(f"couldn't parse {line} (cpu): 0 elements parsed")
    label, raw_values = parts[0], parts[1:11]
    try:
        values = [_parse_float(value) / USER_HZ for value in raw_values]
    except ValueError as exc:
        raise ValueError(f"couldn't parse {line} (cpu): {exc}") from exc
    cpu_stat = CPUStat(*values)

    if label == "cpu":
        return cpu_stat, -1
    suffix = label[3:]
    if not _UINT_RE.fullmatch(suffix):
        raise ValueError(f"couldn't parse {line} (cpu/cpuid): invalid id {suffix!r}")
    return cpu_stat, int(suffix)


def parse_softirq_stat(line: str) -> tuple[SoftIRQStat, int]:
    """Parse a softirq line; return the per-kind counts and the total."""
    parts = line.split()
    if len(parts) < 12:
        raise ValueError(f"couldn't parse {line} (softirq): unexpected EOF")
    try:
        numbers = [_parse_uint(value) for value in parts[1:12]]
    except ValueError as exc:
        raise ValueError(f"couldn't parse {line} (softirq): {exc}") from exc
    total, *counts = numbers
    return SoftIRQStat(*counts), total


def parse_stat(text: str) -> Stat:
    """Parse the contents of /proc/stat."""
    stat = Stat()
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        key = parts[0]

        if key in _SIMPLE_KEYS:
            try:
                value = _parse_uint(parts[1])
            except ValueError as exc:
                raise ValueError(f"couldn't parse {parts[1]} ({key}): {exc}") from exc
            setattr(stat, _SIMPLE_KEYS[key], value)
        elif key == "intr":
            try:
                stat.irq_total = _parse_uint(parts[1])
            except ValueError as exc:
                raise ValueError(f"couldn't parse {parts[1]} (intr): {exc}") from exc
            irqs = []
            for number, count in enumerate(parts[2:]):
                try:
                    irqs.append(_parse_uint(count))
                except ValueError as exc:
                    raise ValueError(
                        f"couldn't parse {count} (intr{number}): {exc}"
                    ) from exc
            stat.irq = irqs
        elif key == "softirq":
            stat.softirq, stat.softirq_total = parse_softirq_stat(line)
        elif key.startswith("cpu"):
            cpu_stat, cpu_id = parse_cpu_stat(line)
            if cpu_id == -1:
                stat.cpu_total = cpu_stat
            else:
                while len(stat.cpu) <= cpu_id:
                    stat.cpu.append(CPUStat())
                stat.cpu[cpu_id] = cpu_stat
    return stat


def read_stat(path: Union[str, PathLike]) -> Stat:
    """Read and parse a /proc/stat file."""
    with open(path, encoding="utf-8") as handle:
        return parse_stat(handle.read())