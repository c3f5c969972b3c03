"""Status information of a process from /proc/[pid]/status."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

_UINT_RE = re.compile(r"[0-9]+")
_UINT64_MAX = (1 << 64) - 1

_BYTE_FIELDS = {
    "VmPeak": "vm_peak",
    "VmSize": "vm_size",
    "VmLck": "vm_lck",
    "VmPin": "vm_pin",
    "VmHWM": "vm_hwm",
    "VmRSS": "vm_rss",
    "RssAnon": "rss_anon",
    "RssFile": "rss_file",
    "RssShmem": "rss_shmem",
    "VmData": "vm_data",
    "VmStk": "vm_stk",
    "VmExe": "vm_exe",
    "VmLib": "vm_lib",
    "VmPTE": "vm_pte",
    "VmPMD": "vm_pmd",
    "VmSwap": "vm_swap",
    "HugetlbPages": "hugetlb_pages",
}

_COUNT_FIELDS = {
    "Tgid": "tgid",
    "voluntary_ctxt_switches": "voluntary_ctxt_switches",
    "nonvoluntary_ctxt_switches": "nonvoluntary_ctxt_switches",
}


@dataclass
class ProcStatus:
    """Status of a process; memory sizes are in bytes."""

    pid: int = 0
    name: str = ""
    tgid: int = 0
    vm_peak: int = 0
    vm_size: int = 0
    vm_lck: int = 0
    vm_pin: int = 0
    vm_hwm: int = 0
    vm_rss: int = 0
    rss_anon: int = 0
    rss_file: int = 0
    rss_shmem: int = 0
    vm_data: int = 0
    vm_stk: int = 0
    vm_exe: int = 0
    vm_lib: int = 0
    vm_pte: int = 0
    vm_pmd: int = 0
    vm_swap: int = 0
    hugetlb_pages: int = 0
    voluntary_ctxt_switches: int = 0
    nonvoluntary_ctxt_switches: int = 0

    def total_ctxt_switches(self) -> int:
        """Voluntary and involuntary context switches together."""
        return self.voluntary_ctxt_switches + self.nonvoluntary_ctxt_switches


def _lenient_uint(text: str) -> int:
    """Parse an unsigned value; non-numbers give 0, overflow saturates."""
    if not _UINT_RE.fullmatch(text):
        return 0
    return min(int(text), _UINT64_MAX)


def parse_proc_status(pid: int, text: Union[str, bytes]) -> ProcStatus:
    """Parse the contents of /proc/[pid]/status; kB values become bytes."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    status = ProcStatus(pid=pid)
    for line in text.split("\n"):
        key, colon, value = line.partition(":")
        if not colon:
            continue
        key = key.strip()
        value = value.strip().strip(" kB")
        number = _lenient_uint(value)

        if key == "Name":
            status.name = value
        elif key in _BYTE_FIELDS:
            setattr(status, _BYTE_FIELDS[key], (number * 1024) & _UINT64_MAX)
        elif key in _COUNT_FIELDS:
            setattr(status, _COUNT_FIELDS[key], number)
    return status