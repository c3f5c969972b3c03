"""Network interface statistics from /proc/net/dev."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from os import PathLike
from typing import Union

_UINT_RE = re.compile(r"[0-9]+")
_UINT64_LIMIT = 1 << 64
_VALUE_COUNT = 16


@dataclass
class NetDevLine:
    """Counters of one network interface."""

    name: str = ""
    rx_bytes: int = 0
    rx_packets: int = 0
    rx_errors: int = 0
    rx_dropped: int = 0
    rx_fifo: int = 0
    rx_frame: int = 0
    rx_compressed: int = 0
    rx_multicast: int = 0
    tx_bytes: int = 0
    tx_packets: int = 0
    tx_errors: int = 0
    tx_dropped: int = 0
    tx_fifo: int = 0
    tx_collisions: int = 0
    tx_carrier: int = 0
    tx_compressed: int = 0


_COUNTER_NAMES = [f.name for f in fields(NetDevLine) if f.name != "name"]


class NetDev(dict):
    """Interface statistics keyed by interface name."""

    def total(self) -> NetDevLine:
        """Sum the counters of all interfaces.

        The name is the sorted, comma separated list of interface names.
        """
        sums = {
            counter: sum(getattr(line, counter) for line in self.values())
            for counter in _COUNTER_NAMES
        }
        names = sorted(line.name for line in self.values())
        return NetDevLine(name=", ".join(names), **sums)


def _parse_uint(text: str) -> int:
    if not _UINT_RE.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    value = int(text)
    if value >= _UINT64_LIMIT:
        raise ValueError(f"value out of range {text!r}")
    return value


def parse_net_dev_line(raw_line: str) -> NetDevLine:
    """Parse one data line of /proc/net/dev; header lines are not accepted."""
    name, colon, rest = raw_line.partition(":")
    if not colon:
        raise ValueError("invalid net/dev line, missing colon")
    name = name.strip()
    if not name:
        raise ValueError("invalid net/dev line, empty interface name")
    values = rest.split()
    if len(values) < _VALUE_COUNT:
        raise ValueError(
            f"invalid net/dev line, expected {_VALUE_COUNT} values but got {len(values)}"
        )
    return NetDevLine(name, *(_parse_uint(value) for value in values[:_VALUE_COUNT]))


def parse_net_dev(text: str) -> NetDev:
    """Parse the contents of /proc/net/dev, skipping its two header lines."""
    net_dev = NetDev()
    for raw_line in text.splitlines()[2:]:
        line = parse_net_dev_line(raw_line)
        net_dev[line.name] = line
    return net_dev


def read_net_dev(path: Union[str, PathLike]) -> NetDev:
    """Read and parse a /proc/net/dev file."""
    with open(path, encoding="utf-8") as handle:
        return parse_net_dev(handle.read())