"""Per-CPU packet processing statistics from /proc/net/softnet_stat."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from typing import Union

_EXPECTED_COLUMNS = 11
_HEX_RE = re.compile(r"[0-9a-fA-F]+")


@dataclass
class SoftnetEntry:
    """One row of /proc/net/softnet_stat."""

    processed: int = 0
    dropped: int = 0
    time_squeezed: int = 0


def _parse_hex32(text: str) -> int:
    if not _HEX_RE.fullmatch(text):
        raise ValueError(f"invalid hexadecimal number {text!r}")
    value = int(text, 16)
    if value >= 1 << 32:
        raise ValueError(f"value out of range {text!r}")
    return value


def _parse_entry(columns: list[str]) -> SoftnetEntry:
    values = []
    for index, column in enumerate(columns[:3]):
        try:
            values.append(_parse_hex32(column))
        except ValueError as exc:
            raise ValueError(f"Unable to parse column {index}: {exc}") from exc
    return SoftnetEntry(*values)


def parse_softnet_entries(data: Union[str, bytes]) -> list[SoftnetEntry]:
    """Parse the contents of /proc/net/softnet_stat; blank lines are skipped."""
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    entries = []
    for line in data.split("\n"):
        columns = line.split()
        if not columns:
            continue
        if len(columns) != _EXPECTED_COLUMNS:
            raise ValueError(
                f"{len(columns)} columns were detected, "
                f"but {_EXPECTED_COLUMNS} were expected"
            )
        entries.append(_parse_entry(columns))
    return entries


def read_softnet_stats(path: Union[str, PathLike]) -> list[SoftnetEntry]:
    """Read and parse a /proc/net/softnet_stat file."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise OSError(
            exc.errno, f"error reading softnet {path}: {exc.strerror}"
        ) from exc
    return parse_softnet_entries(data)