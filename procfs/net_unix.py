"""Unix domain socket table from /proc/net/unix."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable, Union

_KERNEL_PTR_IDX = 0
_REF_COUNT_IDX = 1
_FLAGS_IDX = 3
_TYPE_IDX = 4
_STATE_IDX = 5
_INODE_IDX = 6

# Inode and Path are optional.
_STATIC_FIELDS_COUNT = 6

_UINT64_MASK = (1 << 64) - 1
_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_SIGNED_HEX_RE = re.compile(r"[+-]?[0-9a-fA-F]+")
_DEC_RE = re.compile(r"[0-9]+")


class NetUnixType(int):
    """Socket type of a unix domain socket."""

    STREAM = 1
    DGRAM = 2
    SEQPACKET = 5

    _NAMES = {STREAM: "stream", DGRAM: "dgram", SEQPACKET: "seqpacket"}

    def __str__(self) -> str:
        return self._NAMES.get(int(self), "unknown")

    def __repr__(self) -> str:
        return f"NetUnixType({int(self)})"


class NetUnixFlags(int):
    """Flags of a unix domain socket."""

    LISTEN = 1 << 16

    def __str__(self) -> str:
        return "listen" if int(self) == self.LISTEN else "default"

    def __repr__(self) -> str:
        return f"NetUnixFlags({int(self)})"


class NetUnixState(int):
    """Connection state of a unix domain socket."""

    UNCONNECTED = 1
    CONNECTING = 2
    CONNECTED = 3
    DISCONNECTED = 4

    _NAMES = {
        UNCONNECTED: "unconnected",
        CONNECTING: "connecting",
        CONNECTED: "connected",
        DISCONNECTED: "disconnected",
    }

    def __str__(self) -> str:
        return self._NAMES.get(int(self), "unknown")

    def __repr__(self) -> str:
        return f"NetUnixState({int(self)})"


@dataclass
class NetUnixLine:
    """One row of /proc/net/unix."""

    kernel_ptr: str = ""
    ref_count: int = 0
    protocol: int = 0
    flags: NetUnixFlags = NetUnixFlags(0)
    type: NetUnixType = NetUnixType(0)
    state: NetUnixState = NetUnixState(0)
    inode: int = 0
    path: str = ""


@dataclass
class NetUnix:
    """All rows read from /proc/net/unix."""

    rows: list[NetUnixLine] = field(default_factory=list)


class NetUnixParseError(ValueError):
    """Raised when a row cannot be parsed; carries the rows parsed before it."""

    def __init__(self, message: str, partial: NetUnix) -> None:
        super().__init__(message)
        self.partial = partial


def _parse_hex(text: str, bits: int) -> int:
    if not _HEX_RE.fullmatch(text):
        raise ValueError(f"invalid hexadecimal number {text!r}")
    value = int(text, 16)
    if value >= 1 << bits:
        raise ValueError(f"value out of range {text!r}")
    return value


def _parse_signed_hex(text: str, bits: int) -> int:
    if not _SIGNED_HEX_RE.fullmatch(text):
        raise ValueError(f"invalid hexadecimal number {text!r}")
    value = int(text, 16)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ValueError(f"value out of range {text!r}")
    return value


def _parse_kernel_ptr(text: str) -> str:
    if not text.endswith(":"):
        raise ValueError("Invalid Num(the kernel table slot number) format")
    return text[:-1]


def _parse_inode(text: str) -> int:
    if not _DEC_RE.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    value = int(text)
    if value > _UINT64_MASK:
        raise ValueError(f"value out of range {text!r}")
    return value


def _parse_line(line: str, has_inode: bool, min_fields: int) -> NetUnixLine:
    fields = line.split()
    if len(fields) < min_fields:
        raise ValueError(
            f"Parse Unix domain failed: expect at least {min_fields} fields "
            f"but got {len(fields)}"
        )

    def convert(index: int, what: str, parser):
        try:
            return parser(fields[index])
        except ValueError as exc:
            raise ValueError(
                f"Parse Unix domain {what}({fields[index]}) failed: {exc}"
            ) from exc

    kernel_ptr = convert(_KERNEL_PTR_IDX, "num", _parse_kernel_ptr)
    ref_count = convert(_REF_COUNT_IDX, "ref count", lambda s: _parse_hex(s, 32))
    flags = convert(_FLAGS_IDX, "flags", lambda s: _parse_hex(s, 32))
    sock_type = convert(_TYPE_IDX, "type", lambda s: _parse_hex(s, 16))
    state = convert(_STATE_IDX, "state", lambda s: _parse_signed_hex(s, 8))
    inode = convert(_INODE_IDX, "inode", _parse_inode) if has_inode else 0

    path = ""
    if len(fields) > min_fields:
        path = fields[_INODE_IDX + 1 if has_inode else _INODE_IDX]

    return NetUnixLine(
        kernel_ptr=kernel_ptr,
        ref_count=ref_count,
        flags=NetUnixFlags(flags),
        type=NetUnixType(sock_type),
        state=NetUnixState(state & _UINT64_MASK),
        inode=inode,
        path=path,
    )


def parse_net_unix(lines: Union[str, Iterable[str]]) -> NetUnix:
    """Parse /proc/net/unix content given as text or as an iterable of lines.

    The first line is the header; whether it names an Inode column decides
    how the rows are read. On a bad row NetUnixParseError is raised with the
    rows parsed so far.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()
    iterator = iter(lines)
    header = next(iterator, "")
    has_inode = "Inode" in header
    min_fields = _STATIC_FIELDS_COUNT + (1 if has_inode else 0)

    net_unix = NetUnix()
    for line in iterator:
        try:
            row = _parse_line(line, has_inode, min_fields)
        except ValueError as exc:
            raise NetUnixParseError(str(exc), net_unix) from exc
        net_unix.rows.append(row)
    return net_unix


def read_net_unix(path: Union[str, PathLike]) -> NetUnix:
    """Read and parse a /proc/net/unix file."""
    with open(path, encoding="utf-8") as handle:
        return parse_net_unix(handle)