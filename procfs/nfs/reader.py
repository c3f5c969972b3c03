"""Reading NFS client and server statistics from /proc/net/rpc."""

from __future__ import annotations

import os
import re
from os import PathLike
from typing import Callable, Iterable, TextIO, Union

from procfs.nfs.stats import (
    ClientRPCStats,
    ServerRPCStats,
    parse_client_rpc,
    parse_client_v4_stats,
    parse_file_handles,
    parse_input_output,
    parse_network,
    parse_read_ahead_cache,
    parse_reply_cache,
    parse_server_rpc,
    parse_server_v4_stats,
    parse_threads,
    parse_v2_stats,
    parse_v3_stats,
    parse_v4_ops,
)

DEFAULT_PROC_MOUNT_POINT = "/proc"

_UINT_RE = re.compile(r"[0-9]+")
_UINT64_LIMIT = 1 << 64

_Source = Union[TextIO, Iterable[str], str]

_CLIENT_LINES: dict[str, tuple[str, Callable]] = {
    "net": ("network", parse_network),
    "rpc": ("client_rpc", parse_client_rpc),
    "proc2": ("v2_stats", parse_v2_stats),
    "proc3": ("v3_stats", parse_v3_stats),
    "proc4": ("client_v4_stats", parse_client_v4_stats),
}

_SERVER_LINES: dict[str, tuple[str, Callable]] = {
    "rc": ("reply_cache", parse_reply_cache),
    "fh": ("file_handles", parse_file_handles),
    "io": ("input_output", parse_input_output),
    "th": ("threads", parse_threads),
    "ra": ("read_ahead_cache", parse_read_ahead_cache),
    "net": ("network", parse_network),
    "rpc": ("server_rpc", parse_server_rpc),
    "proc2": ("v2_stats", parse_v2_stats),
    "proc3": ("v3_stats", parse_v3_stats),
    "proc4": ("server_v4_stats", parse_server_v4_stats),
    "proc4ops": ("v4_ops", parse_v4_ops),
}


def _lines(stream: _Source) -> Iterable[str]:
    if isinstance(stream, str):
        return stream.splitlines()
    return stream


def _parse_uint64s(texts: list[str]) -> list[int]:
    values = []
    for text in texts:
        if not _UINT_RE.fullmatch(text):
            raise ValueError(f"invalid unsigned integer {text!r}")
        value = int(text)
        if value >= _UINT64_LIMIT:
            raise ValueError(f"value out of range {text!r}")
        values.append(value)
    return values


def parse_client_rpc_stats(stream: _Source) -> ClientRPCStats:
    """Parse the contents of /proc/net/rpc/nfs."""
    stats = ClientRPCStats()
    for raw_line in _lines(stream):
        line = raw_line.rstrip("\r\n")
        parts = line.split()
        if len(parts) < 2:
            raise ValueError(f"invalid NFS metric line {line!r}")
        try:
            values = _parse_uint64s(parts[1:])
        except ValueError as exc:
            raise ValueError(f"error parsing NFS metric line: {exc}") from exc

        label = parts[0]
        if label not in _CLIENT_LINES:
            raise ValueError(f"unknown NFS metric line {label!r}")
        attribute, parser = _CLIENT_LINES[label]
        try:
            setattr(stats, attribute, parser(values))
        except ValueError as exc:
            raise ValueError(f"errors parsing NFS metric line: {exc}") from exc
    return stats


def parse_server_rpc_stats(stream: _Source) -> ServerRPCStats:
    """Parse the contents of /proc/net/rpc/nfsd."""
    stats = ServerRPCStats()
    for raw_line in _lines(stream):
        line = raw_line.rstrip("\r\n")
        parts = line.split()
        if len(parts) < 2:
            raise ValueError(f"invalid NFSd metric line {line!r}")
        label = parts[0]

        if label == "th":
            if len(parts) < 3:
                raise ValueError(f"invalid NFSd th metric line {line!r}")
            raw_values = parts[1:3]
        else:
            raw_values = parts[1:]
        try:
            values = _parse_uint64s(raw_values)
        except ValueError as exc:
            raise ValueError(f"error parsing NFSd metric line: {exc}") from exc

        if label not in _SERVER_LINES:
            raise ValueError(f"unknown NFSd metric line {label!r}")
        attribute, parser = _SERVER_LINES[label]
        try:
            setattr(stats, attribute, parser(values))
        except ValueError as exc:
            raise ValueError(f"errors parsing NFSd metric line: {exc}") from exc
    return stats


class NfsFS:
    """A proc filesystem mount from which NFS statistics are read."""

    def __init__(self, mount_point: Union[str, PathLike]) -> None:
        mount_point = os.fspath(mount_point)
        if not mount_point.strip():
            mount_point = DEFAULT_PROC_MOUNT_POINT
        if not os.stat(mount_point) or not os.path.isdir(mount_point):
            raise NotADirectoryError(f"mount point {mount_point} is not a directory")
        self.mount_point = mount_point

    def _path(self, *parts: str) -> str:
        return os.path.join(self.mount_point, *parts)

    def client_rpc_stats(self) -> ClientRPCStats:
        """Read NFS client RPC statistics from net/rpc/nfs."""
        with open(self._path("net", "rpc", "nfs"), encoding="utf-8") as handle:
            return parse_client_rpc_stats(handle)

    def server_rpc_stats(self) -> ServerRPCStats:
        """Read NFS daemon RPC statistics from net/rpc/nfsd."""
        with open(self._path("net", "rpc", "nfsd"), encoding="utf-8") as handle:
            return parse_server_rpc_stats(handle)


def new_default_fs() -> NfsFS:
    """Return an NfsFS for the default proc mount point."""
    return NfsFS(DEFAULT_PROC_MOUNT_POINT)