"""The proc pseudo-filesystem as a whole."""

from __future__ import annotations

import os
import re
from os import PathLike
from typing import Union

from procfs.net_dev import NetDev, read_net_dev
from procfs.net_softnet import SoftnetEntry, read_softnet_stats
from procfs.net_unix import NetUnix, read_net_unix
from procfs.proc import Proc
from procfs.proc_psi import PSIStats, parse_psi_stats
from procfs.proc_stat import DEFAULT_PROC_ROOT
from procfs.schedstat import Schedstat, parse_schedstat
from procfs.stat import Stat, read_stat

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_LIMIT = 1 << 63


def _parse_pid(text: str) -> int:
    if not _INT_RE.fullmatch(text) or not -_INT64_LIMIT <= int(text) < _INT64_LIMIT:
        raise ValueError(f"invalid pid {text!r}")
    return int(text)


class FS:
    """A mounted proc filesystem."""

    def __init__(self, mount_point: Union[str, PathLike] = DEFAULT_PROC_ROOT) -> None:
        mount_point = os.fspath(mount_point)
        os.stat(mount_point)
        if not os.path.isdir(mount_point):
            raise NotADirectoryError(f"mount point {mount_point} is not a directory")
        self.mount_point = mount_point

    def __repr__(self) -> str:
        return f"FS({self.mount_point!r})"

    def path(self, *args: str) -> str:
        """Path of a file below the mount point."""
        return os.path.join(self.mount_point, *args)

    def stat(self) -> Stat:
        """Kernel and system statistics."""
        return read_stat(self.path("stat"))

    def net_dev(self) -> NetDev:
        """Network interface statistics."""
        return read_net_dev(self.path("net", "dev"))

    def gather_softnet_stats(self) -> list[SoftnetEntry]:
        """Per-CPU packet processing statistics."""
        return read_softnet_stats(self.path("net", "softnet_stat"))

    def net_unix(self) -> NetUnix:
        """The unix domain socket table."""
        return read_net_unix(self.path("net", "unix"))

    def psi_stats_for_resource(self, resource: str) -> PSIStats:
        """Pressure stall information for a resource such as "cpu", "memory" or "io"."""
        try:
            with open(self.path("pressure", resource), encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise OSError(exc.errno, f"psi_stats: unavailable for {resource}") from exc
        return parse_psi_stats(resource, text)

    def schedstat(self) -> Schedstat:
        """Scheduler statistics of every CPU."""
        with open(self.path("schedstat"), encoding="utf-8") as handle:
            return parse_schedstat(handle.read())

    def proc(self, pid: int) -> Proc:
        """The process with the given pid; raises if it does not exist."""
        os.stat(self.path(str(pid)))
        return Proc(pid, self.mount_point)

    def self_process(self) -> Proc:
        """The process reading the filesystem, found through the self link."""
        target = os.readlink(self.path("self"))
        return self.proc(_parse_pid(target.replace(self.mount_point, "")))

    def all_procs(self) -> list[Proc]:
        """All processes currently present, in directory order."""
        procs = []
        for name in os.listdir(self.mount_point):
            try:
                pid = _parse_pid(name)
            except ValueError:
                continue
            procs.append(Proc(pid, self.mount_point))
        return procs


def default_fs() -> FS:
    """An FS for the default mount point."""
    return FS(DEFAULT_PROC_ROOT)