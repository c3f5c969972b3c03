"""A running process and the files /proc exposes for it."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from procfs.net_dev import NetDev, read_net_dev
from procfs.proc_fdinfo import ProcFDInfo, ProcFDInfos, parse_fdinfo
from procfs.proc_io import ProcIO, parse_proc_io
from procfs.proc_limits import ProcLimits, parse_limits
from procfs.proc_ns import Namespace, read_namespaces
from procfs.proc_stat import DEFAULT_PROC_ROOT, ProcStat, parse_proc_stat
from procfs.proc_status import ProcStatus, parse_proc_status
from procfs.schedstat import ProcSchedstat, parse_proc_schedstat

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT32_LIMIT = 1 << 31


def _read_bytes(path: str) -> bytes:
    with open(path, "rb") as handle:
        return handle.read()


def _readlink_or_empty(path: str) -> str:
    try:
        return os.readlink(path)
    except FileNotFoundError:
        return ""


@dataclass(frozen=True, order=True)
class Proc:
    """A process, identified by its pid under a proc mount point."""

    pid: int
    root: str = DEFAULT_PROC_ROOT

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", os.fspath(self.root))

    def path(self, *args: str) -> str:
        """Path of a file below this process's directory."""
        return os.path.join(self.root, str(self.pid), *args)

    def cmdline(self) -> list[str]:
        """The command line arguments of the process."""
        data = _read_bytes(self.path("cmdline"))
        if not data:
            return []
        return [
            part.decode("utf-8", errors="surrogateescape")
            for part in data.rstrip(b"\x00").split(b"\x00")
        ]

    def comm(self) -> str:
        """The command name of the process."""
        return _read_bytes(self.path("comm")).decode("utf-8", errors="replace").strip()

    def executable(self) -> str:
        """Absolute path of the executable, or "" when it is not known."""
        return _readlink_or_empty(self.path("exe"))

    def cwd(self) -> str:
        """Current working directory, or "" when it is not known."""
        return _readlink_or_empty(self.path("cwd"))

    def root_dir(self) -> str:
        """Root directory as set by chroot, or "" when it is not known."""
        return _readlink_or_empty(self.path("root"))

    def _fd_names(self) -> list[str]:
        return os.listdir(self.path("fd"))

    def file_descriptors(self) -> list[int]:
        """Numbers of the currently open file descriptors."""
        fds = []
        for name in self._fd_names():
            if not _INT_RE.fullmatch(name) or not -_INT32_LIMIT <= int(name) < _INT32_LIMIT:
                raise ValueError(f"could not parse fd {name}: invalid number")
            fds.append(int(name))
        return fds

    def file_descriptor_targets(self) -> list[str]:
        """Link targets of all file descriptors; "" where there is none."""
        targets = []
        for name in self._fd_names():
            try:
                targets.append(os.readlink(self.path("fd", name)))
            except OSError:
                targets.append("")
        return targets

    def file_descriptors_len(self) -> int:
        """Number of currently open file descriptors."""
        return len(self._fd_names())

    def file_descriptors_info(self) -> ProcFDInfos:
        """Information on every file descriptor that can be read."""
        infos = ProcFDInfos()
        for name in self._fd_names():
            try:
                infos.append(self.fd_info(name))
            except (OSError, ValueError):
                continue
        return infos

    def fd_info(self, fd: str) -> ProcFDInfo:
        """Information on one file descriptor."""
        return parse_fdinfo(fd, _read_bytes(self.path("fdinfo", fd)))

    def environ(self) -> list[str]:
        """The environment of the process as "NAME=value" strings."""
        data = _read_bytes(self.path("environ"))
        parts = data.decode("utf-8", errors="surrogateescape").split("\x00")
        return parts[:-1]

    def io(self) -> ProcIO:
        """I/O statistics of the process."""
        return parse_proc_io(_read_bytes(self.path("io")).decode("utf-8"))

    def limits(self) -> ProcLimits:
        """Current soft limits of the process."""
        with open(self.path("limits"), encoding="utf-8") as handle:
            return parse_limits(handle)

    def namespaces(self) -> dict[str, Namespace]:
        """Namespaces the process belongs to, keyed by name."""
        return read_namespaces(self.path("ns"))

    def stat(self) -> ProcStat:
        """Status information from the stat file."""
        return parse_proc_stat(self.pid, _read_bytes(self.path("stat")), self.root)

    def new_status(self) -> ProcStatus:
        """Status information from the status file."""
        return parse_proc_status(self.pid, _read_bytes(self.path("status")))

    def schedstat(self) -> ProcSchedstat:
        """Task scheduling information of the process."""
        with open(self.path("schedstat"), encoding="utf-8") as handle:
            return parse_proc_schedstat(handle.read())

    def net_dev(self) -> NetDev:
        """Network interface statistics seen by the process."""
        return read_net_dev(self.path("net", "dev"))