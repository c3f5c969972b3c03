"""File descriptor information from /proc/[pid]/fdinfo/[fd]."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

_POS_RE = re.compile(r"^pos:\s+(\d+)$", re.ASCII)
_FLAGS_RE = re.compile(r"^flags:\s+(\d+)$", re.ASCII)
_MNT_ID_RE = re.compile(r"^mnt_id:\s+(\d+)$", re.ASCII)
_INOTIFY_PREFIX_RE = re.compile(r"^inotify")
_INOTIFY_RE = re.compile(
    r"^inotify\s+wd:([0-9a-f]+)\s+ino:([0-9a-f]+)"
    r"\s+sdev:([0-9a-f]+)\s+mask:([0-9a-f]+)",
    re.ASCII,
)


@dataclass
class InotifyInfo:
    """One inotify watch listed in an fdinfo file."""

    wd: str = ""
    ino: str = ""
    sdev: str = ""
    mask: str = ""


@dataclass
class ProcFDInfo:
    """Information about one file descriptor of a process."""

    fd: str = ""
    pos: str = ""
    flags: str = ""
    mnt_id: str = ""
    inotify_infos: list[InotifyInfo] = field(default_factory=list)


class ProcFDInfos(list):
    """A list of ProcFDInfo records."""

    def inotify_watch_len(self) -> int:
        """Total number of inotify watches across all descriptors."""
        return sum(len(info.inotify_infos) for info in self)


def parse_inotify_info(line: str) -> InotifyInfo:
    """Parse an "inotify wd:... ino:... sdev:... mask:..." line."""
    match = _INOTIFY_RE.match(line)
    if match is None:
        raise ValueError(f"invalid inotify line {line!r}")
    return InotifyInfo(*match.groups())


def _lines(text: str):
    for line in text.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def parse_fdinfo(fd: str, text: Union[str, bytes]) -> ProcFDInfo:
    """Parse the contents of an fdinfo file for the descriptor fd."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    info = ProcFDInfo(fd=fd)
    for line in _lines(text):
        if match := _POS_RE.match(line):
            info.pos = match.group(1)
        elif match := _FLAGS_RE.match(line):
            info.flags = match.group(1)
        elif match := _MNT_ID_RE.match(line):
            info.mnt_id = match.group(1)
        elif _INOTIFY_PREFIX_RE.match(line):
            info.inotify_infos.append(parse_inotify_info(line))
    return info