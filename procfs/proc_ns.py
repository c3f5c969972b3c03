"""Namespaces of a process from /proc/[pid]/ns."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from os import PathLike
from typing import Union

_UINT_RE = re.compile(r"[0-9]+")
_UINT32_LIMIT = 1 << 32


@dataclass(frozen=True)
class Namespace:
    """A namespace; processes sharing it see the same inode number."""

    type: str
    inode: int


def parse_namespace_link(target: str) -> Namespace:
    """Parse a namespace link target such as "net:[4026531993]"."""
    kind, colon, rest = target.partition(":")
    if not colon:
        raise ValueError(f"failed to parse namespace type and inode from '{target}'")
    inode_text = rest.strip("[]")
    if not _UINT_RE.fullmatch(inode_text) or int(inode_text) >= _UINT32_LIMIT:
        raise ValueError(f"failed to parse inode from '{rest}': invalid number")
    return Namespace(kind, int(inode_text))


def read_namespaces(ns_dir: Union[str, PathLike]) -> dict[str, Namespace]:
    """Read every namespace link in a /proc/[pid]/ns directory, keyed by name."""
    return {
        name: parse_namespace_link(os.readlink(os.path.join(ns_dir, name)))
        for name in os.listdir(ns_dir)
    }