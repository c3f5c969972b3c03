"""Parsers for NFS client and server RPC statistics under /proc/net/rpc."""

__version__ = "0.1.0"