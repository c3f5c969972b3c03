"""Parsers for the Linux /proc pseudo-filesystem: system, network, process and NFS statistics."""

__version__ = "0.1.0"