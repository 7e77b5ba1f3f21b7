"""Reading vendor package archives into an asset inventory."""

from .index import IndexResult, PackageScanner, build_inventory, open_package
from .reader import ArchiveIOError, ArchiveReader, ReadCancelled

__all__ = [
    "ArchiveIOError",
    "ArchiveReader",
    "IndexResult",
    "PackageScanner",
    "ReadCancelled",
    "build_inventory",
    "open_package",
]
