"""Asset index building: turn archive entries into a package inventory."""

from __future__ import annotations

import gzip
import zlib
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Iterable, Iterator, List

from ..categories import categorize
from ..logging import get_logger
from ..models import ArchiveDiagnostic, ArchiveEntry, DiagnosticKind, Inventory, PackageAsset
from .reader import ArchiveIOError, ArchiveReader

PAYLOAD_MEMBER = "asset"
METADATA_MEMBER = "asset.meta"
PATHNAME_MEMBER = "pathname"

_GZIP_MAGIC = b"\x1f\x8b"

logger = get_logger("archive.index")


@dataclass
class _PartialAsset:
    destination: str | None = None
    size: int | None = None


@dataclass
class IndexResult:
    """Inventory plus the bookkeeping gathered while building it."""

    inventory: Inventory
    skipped_count: int = 0
    diagnostics: List[ArchiveDiagnostic] = field(default_factory=list)
    malformed_size_count: int = 0

    @property
    def malformed(self) -> bool:
        return any(diag.kind is DiagnosticKind.MALFORMED_ARCHIVE for diag in self.diagnostics)


def _split_member(path: str) -> tuple[str, str]:
    normalised = path.replace("\\", "/")
    while normalised.startswith("./"):
        normalised = normalised[2:]
    normalised = normalised.strip("/")
    if "/" not in normalised:
        return normalised, ""
    group_id, member = normalised.split("/", 1)
    return group_id, member


def _decode_pathname(payload: bytes) -> str:
    text = payload.decode("utf-8", errors="replace").strip()
    if not text:
        return ""
    # Some exporters append extra lines after the path.
    return text.splitlines()[0].strip()


def build_inventory(entries: Iterable[ArchiveEntry]) -> IndexResult:
    """Group entries by identifier folder and resolve each group into an asset.

    The pass is streaming: only a small partial record per identifier is kept,
    never the payloads themselves. Groups without a ``pathname`` member cannot
    be placed and are dropped and counted.
    """
    partials: Dict[str, _PartialAsset] = {}
    for entry in entries:
        group_id, member = _split_member(entry.path)
        if not group_id:
            continue
        if not member and not entry.is_directory:
            # Loose root files such as the package icon belong to no asset.
            continue
        partial = partials.setdefault(group_id, _PartialAsset())
        if entry.is_directory or not member:
            continue
        if member == PATHNAME_MEMBER:
            partial.destination = _decode_pathname(entry.payload)
        elif member == PAYLOAD_MEMBER:
            partial.size = len(entry.payload)

    assets: List[PackageAsset] = []
    diagnostics: List[ArchiveDiagnostic] = []
    skipped = 0
    for group_id, partial in partials.items():
        if not partial.destination:
            skipped += 1
            logger.debug("Skipping %s: no destination path member", group_id)
            diagnostics.append(
                ArchiveDiagnostic(
                    kind=DiagnosticKind.INCOMPLETE_ASSET,
                    message=f"Identifier group {group_id} has no pathname member",
                )
            )
            continue
        assets.append(
            PackageAsset(
                id=group_id,
                destination_path=partial.destination,
                size_bytes=partial.size or 0,
                category=categorize(partial.destination),
            )
        )

    return IndexResult(inventory=Inventory(assets), skipped_count=skipped, diagnostics=diagnostics)


@contextmanager
def open_package(path: Path) -> Iterator[BinaryIO]:
    """Open a package file, transparently removing a gzip envelope."""
    handle = path.open("rb")
    try:
        magic = handle.read(len(_GZIP_MAGIC))
        handle.seek(0)
        if magic == _GZIP_MAGIC:
            with gzip.GzipFile(fileobj=handle, mode="rb") as stream:
                yield stream  # type: ignore[misc]
        else:
            yield handle
    finally:
        handle.close()


class PackageScanner:
    """Reads a package archive and produces its inventory."""

    def __init__(self, *, should_cancel: Callable[[], bool] | None = None) -> None:
        self._should_cancel = should_cancel

    def scan_stream(self, stream: BinaryIO) -> IndexResult:
        """Index an already-decompressed archive stream."""
        reader = ArchiveReader(stream, should_cancel=self._should_cancel)
        result = build_inventory(reader)
        result.diagnostics = list(reader.diagnostics) + result.diagnostics
        result.malformed_size_count = reader.malformed_size_count
        logger.debug(
            "Indexed %d assets from %d entries (%d skipped)",
            len(result.inventory),
            reader.entry_count,
            result.skipped_count,
        )
        return result

    def scan(self, package: str | Path) -> IndexResult:
        """Return the inventory of the package file at ``package``."""
        package_path = Path(package).expanduser().resolve()
        if not package_path.exists():
            raise FileNotFoundError(f"Package not found: {package}")
        if package_path.is_dir():
            raise IsADirectoryError(f"Package path is a directory: {package}")

        try:
            with open_package(package_path) as stream:
                return self.scan_stream(stream)
        except (EOFError, zlib.error) as exc:
            raise ArchiveIOError(f"Failed to decompress {package_path.name}: {exc}") from exc


__all__ = [
    "IndexResult",
    "METADATA_MEMBER",
    "PATHNAME_MEMBER",
    "PAYLOAD_MEMBER",
    "PackageScanner",
    "build_inventory",
    "open_package",
]
