"""Conflict detection between a package inventory and an existing project."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .logging import get_logger
from .models import ConflictRecord, ConflictReport, Inventory, Recommendation

ASSETS_ROOT = "Assets"

logger = get_logger("conflicts")


class DestinationLookup(Protocol):
    """Read-only view of the destination tree an inventory will be merged into."""

    def exists(self, path: str) -> bool:
        """Return True when a file already occupies ``path``."""

    def size_of(self, path: str) -> int:
        """Return the byte length of the file at ``path``."""


class FilesystemLookup:
    """DestinationLookup backed by a project directory on disk."""

    def __init__(self, project_root: str | Path) -> None:
        self.project_root = Path(project_root).expanduser().resolve()

    def resolve(self, path: str) -> Path:
        relative = path.replace("\\", "/").lstrip("/")
        if not (relative == ASSETS_ROOT or relative.startswith(f"{ASSETS_ROOT}/")):
            relative = f"{ASSETS_ROOT}/{relative}"
        return self.project_root / relative

    def exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def size_of(self, path: str) -> int:
        return self.resolve(path).stat().st_size


def classify(exists: bool, size_matches: bool) -> Recommendation:
    """Return the import recommendation for one asset."""
    if not exists:
        return Recommendation.SAFE
    return Recommendation.SKIP if size_matches else Recommendation.REVIEW


def detect_conflicts(inventory: Inventory, lookup: DestinationLookup) -> ConflictReport:
    """Compare every non-sidecar asset against the destination tree.

    Equal byte length is taken to mean the file is unchanged; contents are not
    compared. A lookup failure for one asset is recorded in ``errors`` and the
    remaining assets are still checked.
    """
    report = ConflictReport()
    for asset in inventory:
        if asset.is_sidecar:
            continue
        path = asset.destination_path
        try:
            exists = bool(lookup.exists(path))
            existing_size = int(lookup.size_of(path)) if exists else None
        except Exception as exc:
            logger.warning("Destination lookup failed for %s: %s", path, exc)
            report.errors.append(f"{path}: {exc}")
            continue

        size_matches = exists and existing_size == asset.size_bytes
        report.records.append(
            ConflictRecord(
                asset=asset,
                exists_at_destination=exists,
                size_matches=size_matches,
                recommendation=classify(exists, size_matches),
                existing_size=existing_size,
            )
        )

    logger.debug(
        "Conflict check: %d conflicts, %d safe, %d errors",
        report.conflict_count,
        report.safe_count,
        len(report.errors),
    )
    return report


__all__ = ["DestinationLookup", "FilesystemLookup", "classify", "detect_conflicts"]
