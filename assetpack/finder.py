"""Locate package files in common download locations."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from .logging import get_logger
from .report import format_bytes

PACKAGE_SUFFIX = ".unitypackage"
MAX_PER_DIRECTORY = 50

logger = get_logger("finder")


@dataclass
class PackageFile:
    """A package archive found on disk."""

    name: str
    path: str
    size: int
    modified: datetime

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "sizeFormatted": format_bytes(self.size),
            "lastModified": self.modified.strftime("%Y-%m-%d %H:%M"),
        }


def default_search_paths(project_root: Path | None = None) -> List[Path]:
    home = Path.home()
    paths = [home / "Downloads", home / "Desktop"]
    paths.append((project_root or Path.cwd()).resolve())
    return paths


def _iter_packages(root: Path) -> Iterable[Path]:
    def _on_error(exc: OSError) -> None:
        logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.lower().endswith(PACKAGE_SUFFIX):
                yield Path(dirpath) / filename


def find_packages(search_paths: Sequence[Path], *, limit_per_dir: int = MAX_PER_DIRECTORY) -> List[PackageFile]:
    """Return package files under ``search_paths``, newest first."""
    found: List[PackageFile] = []
    seen: set[Path] = set()
    for root in search_paths:
        root = Path(root).expanduser()
        if not root.is_dir():
            continue
        count = 0
        for path in _iter_packages(root):
            if count >= limit_per_dir:
                break
            resolved = path.resolve()
            if resolved in seen:
                continue
            try:
                stat_result = path.stat()
            except OSError as exc:
                logger.warning("Cannot stat %s: %s", path, exc)
                continue
            seen.add(resolved)
            count += 1
            found.append(
                PackageFile(
                    name=path.stem,
                    path=str(path),
                    size=stat_result.st_size,
                    modified=datetime.fromtimestamp(stat_result.st_mtime),
                )
            )
    found.sort(key=lambda item: item.modified, reverse=True)
    return found


__all__ = ["PackageFile", "default_search_paths", "find_packages"]
