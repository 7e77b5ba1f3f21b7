"""In-memory stand-ins for the destination lookup and file operations."""

from __future__ import annotations

from typing import Dict, List, Set, Tuple


class FakeLookup:
    """DestinationLookup over a ``path -> size`` mapping."""

    def __init__(self, files: Dict[str, int] | None = None, failing: Set[str] | None = None) -> None:
        self.files = dict(files or {})
        self.failing = set(failing or ())
        self.calls: List[Tuple[str, str]] = []

    def exists(self, path: str) -> bool:
        self.calls.append(("exists", path))
        if path in self.failing:
            raise OSError(f"lookup unavailable for {path}")
        return path in self.files

    def size_of(self, path: str) -> int:
        self.calls.append(("size_of", path))
        return self.files[path]


class FakeFileOps:
    """FileOps that records calls and can be told to fail specific moves."""

    def __init__(self, failing_sources: Set[str] | None = None) -> None:
        self.failing_sources = set(failing_sources or ())
        self.directories: List[str] = []
        self.moves: List[Tuple[str, str]] = []

    def mkdir(self, path: str) -> None:
        self.directories.append(path)

    def move(self, source: str, target: str) -> None:
        if source in self.failing_sources:
            raise PermissionError(f"cannot move {source}")
        self.moves.append((source, target))


__all__ = ["FakeFileOps", "FakeLookup"]
