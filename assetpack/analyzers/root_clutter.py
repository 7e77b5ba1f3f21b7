"""Analyzer flagging packages that drop many files at the project root."""

from __future__ import annotations

from typing import Iterable, List

from .base import Analyzer
from ..config import DEFAULT_ROOT_CLUTTER_THRESHOLD
from ..models import Inventory, Issue, IssueKind


class RootClutterAnalyzer(Analyzer):
    """Counts destination paths with no directory component."""

    name = "root_clutter"

    def __init__(self, threshold: int = DEFAULT_ROOT_CLUTTER_THRESHOLD) -> None:
        self.threshold = threshold

    def analyze(self, inventory: Inventory) -> Iterable[Issue]:
        root_paths: List[str] = [
            asset.destination_path
            for asset in inventory
            if "/" not in asset.destination_path and not asset.is_sidecar
        ]
        if len(root_paths) <= self.threshold:
            return []
        return [
            Issue(
                kind=IssueKind.ROOT_CLUTTER,
                detail={
                    "count": len(root_paths),
                    "threshold": self.threshold,
                    "paths": root_paths,
                },
                message=f"Package has {len(root_paths)} assets in root - may clutter project",
            )
        ]


__all__ = ["RootClutterAnalyzer"]
