"""Analyzer reporting filenames shared by more than one asset."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .base import Analyzer
from ..models import Inventory, Issue, IssueKind


class DuplicateNameAnalyzer(Analyzer):
    """Groups assets by final path component."""

    name = "duplicate_name"

    def analyze(self, inventory: Inventory) -> Iterable[Issue]:
        groups: Dict[str, List[str]] = {}
        for asset in inventory:
            if asset.is_sidecar:
                continue
            groups.setdefault(asset.filename, []).append(asset.id)

        issues: List[Issue] = []
        for filename, ids in groups.items():
            if len(ids) < 2:
                continue
            issues.append(
                Issue(
                    kind=IssueKind.DUPLICATE_NAME,
                    detail={"filename": filename, "ids": ids},
                    message=f"Duplicate file name '{filename}' used by {len(ids)} assets",
                )
            )
        return issues


__all__ = ["DuplicateNameAnalyzer"]
