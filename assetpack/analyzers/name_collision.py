"""Analyzer for script names that commonly clash with existing project code."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .base import Analyzer
from ..config import DEFAULT_COLLISION_NAMES
from ..models import Category, Inventory, Issue, IssueKind


def _stem(filename: str) -> str:
    stem, dot, _ = filename.rpartition(".")
    return stem if dot and stem else filename


class NameCollisionAnalyzer(Analyzer):
    """Matches script stems against a denylist of frequently reused class names."""

    name = "name_collision"

    def __init__(self, names: Sequence[str] = DEFAULT_COLLISION_NAMES) -> None:
        self.names = list(dict.fromkeys(names))

    def analyze(self, inventory: Inventory) -> Iterable[Issue]:
        matches: Dict[str, List[str]] = {name: [] for name in self.names}
        owners: Dict[str, List[str]] = {name: [] for name in self.names}
        for asset in inventory:
            if asset.category is not Category.SCRIPTS:
                continue
            stem = _stem(asset.filename)
            if stem in matches:
                matches[stem].append(asset.destination_path)
                owners[stem].append(asset.id)

        issues: List[Issue] = []
        for name in self.names:
            paths = matches[name]
            if not paths:
                continue
            issues.append(
                Issue(
                    kind=IssueKind.NAME_COLLISION,
                    detail={"name": name, "paths": paths, "ids": owners[name]},
                    message=f"Contains common class name '{name}' - may conflict with existing code",
                )
            )
        return issues


__all__ = ["NameCollisionAnalyzer"]
