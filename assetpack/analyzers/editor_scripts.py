"""Analyzer for editor-only scripts that live outside an editor folder."""

from __future__ import annotations

from typing import Iterable, List

from .base import Analyzer
from ..config import DEFAULT_EDITOR_FOLDER
from ..models import Category, Inventory, Issue, IssueKind


class MisplacedEditorScriptAnalyzer(Analyzer):
    """Flags scripts whose path mentions editor tooling but is not under ``Editor/``.

    Scripts in an editor folder are compiled into a separate editor-only
    assembly by the host; the same code elsewhere ends up in player builds.
    """

    name = "misplaced_editor_script"

    def __init__(self, editor_folder: str = DEFAULT_EDITOR_FOLDER) -> None:
        self.editor_folder = editor_folder

    def analyze(self, inventory: Inventory) -> Iterable[Issue]:
        issues: List[Issue] = []
        for asset in inventory:
            if asset.category is not Category.SCRIPTS:
                continue
            path = asset.destination_path
            if self.editor_folder not in path:
                continue
            directories = path.split("/")[:-1]
            if self.editor_folder in directories:
                continue
            issues.append(
                Issue(
                    kind=IssueKind.MISPLACED_EDITOR_SCRIPT,
                    detail={"id": asset.id, "path": path, "expectedFolder": self.editor_folder},
                    message=f"Potential editor script outside {self.editor_folder} folder: {path}",
                )
            )
        return issues


__all__ = ["MisplacedEditorScriptAnalyzer"]
