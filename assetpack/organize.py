"""Canonical-layout planning and execution for package assets."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable, List, Protocol

from .categories import categorize
from .config import DEFAULT_BASE_PATH
from .logging import get_logger
from .models import Category, Inventory, Move, OrganizePlan

logger = get_logger("organize")


class FileOps(Protocol):
    """Mutating file operations used when a plan is applied."""

    def mkdir(self, path: str) -> None:
        """Create ``path`` and any missing parents."""

    def move(self, source: str, target: str) -> None:
        """Move the file at ``source`` to ``target``."""


class LocalFileOps:
    """FileOps rooted at a project directory on disk."""

    def __init__(self, project_root: str | Path) -> None:
        self.project_root = Path(project_root).expanduser().resolve()

    def _resolve(self, path: str) -> Path:
        return self.project_root / path.replace("\\", "/").lstrip("/")

    def mkdir(self, path: str) -> None:
        self._resolve(path).mkdir(parents=True, exist_ok=True)

    def move(self, source: str, target: str) -> None:
        source_path = self._resolve(source)
        target_path = self._resolve(target)
        if not source_path.exists():
            raise FileNotFoundError(f"Source does not exist: {source}")
        if target_path.exists():
            raise FileExistsError(f"Target already exists: {target}")
        shutil.move(str(source_path), str(target_path))


def canonical_path(
    destination_path: str,
    base_path: str | None = None,
    categorizer: Callable[[str], Category] = categorize,
) -> str:
    """Return ``{base}/{category}/{filename}`` for a destination path."""
    base = (base_path or DEFAULT_BASE_PATH).rstrip("/")
    filename = destination_path.replace("\\", "/").rsplit("/", 1)[-1]
    return f"{base}/{categorizer(destination_path).value}/{filename}"


def plan_moves(
    inventory: Inventory,
    base_path: str | None = None,
    categorizer: Callable[[str], Category] = categorize,
) -> OrganizePlan:
    """Compute a dry-run plan moving every misplaced asset to its canonical path."""
    moves: List[Move] = []
    for asset in inventory:
        if asset.is_sidecar:
            continue
        target = canonical_path(asset.destination_path, base_path, categorizer)
        if target != asset.destination_path:
            moves.append(Move(source=asset.destination_path, target=target))
    return OrganizePlan(dry_run=True, moves=moves)


def apply_plan(plan: OrganizePlan, file_ops: FileOps) -> OrganizePlan:
    """Execute planned moves one at a time, collecting per-move failures.

    The returned plan lists only the moves that succeeded.
    """
    applied = OrganizePlan(dry_run=False)
    for move in plan.moves:
        parent = move.target.rsplit("/", 1)[0] if "/" in move.target else ""
        try:
            if parent:
                file_ops.mkdir(parent)
            file_ops.move(move.source, move.target)
        except Exception as exc:
            logger.warning("Move failed %s -> %s: %s", move.source, move.target, exc)
            applied.errors.append(f"{move.source}: {exc}")
            continue
        applied.moves.append(move)

    logger.info("Organized %d assets (%d errors)", len(applied.moves), len(applied.errors))
    return applied


def organize(
    inventory: Inventory,
    *,
    base_path: str | None = None,
    file_ops: FileOps | None = None,
    dry_run: bool = True,
    categorizer: Callable[[str], Category] = categorize,
) -> OrganizePlan:
    """Plan, and unless ``dry_run`` is set, apply a reorganisation."""
    plan = plan_moves(inventory, base_path, categorizer)
    if dry_run:
        return plan
    if file_ops is None:
        raise ValueError("file_ops is required when dry_run is False")
    return apply_plan(plan, file_ops)


__all__ = [
    "FileOps",
    "LocalFileOps",
    "apply_plan",
    "canonical_path",
    "organize",
    "plan_moves",
]
