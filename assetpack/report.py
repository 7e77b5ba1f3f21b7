"""Package-level statistics and import recommendations."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .models import Category, Inventory, Issue

_SIZE_UNITS = ("B", "KB", "MB", "GB")

RECOMMENDATION_REVIEW_ISSUES = "Review potential issues before importing"
STANDARD_RECOMMENDATIONS = (
    "Use selective import to bring in only the assets you need",
    "Run conflict detection to check for existing file conflicts",
    "Back up your project before importing large packages",
)


def format_bytes(count: int) -> str:
    """Render a byte count with a binary unit suffix."""
    size = float(count)
    order = 0
    while size >= 1024 and order < len(_SIZE_UNITS) - 1:
        order += 1
        size /= 1024
    text = f"{size:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[order]}"


def category_counts(inventory: Inventory) -> Dict[str, int]:
    """Return non-zero asset counts per category in category declaration order."""
    counts = {category: 0 for category in Category}
    for asset in inventory:
        counts[asset.category] += 1
    return {category.value: count for category, count in counts.items() if count}


def top_level_folders(inventory: Inventory) -> List[str]:
    folders: List[str] = []
    for asset in inventory:
        top = asset.destination_path.split("/", 1)[0]
        if top not in folders:
            folders.append(top)
    return folders


def recommendations(issues: Sequence[Issue]) -> List[str]:
    result: List[str] = []
    if issues:
        result.append(RECOMMENDATION_REVIEW_ISSUES)
    result.extend(STANDARD_RECOMMENDATIONS)
    return result


def summarize(inventory: Inventory, issues: Sequence[Issue]) -> Dict[str, Any]:
    """Build the statistics block for an analysed package."""
    counts = category_counts(inventory)
    return {
        "totalAssets": len(inventory),
        "totalSize": inventory.total_size,
        "totalSizeFormatted": format_bytes(inventory.total_size),
        "categories": counts,
        "hasScripts": Category.SCRIPTS.value in counts,
        "hasPrefabs": Category.PREFABS.value in counts,
        "hasScenes": Category.SCENES.value in counts,
        "potentialIssues": len(issues),
        "topLevelFolders": top_level_folders(inventory),
        "recommendations": recommendations(issues),
    }


__all__ = ["category_counts", "format_bytes", "recommendations", "summarize", "top_level_folders"]
