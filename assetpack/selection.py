"""Filtering helpers for content listings and selective imports."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .categories import extension_of, parse_category
from .config import DEFAULT_LIST_LIMIT
from .models import Category, Inventory, PackageAsset

SUGGESTION_LIMIT = 50


def _resolve_categories(names: Sequence[str]) -> set[Category]:
    resolved: set[Category] = set()
    for name in names:
        category = parse_category(name)
        if category is None:
            raise ValueError(f"Unknown category: {name}")
        resolved.add(category)
    return resolved


def filter_assets(
    inventory: Inventory,
    *,
    text_filter: str | None = None,
    category: str | None = None,
) -> List[PackageAsset]:
    """Return assets matching a path substring and/or a category name."""
    needle = text_filter.lower() if text_filter else None
    wanted = _resolve_categories([category]) if category else None

    selected: List[PackageAsset] = []
    for asset in inventory:
        if needle is not None:
            if needle not in asset.destination_path.lower() and needle not in asset.filename.lower():
                continue
        if wanted is not None and asset.category not in wanted:
            continue
        selected.append(asset)
    return selected


def list_contents(
    inventory: Inventory,
    *,
    text_filter: str | None = None,
    category: str | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> Dict[str, Any]:
    """Describe up to ``limit`` assets after filtering."""
    matched = filter_assets(inventory, text_filter=text_filter, category=category)
    shown = matched[: max(limit, 0)]
    return {
        "totalAssets": len(inventory),
        "matchedAssets": len(matched),
        "showingAssets": len(shown),
        "filter": text_filter,
        "category": category,
        "assets": [
            {
                "path": asset.destination_path,
                "id": asset.id,
                "size": asset.size_bytes,
                "category": asset.category.value,
                "extension": extension_of(asset.destination_path),
            }
            for asset in shown
        ],
    }


def select_for_import(
    inventory: Inventory,
    *,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
    categories: Sequence[str] = (),
) -> List[str]:
    """Return destination paths chosen by include/exclude terms and categories."""
    wanted = _resolve_categories(categories) if categories else None
    selected: List[str] = []
    for asset in inventory:
        path = asset.destination_path
        if include and not any(term in path for term in include):
            continue
        if any(term in path for term in exclude):
            continue
        if wanted is not None and asset.category not in wanted:
            continue
        selected.append(path)
    return selected


def selective_import_plan(
    inventory: Inventory,
    *,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
    categories: Sequence[str] = (),
) -> Dict[str, Any]:
    selected = select_for_import(inventory, include=include, exclude=exclude, categories=categories)
    return {
        "recommendation": "Select only these assets:",
        "suggestedAssets": selected[:SUGGESTION_LIMIT],
        "totalSuggested": len(selected),
    }


__all__ = ["filter_assets", "list_contents", "select_for_import", "selective_import_plan"]
