"""Extension-based asset categorisation."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict

from .models import Category

EXTENSION_CATEGORIES: Dict[str, Category] = {
    ".cs": Category.SCRIPTS,
    ".js": Category.SCRIPTS,
    ".prefab": Category.PREFABS,
    ".mat": Category.MATERIALS,
    ".png": Category.TEXTURES,
    ".jpg": Category.TEXTURES,
    ".jpeg": Category.TEXTURES,
    ".tga": Category.TEXTURES,
    ".psd": Category.TEXTURES,
    ".tif": Category.TEXTURES,
    ".fbx": Category.MODELS,
    ".obj": Category.MODELS,
    ".blend": Category.MODELS,
    ".dae": Category.MODELS,
    ".3ds": Category.MODELS,
    ".wav": Category.AUDIO,
    ".mp3": Category.AUDIO,
    ".ogg": Category.AUDIO,
    ".aiff": Category.AUDIO,
    ".unity": Category.SCENES,
    ".anim": Category.ANIMATIONS,
    ".controller": Category.ANIMATIONS,
    ".overridecontroller": Category.ANIMATIONS,
    ".shader": Category.SHADERS,
    ".shadergraph": Category.SHADERS,
    ".hlsl": Category.SHADERS,
    ".cginc": Category.SHADERS,
    ".asset": Category.SCRIPTABLE_OBJECTS,
}


def extension_of(path: str) -> str:
    """Return the lower-cased extension of the final path component, with its dot."""
    filename = path.replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, suffix = filename.rpartition(".")
    if not dot or not stem:
        return ""
    return f".{suffix.lower()}"


@lru_cache(maxsize=4096)
def categorize(path: str) -> Category:
    """Map a destination path to its category; unknown extensions map to Other."""
    return EXTENSION_CATEGORIES.get(extension_of(path), Category.OTHER)


def parse_category(name: str) -> Category | None:
    """Resolve a user-supplied category name case-insensitively."""
    lowered = name.strip().lower()
    for category in Category:
        if category.value.lower() == lowered or category.name.lower() == lowered:
            return category
    return None


__all__ = ["EXTENSION_CATEGORIES", "categorize", "extension_of", "parse_category"]
