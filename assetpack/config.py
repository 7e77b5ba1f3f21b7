"""Configuration loading for assetpack (.assetpack.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".assetpack.yml"

DEFAULT_ROOT_CLUTTER_THRESHOLD = 5
DEFAULT_EDITOR_FOLDER = "Editor"
DEFAULT_COLLISION_NAMES = ("GameManager", "Player", "Enemy", "UIManager", "AudioManager")
DEFAULT_BASE_PATH = "Assets"
DEFAULT_LIST_LIMIT = 100


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class IssueConfig:
    """Issue analyzer enablement and thresholds."""

    enabled: List[str] = field(default_factory=list)
    root_clutter_threshold: int = DEFAULT_ROOT_CLUTTER_THRESHOLD
    editor_folder: str = DEFAULT_EDITOR_FOLDER
    collision_names: List[str] = field(default_factory=lambda: list(DEFAULT_COLLISION_NAMES))


@dataclass
class OrganizeConfig:
    """Target layout for asset reorganisation."""

    base_path: str = DEFAULT_BASE_PATH


@dataclass
class ListConfig:
    """Defaults for content listings."""

    limit: int = DEFAULT_LIST_LIMIT


@dataclass
class AssetPackConfig:
    """Represents the settings defined in .assetpack.yml."""

    root: Path
    issues: IssueConfig = field(default_factory=IssueConfig)
    organize: OrganizeConfig = field(default_factory=OrganizeConfig)
    listing: ListConfig = field(default_factory=ListConfig)


def load_config(config_path: Path) -> AssetPackConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AssetPackConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    issues = IssueConfig()
    issue_data = _as_dict(data.get("issues"))
    if issue_data:
        issues.enabled = _as_str_list(issue_data.get("enabled"))
        threshold = _as_int(issue_data.get("root_clutter_threshold"))
        if threshold is not None and threshold >= 0:
            issues.root_clutter_threshold = threshold
        editor_folder = _as_str(issue_data.get("editor_folder"))
        if editor_folder:
            issues.editor_folder = editor_folder.strip("/")
        if "collision_names" in issue_data:
            issues.collision_names = _as_str_list(issue_data.get("collision_names"))

    organize = OrganizeConfig()
    organize_data = _as_dict(data.get("organize"))
    base_path = _as_str(organize_data.get("base_path")) if organize_data else None
    if base_path:
        organize.base_path = base_path.rstrip("/")

    listing = ListConfig()
    list_data = _as_dict(data.get("list"))
    limit = _as_int(list_data.get("limit")) if list_data else None
    if limit is not None and limit > 0:
        listing.limit = limit

    return AssetPackConfig(root=root, issues=issues, organize=organize, listing=listing)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "AssetPackConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "IssueConfig",
    "ListConfig",
    "OrganizeConfig",
    "load_config",
]
