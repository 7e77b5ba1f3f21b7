"""Tests for assetpack.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from assetpack.config import (
    AssetPackConfig,
    ConfigError,
    DEFAULT_COLLISION_NAMES,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, AssetPackConfig)
    assert config.root == tmp_path.resolve()
    assert config.issues.enabled == []
    assert config.issues.root_clutter_threshold == 5
    assert config.issues.editor_folder == "Editor"
    assert config.issues.collision_names == list(DEFAULT_COLLISION_NAMES)
    assert config.organize.base_path == "Assets"
    assert config.listing.limit == 100


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".assetpack.yml").write_text(
        """
issues:
  enabled: [root_clutter, duplicate_name]
  root_clutter_threshold: 12
  editor_folder: "Editor/"
  collision_names:
    - Boss
    - Hud
organize:
  base_path: "Assets/ThirdParty/"
list:
  limit: 25
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path / ".assetpack.yml")

    assert config.issues.enabled == ["root_clutter", "duplicate_name"]
    assert config.issues.root_clutter_threshold == 12
    assert config.issues.editor_folder == "Editor"
    assert config.issues.collision_names == ["Boss", "Hud"]
    assert config.organize.base_path == "Assets/ThirdParty"
    assert config.listing.limit == 25


def test_wrong_typed_values_fall_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / ".assetpack.yml").write_text(
        "issues:\n  root_clutter_threshold: many\nlist:\n  limit: -3\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.issues.root_clutter_threshold == 5
    assert config.listing.limit == 100


def test_empty_collision_list_disables_names(tmp_path: Path) -> None:
    (tmp_path / ".assetpack.yml").write_text("issues:\n  collision_names: []\n", encoding="utf-8")

    assert load_config(tmp_path).issues.collision_names == []


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    (tmp_path / ".assetpack.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / ".assetpack.yml").write_text("issues: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)
