"""Tests for assetpack.categories."""

from __future__ import annotations

import pytest

from assetpack.categories import EXTENSION_CATEGORIES, categorize, extension_of, parse_category
from assetpack.models import Category


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("Assets/Scripts/Foo.cs", Category.SCRIPTS),
        ("Assets/legacy.js", Category.SCRIPTS),
        ("Assets/Hero.prefab", Category.PREFABS),
        ("Assets/Stone.mat", Category.MATERIALS),
        ("Assets/a.png", Category.TEXTURES),
        ("Assets/a.JPG", Category.TEXTURES),
        ("Assets/a.jpeg", Category.TEXTURES),
        ("Assets/a.tga", Category.TEXTURES),
        ("Assets/a.psd", Category.TEXTURES),
        ("Assets/a.tif", Category.TEXTURES),
        ("Assets/m.FBX", Category.MODELS),
        ("Assets/m.obj", Category.MODELS),
        ("Assets/m.blend", Category.MODELS),
        ("Assets/m.dae", Category.MODELS),
        ("Assets/m.3ds", Category.MODELS),
        ("Assets/s.wav", Category.AUDIO),
        ("Assets/s.mp3", Category.AUDIO),
        ("Assets/s.ogg", Category.AUDIO),
        ("Assets/s.aiff", Category.AUDIO),
        ("Assets/Main.unity", Category.SCENES),
        ("Assets/Run.anim", Category.ANIMATIONS),
        ("Assets/Hero.controller", Category.ANIMATIONS),
        ("Assets/Hero.overrideController", Category.ANIMATIONS),
        ("Assets/Toon.shader", Category.SHADERS),
        ("Assets/Toon.shadergraph", Category.SHADERS),
        ("Assets/Common.hlsl", Category.SHADERS),
        ("Assets/Common.cginc", Category.SHADERS),
        ("Assets/Settings.asset", Category.SCRIPTABLE_OBJECTS),
    ],
)
def test_categorize_known_extensions(path: str, expected: Category) -> None:
    assert categorize(path) is expected


@pytest.mark.parametrize("path", ["Assets/data.xyz", "Assets/README", "Assets/.hidden", "Assets/Dir.cs/file"])
def test_categorize_unknown_is_other(path: str) -> None:
    assert categorize(path) is Category.OTHER


def test_every_table_extension_is_reachable() -> None:
    for extension, category in EXTENSION_CATEGORIES.items():
        assert categorize(f"Assets/sample{extension.upper()}") is category


def test_extension_of_only_inspects_filename() -> None:
    assert extension_of("Assets/some.folder/file") == ""
    assert extension_of("Assets\\Win\\Thing.Prefab") == ".prefab"


def test_parse_category_accepts_value_and_member_name() -> None:
    assert parse_category("scripts") is Category.SCRIPTS
    assert parse_category("scriptable_objects") is Category.SCRIPTABLE_OBJECTS
    assert parse_category("ScriptableObjects") is Category.SCRIPTABLE_OBJECTS
    assert parse_category("nope") is None
