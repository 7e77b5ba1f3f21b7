"""CLI parser and command behaviour tests."""

from __future__ import annotations

import gzip
import json
from pathlib import Path

import pytest

from assetpack.cli import _build_parser, main
from tests._fixtures.archive_builder import ArchiveBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "analyze", "pack.unitypackage"])
    assert args.verbose is True
    assert args.command == "analyze"


def test_cli_accepts_log_file_before_command() -> None:
    args = _build_parser().parse_args(["--log-file", "run.log", "find"])
    assert args.log_file == Path("run.log")


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["conflicts", "pack.unitypackage", "--verbose"])
    assert args.verbose is True
    assert args.project == "."


def test_cli_organize_defaults_to_preview() -> None:
    args = _build_parser().parse_args(["organize", "pack.unitypackage"])
    assert args.apply is False
    assert args.base_path is None


def test_cli_select_collects_repeated_options() -> None:
    args = _build_parser().parse_args(
        ["select", "p.unitypackage", "--include", "A", "--include", "B", "--category", "Scripts"]
    )
    assert args.include == ["A", "B"]
    assert args.categories == ["Scripts"]


def test_cli_analyze_prints_json(
    archive_builder: ArchiveBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    archive_builder.add_asset("abc", "Assets/Scripts/Foo.cs", b"class Foo {}")
    package = archive_builder.write_package(tmp_path / "pack.unitypackage")

    main(["analyze", str(package), "--project", str(tmp_path)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["packageName"] == "pack"
    assert payload["statistics"]["totalAssets"] == 1
    assert payload["skippedCount"] == 0


def test_cli_missing_package_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["list", str(tmp_path / "nope.unitypackage"), "--project", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Package not found" in capsys.readouterr().err


def test_cli_unknown_category_exits_with_error(
    archive_builder: ArchiveBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    package = archive_builder.add_asset("a", "Assets/A.cs", b"").write_package(tmp_path / "p.unitypackage")

    with pytest.raises(SystemExit) as excinfo:
        main(["list", str(package), "--category", "widgets", "--project", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Unknown category" in capsys.readouterr().err


def test_cli_corrupt_package_exits_with_error(
    archive_builder: ArchiveBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    compressed = gzip.compress(archive_builder.add_asset("a", "Assets/A.cs", b"a").build())
    package = tmp_path / "broken.unitypackage"
    package.write_bytes(compressed[:10] + b"\x07" + compressed[11:])

    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(package), "--project", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Failed to decompress" in capsys.readouterr().err

