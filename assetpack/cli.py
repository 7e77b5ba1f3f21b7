"""CLI entrypoints for assetpack commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from .archive.reader import ArchiveIOError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_package_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("package", help="Path to the .unitypackage file.")


def _add_project_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project",
        default=".",
        help="Project root the package would be merged into (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetpack",
        description="Inspect, categorise and safely stage vendor asset packages.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write debug-level logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Summarise package contents and report structural issues.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_package_argument(analyze_parser)
    _add_project_option(analyze_parser)

    list_parser = subparsers.add_parser("list", help="List package assets with optional filters.")
    _add_verbose_option(list_parser, suppress_default=True)
    _add_package_argument(list_parser)
    _add_project_option(list_parser)
    list_parser.add_argument("--filter", dest="text_filter", help="Substring to match in paths.")
    list_parser.add_argument("--category", help="Only list assets in this category.")
    list_parser.add_argument("--limit", type=int, help="Maximum number of assets to show.")

    select_parser = subparsers.add_parser(
        "select",
        help="Compute which assets a selective import should pick.",
    )
    _add_verbose_option(select_parser, suppress_default=True)
    _add_package_argument(select_parser)
    _add_project_option(select_parser)
    select_parser.add_argument("--include", action="append", default=[], help="Path substring to include.")
    select_parser.add_argument("--exclude", action="append", default=[], help="Path substring to exclude.")
    select_parser.add_argument(
        "--category", dest="categories", action="append", default=[], help="Category to include."
    )

    conflicts_parser = subparsers.add_parser(
        "conflicts",
        help="Check which package assets already exist in the project.",
    )
    _add_verbose_option(conflicts_parser, suppress_default=True)
    _add_package_argument(conflicts_parser)
    _add_project_option(conflicts_parser)

    organize_parser = subparsers.add_parser(
        "organize",
        help="Plan moving assets into canonical category folders.",
    )
    _add_verbose_option(organize_parser, suppress_default=True)
    _add_package_argument(organize_parser)
    _add_project_option(organize_parser)
    organize_parser.add_argument("--base", dest="base_path", help="Base folder for the layout.")
    organize_parser.add_argument(
        "--apply",
        action="store_true",
        help="Perform the moves inside the project instead of previewing them.",
    )

    find_parser = subparsers.add_parser("find", help="Search folders for package files.")
    _add_verbose_option(find_parser, suppress_default=True)
    _add_project_option(find_parser)
    find_parser.add_argument("paths", nargs="*", help="Folders to search (defaults to common locations).")

    return parser


def _run(args: argparse.Namespace) -> Dict[str, Any]:
    orchestrator = Orchestrator(project_root=args.project)
    if args.command == "analyze":
        return orchestrator.run_analyze(args.package)
    if args.command == "list":
        return orchestrator.run_list(
            args.package, text_filter=args.text_filter, category=args.category, limit=args.limit
        )
    if args.command == "select":
        return orchestrator.run_select(
            args.package, include=args.include, exclude=args.exclude, categories=args.categories
        )
    if args.command == "conflicts":
        return orchestrator.run_conflicts(args.package)
    if args.command == "organize":
        return orchestrator.run_organize(
            args.package, base_path=args.base_path, dry_run=not args.apply
        )
    if args.command == "find":
        return orchestrator.run_find(args.paths)
    raise ValueError(f"Unknown command: {args.command}")  # pragma: no cover - argparse enforces choices


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for assetpack commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        payload = _run(args)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except ValueError as exc:
        parser.exit(1, f"assetpack {args.command} failed: {exc}\n")
    except ArchiveIOError as exc:
        parser.exit(1, f"assetpack {args.command} failed: {exc}\nRun with --verbose for more details.\n")
    except OSError as exc:
        parser.exit(1, f"assetpack {args.command} failed: {exc}\n")

    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main(sys.argv[1:])
