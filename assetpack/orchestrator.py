"""Pipeline orchestration for analyze/list/select/conflicts/organize/find flows."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .analyzers import Analyzer, detect_issues, discover_analyzers
from .archive.index import IndexResult, PackageScanner
from .config import AssetPackConfig, ConfigError, load_config
from .conflicts import DestinationLookup, FilesystemLookup, detect_conflicts
from .finder import default_search_paths, find_packages
from .logging import get_logger
from .organize import FileOps, LocalFileOps, organize
from .selection import list_contents, selective_import_plan
from .report import summarize


class Orchestrator:
    """Coordinates package inspection pipelines for CLI and library callers."""

    def __init__(
        self,
        scanner: PackageScanner | None = None,
        analyzers: Optional[Iterable[Analyzer]] = None,
        project_root: str | Path | None = None,
    ) -> None:
        self.scanner = scanner or PackageScanner()
        self._analyzer_overrides = list(analyzers) if analyzers is not None else None
        self.project_root = Path(project_root or Path.cwd()).expanduser().resolve()
        self.logger = get_logger("orchestrator")
        self._config: AssetPackConfig | None = None

    @property
    def config(self) -> AssetPackConfig:
        if self._config is None:
            self._config = self._load_config(self.project_root)
        return self._config

    def run_analyze(self, package: str | Path) -> Dict[str, Any]:
        """Inventory a package, run every issue analyzer and summarise the result."""
        package_path = Path(package)
        self.logger.info("Analyzing %s", package_path)
        result = self._scan(package_path)
        issues = detect_issues(result.inventory, self._select_analyzers())
        return {
            "packagePath": str(package_path),
            "packageName": package_path.stem,
            "statistics": summarize(result.inventory, issues),
            "issues": [issue.to_dict() for issue in issues],
            "assets": result.inventory.to_list(),
            **self._scan_metadata(result),
        }

    def run_list(
        self,
        package: str | Path,
        *,
        text_filter: str | None = None,
        category: str | None = None,
        limit: int | None = None,
    ) -> Dict[str, Any]:
        package_path = Path(package)
        result = self._scan(package_path)
        listing = list_contents(
            result.inventory,
            text_filter=text_filter,
            category=category,
            limit=limit if limit is not None else self.config.listing.limit,
        )
        return {"packageName": package_path.stem, **listing, **self._scan_metadata(result)}

    def run_select(
        self,
        package: str | Path,
        *,
        include: Sequence[str] = (),
        exclude: Sequence[str] = (),
        categories: Sequence[str] = (),
    ) -> Dict[str, Any]:
        package_path = Path(package)
        result = self._scan(package_path)
        plan = selective_import_plan(
            result.inventory, include=include, exclude=exclude, categories=categories
        )
        return {"packageName": package_path.stem, **plan, **self._scan_metadata(result)}

    def run_conflicts(
        self, package: str | Path, *, lookup: DestinationLookup | None = None
    ) -> Dict[str, Any]:
        """Compare a package against the project tree."""
        package_path = Path(package)
        result = self._scan(package_path)
        report = detect_conflicts(result.inventory, lookup or FilesystemLookup(self.project_root))
        self.logger.info(
            "%d conflicts, %d safe assets in %s",
            report.conflict_count,
            report.safe_count,
            package_path.name,
        )
        return {
            "packageName": package_path.stem,
            "totalAssets": len(result.inventory),
            **report.to_dict(),
            **self._scan_metadata(result),
        }

    def run_organize(
        self,
        package: str | Path,
        *,
        base_path: str | None = None,
        dry_run: bool = True,
        file_ops: FileOps | None = None,
    ) -> Dict[str, Any]:
        """Plan, or apply, moves of the package's assets to canonical category folders."""
        package_path = Path(package)
        result = self._scan(package_path)
        if not dry_run and file_ops is None:
            file_ops = LocalFileOps(self.project_root)
        plan = organize(
            result.inventory,
            base_path=base_path or self.config.organize.base_path,
            file_ops=file_ops,
            dry_run=dry_run,
        )
        return {"packageName": package_path.stem, **plan.to_dict(), **self._scan_metadata(result)}

    def run_find(self, search_paths: Sequence[str | Path] | None = None) -> Dict[str, Any]:
        roots = (
            [Path(path) for path in search_paths]
            if search_paths
            else default_search_paths(self.project_root)
        )
        packages = find_packages(roots)
        return {
            "searchedPaths": [str(root) for root in roots],
            "packageCount": len(packages),
            "packages": [package.to_dict() for package in packages],
        }

    # ------------------------------------------------------------------
    # Internal helpers

    def _scan(self, package_path: Path) -> IndexResult:
        result = self.scanner.scan(package_path)
        self.logger.debug(
            "Scanner indexed %d assets (%d skipped)", len(result.inventory), result.skipped_count
        )
        if result.malformed:
            self.logger.warning("%s is malformed; results are partial", package_path.name)
        return result

    def _select_analyzers(self) -> List[Analyzer]:
        if self._analyzer_overrides is not None:
            return list(self._analyzer_overrides)
        issue_config = self.config.issues
        return discover_analyzers(issue_config.enabled or None, issue_config)

    def _load_config(self, root: Path) -> AssetPackConfig:
        try:
            return load_config(root)
        except ConfigError as exc:
            self.logger.warning("Ignoring invalid configuration: %s", exc)
            return AssetPackConfig(root=root)

    @staticmethod
    def _scan_metadata(result: IndexResult) -> Dict[str, Any]:
        return {
            "skippedCount": result.skipped_count,
            "malformedSizeCount": result.malformed_size_count,
            "malformed": result.malformed,
            "diagnostics": [diagnostic.to_dict() for diagnostic in result.diagnostics],
        }


__all__ = ["Orchestrator"]
