"""Issue analyzer implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from .base import Analyzer
from .duplicates import DuplicateNameAnalyzer
from .editor_scripts import MisplacedEditorScriptAnalyzer
from .name_collision import NameCollisionAnalyzer
from .root_clutter import RootClutterAnalyzer
from ..config import IssueConfig
from ..logging import get_logger
from ..models import Inventory, Issue

_ENTRY_POINT_GROUP = "assetpack.analyzers"

logger = get_logger("analyzers")


def _builtin_factories(config: IssueConfig) -> dict[str, Callable[[], Analyzer]]:
    return {
        RootClutterAnalyzer.name: lambda: RootClutterAnalyzer(config.root_clutter_threshold),
        DuplicateNameAnalyzer.name: DuplicateNameAnalyzer,
        MisplacedEditorScriptAnalyzer.name: lambda: MisplacedEditorScriptAnalyzer(config.editor_folder),
        NameCollisionAnalyzer.name: lambda: NameCollisionAnalyzer(config.collision_names),
    }


def discover_analyzers(
    enabled: Sequence[str] | None = None, config: IssueConfig | None = None
) -> List[Analyzer]:
    """Return instantiated analyzers in their fixed order, honoring optional enabled names."""

    config = config or IssueConfig()
    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    analyzers: List[Analyzer] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], Analyzer]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, Analyzer):
            raise TypeError(f"Analyzer factory for '{name}' did not return an Analyzer instance")
        analyzers.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _builtin_factories(config).items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - third-party plugin failure
            raise RuntimeError(f"Failed to load analyzer entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> Analyzer:
            return _coerce_analyzer(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown analyzers requested: {missing}")

    return analyzers


def detect_issues(inventory: Inventory, analyzers: Iterable[Analyzer] | None = None) -> List[Issue]:
    """Run each analyzer over the inventory and concatenate their issues in order."""
    selected = list(analyzers) if analyzers is not None else discover_analyzers()
    issues: List[Issue] = []
    for analyzer in selected:
        if not analyzer.supports(inventory):
            continue
        found = list(analyzer.analyze(inventory))
        logger.debug("Analyzer %s reported %d issues", analyzer.name or type(analyzer).__name__, len(found))
        issues.extend(found)
    return issues


def _coerce_analyzer(obj: object) -> Analyzer:
    if isinstance(obj, Analyzer):
        return obj
    if isinstance(obj, type) and issubclass(obj, Analyzer):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, Analyzer):
            return instance
    raise TypeError("Analyzer entry point must be an Analyzer subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    try:
        return metadata.entry_points(group=_ENTRY_POINT_GROUP)
    except Exception:  # pragma: no cover - broken installation metadata
        return []


__all__ = [
    "Analyzer",
    "DuplicateNameAnalyzer",
    "MisplacedEditorScriptAnalyzer",
    "NameCollisionAnalyzer",
    "RootClutterAnalyzer",
    "detect_issues",
    "discover_analyzers",
]
