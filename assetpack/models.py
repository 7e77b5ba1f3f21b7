"""Core data models shared across assetpack components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence

SIDECAR_SUFFIX = ".meta"


class Category(str, Enum):
    """Closed classification of an asset by file extension."""

    SCRIPTS = "Scripts"
    PREFABS = "Prefabs"
    MATERIALS = "Materials"
    TEXTURES = "Textures"
    MODELS = "Models"
    AUDIO = "Audio"
    SCENES = "Scenes"
    ANIMATIONS = "Animations"
    SHADERS = "Shaders"
    SCRIPTABLE_OBJECTS = "ScriptableObjects"
    OTHER = "Other"


class IssueKind(str, Enum):
    ROOT_CLUTTER = "RootClutter"
    DUPLICATE_NAME = "DuplicateName"
    MISPLACED_EDITOR_SCRIPT = "MisplacedEditorScript"
    NAME_COLLISION = "NameCollision"


class Recommendation(str, Enum):
    SAFE = "Safe"
    SKIP = "Skip"
    REVIEW = "Review"


class DiagnosticKind(str, Enum):
    MALFORMED_ARCHIVE = "MalformedArchive"
    MALFORMED_SIZE = "MalformedSize"
    INCOMPLETE_ASSET = "IncompletePackageAsset"


@dataclass(frozen=True)
class ArchiveEntry:
    """One header+payload unit read from the tape-archive stream."""

    path: str
    is_directory: bool
    payload: bytes = b""


@dataclass(frozen=True)
class ArchiveDiagnostic:
    """Non-fatal problem noticed while reading or indexing an archive."""

    kind: DiagnosticKind
    message: str
    offset: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message, "offset": self.offset}


@dataclass(frozen=True)
class PackageAsset:
    """A single logical asset resolved from one identifier group."""

    id: str
    destination_path: str
    size_bytes: int
    category: Category

    @property
    def filename(self) -> str:
        return self.destination_path.rsplit("/", 1)[-1]

    @property
    def is_sidecar(self) -> bool:
        return self.destination_path.endswith(SIDECAR_SUFFIX)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "destinationPath": self.destination_path,
            "sizeBytes": self.size_bytes,
            "category": self.category.value,
        }


class Inventory:
    """Read-only ordered collection of package assets.

    Assets are indexable by their unique id and by destination path. Several
    ids may share a destination path, so lookups by path return a list.
    """

    def __init__(self, assets: Sequence[PackageAsset] = ()) -> None:
        self._assets: tuple[PackageAsset, ...] = tuple(assets)
        self._by_id: Dict[str, PackageAsset] = {}
        self._by_destination: Dict[str, List[PackageAsset]] = {}
        for asset in self._assets:
            if asset.id in self._by_id:
                raise ValueError(f"Duplicate asset id in inventory: {asset.id}")
            self._by_id[asset.id] = asset
            self._by_destination.setdefault(asset.destination_path, []).append(asset)

    def __iter__(self) -> Iterator[PackageAsset]:
        return iter(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def __getitem__(self, index: int) -> PackageAsset:
        return self._assets[index]

    @property
    def assets(self) -> tuple[PackageAsset, ...]:
        return self._assets

    def get(self, asset_id: str) -> Optional[PackageAsset]:
        return self._by_id.get(asset_id)

    def at_destination(self, destination_path: str) -> List[PackageAsset]:
        return list(self._by_destination.get(destination_path, ()))

    @property
    def total_size(self) -> int:
        return sum(asset.size_bytes for asset in self._assets)

    def to_list(self) -> List[Dict[str, Any]]:
        return [asset.to_dict() for asset in self._assets]


@dataclass(frozen=True)
class Issue:
    """Structural finding emitted by an issue analyzer."""

    kind: IssueKind
    detail: Dict[str, Any] = field(default_factory=dict)
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "detail": self.detail, "message": self.message}


@dataclass(frozen=True)
class ConflictRecord:
    """Comparison of one package asset against the destination tree."""

    asset: PackageAsset
    exists_at_destination: bool
    size_matches: bool
    recommendation: Recommendation
    existing_size: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.asset.destination_path,
            "id": self.asset.id,
            "existsAtDestination": self.exists_at_destination,
            "sizeMatches": self.size_matches,
            "packageSize": self.asset.size_bytes,
            "existingSize": self.existing_size,
            "recommendation": self.recommendation.value,
        }


@dataclass
class ConflictReport:
    """Aggregated conflict detection outcome."""

    records: List[ConflictRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def conflict_count(self) -> int:
        return sum(1 for record in self.records if record.exists_at_destination)

    @property
    def safe_count(self) -> int:
        return sum(1 for record in self.records if not record.exists_at_destination)

    @property
    def safe_to_import(self) -> bool:
        return self.conflict_count == 0 and not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conflictCount": self.conflict_count,
            "safeCount": self.safe_count,
            "safeToImport": self.safe_to_import,
            "records": [record.to_dict() for record in self.records],
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class Move:
    """Planned relocation of an asset to its canonical path."""

    source: str
    target: str

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.source, "to": self.target}


@dataclass
class OrganizePlan:
    """Moves computed (dry run) or executed (apply) by the organize planner."""

    dry_run: bool
    moves: List[Move] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dryRun": self.dry_run,
            "movedCount": len(self.moves),
            "errorCount": len(self.errors),
            "moves": [move.to_dict() for move in self.moves],
            "errors": list(self.errors),
        }
