"""
Track Catalog Loader

Loads the catalog index and the per-piece records it points at from a
catalog directory. The layout is:

```
catalog/
  track-catalog.json      # or track-catalog.yaml / .yml
  pieces/straight-short.json
  pieces/curve-standard.yaml
```

The index lists pieces as ``{id, file, category, name, commonName}`` entries;
``file`` is relative to the catalog directory. Records are validated here so
the snapping engine never has to.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import logging

import yaml

from .abstraction import (
    TrackPiece,
    TrackCategory,
    read_key,
    is_finite_connector,
)

logger = logging.getLogger(__name__)

CATALOG_FILENAMES = ("track-catalog.json", "track-catalog.yaml", "track-catalog.yml")


class CatalogError(ValueError):
    """Raised when catalog data is missing or malformed."""


@dataclass
class CatalogEntry:
    """One piece listed in the catalog index."""
    id: str
    file: str
    category: TrackCategory
    name: str = ""
    common_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogEntry":
        return cls(
            id=str(data["id"]),
            file=str(data["file"]),
            category=TrackCategory(data["category"]),
            name=data.get("name", ""),
            common_name=read_key(data, "common_name", "commonName", ""),
        )


@dataclass
class CatalogCategory:
    """A category heading shown in the piece library."""
    id: TrackCategory
    name: str
    description: str = ""
    icon: str = ""
    order: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogCategory":
        return cls(
            id=TrackCategory(data["id"]),
            name=data.get("name", data["id"]),
            description=data.get("description", ""),
            icon=data.get("icon", ""),
            order=int(data.get("order", 0)),
        )


@dataclass
class TrackCatalog:
    """Parsed catalog index."""
    version: str = ""
    last_updated: str = ""
    description: str = ""
    pieces: List[CatalogEntry] = field(default_factory=list)
    categories: List[CatalogCategory] = field(default_factory=list)

    def get_entry(self, piece_id: str) -> Optional[CatalogEntry]:
        for entry in self.pieces:
            if entry.id == piece_id:
                return entry
        return None

    def category_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for entry in self.pieces:
            counts[entry.category.value] = counts.get(entry.category.value, 0) + 1
        return counts

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackCatalog":
        categories = [CatalogCategory.from_dict(c) for c in data.get("categories") or []]
        categories.sort(key=lambda c: c.order)
        return cls(
            version=str(data.get("version", "")),
            last_updated=str(read_key(data, "last_updated", "lastUpdated", "")),
            description=data.get("description", ""),
            pieces=[CatalogEntry.from_dict(p) for p in data.get("pieces") or []],
            categories=categories,
        )


def read_data_file(path: Path) -> Any:
    """Read a JSON or YAML file, chosen by suffix."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogError(f"Cannot read {path}: {e}") from e

    try:
        if path.suffix in (".yaml", ".yml"):
            return yaml.safe_load(content)
        return json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Malformed catalog file {path}: {e}") from e


def validate_track_piece(piece: TrackPiece, source: Path):
    """Check catalog invariants the engine relies on."""
    if not piece.connections:
        logger.warning("Track piece '%s' (%s) has no connectors", piece.id, source)

    seen = set()
    for conn in piece.connections:
        if conn.id in seen:
            raise CatalogError(
                f"Duplicate connector id '{conn.id}' on piece '{piece.id}' ({source})"
            )
        seen.add(conn.id)
        if not is_finite_connector(conn):
            raise CatalogError(
                f"Connector '{conn.id}' on piece '{piece.id}' has non-finite "
                f"position, angle or height ({source})"
            )


class CatalogLoader:
    """
    Load track pieces from a catalog directory.

    Usage:
        loader = CatalogLoader(Path("data"))
        pieces = loader.load_all_track_pieces()
        curves = loader.load_track_pieces_by_category("curved")
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self._catalog: Optional[TrackCatalog] = None
        self._pieces: Dict[str, TrackPiece] = {}

        if not self.root.is_dir():
            raise CatalogError(f"Catalog directory not found: {self.root}")

    @property
    def index_path(self) -> Path:
        for name in CATALOG_FILENAMES:
            path = self.root / name
            if path.exists():
                return path
        raise CatalogError(
            f"No catalog index in {self.root} (expected one of: "
            f"{', '.join(CATALOG_FILENAMES)})"
        )

    def load_catalog(self) -> TrackCatalog:
        """Load (and cache) the catalog index."""
        if self._catalog is None:
            path = self.index_path
            data = read_data_file(path)
            if not isinstance(data, dict):
                raise CatalogError(f"Catalog index must be a mapping: {path}")
            try:
                self._catalog = TrackCatalog.from_dict(data)
            except (KeyError, ValueError, TypeError) as e:
                raise CatalogError(f"Invalid catalog index {path}: {e}") from e
            logger.debug("Loaded catalog %s (%d pieces)", path, len(self._catalog.pieces))
        return self._catalog

    def load_track_piece(self, piece_id: str) -> TrackPiece:
        """Load a specific track piece by id."""
        if piece_id in self._pieces:
            return self._pieces[piece_id]

        entry = self.load_catalog().get_entry(piece_id)
        if entry is None:
            raise CatalogError(f"Track piece '{piece_id}' not found in catalog")

        path = self.root / entry.file
        data = read_data_file(path)
        if not isinstance(data, dict):
            raise CatalogError(f"Track piece file must be a mapping: {path}")

        try:
            piece = TrackPiece.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            raise CatalogError(f"Invalid track piece '{piece_id}' in {path}: {e}") from e

        if piece.id != piece_id:
            logger.warning(
                "Catalog entry '%s' points at piece '%s' (%s)", piece_id, piece.id, path
            )
        validate_track_piece(piece, path)

        self._pieces[piece_id] = piece
        logger.debug("Loaded track piece %s", piece)
        return piece

    def load_all_track_pieces(self) -> List[TrackPiece]:
        """Load every piece in catalog order."""
        return [self.load_track_piece(e.id) for e in self.load_catalog().pieces]

    def load_track_pieces_by_category(self, category: str) -> List[TrackPiece]:
        """Load the pieces of one category, in catalog order."""
        try:
            wanted = TrackCategory(category)
        except ValueError as e:
            raise CatalogError(f"Unknown track category: {category}") from e
        return [
            self.load_track_piece(e.id)
            for e in self.load_catalog().pieces
            if e.category == wanted
        ]
