"""
Catalog Loader

Loads catalogs produced by the offline builder from a catalogs directory.
Each catalog folder must have a manifest.json and a games file; a persisted
graph file is optional.

Usage:
    loader = CatalogLoader(catalogs_dir)

    # List available catalogs
    catalogs = loader.list_catalogs()

    # Load a specific catalog
    loaded = loader.load_catalog("vintage_1980_1995")
    print(loaded.manifest)
    print(f"Loaded {len(loaded.catalog)} games")
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from blending.models.game import Catalog, ensure_catalog
from blending.stages.graph_builder import CatalogGraph
from blending.stages.metadata_builder import build_catalog

logger = logging.getLogger(__name__)

FORMAT_RECORDS = "records"
FORMAT_METADATA = "metadata"


@dataclass
class CatalogManifest:
    """Parsed manifest.json for a catalog."""
    name: str
    version: str
    description: str
    created_at: str
    # "records": raw items, built through the metadata builder on load
    # "metadata": prebuilt GameMetadata entries
    format: str
    game_count: int
    source: Dict[str, str]

    @classmethod
    def from_dict(cls, data: Dict) -> "CatalogManifest":
        return cls(
            name=data.get("name", ""),
            version=data.get("version", ""),
            description=data.get("description", ""),
            created_at=data.get("created_at", ""),
            format=data.get("format", FORMAT_METADATA),
            game_count=data.get("game_count", 0),
            source=data.get("source", {}),
        )


@dataclass
class LoadedCatalog:
    """A loaded catalog with its manifest, metadata, and optional precomputed graph."""
    folder_name: str
    path: Path
    manifest: CatalogManifest
    catalog: Catalog
    graph: Optional[CatalogGraph] = None


class CatalogLoader:
    """
    Loads catalogs from a catalogs directory.

    Expected directory structure:
        catalogs/
        ├── vintage_1980_1995/
        │   ├── manifest.json
        │   ├── games.json
        │   └── graph.json (optional)
        └── ...
    """

    def __init__(self, catalogs_dir: Path):
        """
        Initialize the catalog loader.

        Args:
            catalogs_dir: Path to the catalogs directory
        """
        self.catalogs_dir = Path(catalogs_dir)
        self._loaded: Dict[str, LoadedCatalog] = {}

    def list_catalogs(self) -> List[Dict[str, Any]]:
        """
        List all available catalogs.

        Returns:
            List of dicts with catalog info (folder_name, name, version, etc.)
        """
        catalogs = []

        if not self.catalogs_dir.exists():
            return catalogs

        for folder in sorted(self.catalogs_dir.iterdir()):
            if not folder.is_dir():
                continue

            manifest_path = folder / "manifest.json"
            if not manifest_path.exists():
                continue

            try:
                with open(manifest_path) as f:
                    manifest_data = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("[catalog] MANIFEST_UNREADABLE folder=%s error=%s", folder.name, e)
                continue

            catalogs.append({
                "folder_name": folder.name,
                "name": manifest_data.get("name", folder.name),
                "version": manifest_data.get("version", ""),
                "description": manifest_data.get("description", ""),
                "format": manifest_data.get("format", FORMAT_METADATA),
                "game_count": manifest_data.get("game_count", 0),
                "path": str(folder),
            })

        return catalogs

    def load_catalog(self, folder_name: str) -> LoadedCatalog:
        """
        Load a catalog.

        Args:
            folder_name: Name of the catalog folder

        Returns:
            LoadedCatalog with manifest, metadata, and graph when persisted

        Raises:
            FileNotFoundError: If the catalog folder or required files don't exist
            ValueError: If the manifest format is unknown or ids are duplicated
        """
        if folder_name in self._loaded:
            return self._loaded[folder_name]

        folder_path = self.catalogs_dir / folder_name
        if not folder_path.exists():
            raise FileNotFoundError(f"Catalog folder not found: {folder_path}")

        manifest_path = folder_path / "manifest.json"
        if not manifest_path.exists():
            raise FileNotFoundError(f"manifest.json not found in {folder_path}")
        with open(manifest_path) as f:
            manifest = CatalogManifest.from_dict(json.load(f))

        games_file = manifest.source.get("games_file", "games.json")
        games_path = folder_path / games_file
        if not games_path.exists():
            raise FileNotFoundError(f"{games_file} not found in {folder_path}")
        with open(games_path) as f:
            games = json.load(f)

        if manifest.format == FORMAT_RECORDS:
            catalog = build_catalog(games)
        elif manifest.format == FORMAT_METADATA:
            catalog = ensure_catalog(games)
        else:
            raise ValueError(f"Unknown catalog format: {manifest.format!r}")

        graph = None
        graph_path = folder_path / manifest.source.get("graph_file", "graph.json")
        if graph_path.exists():
            with open(graph_path) as f:
                graph = CatalogGraph.from_dict(json.load(f))
            # Node set must equal the catalog's ids exactly
            missing, extra = graph.node_mismatch(catalog)
            if missing or extra:
                logger.warning(
                    "[catalog] GRAPH_CATALOG_MISMATCH folder=%s missing=%s extra=%s; graph ignored",
                    folder_name, missing[:5], extra[:5],
                )
                graph = None

        if manifest.game_count and manifest.game_count != len(catalog):
            logger.warning(
                "[catalog] GAME_COUNT_MISMATCH folder=%s manifest=%s loaded=%s",
                folder_name, manifest.game_count, len(catalog),
            )

        loaded = LoadedCatalog(
            folder_name=folder_name,
            path=folder_path,
            manifest=manifest,
            catalog=catalog,
            graph=graph,
        )
        self._loaded[folder_name] = loaded
        logger.info(
            "[catalog] LOADED folder=%s games=%s graph=%s",
            folder_name, len(catalog), graph is not None,
        )
        return loaded

    def clear_cache(self) -> None:
        self._loaded.clear()
