"""Backing logic: catalog loading."""

from .catalog_loader import CatalogLoader, CatalogManifest, LoadedCatalog

__all__ = [
    "CatalogLoader",
    "CatalogManifest",
    "LoadedCatalog",
]
