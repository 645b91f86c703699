"""
Engine Settings

Loads runtime settings from environment variables and provides defaults.
Supports loading from a project-root .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from blending.models.config import BlendingConfig, DEFAULT_CONFIG

_ROOT = Path(__file__).resolve().parent.parent
_root_env = _ROOT / ".env"
if _root_env.exists():
    load_dotenv(_root_env)


@dataclass
class EngineSettings:
    """Runtime settings for hosts embedding the engine."""

    # Folder holding one sub-folder per catalog (manifest.json + games file)
    catalogs_dir: Path = _ROOT / "catalogs"
    # Catalog folder loaded by default
    catalog_name: Optional[str] = None
    # Optional JSON file with BlendingConfig overrides
    config_path: Optional[Path] = None
    # Overrides for the graph build
    graph_workers: Optional[int] = None
    graph_executor: Optional[str] = None

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Load settings from environment variables."""

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (_ROOT / p).resolve()

        workers = os.getenv("GRAPH_WORKERS", "").strip()
        executor = os.getenv("GRAPH_EXECUTOR", "").strip().lower() or None
        return cls(
            catalogs_dir=_path_env("CATALOG_DIR", _ROOT / "catalogs"),
            catalog_name=os.getenv("CATALOG_NAME") or None,
            config_path=_path_env("BLENDING_CONFIG_PATH"),
            graph_workers=int(workers) if workers else None,
            graph_executor=executor,
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the settings.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if not self.catalogs_dir.exists():
            errors.append(f"Catalogs directory not found: {self.catalogs_dir}")

        if self.config_path is not None and not self.config_path.exists():
            errors.append(f"Blending config file not found: {self.config_path}")

        if self.graph_workers is not None and self.graph_workers < 1:
            errors.append(f"GRAPH_WORKERS must be >= 1, got {self.graph_workers}")

        if self.graph_executor is not None and self.graph_executor not in ("thread", "process"):
            errors.append(f"GRAPH_EXECUTOR must be 'thread' or 'process', got {self.graph_executor}")

        return len(errors) == 0, errors

    def blending_config(self) -> BlendingConfig:
        """BlendingConfig from the optional config file plus graph overrides."""
        data = {}
        if self.config_path is not None:
            with open(self.config_path) as f:
                data = json.load(f)
        if self.graph_workers is not None:
            data["graph_workers"] = self.graph_workers
        if self.graph_executor is not None:
            data["graph_executor"] = self.graph_executor
        return BlendingConfig.from_dict(data) if data else DEFAULT_CONFIG


# Global settings instance
_settings: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = EngineSettings.from_env()
    return _settings


def reload_settings() -> EngineSettings:
    """Reload settings from environment."""
    global _settings
    _settings = None
    return get_settings()
