"""
Shared fixtures for blending engine tests.

make_vector / make_game build taxonomy-length feature vectors and catalog
entries from a handful of keyword arguments so tests only spell out the
attributes they care about.
"""

import json
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

import pytest

from blending.models.features import FeatureVector
from blending.models.game import GameMetadata
from blending.models.taxonomy import GENRE_COUNT, MECHANIC_COUNT, Genre, Mechanic


def _vector(
    genres: Optional[Dict[int, float]] = None,
    mechanics: Iterable[int] = (),
    generation: int = 3,
    complexity: float = 0.5,
    action: float = 0.0,
    multi: float = 0.0,
    embedding: Optional[Sequence[float]] = None,
) -> FeatureVector:
    genre_weights = [0.0] * GENRE_COUNT
    for idx, weight in (genres or {}).items():
        genre_weights[idx] = weight
    flags = [False] * MECHANIC_COUNT
    for idx in mechanics:
        flags[idx] = True
    return FeatureVector(
        genre_weights=tuple(genre_weights),
        mechanic_flags=tuple(flags),
        platform_generation=generation,
        complexity=complexity,
        action_strategy_balance=action,
        single_multi_balance=multi,
        semantic_embedding=tuple(embedding) if embedding else None,
    )


def _game(
    game_id: str,
    name: Optional[str] = None,
    year: int = 1990,
    genre: str = "Action",
    platforms: Sequence[str] = ("SNES",),
    mechanic_tags: Sequence[str] = (),
    mood_tags: Sequence[str] = (),
    genre_affinities: Optional[Dict[str, float]] = None,
    era_category: Optional[str] = None,
    vector: Optional[FeatureVector] = None,
    **vector_kwargs,
) -> GameMetadata:
    data = {
        "id": game_id,
        "name": name or f"Game {game_id}",
        "year": year,
        "genre": genre,
        "platforms": list(platforms),
        "feature_vector": vector or _vector(**vector_kwargs),
        "mechanic_tags": list(mechanic_tags),
        "mood_tags": list(mood_tags),
        "genre_affinities": genre_affinities or {},
    }
    if era_category is not None:
        data["era_category"] = era_category
    return GameMetadata.model_validate(data)


@pytest.fixture
def make_vector():
    return _vector


@pytest.fixture
def make_game():
    return _game


@pytest.fixture
def sample_records():
    """Raw catalog records as the external builder supplies them."""
    return [
        {"id": 1, "name": "Super Mario Bros.", "year": 1985, "genre": "Platform",
         "platforms": ["NES"], "developer": "Nintendo"},
        {"id": 2, "name": "The Legend of Zelda", "year": 1986, "genre": "Adventure",
         "platforms": ["NES"], "description": "Action adventure with puzzle dungeons"},
        {"id": 3, "name": "Final Fantasy", "year": 1987, "genre": "Role-Playing",
         "platforms": ["NES"]},
        {"id": 4, "name": "Street Fighter II", "year": 1991, "genre": "Fighting",
         "platforms": ["Arcade", "SNES"]},
        {"id": 5, "name": "Civilization", "year": 1991, "genre": "Strategy",
         "platforms": ["PC"]},
        {"id": 6, "name": "Pac-Man", "year": 1980, "genre": "Action",
         "platforms": ["Arcade"]},
        {"id": 7, "name": "Tetris", "year": 1989, "genre": "Puzzle",
         "platforms": ["Game Boy"]},
        {"id": 8, "name": "F-Zero", "year": 1990, "genre": "Racing",
         "platforms": ["Super Nintendo"]},
    ]


@pytest.fixture
def small_catalog():
    """Five hand-built entries spanning the genre/era space."""
    games = [
        _game("a", "Alpha Quest", year=1986, genre="RPG",
              genres={Genre.RPG: 1.0, Genre.ADVENTURE: 0.5},
              mechanics=(Mechanic.EXPLORATION, Mechanic.CHARACTER_PROGRESSION),
              generation=2, complexity=0.8, action=-0.2, multi=-0.8,
              mechanic_tags=("Exploration", "Character Progression")),
        _game("b", "Beta Blaster", year=1988, genre="Action",
              genres={Genre.ACTION: 1.0},
              mechanics=(Mechanic.COMBAT, Mechanic.REAL_TIME),
              generation=2, complexity=0.45, action=0.8, multi=-0.4,
              mechanic_tags=("Combat", "Real-Time")),
        _game("c", "Gamma Tactics", year=1993, genre="Strategy",
              genres={Genre.STRATEGY: 1.0},
              mechanics=(Mechanic.RESOURCE_MANAGEMENT, Mechanic.TURN_BASED),
              generation=3, complexity=0.95, action=-0.8, multi=-0.8,
              mechanic_tags=("Resource Management", "Turn-Based")),
        _game("d", "Delta Dash", year=1982, genre="Racing",
              genres={Genre.RACING: 1.0},
              mechanics=(Mechanic.REAL_TIME, Mechanic.TIME_PRESSURE),
              generation=1, complexity=0.3, action=0.6, multi=0.4,
              platforms=("Arcade",),
              mechanic_tags=("Real-Time", "Time Pressure")),
        _game("e", "Epsilon Odyssey", year=1991, genre="Adventure",
              genres={Genre.ADVENTURE: 1.0, Genre.RPG: 0.4},
              mechanics=(Mechanic.EXPLORATION, Mechanic.STORY_CHOICES),
              generation=3, complexity=0.7, action=0.0, multi=-0.8,
              mechanic_tags=("Exploration", "Story Choices")),
    ]
    return {g.id: g for g in games}


@pytest.fixture
def catalog_dir(tmp_path, sample_records):
    """A catalogs directory with one raw-record catalog and one broken folder."""
    root = tmp_path / "catalogs"
    folder = root / "vintage"
    folder.mkdir(parents=True)
    (folder / "manifest.json").write_text(json.dumps({
        "name": "Vintage 1980-1995",
        "version": "1.0",
        "description": "Test catalog",
        "format": "records",
        "game_count": len(sample_records),
        "source": {"games_file": "games.json"},
    }))
    (folder / "games.json").write_text(json.dumps(sample_records))

    broken = root / "broken"
    broken.mkdir()
    (broken / "manifest.json").write_text("{not json")

    (root / "not_a_catalog").mkdir()
    return Path(root)
