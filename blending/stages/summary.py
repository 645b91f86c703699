"""
Blend summary — assemble the aggregate BlendResult for a resolved selection.

Name, description, aggregated genre/mechanic/mood attributes, average
complexity and pacing, and art-style suggestions derived from era and genre.
"""

from typing import Dict, List, Sequence

from blending.models.game import GameMetadata
from blending.models.results import BlendPath, BlendResult
from blending.models.taxonomy import Genre

from .recommendations import (
    aggregate_genre_weights,
    aggregate_mechanic_tags,
    average_complexity,
    recommend,
)

# (last_year_inclusive, palette styles) by average release year
ERA_ART_STYLES = (
    (1985, ("8-bit pixel art", "Limited color palette")),
    (1991, ("16-bit pixel art", "Vibrant colors")),
)
LATE_ART_STYLES = ("High-color pixel art", "Detailed sprites")

GENRE_ART_STYLES: Dict[int, str] = {
    Genre.RPG: "Top-down or isometric view",
    Genre.PLATFORM: "Side-scrolling perspective",
    Genre.ADVENTURE: "Detailed backgrounds",
    Genre.RACING: "Pseudo-3D perspective",
}


def blend_name(games: Sequence[GameMetadata]) -> str:
    if len(games) == 2:
        return f"{games[0].name} × {games[1].name}"
    return f"{games[0].name} meets {games[-1].name} (+{len(games) - 2})"


def blend_description(games: Sequence[GameMetadata], genres: Dict[str, float]) -> str:
    years = [g.year for g in games]
    if genres:
        # Highest weight wins; ties go to the alphabetically first label
        dominant = min(genres.items(), key=lambda item: (-item[1], item[0]))[0]
    else:
        dominant = "genre-blending"
    return (
        f"A {dominant} experience blending {len(games)} classic games from "
        f"{min(years)}-{max(years)}, combining the best elements of each era"
    )


def art_styles(games: Sequence[GameMetadata]) -> List[str]:
    """Palette from the average year plus genre perspectives; sorted, de-duplicated."""
    avg_year = sum(g.year for g in games) // len(games)
    styles: List[str] = list(LATE_ART_STYLES)
    for last_year, palette in ERA_ART_STYLES:
        if avg_year <= last_year:
            styles = list(palette)
            break
    for game in games:
        if game.genre_index in GENRE_ART_STYLES:
            styles.append(GENRE_ART_STYLES[game.genre_index])
    return sorted(set(styles))


def build_blend_result(games: Sequence[GameMetadata], blend_path: BlendPath) -> BlendResult:
    """BlendResult for the selected games (in selection order) and their resolved path."""
    genres = aggregate_genre_weights(games)
    mechanics = aggregate_mechanic_tags(games)
    complexity = average_complexity(games)
    balance = sum(g.action_strategy_balance for g in games) / len(games)
    return BlendResult(
        name=blend_name(games),
        description=blend_description(games, genres),
        blend_path=blend_path,
        genres=genres,
        mechanics=mechanics,
        mood_tags=list(dict.fromkeys(tag for g in games for tag in g.mood_tags)),
        art_styles=art_styles(games),
        complexity_score=complexity,
        action_strategy_balance=balance,
        recommended_features=recommend(genres, mechanics, complexity),
    )
