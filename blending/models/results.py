"""
Result models — per-query structures produced by the annotator and resolver.

Contains:
- Synergy, Conflict: qualitative findings for one pair of items
- CompatibilityEdge: scored pair with its findings (computed on demand, never stored)
- BlendPath: the maximum-compatibility spanning tree over a selection
- BlendResult: the aggregate object handed to a presentation layer
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel


class Synergy(BaseModel):
    """Why two items reinforce each other. strength in [0, 1], higher = stronger."""

    type_name: str
    description: str
    strength: float


class Conflict(BaseModel):
    """Why two items clash. severity in [0, 1], higher = worse."""

    type_name: str
    description: str
    severity: float
    resolution_hint: str


class CompatibilityEdge(BaseModel):
    """Unordered pair of item ids with similarity weight and findings."""

    game_ids: Tuple[str, str]
    weight: float
    synergies: List[Synergy] = []
    conflicts: List[Conflict] = []


class BlendPath(BaseModel):
    """
    Resolved blend over a selection.

    games keeps the selection order; edges are the spanning-tree edges in the
    order the tree algorithm accepted them; synergies/conflicts concatenate the
    findings of those edges in the same order.
    """

    games: List[str]
    edges: List[CompatibilityEdge]
    total_compatibility: float
    synergies: List[Synergy]
    conflicts: List[Conflict]


class BlendResult(BaseModel):
    """Everything a host needs to present one blend."""

    name: str
    description: str
    blend_path: BlendPath
    genres: Dict[str, float]
    mechanics: List[str]
    mood_tags: List[str]
    art_styles: List[str]
    complexity_score: float
    action_strategy_balance: float
    recommended_features: List[str]

    @property
    def synergies(self) -> List[Synergy]:
        return self.blend_path.synergies

    @property
    def conflicts(self) -> List[Conflict]:
        return self.blend_path.conflicts
