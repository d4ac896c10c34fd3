"""Utility modules for draft_better."""

from draft_better.utils.role_normalizer import (
    AssignedPosition,
    Role,
    normalize_role,
    parse_assigned_position,
    position_to_role,
)
from draft_better.utils.champion_catalog import ChampionCatalog
from draft_better.utils.events import EventRegistry, Subscription

__all__ = [
    "AssignedPosition",
    "Role",
    "normalize_role",
    "parse_assigned_position",
    "position_to_role",
    "ChampionCatalog",
    "EventRegistry",
    "Subscription",
]
