"""Centralized role normalization utility.

The local client reports a seat's assigned position as free text
(``"top"``, ``"JUNGLE"``, ``"middle"``, ``"bottom"``, ``"utility"``, or
something we have never seen). All role handling goes through two explicit
enums so that an unknown label can never leak through as a raw string:

    label --parse_assigned_position--> AssignedPosition --position_to_role--> Role | None
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Canonical lane roles used throughout the application."""

    TOP = "top"
    JUNGLE = "jungle"
    MID = "mid"
    BOT = "bot"
    SUPPORT = "support"


class AssignedPosition(str, Enum):
    """Position labels as the local client sends them."""

    TOP = "top"
    JUNGLE = "jungle"
    MIDDLE = "middle"
    BOTTOM = "bottom"
    UTILITY = "utility"
    UNRECOGNIZED = "unrecognized"


_POSITION_TO_ROLE: dict[AssignedPosition, Optional[Role]] = {
    AssignedPosition.TOP: Role.TOP,
    AssignedPosition.JUNGLE: Role.JUNGLE,
    AssignedPosition.MIDDLE: Role.MID,
    AssignedPosition.BOTTOM: Role.BOT,
    AssignedPosition.UTILITY: Role.SUPPORT,
    AssignedPosition.UNRECOGNIZED: None,
}


def parse_assigned_position(label: Optional[str]) -> Optional[AssignedPosition]:
    """Parse a client position label.

    Args:
        label: Raw label from the seat record (case-insensitive)

    Returns:
        The matching AssignedPosition, UNRECOGNIZED for unknown text,
        or None when the seat has no label at all

    Examples:
        >>> parse_assigned_position("UTILITY")
        <AssignedPosition.UTILITY: 'utility'>
        >>> parse_assigned_position("adc")
        <AssignedPosition.UNRECOGNIZED: 'unrecognized'>
        >>> parse_assigned_position("") is None
        True
    """
    if label is None:
        return None
    cleaned = label.strip().lower()
    if not cleaned:
        return None
    try:
        position = AssignedPosition(cleaned)
    except ValueError:
        return AssignedPosition.UNRECOGNIZED
    return position


def position_to_role(position: Optional[AssignedPosition]) -> Optional[Role]:
    """Map a parsed position to its canonical role (None if unrecognized/absent)."""
    if position is None:
        return None
    return _POSITION_TO_ROLE[position]


def normalize_role(label: Optional[str]) -> Optional[Role]:
    """Normalize a raw position label straight to a canonical Role.

    Args:
        label: Raw position label, e.g. "middle" or "UTILITY"

    Returns:
        Role (top/jungle/mid/bot/support) or None if absent or unknown
    """
    return position_to_role(parse_assigned_position(label))

