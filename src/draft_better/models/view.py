"""Normalized champion-select view handed to consumers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from draft_better.utils.role_normalizer import Role


class DraftPhase(str, Enum):
    """Phases of a champion-select draft as seen by the local player."""

    PLANNING = "planning"
    BANNING = "banning"
    PICKING = "picking"
    FINALIZATION = "finalization"  # Terminal for the lobby


class IntentSource(str, Enum):
    """Where a seat's pick intent came from."""

    HOVER = "hover"  # Recovered from the action matrix only
    DECLARED = "declared"  # Seat's pick-intent field
    LOCKED = "locked"  # Seat's locked champion


@dataclass
class SeatEntry:
    """One normalized seat."""

    cell_id: int
    champion_id: int = 0  # 0 = no champion yet
    role: Optional[Role] = None
    summoner_id: Optional[int] = None
    is_local_player: bool = False

    def to_dict(self) -> dict:
        return {
            "cell_id": self.cell_id,
            "champion_id": self.champion_id,
            "role": self.role.value if self.role else None,
            "summoner_id": self.summoner_id,
            "is_local_player": self.is_local_player,
        }


@dataclass
class PickIntent:
    """The champion a seat's occupant wants to play."""

    cell_id: int
    champion_id: int
    source: IntentSource
    champion_name: str = ""

    def to_dict(self) -> dict:
        return {
            "cell_id": self.cell_id,
            "champion_id": self.champion_id,
            "champion_name": self.champion_name,
            "source": self.source.value,
        }


@dataclass
class ChampSelectView:
    """Complete interpreted state of one champ-select snapshot."""

    phase: DraftPhase = DraftPhase.PLANNING
    my_team: list[SeatEntry] = field(default_factory=list)
    their_team: list[SeatEntry] = field(default_factory=list)
    user_role: Optional[Role] = None
    local_player_cell_id: Optional[int] = None
    my_team_bans: list[int] = field(default_factory=list)
    their_team_bans: list[int] = field(default_factory=list)
    is_practice_mode: bool = False
    user_pick_intent: Optional[PickIntent] = None
    team_pick_intents: list[PickIntent] = field(default_factory=list)

    @property
    def local_seat(self) -> Optional[SeatEntry]:
        for seat in self.my_team:
            if seat.is_local_player:
                return seat
        return None

    @property
    def my_picks(self) -> list[int]:
        """Champion ids resolved for my team, unresolved seats skipped."""
        return [s.champion_id for s in self.my_team if s.champion_id > 0]

    @property
    def their_picks(self) -> list[int]:
        """Champion ids resolved for the enemy team."""
        return [s.champion_id for s in self.their_team if s.champion_id > 0]

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return {
            "phase": self.phase.value,
            "my_team": [s.to_dict() for s in self.my_team],
            "their_team": [s.to_dict() for s in self.their_team],
            "user_role": self.user_role.value if self.user_role else None,
            "local_player_cell_id": self.local_player_cell_id,
            "bans": {
                "my_team_bans": list(self.my_team_bans),
                "their_team_bans": list(self.their_team_bans),
            },
            "is_practice_mode": self.is_practice_mode,
            "user_pick_intent": self.user_pick_intent.to_dict() if self.user_pick_intent else None,
            "team_pick_intents": [i.to_dict() for i in self.team_pick_intents],
        }
