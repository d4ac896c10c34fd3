"""Raw champion-select session as delivered by the local client.

These models only parse; they never interpret. Every field is optional on
the wire and a null or missing value degrades to that field's default, so a
sparse payload still parses into a usable snapshot.
"""

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class ActionKind(str, Enum):
    """Kinds of draft actions the interpreter understands."""

    PICK = "pick"
    BAN = "ban"


class _RawModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat explicit nulls like missing keys so each field falls back to its default."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class RawAction(_RawModel):
    """One pick or ban slot in the action matrix."""

    id: int = 0
    actor_cell_id: int = -1
    type: str = ""
    champion_id: int = 0
    is_in_progress: bool = False
    completed: bool = False

    @field_validator("champion_id")
    @classmethod
    def champion_non_negative(cls, value: int) -> int:
        return max(value, 0)

    def is_kind(self, kind: ActionKind) -> bool:
        return self.type == kind.value


class RawSeat(_RawModel):
    """One seat (cell) of a team."""

    cell_id: int = -1
    champion_id: int = 0  # Locked champion
    champion_pick_intent: int = 0  # Hovered / declared champion
    assigned_position: Optional[str] = None
    summoner_id: Optional[int] = None

    @field_validator("champion_id", "champion_pick_intent")
    @classmethod
    def champion_non_negative(cls, value: int) -> int:
        return max(value, 0)


class RawTimer(_RawModel):
    phase: Optional[str] = None


class RawBans(_RawModel):
    my_team_bans: list[int] = []
    their_team_bans: list[int] = []


class RawChampSelectSession(_RawModel):
    """Snapshot of ``/lol-champ-select/v1/session``."""

    local_player_cell_id: Optional[int] = None
    my_team: list[RawSeat] = []
    their_team: list[RawSeat] = []
    timer: Optional[RawTimer] = None
    bans: Optional[RawBans] = None
    actions: list[list[RawAction]] = []

    @field_validator("my_team", "their_team", mode="before")
    @classmethod
    def skip_null_seats(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [seat for seat in value if seat is not None]
        return value

    @field_validator("actions", mode="before")
    @classmethod
    def skip_null_rounds(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        rounds = []
        for round_ in value:
            if round_ is None:
                rounds.append([])
            elif isinstance(round_, list):
                rounds.append([action for action in round_ if action is not None])
            else:
                rounds.append(round_)
        return rounds

    @property
    def timer_phase(self) -> str:
        """Lower-cased timer label, empty when absent."""
        if self.timer is None or not self.timer.phase:
            return ""
        return self.timer.phase.lower()

    @property
    def local_seat(self) -> Optional[RawSeat]:
        """The local player's seat in my team, if the snapshot names one."""
        if self.local_player_cell_id is None:
            return None
        for seat in self.my_team:
            if seat.cell_id == self.local_player_cell_id:
                return seat
        return None

    @classmethod
    def from_payload(cls, payload: Any) -> "RawChampSelectSession":
        """Parse a raw JSON payload, degrading to an empty session.

        Args:
            payload: Decoded JSON body (normally a dict)

        Returns:
            Parsed session; an empty one if the payload is not a usable object
        """
        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, dict):
            if payload is not None:
                logger.warning(f"Ignoring champ select payload of type {type(payload).__name__}")
            return cls()
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Malformed champ select payload, using empty session: {e}")
            return cls()
