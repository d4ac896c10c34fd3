"""Models describing the local game client connection and lifecycle."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ConnectionStatus(str, Enum):
    """Externally visible connection state (attempts are not a state)."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class GameflowPhase(str, Enum):
    """Coarse client lifecycle phase from ``/lol-gameflow/v1/gameflow-phase``."""

    NONE = "None"
    LOBBY = "Lobby"
    MATCHMAKING = "Matchmaking"
    READY_CHECK = "ReadyCheck"
    CHAMP_SELECT = "ChampSelect"
    GAME_START = "GameStart"
    IN_PROGRESS = "InProgress"
    WAITING_FOR_STATS = "WaitingForStats"
    END_OF_GAME = "EndOfGame"
    PRE_END_OF_GAME = "PreEndOfGame"

    @classmethod
    def parse(cls, label: Any) -> Optional["GameflowPhase"]:
        """Parse a phase label, None for anything outside the vocabulary."""
        if isinstance(label, cls):
            return label
        try:
            return cls(label)
        except ValueError:
            return None


# Phases during which a game is being played
IN_GAME_PHASES = frozenset({GameflowPhase.GAME_START, GameflowPhase.IN_PROGRESS})

# Phases a finished game can still be in before it is closed out
AWAITING_END_PHASES = IN_GAME_PHASES | {GameflowPhase.WAITING_FOR_STATS}

# Phases that close out a game when entered from AWAITING_END_PHASES
GAME_ENDED_PHASES = frozenset({
    GameflowPhase.END_OF_GAME,
    GameflowPhase.PRE_END_OF_GAME,
    GameflowPhase.NONE,
    GameflowPhase.LOBBY,
})


@dataclass
class ActionResult:
    """Outcome of a request that changes client state."""

    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(success=True)

    @classmethod
    def failed(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        return {"success": self.success, "error": self.error}


NOT_CONNECTED = "not connected"


@dataclass
class ActiveGame:
    """Summary of the game currently loading or in progress."""

    game_id: int
    game_mode: str = ""
    game_type: str = ""
    map_id: int = 0
    team_one: list[dict] = field(default_factory=list)
    team_two: list[dict] = field(default_factory=list)
    game_start_time: int = 0
    game_length: int = 0


@dataclass
class SummonerInfo:
    """The signed-in player."""

    puuid: str
    summoner_id: int
    display_name: str
    game_name: str = ""
    tag_line: str = ""
    profile_icon_id: int = 0
    summoner_level: int = 0


@dataclass
class RunePage:
    """A rune page stored in the client (``/lol-perks/v1/pages``)."""

    name: str
    primary_style_id: int
    sub_style_id: int
    selected_perk_ids: list[int] = field(default_factory=list)
    id: Optional[int] = None
    current: bool = False
    is_editable: bool = True
    is_deletable: bool = True

    @classmethod
    def from_payload(cls, data: dict) -> "RunePage":
        return cls(
            name=data.get("name") or "",
            primary_style_id=data.get("primaryStyleId") or 0,
            sub_style_id=data.get("subStyleId") or 0,
            selected_perk_ids=list(data.get("selectedPerkIds") or []),
            id=data.get("id"),
            current=bool(data.get("current")),
            is_editable=data.get("isEditable", True) is not False,
            is_deletable=data.get("isDeletable", True) is not False,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "primary_style_id": self.primary_style_id,
            "sub_style_id": self.sub_style_id,
            "selected_perk_ids": list(self.selected_perk_ids),
            "current": self.current,
            "is_editable": self.is_editable,
            "is_deletable": self.is_deletable,
        }
