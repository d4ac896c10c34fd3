"""Data models for the LoL Draft Assistant."""

from draft_better.models.session import (
    ActionKind,
    RawAction,
    RawBans,
    RawChampSelectSession,
    RawSeat,
    RawTimer,
)
from draft_better.models.view import (
    ChampSelectView,
    DraftPhase,
    IntentSource,
    PickIntent,
    SeatEntry,
)
from draft_better.models.client import (
    ActionResult,
    ActiveGame,
    ConnectionStatus,
    GameflowPhase,
    RunePage,
    SummonerInfo,
)

__all__ = [
    "ActionKind",
    "RawAction",
    "RawBans",
    "RawChampSelectSession",
    "RawSeat",
    "RawTimer",
    "ChampSelectView",
    "DraftPhase",
    "IntentSource",
    "PickIntent",
    "SeatEntry",
    "ActionResult",
    "ActiveGame",
    "ConnectionStatus",
    "GameflowPhase",
    "RunePage",
    "SummonerInfo",
]
