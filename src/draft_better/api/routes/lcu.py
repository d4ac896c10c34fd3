"""REST endpoints for the local client connection and champ select."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from draft_better.models.client import NOT_CONNECTED, ActionResult
from draft_better.services.lcu_client import DEFAULT_RUNE_PAGE_NAME
from draft_better.services.champ_select_tracker import ChampSelectTracker
from draft_better.services.connection_supervisor import ConnectionSupervisor

router = APIRouter(prefix="/api/lcu", tags=["lcu"])


class ChampionActionRequest(BaseModel):
    """Request body for hover / lock / ban."""

    champion_id: int = Field(gt=0)


class SummonerSpellsRequest(BaseModel):
    spell1_id: int
    spell2_id: int


class RunePageRequest(BaseModel):
    """Request body for creating the managed rune page."""

    name: str = Field(default=DEFAULT_RUNE_PAGE_NAME, min_length=1)
    primary_style_id: int
    sub_style_id: int
    selected_perk_ids: list[int] = Field(min_length=1)


def _get_services(request: Request) -> tuple[ConnectionSupervisor, ChampSelectTracker]:
    """Get supervisor and tracker from app state."""
    return request.app.state.supervisor, request.app.state.tracker


def _require_connection(supervisor: ConnectionSupervisor) -> None:
    if not supervisor.is_connected:
        raise HTTPException(status_code=503, detail="Not connected to League client")


def _status_payload(supervisor: ConnectionSupervisor, tracker: ChampSelectTracker) -> dict:
    return {
        "status": supervisor.status.value,
        "gameflow_phase": supervisor.gameflow_phase.value,
        "in_champ_select": tracker.in_champ_select,
    }


@router.get("/status")
async def get_status(request: Request):
    """Connection status and coarse client phase."""
    supervisor, tracker = _get_services(request)
    return _status_payload(supervisor, tracker)


@router.post("/reconnect")
async def reconnect(request: Request):
    """Drop the current client connection and try again now."""
    supervisor, tracker = _get_services(request)
    await supervisor.reconnect()
    return _status_payload(supervisor, tracker)


@router.get("/champ-select")
async def get_champ_select(request: Request):
    """Current champ select view, or ``{"active": false}`` outside champ select."""
    _, tracker = _get_services(request)
    view = tracker.current_view
    if view is None:
        return {"active": False}
    return {"active": True, **view.to_dict()}


@router.get("/gameflow")
async def get_gameflow(request: Request):
    supervisor, _ = _get_services(request)
    return {"phase": supervisor.gameflow_phase.value}


@router.get("/active-game")
async def get_active_game(request: Request):
    """Game currently loading or in progress."""
    supervisor, _ = _get_services(request)
    _require_connection(supervisor)
    game = await supervisor.client.get_active_game()
    return {"active_game": asdict(game) if game else None}


@router.get("/summoner")
async def get_current_summoner(request: Request):
    supervisor, _ = _get_services(request)
    _require_connection(supervisor)
    summoner = await supervisor.client.get_current_summoner()
    return {"summoner": asdict(summoner) if summoner else None}


async def _run_champion_action(request: Request, action: str, champion_id: int) -> dict:
    supervisor, _ = _get_services(request)
    if not supervisor.is_connected:
        return ActionResult.failed(NOT_CONNECTED).to_dict()
    client = supervisor.client
    if action == "hover":
        result = await client.hover_champion(champion_id)
    elif action == "lock":
        result = await client.lock_in_champion(champion_id)
    else:
        result = await client.ban_champion(champion_id)
    return result.to_dict()


@router.post("/champ-select/hover")
async def hover_champion(request: Request, body: ChampionActionRequest):
    """Hover a champion on the local player's pick action."""
    return await _run_champion_action(request, "hover", body.champion_id)


@router.post("/champ-select/lock")
async def lock_in_champion(request: Request, body: ChampionActionRequest):
    """Select and lock in a champion."""
    return await _run_champion_action(request, "lock", body.champion_id)


@router.post("/champ-select/ban")
async def ban_champion(request: Request, body: ChampionActionRequest):
    """Select and complete the local player's ban."""
    return await _run_champion_action(request, "ban", body.champion_id)


@router.post("/champ-select/summoner-spells")
async def set_summoner_spells(request: Request, body: SummonerSpellsRequest):
    supervisor, _ = _get_services(request)
    if not supervisor.is_connected:
        return ActionResult.failed(NOT_CONNECTED).to_dict()
    result = await supervisor.client.set_summoner_spells(body.spell1_id, body.spell2_id)
    return result.to_dict()


@router.get("/runes")
async def get_rune_pages(request: Request):
    supervisor, _ = _get_services(request)
    _require_connection(supervisor)
    pages = await supervisor.client.get_rune_pages()
    return {"pages": [page.to_dict() for page in pages]}


@router.get("/runes/current")
async def get_current_rune_page(request: Request):
    supervisor, _ = _get_services(request)
    _require_connection(supervisor)
    page = await supervisor.client.get_current_rune_page()
    return {"page": page.to_dict() if page else None}


@router.post("/runes")
async def set_rune_page(request: Request, body: RunePageRequest):
    """Create (or replace) the managed rune page and make it current."""
    supervisor, _ = _get_services(request)
    if not supervisor.is_connected:
        return ActionResult.failed(NOT_CONNECTED).to_dict()
    result = await supervisor.client.set_rune_page(
        body.primary_style_id,
        body.sub_style_id,
        body.selected_perk_ids,
        name=body.name,
    )
    return result.to_dict()


@router.delete("/runes/{page_id}")
async def delete_rune_page(request: Request, page_id: int):
    supervisor, _ = _get_services(request)
    if not supervisor.is_connected:
        return ActionResult.failed(NOT_CONNECTED).to_dict()
    result = await supervisor.client.delete_rune_page(page_id)
    return result.to_dict()
