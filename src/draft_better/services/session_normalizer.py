"""Session normalizer: raw champ-select snapshot -> ChampSelectView.

This is the interpreter's public entry point. It is pure and total: the
same snapshot always yields an equal view, and a sparse snapshot degrades
to empty values instead of raising.
"""

import logging
from typing import Any, Optional, Union

from draft_better.models.session import RawChampSelectSession, RawSeat
from draft_better.models.view import ChampSelectView, SeatEntry
from draft_better.services.action_index import has_any_ban_action, picks_by_cell
from draft_better.services.intent_extractor import extract_pick_intents
from draft_better.services.mode_detector import is_practice_mode
from draft_better.services.phase_resolver import resolve_phase
from draft_better.utils.champion_catalog import ChampionCatalog
from draft_better.utils.role_normalizer import normalize_role

logger = logging.getLogger(__name__)


def _to_seat_entry(
    seat: RawSeat,
    local_cell_id: Optional[int],
    action_champion_id: int = 0,
) -> SeatEntry:
    champion_id = seat.champion_id or seat.champion_pick_intent or action_champion_id
    return SeatEntry(
        cell_id=seat.cell_id,
        champion_id=champion_id,
        role=normalize_role(seat.assigned_position),
        summoner_id=seat.summoner_id,
        is_local_player=local_cell_id is not None and seat.cell_id == local_cell_id,
    )


def normalize(
    snapshot: Union[RawChampSelectSession, dict, Any],
    catalog: Optional[ChampionCatalog] = None,
) -> ChampSelectView:
    """Interpret one champ-select snapshot.

    Args:
        snapshot: Parsed session or the raw JSON payload
        catalog: Optional champion catalog for intent names

    Returns:
        A freshly built ChampSelectView
    """
    session = RawChampSelectSession.from_payload(snapshot)
    local_cell_id = session.local_player_cell_id

    practice = is_practice_mode(session, has_any_ban_action(session))
    phase = resolve_phase(session, practice)

    action_picks = picks_by_cell(session)
    my_team = [
        _to_seat_entry(seat, local_cell_id, action_picks.get(seat.cell_id, 0))
        for seat in session.my_team
    ]
    # Opponent seats are never reconciled against the matrix and never carry intents
    their_team = [_to_seat_entry(seat, None) for seat in session.their_team]

    local_seat = session.local_seat
    user_role = normalize_role(local_seat.assigned_position) if local_seat else None

    user_intent, team_intents = extract_pick_intents(session, catalog)

    bans = session.bans
    view = ChampSelectView(
        phase=phase,
        my_team=my_team,
        their_team=their_team,
        user_role=user_role,
        local_player_cell_id=local_cell_id,
        my_team_bans=list(bans.my_team_bans) if bans else [],
        their_team_bans=list(bans.their_team_bans) if bans else [],
        is_practice_mode=practice,
        user_pick_intent=user_intent,
        team_pick_intents=team_intents,
    )

    logger.debug(
        f"Session normalized: phase={phase.value} practice={practice} "
        f"user_intent={user_intent.champion_id if user_intent else None} "
        f"team_intents={len(team_intents)}"
    )
    return view
