"""Pick intent extraction for my team's seats."""

from typing import Optional

from draft_better.models.session import RawChampSelectSession, RawSeat
from draft_better.models.view import IntentSource, PickIntent
from draft_better.services.action_index import picks_by_cell
from draft_better.utils.champion_catalog import ChampionCatalog


def classify_seat_intent(seat: RawSeat, action_champion_id: int = 0) -> Optional[tuple[int, IntentSource]]:
    """Resolve a seat's champion and where it came from.

    Args:
        seat: Raw seat record
        action_champion_id: Champion named by the seat's pick action, 0 if none

    Returns:
        (champion_id, source) or None when the seat has no champion at all
    """
    if seat.champion_id > 0:
        return seat.champion_id, IntentSource.LOCKED
    if seat.champion_pick_intent > 0:
        return seat.champion_pick_intent, IntentSource.DECLARED
    # The matrix is sometimes populated before the seat record catches up
    if action_champion_id > 0:
        return action_champion_id, IntentSource.HOVER
    return None


def extract_pick_intents(
    session: RawChampSelectSession,
    catalog: Optional[ChampionCatalog] = None,
) -> tuple[Optional[PickIntent], list[PickIntent]]:
    """Extract the local player's and teammates' pick intents.

    Only my team is inspected; the enemy team never yields intents even if
    the client exposes their hovers.

    Args:
        session: Raw session snapshot
        catalog: Optional champion catalog used to fill champion names

    Returns:
        (user_pick_intent, team_pick_intents)
    """
    user_intent: Optional[PickIntent] = None
    team_intents: list[PickIntent] = []
    action_picks = picks_by_cell(session)

    for seat in session.my_team:
        resolved = classify_seat_intent(seat, action_picks.get(seat.cell_id, 0))
        if resolved is None:
            continue
        champion_id, source = resolved
        intent = PickIntent(
            cell_id=seat.cell_id,
            champion_id=champion_id,
            source=source,
            champion_name=catalog.get_name(champion_id) if catalog else "",
        )
        is_local = (
            session.local_player_cell_id is not None
            and seat.cell_id == session.local_player_cell_id
        )
        if is_local and user_intent is None:
            user_intent = intent
        elif not is_local:
            team_intents.append(intent)

    return user_intent, team_intents
