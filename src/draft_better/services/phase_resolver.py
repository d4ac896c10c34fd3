"""Draft phase resolution for a single snapshot.

The client's timer label is a loose hint that differs between queues; the
action matrix is authoritative and always wins when it says something.
"""

from draft_better.models.session import ActionKind, RawChampSelectSession
from draft_better.models.view import DraftPhase
from draft_better.services.action_index import (
    find_active_action,
    find_completed_pick,
    seat_has_action_kind,
)

FINALIZATION_TIMER_PHASE = "finalization"


def _phase_from_timer(
    session: RawChampSelectSession,
    timer_phase: str,
    is_practice: bool,
) -> DraftPhase:
    if "ban" in timer_phase or timer_phase == "ban_pick":
        local_can_ban = seat_has_action_kind(session, session.local_player_cell_id, ActionKind.BAN)
        if local_can_ban and not is_practice:
            return DraftPhase.BANNING
        return DraftPhase.PICKING
    if "pick" in timer_phase or "planning" in timer_phase:
        return DraftPhase.PICKING
    return DraftPhase.PLANNING


def resolve_phase(session: RawChampSelectSession, is_practice: bool) -> DraftPhase:
    """Resolve the local player's draft phase.

    Rules, first match wins:
    1. Timer label "finalization".
    2. The local seat has completed a pick with a real champion.
    3. The local seat's in-progress action: ban (competitive only) or pick.
    4. Timer label: "ban"/"ban_pick" -> banning when the local seat bans in a
       competitive lobby, else picking; "pick"/"planning" -> picking.
    5. Still planning with seats on my team, or any practice lobby -> picking.
    6. Planning.

    Practice lobbies never report banning; their stray ban actions belong to
    nobody meaningful.

    Args:
        session: Raw session snapshot
        is_practice: Result of mode_detector.is_practice_mode

    Returns:
        One of the four DraftPhase values
    """
    local_cell_id = session.local_player_cell_id
    timer_phase = session.timer_phase
    phase = DraftPhase.PLANNING

    if timer_phase == FINALIZATION_TIMER_PHASE:
        return DraftPhase.FINALIZATION

    if find_completed_pick(session, local_cell_id) is not None:
        return DraftPhase.FINALIZATION

    active_action = find_active_action(session, local_cell_id)
    if active_action is not None and active_action.is_in_progress:
        if active_action.is_kind(ActionKind.BAN) and not is_practice:
            phase = DraftPhase.BANNING
        elif active_action.is_kind(ActionKind.PICK):
            phase = DraftPhase.PICKING
    elif timer_phase:
        phase = _phase_from_timer(session, timer_phase, is_practice)

    if phase == DraftPhase.PLANNING and (session.my_team or is_practice):
        phase = DraftPhase.PICKING

    return phase
