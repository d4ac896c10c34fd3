"""Competitive vs practice lobby detection."""

import logging

from draft_better.models.session import RawChampSelectSession

logger = logging.getLogger(__name__)


def is_practice_mode(session: RawChampSelectSession, game_has_any_ban_action: bool) -> bool:
    """Decide whether a lobby is a practice/sandbox lobby.

    Rules, first match wins:
    1. No ban action anywhere in the matrix. Ranked and normal drafts always
       carry ban rounds, even when the local seat has none.
    2. A single seat on my team and no enemy team.
    3. The local seat has no assigned position and there is no enemy team.
       A real lobby whose positions have not propagated yet can land here too.
    4. Otherwise competitive.

    Args:
        session: Raw session snapshot
        game_has_any_ban_action: Result of action_index.has_any_ban_action

    Returns:
        True for practice mode
    """
    if not game_has_any_ban_action:
        logger.debug("Practice mode: no ban actions in game")
        return True

    no_enemies = len(session.their_team) == 0

    if len(session.my_team) == 1 and no_enemies:
        logger.debug("Practice mode: single player, no enemy team")
        return True

    local_seat = session.local_seat
    if local_seat is not None and not local_seat.assigned_position and no_enemies:
        logger.debug("Practice mode: no assigned position, no enemy team")
        return True

    return False
