"""Lookups over a session's action matrix.

The action matrix is the ground truth for turn order: an ordered list of
rounds, each an ordered list of actions. Every scan walks rounds first,
then actions within a round.
"""

from typing import Iterator, Optional

from draft_better.models.session import ActionKind, RawAction, RawChampSelectSession


def iter_actions(session: RawChampSelectSession) -> Iterator[RawAction]:
    """Yield every action in round-then-within-round order."""
    for round_ in session.actions:
        yield from round_


def find_current_action(
    session: RawChampSelectSession,
    cell_id: Optional[int],
    kind: ActionKind,
) -> Optional[int]:
    """Find the action a seat should act on next.

    The client sometimes leaves ``isInProgress`` unset for a moment while a
    pick is already selectable, so a second pass accepts any uncompleted
    action of the right kind.

    Args:
        session: Raw session snapshot
        cell_id: Seat to search for
        kind: Pick or ban

    Returns:
        The action id, or None if the seat has nothing left of this kind
    """
    if cell_id is None:
        return None

    for action in iter_actions(session):
        if (
            action.actor_cell_id == cell_id
            and action.is_kind(kind)
            and action.is_in_progress
            and not action.completed
        ):
            return action.id

    for action in iter_actions(session):
        if action.actor_cell_id == cell_id and action.is_kind(kind) and not action.completed:
            return action.id

    return None


def find_active_action(
    session: RawChampSelectSession,
    cell_id: Optional[int],
) -> Optional[RawAction]:
    """Find a seat's current action of any kind, in-progress ones first."""
    if cell_id is None:
        return None

    for action in iter_actions(session):
        if action.actor_cell_id == cell_id and action.is_in_progress and not action.completed:
            return action

    for action in iter_actions(session):
        if action.actor_cell_id == cell_id and not action.completed:
            return action

    return None


def find_completed_pick(session: RawChampSelectSession, cell_id: Optional[int]) -> Optional[RawAction]:
    """Find a seat's completed pick with a real champion, if any."""
    if cell_id is None:
        return None
    for action in iter_actions(session):
        if (
            action.actor_cell_id == cell_id
            and action.is_kind(ActionKind.PICK)
            and action.completed
            and action.champion_id > 0
        ):
            return action
    return None


def has_any_ban_action(session: RawChampSelectSession) -> bool:
    """Whether any seat in the lobby has a ban action."""
    return any(action.is_kind(ActionKind.BAN) for action in iter_actions(session))


def seat_has_action_kind(
    session: RawChampSelectSession,
    cell_id: Optional[int],
    kind: ActionKind,
) -> bool:
    """Whether a seat owns at least one action of the given kind (completed or not)."""
    if cell_id is None:
        return False
    return any(
        action.actor_cell_id == cell_id and action.is_kind(kind)
        for action in iter_actions(session)
    )


def picks_by_cell(session: RawChampSelectSession) -> dict[int, int]:
    """Map cell id -> champion id from pick actions that name a champion.

    Later actions in the matrix overwrite earlier ones for the same cell.
    """
    result: dict[int, int] = {}
    for action in iter_actions(session):
        if action.is_kind(ActionKind.PICK) and action.champion_id > 0:
            result[action.actor_cell_id] = action.champion_id
    return result
