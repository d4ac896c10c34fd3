"""Tests for practice vs competitive lobby detection."""

from draft_better.models.session import RawChampSelectSession
from draft_better.services.action_index import has_any_ban_action
from draft_better.services.mode_detector import is_practice_mode

from factories import action, ranked_session, seat, session


def _detect(payload):
    snapshot = RawChampSelectSession.from_payload(payload)
    return is_practice_mode(snapshot, has_any_ban_action(snapshot))


def test_ranked_lobby_is_competitive():
    assert _detect(ranked_session()) is False


def test_no_ban_actions_is_practice():
    """A full 5v5 without a single ban round is still practice."""
    payload = ranked_session(actions=[[action(20 + c, c, "pick") for c in range(10)]])
    assert _detect(payload) is True


def test_competitive_when_only_enemy_seats_ban():
    """Bans anywhere in the lobby count, even if the local seat has none."""
    payload = ranked_session(actions=[
        [action(1, 7, "ban")],
        [action(20 + c, c, "pick") for c in range(10)],
    ])
    assert _detect(payload) is False


def test_single_seat_without_enemies_is_practice():
    """Practice tool: one seat, no enemy team, even with a stray ban action."""
    payload = session(
        local_cell_id=0,
        my_team=[seat(0, position="middle")],
        actions=[[action(1, 0, "ban")], [action(2, 0, "pick")]],
    )
    assert _detect(payload) is True


def test_single_seat_with_enemies_is_competitive():
    payload = session(
        local_cell_id=0,
        my_team=[seat(0, position="middle")],
        their_team=[seat(5)],
        actions=[[action(1, 0, "ban")]],
    )
    assert _detect(payload) is False


def test_unassigned_local_seat_without_enemies_is_practice():
    """Five seats with bans but no positions and no enemy team.

    A real lobby whose positions and enemy team have not propagated yet is
    indistinguishable from this and is also classified as practice.
    """
    payload = session(
        local_cell_id=2,
        my_team=[seat(c) for c in range(5)],
        actions=[[action(c + 1, c, "ban") for c in range(5)]],
    )
    assert _detect(payload) is True


def test_unassigned_local_seat_with_enemies_is_competitive():
    """Blind pick style lobby: no positions but a visible enemy team."""
    payload = session(
        local_cell_id=2,
        my_team=[seat(c) for c in range(5)],
        their_team=[seat(c) for c in range(5, 10)],
        actions=[[action(c + 1, c, "ban") for c in range(10)]],
    )
    assert _detect(payload) is False
