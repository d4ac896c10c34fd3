"""Tests for action matrix lookups."""

from draft_better.models.session import ActionKind, RawChampSelectSession
from draft_better.services.action_index import (
    find_active_action,
    find_completed_pick,
    find_current_action,
    has_any_ban_action,
    picks_by_cell,
    seat_has_action_kind,
)

from factories import action, session


def _parse(payload):
    return RawChampSelectSession.from_payload(payload)


class TestFindCurrentAction:
    def test_prefers_in_progress_over_earlier_uncompleted(self):
        """An in-progress action wins even when an uncompleted one comes first."""
        snapshot = _parse(session(actions=[
            [action(1, 3, "pick")],
            [action(2, 3, "pick", in_progress=True)],
        ]))
        assert find_current_action(snapshot, 3, ActionKind.PICK) == 2

    def test_falls_back_to_first_uncompleted(self):
        """Without an in-progress action, the first uncompleted one is used."""
        snapshot = _parse(session(actions=[
            [action(1, 3, "pick", completed=True)],
            [action(2, 3, "pick"), action(3, 3, "pick")],
        ]))
        assert find_current_action(snapshot, 3, ActionKind.PICK) == 2

    def test_kind_and_seat_must_match(self):
        """Actions of another kind or another seat are skipped."""
        snapshot = _parse(session(actions=[
            [action(1, 3, "ban", in_progress=True), action(2, 4, "pick", in_progress=True)],
        ]))
        assert find_current_action(snapshot, 3, ActionKind.PICK) is None
        assert find_current_action(snapshot, 3, ActionKind.BAN) == 1

    def test_completed_only_returns_none(self):
        snapshot = _parse(session(actions=[[action(1, 3, "pick", 99, completed=True)]]))
        assert find_current_action(snapshot, 3, ActionKind.PICK) is None

    def test_unknown_cell_returns_none(self):
        snapshot = _parse(session(actions=[[action(1, 3, "pick", in_progress=True)]]))
        assert find_current_action(snapshot, None, ActionKind.PICK) is None


def test_find_active_action_any_kind():
    """The active action may be a pick or a ban."""
    snapshot = _parse(session(actions=[
        [action(1, 3, "ban", completed=True)],
        [action(2, 3, "pick")],
    ]))
    active = find_active_action(snapshot, 3)
    assert active.id == 2
    assert active.is_in_progress is False


def test_find_completed_pick_requires_real_champion():
    """A completed pick with champion 0 does not count."""
    snapshot = _parse(session(actions=[[action(1, 3, "pick", 0, completed=True)]]))
    assert find_completed_pick(snapshot, 3) is None

    snapshot = _parse(session(actions=[[action(1, 3, "pick", 157, completed=True)]]))
    assert find_completed_pick(snapshot, 3).champion_id == 157


def test_ban_detection():
    """Ban presence is lobby-wide; seat ownership is per cell."""
    snapshot = _parse(session(actions=[[action(1, 7, "ban")], [action(2, 3, "pick")]]))
    assert has_any_ban_action(snapshot) is True
    assert seat_has_action_kind(snapshot, 7, ActionKind.BAN) is True
    assert seat_has_action_kind(snapshot, 3, ActionKind.BAN) is False
    assert has_any_ban_action(_parse(session(actions=[[action(1, 3, "pick")]]))) is False


def test_picks_by_cell_skips_empty_and_keeps_last():
    snapshot = _parse(session(actions=[
        [action(1, 3, "pick", 0), action(2, 4, "pick", 64)],
        [action(3, 4, "pick", 157), action(4, 5, "ban", 22)],
    ]))
    assert picks_by_cell(snapshot) == {4: 157}


def test_missing_or_null_rounds_are_empty():
    """A null actions field or null round yields no actions."""
    assert find_active_action(_parse({"actions": None, "localPlayerCellId": 1}), 1) is None
    assert find_active_action(_parse({"actions": [None], "localPlayerCellId": 1}), 1) is None
