"""Tests for the champ select tracker and its observer registry."""

from draft_better.models.view import DraftPhase
from draft_better.services.champ_select_tracker import ChampSelectTracker
from draft_better.utils.champion_catalog import ChampionCatalog
from draft_better.utils.events import EventRegistry

from factories import ranked_session, seat, session


class TestEventRegistry:
    def test_unsubscribe_is_idempotent(self):
        registry = EventRegistry("test")
        calls = []
        subscription = registry.subscribe(calls.append)

        subscription.unsubscribe()
        subscription.unsubscribe()

        registry.emit(1)
        assert calls == []
        assert subscription.active is False
        assert len(registry) == 0

    def test_unsubscribe_after_clear(self):
        registry = EventRegistry("test")
        subscription = registry.subscribe(lambda: None)
        registry.clear()
        subscription.unsubscribe()
        assert len(registry) == 0

    def test_failing_handler_does_not_stop_others(self):
        registry = EventRegistry("test")
        calls = []

        def broken(value):
            raise RuntimeError("boom")

        registry.subscribe(broken)
        registry.subscribe(calls.append)
        registry.emit("x")

        assert calls == ["x"]

    def test_handler_may_unsubscribe_during_emit(self):
        registry = EventRegistry("test")
        calls = []
        holder = {}

        def once(value):
            calls.append(value)
            holder["sub"].unsubscribe()

        holder["sub"] = registry.subscribe(once)
        registry.emit(1)
        registry.emit(2)
        assert calls == [1]


class TestChampSelectTracker:
    def test_initially_outside_champ_select(self):
        tracker = ChampSelectTracker()
        assert tracker.current_view is None
        assert tracker.current_phase is None
        assert tracker.in_champ_select is False

    def test_apply_snapshot_stores_and_notifies(self):
        tracker = ChampSelectTracker()
        views = []
        tracker.on_view_updated(views.append)

        view = tracker.apply_snapshot(ranked_session())

        assert tracker.current_view is view
        assert tracker.current_phase == DraftPhase.BANNING
        assert tracker.in_champ_select is True
        assert views == [view]

    def test_every_snapshot_replaces_view(self):
        """Nothing carries over from the previous snapshot."""
        tracker = ChampSelectTracker()
        tracker.apply_snapshot(session(local_cell_id=0, my_team=[seat(0, pick_intent=157)]))
        assert tracker.current_view.user_pick_intent is not None

        tracker.apply_snapshot(session(local_cell_id=0, my_team=[seat(0)]))
        assert tracker.current_view.user_pick_intent is None

    def test_end_session_clears_and_notifies(self):
        tracker = ChampSelectTracker()
        ended = []
        tracker.on_session_ended(lambda: ended.append(True))
        tracker.apply_snapshot(ranked_session())

        tracker.end_session()

        assert tracker.current_view is None
        assert tracker.current_phase is None
        assert ended == [True]

    def test_unsubscribed_handler_not_called(self):
        tracker = ChampSelectTracker()
        views = []
        subscription = tracker.on_view_updated(views.append)
        subscription.unsubscribe()

        tracker.apply_snapshot(ranked_session())
        assert views == []

    def test_clear_subscriptions(self):
        tracker = ChampSelectTracker()
        views = []
        subscription = tracker.on_view_updated(views.append)
        tracker.clear_subscriptions()
        subscription.unsubscribe()

        tracker.apply_snapshot(ranked_session())
        assert views == []

    def test_catalog_names_intents(self):
        tracker = ChampSelectTracker(ChampionCatalog.from_mapping({157: "Yasuo"}))
        view = tracker.apply_snapshot(session(local_cell_id=0, my_team=[seat(0, pick_intent=157)]))
        assert view.user_pick_intent.champion_name == "Yasuo"
