"""Holds the latest champ-select view and publishes changes."""

import logging
from typing import Any, Callable, Optional

from draft_better.models.view import ChampSelectView, DraftPhase
from draft_better.services.session_normalizer import normalize
from draft_better.utils.champion_catalog import ChampionCatalog
from draft_better.utils.events import EventRegistry, Subscription

logger = logging.getLogger(__name__)

ViewHandler = Callable[[ChampSelectView], None]
EndHandler = Callable[[], None]


class ChampSelectTracker:
    """Current champ-select state for consumers (UI, recommendation engine).

    Every snapshot replaces the previous view entirely; nothing is carried
    over between updates.
    """

    def __init__(self, catalog: Optional[ChampionCatalog] = None):
        self.catalog = catalog
        self._view: Optional[ChampSelectView] = None
        self._view_updated: EventRegistry[ViewHandler] = EventRegistry("view_updated")
        self._session_ended: EventRegistry[EndHandler] = EventRegistry("session_ended")

    @property
    def current_view(self) -> Optional[ChampSelectView]:
        """Last view, None outside champ select."""
        return self._view

    @property
    def current_phase(self) -> Optional[DraftPhase]:
        return self._view.phase if self._view else None

    @property
    def in_champ_select(self) -> bool:
        return self._view is not None

    def on_view_updated(self, handler: ViewHandler) -> Subscription:
        return self._view_updated.subscribe(handler)

    def on_session_ended(self, handler: EndHandler) -> Subscription:
        return self._session_ended.subscribe(handler)

    def apply_snapshot(self, payload: Any) -> ChampSelectView:
        """Normalize a snapshot, store it and notify observers."""
        previous_phase = self.current_phase
        view = normalize(payload, self.catalog)
        self._view = view
        if view.phase != previous_phase:
            logger.info(f"Champ select phase: {previous_phase.value if previous_phase else None} -> {view.phase.value}")
        self._view_updated.emit(view)
        return view

    def end_session(self) -> None:
        """Discard the current view after the lobby closed."""
        if self._view is not None:
            logger.info("Champ select session ended")
        self._view = None
        self._session_ended.emit()

    def clear_subscriptions(self) -> None:
        self._view_updated.clear()
        self._session_ended.clear()
