"""Request/response client for the local League client API (LCU).

The client is expected to be absent most of the time, so read calls resolve
to None instead of raising, and every request carries a short timeout.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import httpx

from draft_better.models.client import (
    NOT_CONNECTED,
    ActionResult,
    ActiveGame,
    GameflowPhase,
    RunePage,
    SummonerInfo,
)
from draft_better.models.session import ActionKind, RawChampSelectSession
from draft_better.services.action_index import find_current_action

logger = logging.getLogger(__name__)

SESSION_ENDPOINT = "/lol-champ-select/v1/session"
GAMEFLOW_PHASE_ENDPOINT = "/lol-gameflow/v1/gameflow-phase"
GAMEFLOW_SESSION_ENDPOINT = "/lol-gameflow/v1/session"
CURRENT_SUMMONER_ENDPOINT = "/lol-summoner/v1/current-summoner"
MY_SELECTION_ENDPOINT = "/lol-champ-select/v1/session/my-selection"
RUNE_PAGES_ENDPOINT = "/lol-perks/v1/pages"
CURRENT_RUNE_PAGE_ENDPOINT = "/lol-perks/v1/currentpage"

# Name of the page this app manages; set_rune_page replaces it in place
DEFAULT_RUNE_PAGE_NAME = "DraftBetter"

DEFAULT_LOCKFILE_PATHS = {
    "win32": [Path("C:/Riot Games/League of Legends/lockfile")],
    "darwin": [Path("/Applications/League of Legends.app/Contents/LoL/lockfile")],
}


class CredentialsNotFoundError(Exception):
    """The client's lockfile is missing or unreadable (client not running)."""


class NotConnectedError(httpx.TransportError):
    """A request was attempted without client credentials."""


@dataclass(frozen=True)
class LcuCredentials:
    """Connection details published by the client in its lockfile."""

    port: int
    password: str
    protocol: str = "https"
    pid: Optional[int] = None

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://127.0.0.1:{self.port}"

    @property
    def websocket_url(self) -> str:
        scheme = "wss" if self.protocol == "https" else "ws"
        return f"{scheme}://127.0.0.1:{self.port}/"

    @classmethod
    def from_lockfile_text(cls, text: str) -> "LcuCredentials":
        """Parse ``name:pid:port:password:protocol``.

        Raises:
            CredentialsNotFoundError: If the text is not a lockfile
        """
        parts = text.strip().split(":")
        if len(parts) < 5:
            raise CredentialsNotFoundError("Lockfile is incomplete")
        try:
            pid = int(parts[1])
            port = int(parts[2])
        except ValueError as e:
            raise CredentialsNotFoundError(f"Lockfile is malformed: {e}") from e
        return cls(port=port, password=parts[3], protocol=parts[4], pid=pid)


def load_credentials(lockfile_path: str = "") -> LcuCredentials:
    """Read credentials from the configured or default lockfile location.

    Args:
        lockfile_path: Explicit lockfile path; empty to search install defaults

    Returns:
        Parsed credentials

    Raises:
        CredentialsNotFoundError: If no lockfile could be read
    """
    if lockfile_path:
        candidates = [Path(lockfile_path)]
    else:
        candidates = DEFAULT_LOCKFILE_PATHS.get(sys.platform, [])

    for path in candidates:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError:
            continue
        return LcuCredentials.from_lockfile_text(text)

    raise CredentialsNotFoundError("League client lockfile not found")


class LcuClient:
    """Async HTTP client bound to the credentials of a running client."""

    def __init__(
        self,
        timeout: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.timeout = timeout
        self.credentials: Optional[LcuCredentials] = None
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_connected(self) -> bool:
        return self.credentials is not None

    async def connect(self, credentials: LcuCredentials) -> None:
        """Bind to a client instance, dropping any previous HTTP session."""
        await self.close()
        self.credentials = credentials

    async def disconnect(self) -> None:
        await self.close()
        self.credentials = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.credentials.base_url,
                auth=("riot", self.credentials.password),
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                verify=False,  # Self-signed certificate
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(self, method: str, endpoint: str, body: Any = None) -> Any:
        """Send a request and decode the response.

        Raises:
            httpx.HTTPError: On transport errors, timeouts and non-2xx status
            NotConnectedError: If not connected (an httpx.TransportError)
        """
        if self.credentials is None:
            raise NotConnectedError("Not connected to League client")

        client = await self._get_client()
        response = await client.request(method, endpoint, json=body)
        response.raise_for_status()
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def _get_json(self, endpoint: str) -> Any:
        """GET that resolves to None when the client is absent or errors."""
        if self.credentials is None:
            return None
        try:
            return await self.request("GET", endpoint)
        except httpx.HTTPError as e:
            logger.debug(f"GET {endpoint} failed: {e}")
            return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_session(self) -> Optional[dict]:
        """Current champ-select session payload, None outside champ select."""
        data = await self._get_json(SESSION_ENDPOINT)
        return data if isinstance(data, dict) else None

    async def get_gameflow_phase(self) -> Optional[GameflowPhase]:
        return GameflowPhase.parse(await self._get_json(GAMEFLOW_PHASE_ENDPOINT))

    async def get_active_game(self) -> Optional[ActiveGame]:
        data = await self._get_json(GAMEFLOW_SESSION_ENDPOINT)
        if not isinstance(data, dict) or not data.get("gameData"):
            return None
        game = data["gameData"]
        return ActiveGame(
            game_id=game.get("gameId", 0),
            game_mode=game.get("gameMode") or "",
            game_type=game.get("gameType") or "",
            map_id=game.get("mapId", 0) or 0,
            team_one=game.get("teamOne") or [],
            team_two=game.get("teamTwo") or [],
            game_start_time=game.get("gameStartTime", 0) or 0,
            game_length=game.get("gameLength", 0) or 0,
        )

    async def get_current_summoner(self) -> Optional[SummonerInfo]:
        data = await self._get_json(CURRENT_SUMMONER_ENDPOINT)
        if not isinstance(data, dict):
            return None
        return SummonerInfo(
            puuid=data.get("puuid", ""),
            summoner_id=data.get("summonerId", 0),
            display_name=data.get("displayName") or data.get("gameName", ""),
            game_name=data.get("gameName", ""),
            tag_line=data.get("tagLine", ""),
            profile_icon_id=data.get("profileIconId", 0),
            summoner_level=data.get("summonerLevel", 0),
        )

    # ------------------------------------------------------------------
    # Champ select actions
    # ------------------------------------------------------------------

    async def _find_local_action(self, kind: ActionKind) -> Optional[int]:
        session = RawChampSelectSession.from_payload(await self.request("GET", SESSION_ENDPOINT))
        if session.local_player_cell_id is None:
            return None
        return find_current_action(session, session.local_player_cell_id, kind)

    async def apply_champion_action(
        self,
        kind: ActionKind,
        champion_id: int,
        complete: bool,
    ) -> ActionResult:
        """Select (and optionally complete) the local player's current action.

        With ``complete`` the champion is selected and locked in one PATCH.
        Some client builds reject that; the fallback selects with a PATCH and
        completes with a separate POST, once. No further retries.

        Args:
            kind: Pick or ban
            champion_id: Champion to select
            complete: Lock the selection in

        Returns:
            ActionResult with the failure reason if it did not go through
        """
        if self.credentials is None:
            return ActionResult.failed(NOT_CONNECTED)

        try:
            action_id = await self._find_local_action(kind)
        except httpx.HTTPError as e:
            logger.error(f"Could not read champ select session for {kind.value}: {e}")
            return ActionResult.failed(f"session unavailable: {e}")

        if action_id is None:
            logger.info(f"No {kind.value} action available for champion {champion_id}")
            return ActionResult.failed(f"no {kind.value} action available")

        body: dict[str, Any] = {"championId": champion_id}
        if complete:
            body["completed"] = True

        try:
            await self.request("PATCH", f"{SESSION_ENDPOINT}/actions/{action_id}", body)
            logger.info(f"{kind.value} action {action_id}: champion {champion_id} (complete={complete})")
            return ActionResult.ok()
        except httpx.HTTPError as e:
            if not complete:
                logger.error(f"Hover of champion {champion_id} failed: {e}")
                return ActionResult.failed(str(e))
            logger.warning(f"Combined {kind.value} rejected, trying two-step method: {e}")

        try:
            action_id = await self._find_local_action(kind)
            if action_id is None:
                return ActionResult.failed(f"no {kind.value} action available")
            await self.request("PATCH", f"{SESSION_ENDPOINT}/actions/{action_id}", {"championId": champion_id})
            await self.request("POST", f"{SESSION_ENDPOINT}/actions/{action_id}/complete")
        except httpx.HTTPError as e:
            logger.error(f"Two-step {kind.value} of champion {champion_id} also failed: {e}")
            return ActionResult.failed(str(e))

        logger.info(f"Two-step {kind.value} succeeded for champion {champion_id}")
        return ActionResult.ok()

    async def hover_champion(self, champion_id: int) -> ActionResult:
        return await self.apply_champion_action(ActionKind.PICK, champion_id, complete=False)

    async def lock_in_champion(self, champion_id: int) -> ActionResult:
        return await self.apply_champion_action(ActionKind.PICK, champion_id, complete=True)

    async def ban_champion(self, champion_id: int) -> ActionResult:
        return await self.apply_champion_action(ActionKind.BAN, champion_id, complete=True)

    async def set_summoner_spells(self, spell1_id: int, spell2_id: int) -> ActionResult:
        if self.credentials is None:
            return ActionResult.failed(NOT_CONNECTED)
        try:
            await self.request("PATCH", MY_SELECTION_ENDPOINT, {"spell1Id": spell1_id, "spell2Id": spell2_id})
        except httpx.HTTPError as e:
            logger.error(f"Failed to set summoner spells: {e}")
            return ActionResult.failed(str(e))
        logger.info(f"Summoner spells set: {spell1_id}, {spell2_id}")
        return ActionResult.ok()

    # ------------------------------------------------------------------
    # Rune pages
    # ------------------------------------------------------------------

    async def get_rune_pages(self) -> list[RunePage]:
        """All rune pages, empty when the client is absent."""
        data = await self._get_json(RUNE_PAGES_ENDPOINT)
        if not isinstance(data, list):
            return []
        return [RunePage.from_payload(page) for page in data if isinstance(page, dict)]

    async def get_current_rune_page(self) -> Optional[RunePage]:
        data = await self._get_json(CURRENT_RUNE_PAGE_ENDPOINT)
        return RunePage.from_payload(data) if isinstance(data, dict) else None

    async def set_rune_page(
        self,
        primary_style_id: int,
        sub_style_id: int,
        selected_perk_ids: list[int],
        name: str = DEFAULT_RUNE_PAGE_NAME,
    ) -> ActionResult:
        """Create a rune page and make it current.

        An existing page with the same name is deleted first, so repeated
        calls keep a single managed page instead of filling the page slots.

        Args:
            primary_style_id: Primary rune tree
            sub_style_id: Secondary rune tree
            selected_perk_ids: Keystone, runes and shards in client order
            name: Page name

        Returns:
            ActionResult with the failure reason if any request failed
        """
        if self.credentials is None:
            return ActionResult.failed(NOT_CONNECTED)

        page = {
            "name": name,
            "primaryStyleId": primary_style_id,
            "subStyleId": sub_style_id,
            "selectedPerkIds": list(selected_perk_ids),
            "current": True,
        }
        try:
            pages = await self.request("GET", RUNE_PAGES_ENDPOINT)
            for existing in pages if isinstance(pages, list) else []:
                if isinstance(existing, dict) and existing.get("name") == name and existing.get("id"):
                    await self.request("DELETE", f"{RUNE_PAGES_ENDPOINT}/{existing['id']}")
                    break
            await self.request("POST", RUNE_PAGES_ENDPOINT, page)
        except httpx.HTTPError as e:
            logger.error(f"Failed to set rune page '{name}': {e}")
            return ActionResult.failed(str(e))

        logger.info(f"Rune page '{name}' set")
        return ActionResult.ok()

    async def delete_rune_page(self, page_id: int) -> ActionResult:
        if self.credentials is None:
            return ActionResult.failed(NOT_CONNECTED)
        try:
            await self.request("DELETE", f"{RUNE_PAGES_ENDPOINT}/{page_id}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to delete rune page {page_id}: {e}")
            return ActionResult.failed(str(e))
        return ActionResult.ok()
