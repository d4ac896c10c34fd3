"""Champion id to name lookup."""
import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class ChampionCatalog:
    """Lookup champion display names from a Data Dragon ``champion.json``.

    The file maps champion keys to entries carrying a numeric ``key`` and a
    ``name``::

        {"data": {"Ahri": {"key": "103", "name": "Ahri"}, ...}}

    A missing or unreadable file leaves the catalog empty; every lookup then
    returns an empty name.
    """

    def __init__(self, data_path: Optional[Path] = None):
        self.data_path = data_path
        self._names: dict[int, str] = {}
        self._load_data()

    def _load_data(self):
        """Load champion names."""
        if self.data_path is None or not self.data_path.exists():
            return
        try:
            with open(self.data_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load champion data from {self.data_path}: {e}")
            return

        for entry in data.get("data", {}).values():
            try:
                champion_id = int(entry["key"])
            except (KeyError, TypeError, ValueError):
                continue
            self._names[champion_id] = entry.get("name", "")
        logger.info(f"Loaded {len(self._names)} champion names")

    @classmethod
    def from_mapping(cls, names: dict[int, str]) -> "ChampionCatalog":
        """Build a catalog from an in-memory id -> name mapping."""
        catalog = cls()
        catalog._names = dict(names)
        return catalog

    def __len__(self) -> int:
        return len(self._names)

    def get_name(self, champion_id: int) -> str:
        """Get a champion's display name, empty string when unknown or 0."""
        if champion_id <= 0:
            return ""
        return self._names.get(champion_id, "")
