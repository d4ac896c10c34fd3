"""Business logic services."""

from draft_better.services.session_normalizer import normalize
from draft_better.services.champ_select_tracker import ChampSelectTracker
from draft_better.services.lcu_client import (
    CredentialsNotFoundError,
    LcuClient,
    LcuCredentials,
    load_credentials,
)
from draft_better.services.session_feed import LcuSessionFeed, SessionFeed
from draft_better.services.connection_supervisor import ConnectionSupervisor

__all__ = [
    "normalize",
    "ChampSelectTracker",
    "CredentialsNotFoundError",
    "LcuClient",
    "LcuCredentials",
    "load_credentials",
    "LcuSessionFeed",
    "SessionFeed",
    "ConnectionSupervisor",
]
