"""OAuth credentials for the publish stage.

The token record lives in a JSON file written by the one-off OAuth setup.
Access tokens are short-lived; when the Google client refreshes one, the
merged record is written back to disk before the API call that triggered the
refresh returns, so the next run starts with a current token.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from google.oauth2.credentials import Credentials

from common.config import Config
from common.errors import MissingCredentialsError
from common.local_io import read_json, write_json_atomic

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/youtube"]
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"

RefreshListener = Callable[[Credentials], None]


class ObservableCredentials(Credentials):
    """``Credentials`` that tell registered listeners about every refresh.

    Listeners run synchronously inside ``refresh``, after the new token has
    been set and before control goes back to the HTTP layer. A listener that
    raises fails the triggering call.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._refresh_listeners: list[RefreshListener] = []

    def add_refresh_listener(self, listener: RefreshListener) -> None:
        self._refresh_listeners.append(listener)

    def refresh(self, request: Any) -> None:
        super().refresh(request)
        for listener in list(self._refresh_listeners):
            listener(self)


class CredentialStore:
    """The persisted token record (``access_token``, ``refresh_token``, ``expiry_date``...)."""

    def __init__(self, token_path: str | Path):
        self.token_path = Path(token_path)

    def exists(self) -> bool:
        return self.token_path.exists()

    def load(self) -> dict[str, Any]:
        if not self.exists():
            raise MissingCredentialsError(
                f"No tokens found at {self.token_path}. Run the YouTube OAuth setup first."
            )
        record = read_json(self.token_path)
        if not isinstance(record, dict):
            raise MissingCredentialsError(f"Token file {self.token_path} is not a JSON object")
        return record

    def save(self, record: dict[str, Any]) -> None:
        write_json_atomic(self.token_path, record)


def find_client_secrets(credentials_dir: str | Path, fallback_dir: str | Path = ".") -> Path:
    """Locate ``client_secret*.json``, first in ``credentials_dir`` then in ``fallback_dir``."""
    for directory in (Path(credentials_dir), Path(fallback_dir)):
        if not directory.is_dir():
            continue
        matches = sorted(directory.glob("client_secret*.json"))
        if matches:
            return matches[0]
    raise MissingCredentialsError(f"client_secret*.json not found in {credentials_dir}/ or {fallback_dir}/")


def load_client_config(path: str | Path) -> dict[str, Any]:
    data = read_json(Path(path))
    section = (data.get("installed") or data.get("web")) if isinstance(data, dict) else None
    if not section or "client_id" not in section or "client_secret" not in section:
        raise MissingCredentialsError(f"{path} has no installed/web client_id and client_secret")
    return section


def expiry_from_record(record: dict[str, Any]) -> Optional[datetime]:
    """Naive-UTC expiry (what google-auth expects) from ``expiry_date`` in epoch ms."""
    expiry_ms = record.get("expiry_date")
    if not expiry_ms:
        return None
    return datetime.fromtimestamp(int(expiry_ms) / 1000, tz=timezone.utc).replace(tzinfo=None)


def expiry_to_ms(expiry: Optional[datetime]) -> Optional[int]:
    if expiry is None:
        return None
    return int(expiry.replace(tzinfo=timezone.utc).timestamp() * 1000)


def merge_refreshed(record: dict[str, Any], credentials: Credentials) -> dict[str, Any]:
    """Fold a refreshed token into the stored record, keeping every other field."""
    merged = dict(record)
    merged["access_token"] = credentials.token
    expiry_ms = expiry_to_ms(credentials.expiry)
    if expiry_ms is not None:
        merged["expiry_date"] = expiry_ms
    if credentials.refresh_token:
        merged["refresh_token"] = credentials.refresh_token
    return merged


class CredentialManager:
    def __init__(
        self,
        store: CredentialStore,
        client_config: dict[str, Any],
        scopes: Sequence[str] = SCOPES,
    ):
        self.store = store
        self.client_config = client_config
        self.scopes = list(scopes)
        self.record: dict[str, Any] = {}

    @classmethod
    def from_config(cls, config: Config) -> CredentialManager:
        """Check that both the token file and client secrets exist.

        Raises:
            MissingCredentialsError: If either is missing.
        """
        store = CredentialStore(config.paths.token_path)
        if not store.exists():
            raise MissingCredentialsError(
                f"No tokens found at {store.token_path}. Run the YouTube OAuth setup first."
            )
        client_config = load_client_config(find_client_secrets(config.paths.credentials_dir))
        return cls(store, client_config)

    def credentials(self) -> ObservableCredentials:
        self.record = self.store.load()
        if not self.record.get("refresh_token") and not self.record.get("access_token"):
            raise MissingCredentialsError(f"{self.store.token_path} holds neither an access nor a refresh token")

        credentials = ObservableCredentials(
            token=self.record.get("access_token"),
            refresh_token=self.record.get("refresh_token"),
            token_uri=self.client_config.get("token_uri", DEFAULT_TOKEN_URI),
            client_id=self.client_config["client_id"],
            client_secret=self.client_config["client_secret"],
            scopes=self.scopes,
            expiry=expiry_from_record(self.record),
        )
        credentials.add_refresh_listener(self._persist_refreshed)
        return credentials

    def _persist_refreshed(self, credentials: Credentials) -> None:
        self.record = merge_refreshed(self.record, credentials)
        self.store.save(self.record)
        logger.info("Tokens refreshed and saved to %s", self.store.token_path)
