"""OAuth token cache for the ecobee API.

ecobee rotates the refresh token on every refresh, so the latest pair is
written back to a JSON cache file to survive restarts.
"""

import json
import logging
import os
import threading
import time
from dataclasses import asdict, dataclass
from pathlib import Path

import httpx

from ecobee_exporter.adapters.ecobee.errors import EcobeeAuthError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.ecobee.com"

# Refresh slightly before the access token actually expires
EXPIRY_MARGIN_SECONDS = 60.0


@dataclass(frozen=True)
class Tokens:
    """An access/refresh token pair.

    Attributes:
        access_token: Bearer token for API calls. Empty when unknown.
        refresh_token: Token exchanged for a new pair.
        expires_at: Unix timestamp after which access_token is stale.
    """

    access_token: str = ""
    refresh_token: str = ""
    expires_at: float = 0.0

    def is_fresh(self, now: float) -> bool:
        return bool(self.access_token) and now < self.expires_at - EXPIRY_MARGIN_SECONDS


class TokenStore:
    """Thread-safe holder of the current tokens, backed by a cache file.

    Args:
        path: JSON cache file. Created on first refresh.
        api_key: ecobee application key (client_id).
        refresh_token: Seed refresh token used when the cache has none.
        base_url: ecobee API root.
        http_client: Client used for the token endpoint.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        api_key: str,
        refresh_token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.path = Path(path)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._http = http_client or httpx.Client()
        self._lock = threading.Lock()
        self._tokens = self._load()
        if refresh_token and not self._tokens.refresh_token:
            self._tokens = Tokens(refresh_token=refresh_token)

    def _load(self) -> Tokens:
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            return Tokens()
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable token cache %s: %s", self.path, e)
            return Tokens()
        return Tokens(
            access_token=str(data.get("access_token", "")),
            refresh_token=str(data.get("refresh_token", "")),
            expires_at=float(data.get("expires_at", 0.0)),
        )

    def _save(self, tokens: Tokens) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(asdict(tokens)))
        os.chmod(tmp, 0o600)
        tmp.replace(self.path)

    @property
    def tokens(self) -> Tokens:
        return self._tokens

    def access_token(self) -> str:
        """Return a fresh access token, refreshing it if needed.

        Raises:
            EcobeeAuthError: If no refresh token is available or the
                refresh is rejected.
        """
        with self._lock:
            if self._tokens.is_fresh(time.time()):
                return self._tokens.access_token
            return self._refresh_locked()

    def refresh(self, stale_token: str) -> str:
        """Force a refresh unless another thread already replaced stale_token."""
        with self._lock:
            if self._tokens.access_token and self._tokens.access_token != stale_token:
                return self._tokens.access_token
            return self._refresh_locked()

    def _refresh_locked(self) -> str:
        if not self._tokens.refresh_token:
            raise EcobeeAuthError(
                "no refresh token available; authorize the app and set "
                "ECOBEE_REFRESH_TOKEN"
            )
        logger.info("refreshing ecobee access token")
        response = self._http.post(
            f"{self.base_url}/token",
            params={
                "grant_type": "refresh_token",
                "refresh_token": self._tokens.refresh_token,
                "client_id": self.api_key,
            },
        )
        if response.status_code != httpx.codes.OK:
            raise EcobeeAuthError(
                f"token refresh failed with HTTP {response.status_code}: "
                f"{response.text}"
            )
        data = response.json()
        try:
            tokens = Tokens(
                access_token=data["access_token"],
                refresh_token=data.get("refresh_token", self._tokens.refresh_token),
                expires_at=time.time() + float(data.get("expires_in", 3600)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise EcobeeAuthError(f"malformed token response: {e}") from e
        self._tokens = tokens
        try:
            self._save(tokens)
        except OSError as e:
            logger.error("writing token cache %s failed: %s", self.path, e)
        return tokens.access_token
