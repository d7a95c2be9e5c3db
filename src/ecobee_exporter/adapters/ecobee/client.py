"""HTTP client for the ecobee thermostat API.

Implements ThermostatSourcePort on top of a synchronous httpx.Client,
which may be shared by concurrent scrapes. Pagination is not handled:
a single page holds up to 25 thermostats.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ecobee_exporter.adapters.ecobee.errors import EcobeeAPIError
from ecobee_exporter.adapters.ecobee.tokens import DEFAULT_BASE_URL, TokenStore
from ecobee_exporter.core.thermostats import (
    Selection,
    Thermostat,
    ThermostatSummary,
    parse_status_list,
    parse_thermostat_list,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class EcobeeClient:
    """Fetches thermostats and summaries from the ecobee API.

    Args:
        tokens: Token store providing bearer tokens.
        base_url: ecobee API root.
        timeout: Per-request timeout in seconds.
        http_client: Preconfigured httpx client (e.g. with a mock transport).
    """

    def __init__(
        self,
        tokens: TokenStore,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.tokens = tokens
        self.base_url = base_url.rstrip("/")
        self._http = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def get_thermostats(self, selection: Selection) -> list[Thermostat]:
        """Fetch thermostats matching the selection."""
        body = json.dumps({"selection": selection.to_payload()})
        payload = self._get("/1/thermostat", {"format": "json", "json": body})
        return parse_thermostat_list(payload)

    def get_thermostat_summary(
        self, selection: Selection
    ) -> Mapping[str, ThermostatSummary]:
        """Fetch thermostat summaries keyed by thermostat identifier."""
        body = json.dumps({"selection": selection.to_payload()})
        payload = self._get("/1/thermostatSummary", {"json": body})
        return parse_status_list(payload)

    def _get(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        token = self.tokens.access_token()
        try:
            return self._request(path, params, token)
        except EcobeeAPIError as e:
            if not e.token_expired:
                raise
            logger.info("ecobee access token expired, retrying after refresh")
        return self._request(path, params, self.tokens.refresh(token))

    def _request(self, path: str, params: dict[str, str], token: str) -> dict[str, Any]:
        response = self._http.get(
            f"{self.base_url}{path}",
            params=params,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json;charset=UTF-8",
            },
        )
        payload = _decode(response)
        status = payload.get("status") or {}
        code = int(status.get("code", 0))
        if code != 0 or response.is_error:
            message = str(status.get("message", response.reason_phrase))
            raise EcobeeAPIError(code, message, response.status_code)
        return payload


def _decode(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON response body, raising for non-JSON error pages."""
    try:
        payload = response.json()
    except ValueError:
        response.raise_for_status()
        raise EcobeeAPIError(-1, "response is not JSON", response.status_code)
    if not isinstance(payload, dict):
        raise EcobeeAPIError(-1, "response is not a JSON object", response.status_code)
    return payload
