"""REST client for the hosted backend's PostgREST endpoint.

Usage example:
    from collab_engine.infrastructure.io.http import build_rest_client

    client = build_rest_client(
        base_url="https://project.supabase.co",
        api_key="service-role-or-anon-key",
        timeout_seconds=15.0,
    )
    rows = client.select("users", {"id": "eq.user-1", "select": "*"})

Requests are made once. A failure is reported as ``DataAccessError`` (or
``AuthenticationError`` for 401/403) and never retried here.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import override

import requests

from ...exceptions import AuthenticationError, DataAccessError
from ...observability import get_logger
from ...protocols import RestClient
from .validation import IncomingDataError, validate_json_as

logger = get_logger("collab_engine.infrastructure.http")

_REST_PATH = "/rest/v1"


def build_rest_client(
    *,
    base_url: str,
    api_key: str,
    timeout_seconds: float,
) -> RequestsRestClient:
    session = requests.Session()
    session.headers.update(
        {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
    )
    return RequestsRestClient(
        base_url=base_url,
        session=session,
        timeout_seconds=timeout_seconds,
    )


def _response_details(response: requests.Response) -> str:
    """Return a compact status/body summary for error reporting."""
    try:
        body = response.text
    except (UnicodeDecodeError, ValueError, requests.RequestException):
        body = "<unreadable>"
    body = " ".join(body.split())
    if len(body) > 300:
        body = body[:300] + "..."
    return f"status={response.status_code}, body={body}"


def _check_status(response: requests.Response, operation: str) -> None:
    if response.status_code in (401, 403):
        raise AuthenticationError(operation, response.status_code, _response_details(response))
    if response.status_code >= 400:
        raise DataAccessError(operation, _response_details(response))


class RequestsRestClient(RestClient):
    """Requests-backed PostgREST client."""

    def __init__(
        self,
        *,
        base_url: str,
        session: requests.Session | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds

    def _table_url(self, table: str) -> str:
        return f"{self.base_url}{_REST_PATH}/{table}"

    @override
    def select(self, table: str, params: Mapping[str, str]) -> list[dict[str, object]]:
        """Fetch rows from a table.

        Raises:
            AuthenticationError: If the backend returns 401 or 403.
            DataAccessError: For other HTTP errors, network failures, or a body
                that is not a JSON array of objects.
        """
        operation = f"select {table}"
        logger.debug("GET %s params=%s", table, dict(params))
        try:
            response = self.session.get(
                self._table_url(table),
                params=dict(params),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise DataAccessError(operation, str(exc)) from exc

        _check_status(response, operation)
        try:
            return validate_json_as(list[dict[str, object]], response.text)
        except IncomingDataError as exc:
            raise DataAccessError(operation, "expected a JSON array of rows") from exc

    @override
    def update(
        self,
        table: str,
        params: Mapping[str, str],
        payload: Mapping[str, object],
    ) -> None:
        """Patch matching rows.

        Raises:
            AuthenticationError: If the backend returns 401 or 403.
            DataAccessError: For other HTTP errors or network failures.
        """
        operation = f"update {table}"
        logger.debug("PATCH %s params=%s", table, dict(params))
        try:
            response = self.session.patch(
                self._table_url(table),
                params=dict(params),
                json=dict(payload),
                headers={"Prefer": "return=minimal"},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise DataAccessError(operation, str(exc)) from exc

        _check_status(response, operation)
