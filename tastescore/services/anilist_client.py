"""
AniList GraphQL Client
──────────────────────
Posts QueryDocuments to the AniList GraphQL endpoint and returns the decoded
JSON body.

One client (and its connection pool) is reused for every request of a run:

    with AniListClient() as client:
        payload = client.execute(build_list_query("someone", MediaKind.ANIME))
"""
import json
import logging
from typing import Any

import httpx

from tastescore.core.config import settings
from tastescore.services.query_builder import QueryDocument

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class AniListTransportError(Exception):
    """Raised when the request cannot be delivered or the response cannot be read."""


class AniListResponseError(AniListTransportError):
    """Raised when the response body is not UTF-8 encoded JSON."""


class AniListClient:
    """
    Thin synchronous wrapper around the AniList GraphQL endpoint.
    Each ``execute`` call blocks until the full body is received and parsed.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url or settings.ANILIST_GRAPHQL_URL
        self._client = httpx.Client(
            headers=JSON_HEADERS,
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )

    def __enter__(self) -> "AniListClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def execute(self, document: QueryDocument) -> dict[str, Any]:
        """
        POST *document* and return the decoded JSON object.

        GraphQL-level ``errors`` are logged but not raised; the caller decides
        whether the ``data`` that came back is usable.

        Raises:
            AniListTransportError: Connection, timeout or other network failure.
            AniListResponseError: Body is not UTF-8 JSON.
        """
        try:
            response = self._client.post(self.url, json=document.payload())
        except httpx.RequestError as exc:
            raise AniListTransportError(
                f"AniList request to {self.url} failed: {exc}"
            ) from exc

        try:
            payload = response.json()
        except UnicodeDecodeError as exc:
            raise AniListResponseError(
                f"AniList response (HTTP {response.status_code}) is not UTF-8"
            ) from exc
        except json.JSONDecodeError as exc:
            raise AniListResponseError(
                f"AniList response (HTTP {response.status_code}) is not JSON"
            ) from exc

        if isinstance(payload, dict) and payload.get("errors"):
            logger.warning(
                "AniList returned errors (HTTP %s): %s",
                response.status_code,
                payload["errors"],
            )
        return payload
