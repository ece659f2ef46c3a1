"""
Client for the external song metadata provider.

The provider exposes a single ``GET`` endpoint taking ``group`` and
``song`` query parameters and answering with a JSON object holding
``releaseDate``, ``text`` and ``link``.  Network failures, non-200
statuses and malformed bodies all surface as ``EnrichmentError`` with
the underlying exception attached; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import EnrichmentError
from ..schemas.song import EnrichmentResult

DEFAULT_TIMEOUT = 15


class EnrichmentClient:
    """Fetch release date, lyrics and link for a (group, title) pair."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Full URL of the provider's info endpoint.
            timeout: Seconds to wait for the provider before giving up.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            logger: Logger to report failures to.
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._logger = logger or logging.getLogger(__name__)

    def fetch(self, group: str, title: str) -> EnrichmentResult:
        """Query the provider for ``group`` / ``title``."""
        if not self.base_url:
            raise EnrichmentError("metadata provider URL is not configured")

        params = {"group": group, "song": title}
        try:
            self._logger.debug("Requesting enrichment from %s with %s", self.base_url, params)
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            self._logger.error("Enrichment request for %r / %r failed: %s", group, title, exc)
            raise EnrichmentError("metadata provider unreachable", cause=exc) from exc

        if response.status_code != requests.codes.ok:
            self._logger.error(
                "Enrichment provider answered %s for %r / %r", response.status_code, group, title
            )
            raise EnrichmentError(f"metadata provider returned status {response.status_code}")

        try:
            payload = response.json()
            result = EnrichmentResult.model_validate(payload)
        except (ValueError, PydanticValidationError) as exc:
            self._logger.error("Malformed enrichment payload for %r / %r: %s", group, title, exc)
            raise EnrichmentError("metadata provider returned a malformed body", cause=exc) from exc
        return result

    def close(self) -> None:
        """Release the pooled connections of the underlying session."""
        self.session.close()
