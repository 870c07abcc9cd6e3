"""Music Recommendations API client.

A thin wrapper around the HTTP surface of the recommendations service,
built on ``requests``.  Every high-level method returns a tuple
``(data, error)``: on success ``error`` is ``None``; on failure ``data``
is ``None`` (or an empty list for list operations) and ``error`` is a
dictionary with ``status_code`` and ``message`` keys.  The message is
taken from FastAPI's ``detail`` field when the server provides one.

Example::

    api = RecommendationsAPI(base_url="http://localhost:8000")
    created, error = api.create("Falamansa - Xote dos Milagres", "https://youtu.be/chwyjJbcs1Y")
    if error is None:
        api.upvote(created["id"])
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class RecommendationsAPI:
    """Client for the recommendations endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Root URL of the service including any API prefix,
                e.g. ``http://localhost:8000``.
            session: Optional requests session.  A new one is created
                when omitted.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request and decode the JSON response."""
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    detail = err_json.get("detail") if isinstance(err_json, dict) else None
                    message = detail if isinstance(detail, str) else str(detail or err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    # ------------------------------------------------------------------
    # Recommendation operations
    # ------------------------------------------------------------------
    def create(self, name: str, link: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Submit a recommendation; 409 and 422 come back as errors."""
        return self._request("POST", "/recommendations", json_body={"name": name, "link": link})

    def upvote(self, recommendation_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("POST", f"/recommendations/{recommendation_id}/upvote")
        return error is None, error

    def downvote(self, recommendation_id: int) -> Tuple[bool, Optional[Error]]:
        """Downvote; succeeds even when the recommendation gets deleted."""
        _, error = self._request("POST", f"/recommendations/{recommendation_id}/downvote")
        return error is None, error

    def list_recent(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/recommendations")

    def get(self, recommendation_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/recommendations/{recommendation_id}")

    def top(self, amount: int) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/recommendations/top/{amount}")

    def random(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/recommendations/random")

    def statistics(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/statistics")
