"""Blog Service API client.

A thin wrapper around the HTTP surface of the Blog Service.  Every
service operation has one method here:

* :meth:`create_profile` / :meth:`get_profile` / :meth:`update_bio`
* :meth:`create_post` / :meth:`get_post` / :meth:`get_all_posts` /
  :meth:`get_user_posts`
* :meth:`rate_post` / :meth:`get_post_ratings` /
  :meth:`get_aggregated_rating`

Lookups that the service answers with "absent" come back as ``None``.
Any other failure raises :class:`BlogAPIError` carrying the HTTP status
and the server's ``detail`` message.

Write operations need a bearer token identifying the caller (see
``create_token.py``); pass it as ``token=...``.  The client uses the
``requests`` library; any object with a compatible ``request`` method
can be supplied as ``session``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class BlogAPIError(Exception):
    """Raised when the service rejects a request or cannot be reached.

    Attributes:
        status_code: HTTP status, or ``None`` for transport failures.
        detail: Message reported by the server.
    """

    def __init__(self, status_code: Optional[int], detail: str) -> None:
        super().__init__(f"{status_code}: {detail}" if status_code else detail)
        self.status_code = status_code
        self.detail = detail


class BlogAPI:
    """Client for interacting with the Blog Service API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[Any] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8000``.
            token: Optional bearer token.  Required for write operations.
            session: Optional HTTP session.  A ``requests.Session`` is
                created when omitted.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any | None = None,
        allow_missing: bool = False,
    ) -> Any:
        """Perform an HTTP request and return the decoded JSON body.

        Returns ``None`` for empty responses, and for 404 responses when
        ``allow_missing`` is set.
        """
        url = f"{self.base_url}{API_PREFIX}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        logger.debug("Sending %s request to %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            raise BlogAPIError(None, str(exc)) from exc

        if response.status_code == 404 and allow_missing:
            return None
        if response.status_code >= 400:
            detail = self._error_detail(response)
            logger.error("API request failed (%s): %s", response.status_code, detail)
            raise BlogAPIError(response.status_code, detail)
        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_detail(response: Any) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and body.get("detail"):
            return str(body["detail"])
        return str(body)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------
    def create_profile(self, username: str, bio: str = "") -> Dict[str, Any]:
        """Create the caller's profile and return it."""
        return self._request("POST", "/profiles", json_body={"username": username, "bio": bio})

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self._request("GET", f"/profiles/{quote(user_id, safe='')}", allow_missing=True)

    def update_bio(self, bio: str) -> Dict[str, Any]:
        """Replace the caller's bio and return the updated profile."""
        return self._request("PUT", "/profiles/me/bio", json_body={"bio": bio})

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------
    def create_post(self, title: str, content: str) -> int:
        """Publish a post and return its identifier."""
        data = self._request("POST", "/posts", json_body={"title": title, "content": content})
        return data["id"]

    def get_post(self, post_id: int) -> Optional[Dict[str, Any]]:
        return self._request("GET", f"/posts/{post_id}", allow_missing=True)

    def get_all_posts(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/posts") or []

    def get_user_posts(self, user_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/users/{quote(user_id, safe='')}/posts") or []

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------
    def rate_post(self, post_id: int, value: int) -> None:
        self._request("PUT", f"/posts/{post_id}/rating", json_body={"value": value})

    def get_post_ratings(self, post_id: int) -> Optional[List[Dict[str, Any]]]:
        return self._request("GET", f"/posts/{post_id}/ratings", allow_missing=True)

    def get_aggregated_rating(self, post_id: int) -> Optional[float]:
        """Mean rating of a post; ``None`` if it is missing or unrated."""
        summary = self._request("GET", f"/posts/{post_id}/rating", allow_missing=True)
        if summary is None:
            return None
        return summary.get("average")
