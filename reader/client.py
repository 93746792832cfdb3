"""Async HTTP client for the reader API.

Keeps the login state (token and user id) between calls, the way the reading
page does: log in or register once, then fetch the book, load and save
preferences, and mark verses as read.

Errors
------
Every failed call raises ``ReaderClientError``. Its message is the server's
``error`` string when the response carries one, otherwise a fallback for the
kind of call ("Auth failed", "Failed to load", "Request failed").

Usage
-----
>>> async with ReaderClient("http://localhost:5000") as client:
...     await client.login("alice", "pw")
...     book = await client.get_book(1)
...     await client.mark_read(1, 3)
"""
from __future__ import annotations

from typing import Any, Optional

import httpx

from reader.core.logging_config import get_logger

AUTH_FAILED = "Auth failed"
LOAD_FAILED = "Failed to load"
REQUEST_FAILED = "Request failed"


class ReaderClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ReaderClient:
    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        *,
        token: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Create a client.

        Args:
            base_url: Server root, without the ``/api`` prefix.
            token: Bearer token from an earlier login, if any.
            timeout: Timeout for the internal ``httpx.AsyncClient``.
            client: Preconfigured ``httpx.AsyncClient`` (e.g. bound to an ASGI app in tests).
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.user_id: Optional[int] = None
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)
        self._logger = get_logger(__name__)

    async def __aenter__(self) -> "ReaderClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @property
    def logged_in(self) -> bool:
        return bool(self.token)

    # ----------------------
    # Plumbing
    # ----------------------
    def _headers(self, auth: bool) -> dict[str, str]:
        if not auth:
            return {}
        if not self.token:
            raise ReaderClientError("Not logged in")
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, *, fallback: str, auth: bool = False, **kwargs) -> Any:
        headers = self._headers(auth)
        try:
            resp = await self._client.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            self._logger.warning("%s %s failed: %s", method, path, exc)
            raise ReaderClientError(fallback) from exc

        if resp.is_success:
            try:
                return resp.json()
            except ValueError as exc:
                raise ReaderClientError(fallback, resp.status_code) from exc

        raise ReaderClientError(self._error_message(resp, fallback), resp.status_code)

    @staticmethod
    def _error_message(resp: httpx.Response, fallback: str) -> str:
        try:
            body = resp.json()
        except ValueError:
            return fallback
        if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
            return body["error"]
        return fallback

    def _remember(self, data: Any) -> dict:
        if not isinstance(data, dict) or not data.get("token"):
            raise ReaderClientError(AUTH_FAILED)
        self.token = data["token"]
        self.user_id = data.get("userId")
        return data

    # ----------------------
    # Auth
    # ----------------------
    async def register(self, username: str, email: str, password: str) -> dict:
        data = await self._request(
            "POST",
            "/api/register",
            fallback=AUTH_FAILED,
            json={"username": username, "email": email, "password": password},
        )
        return self._remember(data)

    async def login(self, username: str, password: str) -> dict:
        data = await self._request(
            "POST",
            "/api/login",
            fallback=AUTH_FAILED,
            json={"username": username, "password": password},
        )
        return self._remember(data)

    def logout(self) -> None:
        """Forget the token; tokens are stateless so nothing is sent to the server."""
        self.token = None
        self.user_id = None

    # ----------------------
    # Content
    # ----------------------
    async def get_book(self, book_id: int) -> dict:
        return await self._request("GET", f"/api/book/{book_id}", fallback=LOAD_FAILED)

    async def list_books(self) -> list[dict]:
        return await self._request("GET", "/api/books", fallback=LOAD_FAILED)

    # ----------------------
    # Preferences & progress
    # ----------------------
    async def get_preferences(self) -> dict:
        return await self._request("GET", "/api/preferences", fallback=LOAD_FAILED, auth=True)

    async def update_preferences(self, font_size: int, theme_color: str) -> dict:
        return await self._request(
            "PUT",
            "/api/preferences",
            fallback=REQUEST_FAILED,
            auth=True,
            json={"fontSize": font_size, "themeColor": theme_color},
        )

    async def get_progress(self, book_id: int) -> int:
        """Return the furthest verse read in ``book_id`` (0 for none)."""
        data = await self._request("GET", f"/api/progress/{book_id}", fallback=LOAD_FAILED, auth=True)
        return int(data.get("verseRead", 0))

    async def save_progress(
        self,
        book_id: int,
        verse_read: int,
        chapter_completed: Optional[int] = None,
    ) -> dict:
        body: dict[str, Any] = {"bookId": book_id, "verseRead": verse_read}
        if chapter_completed is not None:
            body["chapterCompleted"] = chapter_completed
        return await self._request("PUT", "/api/progress", fallback=REQUEST_FAILED, auth=True, json=body)

    async def mark_read(self, book_id: int, verse: int) -> int:
        """Advance progress to ``verse`` if it is beyond what is stored; return the resulting progress."""
        current = await self.get_progress(book_id)
        if verse <= current:
            return current
        await self.save_progress(book_id, verse)
        return verse
