from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable
from urllib.parse import quote

import httpx


class GitHubAPIError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


@dataclass(frozen=True)
class GitHubResponse:
    data: Any
    status_code: int | None = None


RequestFunc = Callable[
    [str, str, dict | None],
    Awaitable[GitHubResponse],
]


class GitHubRestClient:
    """Unauthenticated client for the public GitHub REST endpoints."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        request_func: RequestFunc | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._request_func = request_func
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None
        if request_func is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Accept": "application/vnd.github+json",
                    "User-Agent": "gh-latest-commit",
                },
                timeout=timeout,
                transport=transport,
            )

    async def __aenter__(self) -> "GitHubRestClient":
        if self._client is None and self._request_func is None:
            raise RuntimeError("GitHub client unavailable.")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
    ) -> GitHubResponse:
        if self._request_func is not None:
            response = await self._request_func(method, path, params)
        else:
            if self._client is None:
                raise RuntimeError("HTTP client not initialized")
            try:
                raw = await self._client.request(method, path, params=params)
            except httpx.HTTPError as exc:
                raise GitHubAPIError(f"GitHub request failed: {exc}") from exc
            try:
                data = raw.json() if raw.status_code < 400 else None
            except ValueError as exc:
                raise GitHubAPIError(
                    f"GitHub returned invalid JSON: {exc}", status_code=raw.status_code
                ) from exc
            response = GitHubResponse(data=data, status_code=raw.status_code)
        status_code = response.status_code
        if status_code is not None and status_code >= 400:
            raise GitHubAPIError(f"GitHub API error {status_code}", status_code=status_code)
        return response

    async def get_json(self, path: str, params: dict | None = None) -> Any:
        response = await self.request("GET", path, params=params)
        return response.data

    async def list_public_events(self, username: str, per_page: int = 100) -> list[dict]:
        # First page only; older history is never requested.
        data = await self.get_json(
            f"/users/{quote(username, safe='')}/events/public",
            params={"per_page": per_page},
        )
        if not isinstance(data, list):
            raise GitHubAPIError(f"Unexpected events payload: {type(data).__name__}")
        return data
