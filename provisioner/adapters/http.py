"""Shared HTTP plumbing for the REST adapters.

Clients are keyed by request-session token: a request acquires a token when
it starts, every adapter call made under that token shares one
``httpx.AsyncClient`` per backend, and releasing the token closes them.
"""

from typing import Any
import uuid

import httpx

from ..logging import RequestContext, get_logger

logger = get_logger(__name__)


class ClientRegistry:
    """httpx clients per (session token, base URL)."""

    def __init__(
        self,
        username: str = "",
        password: str = "",
        timeout: float = 30.0,
    ) -> None:
        self._auth = httpx.BasicAuth(username, password) if username else None
        self._timeout = timeout
        self._clients: dict[tuple[str, str], httpx.AsyncClient] = {}

    def get_client(self, token: str, base_url: str) -> httpx.AsyncClient:
        key = (token, base_url)
        client = self._clients.get(key)
        if client is None or client.is_closed:
            client = httpx.AsyncClient(
                base_url=base_url,
                auth=self._auth,
                timeout=self._timeout,
                follow_redirects=True,
                headers={"Accept": "application/json"},
            )
            self._clients[key] = client
        return client

    async def remove_client(self, token: str) -> int:
        """Close every client opened under ``token``; returns how many."""
        keys = [key for key in self._clients if key[0] == token]
        for key in keys:
            await self._clients.pop(key).aclose()
        return len(keys)

    def open_sessions(self) -> set[str]:
        return {token for token, _ in self._clients}


class ServiceAccountSessionProvider:
    """Session provider for the service account configured in settings."""

    def __init__(self, registry: ClientRegistry) -> None:
        self._registry = registry

    async def acquire(self, ctx: RequestContext) -> str:
        token = f"sess_{uuid.uuid4().hex[:12]}"
        ctx.log.debug("request_session_acquired", token=token)
        return token

    async def release(self, token: str) -> None:
        closed = await self._registry.remove_client(token)
        logger.debug("request_session_released", token=token, clients_closed=closed)


class RestAdapter:
    """Base class for the REST collaborators."""

    service_name = "rest"

    def __init__(self, base_url: str, registry: ClientRegistry) -> None:
        self.base_url = base_url.rstrip("/")
        self._registry = registry

    def _client(self, ctx: RequestContext) -> httpx.AsyncClient:
        if not self.base_url:
            raise RuntimeError(f"{self.service_name} URL is not configured")
        if not ctx.token:
            raise RuntimeError(f"{self.service_name} called outside of a request session")
        return self._registry.get_client(ctx.token, self.base_url)

    async def _request(
        self, method: str, path: str, ctx: RequestContext, **kwargs: Any
    ) -> httpx.Response:
        client = self._client(ctx)
        resp = await client.request(method, path, **kwargs)
        if resp.is_error:
            ctx.log.warning(
                f"{self.service_name}_request_failed",
                method=method,
                path=path,
                status_code=resp.status_code,
                response=resp.text[:500],
            )
        resp.raise_for_status()
        return resp

    async def _get_json(self, path: str, ctx: RequestContext, **kwargs: Any) -> Any:
        resp = await self._request("GET", path, ctx, **kwargs)
        return resp.json()

    async def _post_json(self, path: str, ctx: RequestContext, **kwargs: Any) -> Any:
        resp = await self._request("POST", path, ctx, **kwargs)
        if resp.status_code == httpx.codes.NO_CONTENT or not resp.content:
            return None
        return resp.json()
