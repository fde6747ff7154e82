import httpx
import pytest
import respx

from provisioner.adapters import ClientRegistry, ServiceAccountSessionProvider
from provisioner.adapters.http import RestAdapter
from provisioner.logging import RequestContext

BASE = "https://svc.example.com"


class TestClientRegistry:
    @pytest.mark.asyncio
    async def test_client_is_shared_within_a_session(self, registry):
        first = registry.get_client("sess_a", BASE)

        assert registry.get_client("sess_a", BASE) is first
        assert registry.get_client("sess_b", BASE) is not first
        assert registry.open_sessions() == {"sess_a", "sess_b"}

    @pytest.mark.asyncio
    async def test_remove_client_closes_session_clients(self, registry):
        client = registry.get_client("sess_a", BASE)
        registry.get_client("sess_a", "https://other.example.com")
        registry.get_client("sess_b", BASE)

        closed = await registry.remove_client("sess_a")

        assert closed == 2
        assert client.is_closed
        assert registry.open_sessions() == {"sess_b"}

    @pytest.mark.asyncio
    async def test_service_account_credentials_are_sent(self):
        registry = ClientRegistry("svc", "secret")  # noqa: S106
        async with respx.mock(base_url=BASE) as respx_mock:
            route = respx_mock.get("/ping").mock(return_value=httpx.Response(httpx.codes.OK))

            await registry.get_client("sess_a", BASE).get("/ping")

            assert route.calls.last.request.headers["Authorization"].startswith("Basic ")
        await registry.remove_client("sess_a")


class TestSessionProvider:
    @pytest.mark.asyncio
    async def test_acquire_and_release(self, registry):
        sessions = ServiceAccountSessionProvider(registry)
        ctx = RequestContext()

        token = await sessions.acquire(ctx)
        registry.get_client(token, BASE)
        await sessions.release(token)

        assert token.startswith("sess_")
        assert registry.open_sessions() == set()

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, registry):
        sessions = ServiceAccountSessionProvider(registry)

        assert await sessions.acquire(RequestContext()) != await sessions.acquire(RequestContext())


class TestRestAdapter:
    @pytest.mark.asyncio
    async def test_unconfigured_url_is_rejected(self, registry, ctx):
        adapter = RestAdapter("", registry)

        with pytest.raises(RuntimeError, match="not configured"):
            await adapter._get_json("/anything", ctx)

    @pytest.mark.asyncio
    async def test_post_without_content_returns_none(self, registry, ctx):
        adapter = RestAdapter(BASE + "/", registry)

        async with respx.mock(base_url=BASE) as respx_mock:
            respx_mock.post("/thing").mock(return_value=httpx.Response(httpx.codes.NO_CONTENT))

            assert await adapter._post_json("/thing", ctx, json={}) is None
