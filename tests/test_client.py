"""
Tests for store settings and the session factory.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from talkstore.config import StoreSettings, get_settings
from talkstore.database.client import open_session
from talkstore.exceptions import StoreConfigurationError


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestGetSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")

        settings = get_settings()

        assert settings.url == "https://example.supabase.co"
        assert settings.key == "service-key"

    def test_missing_values_raise(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")

        with pytest.raises(StoreConfigurationError) as exc_info:
            get_settings()

        assert exc_info.value.details["missing"] == ["SUPABASE_URL"]


class TestOpenSession:
    """Tests that the client and its HTTP transport are always released."""

    @pytest.mark.asyncio
    async def test_yields_client_and_closes_transport(self):
        client = MagicMock()
        settings = StoreSettings(url="https://example.supabase.co", key="k")

        with patch("talkstore.database.client.acreate_client", AsyncMock(return_value=client)) as create:
            async with open_session(settings) as session:
                assert session is client

        args, kwargs = create.await_args
        assert args == ("https://example.supabase.co", "k")
        http_client = kwargs["options"].httpx_client
        assert isinstance(http_client, httpx.AsyncClient)
        assert http_client.is_closed

    @pytest.mark.asyncio
    async def test_closes_transport_on_error(self):
        settings = StoreSettings(url="https://example.supabase.co", key="k")

        with patch("talkstore.database.client.acreate_client", AsyncMock(return_value=MagicMock())) as create:
            with pytest.raises(RuntimeError):
                async with open_session(settings):
                    raise RuntimeError("boom")

        assert create.await_args.kwargs["options"].httpx_client.is_closed

    @pytest.mark.asyncio
    async def test_auth_and_postgrest_share_the_closed_transport(self):
        settings = StoreSettings(url="https://example.supabase.co", key="header.payload.signature")

        async with open_session(settings) as session:
            http_client = session.options.httpx_client
            assert not http_client.is_closed

        assert http_client.is_closed
        assert session.auth._http_client.is_closed

    @pytest.mark.asyncio
    async def test_uses_environment_settings_by_default(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
        monkeypatch.setenv("SUPABASE_SERVICE_KEY", "env-key")

        with patch("talkstore.database.client.acreate_client", AsyncMock(return_value=MagicMock())) as create:
            async with open_session():
                pass

        assert create.await_args.args == ("https://env.supabase.co", "env-key")
