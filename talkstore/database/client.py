"""Supabase session factory.

Each repository operation opens its own client and releases it on exit,
so nothing is shared between calls.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from talkstore.config import StoreSettings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_session(settings: Optional[StoreSettings] = None) -> AsyncIterator[AsyncClient]:
    """Open an async Supabase client scoped to a single unit of work.

    Auth and PostgREST share one HTTP client, closed when the block exits.
    """
    settings = settings or get_settings()
    async with httpx.AsyncClient() as http_client:
        client = await acreate_client(
            settings.url,
            settings.key,
            options=AsyncClientOptions(httpx_client=http_client),
        )
        yield client
    logger.debug("Closed store session for %s", settings.url)
