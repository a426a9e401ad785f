# services/sauce_client/app/main.py
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

import httpx

from core.config import settings as default_settings, Settings
from .broadcaster import SauceBroadcaster
from .client import SaucesClient
from .identity import UserIdentity

# Use logger configured in core.config
logger = logging.getLogger("Piquante_Core").getChild("SauceClient").getChild("Context")


@dataclass
class SauceClientContext:
    """Collaborators of the sauce data layer, built once at startup and passed to the UI."""
    settings: Settings
    http_client: httpx.AsyncClient
    identity: UserIdentity
    broadcaster: SauceBroadcaster
    sauces: SaucesClient


@asynccontextmanager
async def create_client_context(
    identity: UserIdentity,
    settings: Settings = default_settings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> AsyncIterator[SauceClientContext]:
    """
    Builds the sauce client and its collaborators for the lifetime of the block.

    An HTTPX client is created from settings unless one is injected; only a
    client created here is closed on exit.
    """
    owns_client = http_client is None
    if owns_client:
        logger.info(f"Initializing HTTPX Client (timeout={settings.HTTP_TIMEOUT}s).")
        http_client = httpx.AsyncClient(base_url=settings.API_URL, timeout=settings.HTTP_TIMEOUT)

    broadcaster = SauceBroadcaster()
    context = SauceClientContext(
        settings=settings,
        http_client=http_client,
        identity=identity,
        broadcaster=broadcaster,
        sauces=SaucesClient(http_client, identity, broadcaster, api_url=settings.API_URL),
    )
    logger.info(f"Sauce client ready for {context.sauces.sauces_url}")

    try:
        yield context
    finally:
        if owns_client:
            logger.info("Closing HTTPX Client.")
            await http_client.aclose()
