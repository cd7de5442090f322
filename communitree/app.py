"""Composition root: wire settings, storage, store, services and controllers."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from .adapters.base import RSVPService, VerificationService
from .adapters.http import HTTPRSVPService, HTTPVerificationService
from .config import Settings, load_settings
from .controllers.chat import ChatController
from .controllers.rsvp import RSVPController
from .controllers.trust import TrustPointsController
from .controllers.verification import NGOVerifier
from .data.storage import JSONStateStorage, StateStorage
from .data.store import AppStore
from .logging_config import setup_logging


@dataclass
class App:
    settings: Settings
    store: AppStore
    rsvp: RSVPController
    verification: NGOVerifier
    trust: TrustPointsController
    chat: ChatController
    _http_client: httpx.AsyncClient | None = field(default=None, repr=False)

    async def aclose(self) -> None:
        """Close the HTTP client if the app created one."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


def create_app(
    settings: Settings | None = None,
    *,
    rsvp_service: RSVPService | None = None,
    verification_service: VerificationService | None = None,
    storage: StateStorage | None = None,
) -> App:
    settings = settings or load_settings()
    log = setup_logging(settings.log_level)

    store = AppStore(storage=storage or JSONStateStorage(settings.data_path))
    if not store.hydrate():
        log.info("No saved state found; starting fresh")

    client: httpx.AsyncClient | None = None
    if rsvp_service is None or verification_service is None:
        if not settings.api_base_url:
            raise ValueError(
                "COMMUNITREE_API_URL is not set and no services were provided."
            )
        client = httpx.AsyncClient()
        rsvp_service = rsvp_service or HTTPRSVPService(
            settings.api_base_url, settings.api_token, client
        )
        verification_service = verification_service or HTTPVerificationService(
            settings.api_base_url, settings.api_token, client
        )

    return App(
        settings=settings,
        store=store,
        rsvp=RSVPController(store, rsvp_service),
        verification=NGOVerifier(store, verification_service),
        trust=TrustPointsController(store),
        chat=ChatController(store),
        _http_client=client,
    )
