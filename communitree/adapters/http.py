"""HTTP implementations of the service interfaces.

The adapters are intentionally small. They use :mod:`httpx` to talk to the
CommuniTree REST API, which keeps them fully asynchronous, and translate
every failure into a :class:`~communitree.core.errors.ServiceError`.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..core.errors import ServiceError, ServiceErrorCode
from ..core.models import RSVP
from .base import RSVPService, VerificationService

logger = logging.getLogger(__name__)


def _error_code(status_code: int) -> ServiceErrorCode:
    if status_code == 404:
        return "not_found"
    if status_code in (401, 403):
        return "permission_denied"
    if status_code in (409, 422):
        return "constraint_violation"
    return "network_error"


T = TypeVar("T")

_RSVP_ADAPTER: TypeAdapter[RSVP] = TypeAdapter(RSVP)
_RSVP_LIST_ADAPTER: TypeAdapter[list[RSVP]] = TypeAdapter(list[RSVP])


def _decode(response: httpx.Response, adapter: TypeAdapter[T], operation: str) -> T:
    """Parse and validate a JSON body; a malformed body is a ``ServiceError``."""
    try:
        return adapter.validate_json(response.content)
    except ValidationError as exc:
        logger.warning("%s returned an unreadable body: %s", operation, exc.errors(include_url=False))
        raise ServiceError(f"{operation} returned an invalid response", "network_error") from exc


class _HTTPClient:
    """Shared request plumbing for the API adapters."""

    def __init__(
        self, base_url: str, token: str = "", client: httpx.AsyncClient | None = None
    ) -> None:
        """Store the API ``base_url``, bearer ``token`` and optional HTTP ``client``."""
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.client = client or httpx.AsyncClient()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, operation: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, headers=self._headers(), **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            code = _error_code(exc.response.status_code)
            logger.warning("%s failed with HTTP %s", operation, exc.response.status_code)
            raise ServiceError(
                f"{operation} failed", code, {"status": exc.response.status_code}
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s failed: %s", operation, exc)
            raise ServiceError(f"{operation} failed", "network_error") from exc
        return response

    async def close(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()


class HTTPRSVPService(_HTTPClient, RSVPService):
    """RSVP service backed by ``/events/{id}/rsvps`` endpoints."""

    async def create_rsvp(self, event_id: str, user_id: str) -> RSVP:
        response = await self._request(
            "POST", f"/events/{event_id}/rsvps", "createRSVP", json={"user_id": user_id}
        )
        return _decode(response, _RSVP_ADAPTER, "createRSVP")

    async def cancel_rsvp(self, event_id: str, user_id: str) -> None:
        await self._request("DELETE", f"/events/{event_id}/rsvps/{user_id}", "cancelRSVP")

    async def get_user_rsvps(self, user_id: str) -> list[RSVP]:
        response = await self._request("GET", f"/users/{user_id}/rsvps", "getUserRSVPs")
        return _decode(response, _RSVP_LIST_ADAPTER, "getUserRSVPs")


class _VerificationReply(BaseModel):
    verified: bool = False


_VERIFICATION_ADAPTER: TypeAdapter[_VerificationReply] = TypeAdapter(_VerificationReply)


class HTTPVerificationService(_HTTPClient, VerificationService):
    """Darpan ID verification through ``POST /ngos/{id}/verify``."""

    async def verify_ngo(self, ngo_id: str, darpan_id: str) -> bool:
        response = await self._request(
            "POST", f"/ngos/{ngo_id}/verify", "verifyNGO", json={"darpan_id": darpan_id}
        )
        return _decode(response, _VERIFICATION_ADAPTER, "verifyNGO").verified
