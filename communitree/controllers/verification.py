"""NGO verification flow."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..adapters.base import VerificationService
from ..core.enums import NotificationType
from ..core.errors import FieldValidationError, ServiceError, user_message
from ..core.selectors import find_ngo
from ..core.validation import validate_darpan_id
from ..data.actions import VerifyNGO
from ..data.store import AppStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    message: str
    field: str | None = None


class NGOVerifier:
    """Checks a Darpan ID with the verification service and records the outcome.

    The store is only changed after the service confirms the ID; a rejected
    or failed verification leaves the NGO exactly as it was.
    """

    def __init__(self, store: AppStore, service: VerificationService) -> None:
        self.store = store
        self.service = service

    async def verify(self, ngo_id: str, darpan_id: str) -> VerificationResult:
        try:
            darpan_id = validate_darpan_id(darpan_id)
        except FieldValidationError as exc:
            return VerificationResult(False, exc.message, exc.field)

        ngo = find_ngo(self.store.state, ngo_id)
        if ngo is None:
            return VerificationResult(False, "NGO not found")
        if ngo.is_verified:
            return VerificationResult(True, f"{ngo.name} is already verified.")

        try:
            verified = await self.service.verify_ngo(ngo_id, darpan_id)
        except ServiceError as exc:
            message = user_message(exc)
            logger.warning("Verification of NGO %s failed: %s", ngo_id, exc.code)
            self.store.notify(NotificationType.SYSTEM, "Verification Error", message)
            return VerificationResult(False, message)

        if not verified:
            logger.info("Darpan ID rejected for NGO %s", ngo_id)
            message = "Verification failed. Please check your Darpan ID and try again."
            self.store.notify(NotificationType.VERIFICATION, "Verification Failed", message)
            return VerificationResult(False, message, "darpan_id")

        self.store.dispatch(VerifyNGO(id=ngo_id, darpan_id=darpan_id))
        logger.info("NGO %s verified with Darpan ID %s", ngo_id, darpan_id)
        message = f"{ngo.name} has been successfully verified with Darpan ID {darpan_id}."
        self.store.notify(NotificationType.VERIFICATION, "Verification Successful", message)
        return VerificationResult(True, message)
