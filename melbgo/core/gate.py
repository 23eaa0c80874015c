"""Shared-secret access gate for trip edits"""
import hmac
import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


def _same(given: str, secret: str) -> bool:
    return hmac.compare_digest(given.encode("utf-8"), secret.encode("utf-8"))


class GateState(str, Enum):
    READ_ONLY = "read_only"
    AUTHORIZED = "authorized"


class AccessGate:
    """
    Two-state gate: read is always allowed, edits need the shared secret.

    The gate does not persist anything itself. `marker` is the value the
    caller keeps on the user's device (the HTTP layer uses a cookie) and
    hands back on the next request; it holds the literal secret once
    unlocked and is None otherwise.
    """

    def __init__(self, secret: str, marker: Optional[str] = None):
        self._secret = secret
        self.marker = marker

    @property
    def state(self) -> GateState:
        if self.marker is not None and _same(self.marker, self._secret):
            return GateState.AUTHORIZED
        return GateState.READ_ONLY

    @property
    def is_authorized(self) -> bool:
        return self.state is GateState.AUTHORIZED

    def unlock(self, password: str) -> bool:
        """Authorize when `password` equals the shared secret"""
        if _same(password, self._secret):
            self.marker = self._secret
            logger.info("🔓 Trip unlocked for editing")
            return True
        logger.warning("Rejected unlock attempt with wrong password")
        return False

    def logout(self, confirmed: bool) -> bool:
        """Return to read-only; only an explicitly confirmed logout clears the marker"""
        if not confirmed:
            return False
        self.marker = None
        logger.info("🔒 Trip locked (read-only)")
        return True
