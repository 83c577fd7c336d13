"""Access gate for privileged (admin) operations."""

import hmac
import logging
from collections.abc import Callable
from enum import Enum

from vidstore.errors import AccessDenied

logger = logging.getLogger(__name__)

CredentialCheck = Callable[[str, str], bool]


class Access(Enum):
    GRANTED = "granted"
    DENIED = "denied"


def constant_time_equals(supplied: str, secret: str) -> bool:
    """Verbatim comparison that does not leak the match length through timing."""
    return hmac.compare_digest(supplied.encode("utf-8"), secret.encode("utf-8"))


class AccessGate:
    """Binary admission check against one process-configured shared secret.

    There are no roles: a caller either has full privileged access or none.
    The comparison is injected so the credential scheme can change without
    touching callers. A missing credential or an unset secret is always
    denied.
    """

    def __init__(self, secret: str, compare: CredentialCheck = constant_time_equals) -> None:
        self._secret = secret
        self._compare = compare

    def authorize(self, credential: str | None) -> Access:
        if not credential or not self._secret:
            return Access.DENIED
        if self._compare(credential, self._secret):
            return Access.GRANTED
        return Access.DENIED

    def require(self, credential: str | None) -> None:
        """Raise AccessDenied unless ``credential`` is granted."""
        if self.authorize(credential) is Access.DENIED:
            logger.warning("Rejected privileged request: bad or missing admin secret")
            raise AccessDenied("Forbidden: Admin access only")
