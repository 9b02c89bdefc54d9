"""RTC token issuance.

Every token grants the publisher role and expires one hour after issuance."""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

from ..core.credentials import AgoraCredentials
from .signer import RtcRole, TokenSigner, default_signer

logger = logging.getLogger(__name__)

TOKEN_TTL_SECONDS = 3600
TOKEN_ROLE = RtcRole.PUBLISHER


class TokenServiceError(Exception):
    """Base error for token issuance failures."""


class CredentialsMissingError(TokenServiceError):
    """Raised when the Agora app id or certificate is not configured."""


class TokenSigningError(TokenServiceError):
    """Raised when the signer fails or produces no token."""


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    channel_name: str
    uid: int
    role: RtcRole
    expire_at: int


def compute_expire_at(now: float) -> int:
    """Return the privilege expiry for a token issued at ``now``."""

    return int(math.floor(now)) + TOKEN_TTL_SECONDS


def issue_token(
    credentials: AgoraCredentials,
    channel_name: str,
    uid: int,
    *,
    signer: TokenSigner | None = None,
    now: float | None = None,
) -> IssuedToken:
    """Produce a publisher token for ``uid`` in ``channel_name``."""

    if not credentials.is_complete:
        logger.error("Agora credentials are not configured; refusing to issue token")
        raise CredentialsMissingError("agora app id and certificate must be set")

    signer = signer or default_signer
    issued_at = time.time() if now is None else now
    expire_at = compute_expire_at(issued_at)

    try:
        token = signer.build_token_with_uid(
            credentials.app_id,
            credentials.app_certificate,
            channel_name,
            uid,
            TOKEN_ROLE,
            expire_at,
        )
    except Exception as exc:  # noqa: BLE001 - any signer failure maps to one error
        # exception text may echo the certificate
        logger.error(
            "Token signing failed for channel=%s uid=%s: %s",
            channel_name,
            uid,
            type(exc).__name__,
        )
        raise TokenSigningError("token signing failed") from exc

    if not token:
        logger.error("Signer returned an empty token for channel=%s uid=%s", channel_name, uid)
        raise TokenSigningError("signer returned an empty token")

    logger.info("Issued %s token for channel=%s uid=%s expire_at=%s", TOKEN_ROLE.name, channel_name, uid, expire_at)
    return IssuedToken(
        token=token,
        channel_name=channel_name,
        uid=uid,
        role=TOKEN_ROLE,
        expire_at=expire_at,
    )
