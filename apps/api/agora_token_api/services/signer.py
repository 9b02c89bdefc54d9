"""Token signing capability.

The cryptographic work lives in ``agora-token-builder``; this module only
adapts it to a small protocol so the issuance service can be exercised with a
fake signer."""
from __future__ import annotations

import enum
from typing import Protocol

from agora_token_builder.RtcTokenBuilder import (
    Role_Publisher,
    Role_Subscriber,
    RtcTokenBuilder,
)


class RtcRole(enum.IntEnum):
    PUBLISHER = Role_Publisher
    SUBSCRIBER = Role_Subscriber


class TokenSigner(Protocol):
    def build_token_with_uid(
        self,
        app_id: str,
        app_certificate: str,
        channel_name: str,
        uid: int,
        role: RtcRole,
        expire_at: int,
    ) -> str: ...


class AgoraTokenSigner:
    """Sign RTC tokens with the Agora token builder."""

    def build_token_with_uid(
        self,
        app_id: str,
        app_certificate: str,
        channel_name: str,
        uid: int,
        role: RtcRole,
        expire_at: int,
    ) -> str:
        return RtcTokenBuilder.buildTokenWithUid(
            app_id,
            app_certificate,
            channel_name,
            uid,
            int(role),
            expire_at,
        )


default_signer = AgoraTokenSigner()
