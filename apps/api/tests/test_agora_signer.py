"""Tests against the real Agora token builder."""
from __future__ import annotations

import pytest
from agora_token_builder.AccessToken import (
    AccessToken,
    kJoinChannel,
    kPublishAudioStream,
    kPublishDataStream,
    kPublishVideoStream,
)
from httpx import ASGITransport, AsyncClient

from agora_token_api.core.credentials import AgoraCredentials, get_credentials
from agora_token_api.main import app
from agora_token_api.routers.tokens import get_signer
from agora_token_api.services import tokens as tokens_service
from agora_token_api.services.signer import AgoraTokenSigner, RtcRole

CREDENTIALS = AgoraCredentials(app_id="970CA35de60c44645bbae8a215061b33", app_certificate="5CFd2fd1755d40ecb72977518be15d3b")


class SpySigner(AgoraTokenSigner):
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def build_token_with_uid(self, app_id, app_certificate, channel_name, uid, role, expire_at) -> str:
        self.calls.append((channel_name, uid, role, expire_at))
        return super().build_token_with_uid(app_id, app_certificate, channel_name, uid, role, expire_at)


def _decode(token: str) -> AccessToken:
    access = AccessToken()
    assert access.fromString(token) is True
    return access


def _rebuild(decoded: AccessToken, channel_name: str, uid: int) -> str:
    """Re-sign the decoded salt, timestamp and privileges for a given channel and uid."""

    rebuilt = AccessToken(CREDENTIALS.app_id, CREDENTIALS.app_certificate, channel_name, uid)
    rebuilt.salt = decoded.salt
    rebuilt.ts = decoded.ts
    rebuilt.messages = dict(decoded.messages)
    return rebuilt.build()


def test_publisher_role_matches_builder_constant() -> None:
    assert int(RtcRole.PUBLISHER) == 1
    assert int(RtcRole.SUBSCRIBER) == 2


def test_real_token_carries_publisher_privileges_and_expiry() -> None:
    issued_at = 1_700_000_000.7
    spy = SpySigner()

    issued = tokens_service.issue_token(CREDENTIALS, "room42", 7, signer=spy, now=issued_at)

    assert issued.token.startswith("006" + CREDENTIALS.app_id)
    assert spy.calls == [("room42", 7, RtcRole.PUBLISHER, 1_700_003_600)]

    access = _decode(issued.token)
    assert access.messages[kJoinChannel] == 1_700_003_600
    for privilege in (kPublishAudioStream, kPublishVideoStream, kPublishDataStream):
        assert access.messages[privilege] == 1_700_003_600

    assert _rebuild(access, "room42", 7) == issued.token
    assert _rebuild(access, "room43", 7) != issued.token
    assert _rebuild(access, "room42", 8) != issued.token


def test_real_tokens_differ_across_issuance_times() -> None:
    first = tokens_service.issue_token(CREDENTIALS, "room42", 7, signer=AgoraTokenSigner(), now=1_000.0)
    second = tokens_service.issue_token(CREDENTIALS, "room42", 7, signer=AgoraTokenSigner(), now=2_000.0)

    assert first.token != second.token
    assert _decode(first.token).messages[kJoinChannel] == 4_600
    assert _decode(second.token).messages[kJoinChannel] == 5_600


@pytest.mark.asyncio
async def test_endpoint_issues_decodable_token(monkeypatch) -> None:
    spy = SpySigner()
    app.dependency_overrides[get_credentials] = lambda: CREDENTIALS
    app.dependency_overrides[get_signer] = lambda: spy
    monkeypatch.setattr(tokens_service.time, "time", lambda: 1_700_000_000.0)

    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.post("/generateAgoraToken", json={"channelName": "room42", "uid": 7})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    token = response.json()["token"]
    assert token
    assert spy.calls == [("room42", 7, RtcRole.PUBLISHER, 1_700_003_600)]
    decoded = _decode(token)
    assert decoded.messages[kJoinChannel] == 1_700_003_600
    assert _rebuild(decoded, "room42", 7) == token
