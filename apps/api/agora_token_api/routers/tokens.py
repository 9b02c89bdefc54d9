"""RTC token issuance endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..core.credentials import AgoraCredentials, get_credentials
from ..schemas.tokens import ErrorResponse, TokenRequest, TokenResponse
from ..services import tokens as tokens_service
from ..services.signer import TokenSigner, default_signer

router = APIRouter()


def get_signer() -> TokenSigner:
    return default_signer


@router.post(
    "/generateAgoraToken",
    response_model=TokenResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def generate_agora_token(
    payload: TokenRequest,
    credentials: AgoraCredentials = Depends(get_credentials),
    signer: TokenSigner = Depends(get_signer),
) -> TokenResponse:
    """Return a publisher token for the requested channel and uid."""

    issued = tokens_service.issue_token(
        credentials,
        payload.channel_name,
        payload.uid,
        signer=signer,
    )
    return TokenResponse(token=issued.token)
