"""FastAPI application issuing Agora RTC tokens."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .core.config import settings
from .core.credentials import get_credentials
from .routers import tokens as tokens_router
from .services.tokens import CredentialsMissingError, TokenSigningError

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

credentials = get_credentials()
if not credentials.is_complete:
    logger.warning("AGORA_APP_ID or AGORA_APP_CERTIFICATE is not set; token requests will fail")

app = FastAPI(title="Agora Token API", version="0.1.0")

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(tokens_router.router, tags=["tokens"])


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed token requests with a 400 instead of FastAPI's 422."""

    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    logger.info("Rejected request to %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": "Invalid token request", "errors": errors}),
    )


@app.exception_handler(CredentialsMissingError)
async def credentials_missing_handler(request: Request, exc: CredentialsMissingError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Token service is not configured"},
    )


@app.exception_handler(TokenSigningError)
async def token_signing_handler(request: Request, exc: TokenSigningError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Token generation failed"},
    )


@app.head("/", tags=["meta"])
async def index_head() -> Response:
    """Fast health checks issue HEAD /; answer with 200 to avoid noisy 405s."""

    return Response(status_code=200)


@app.get("/api/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Simple liveness probe."""

    return {"status": "ok"}


@app.head("/api/health", tags=["meta"])
async def health_head() -> Response:
    """Allow HEAD for uptime monitors that only need the status code."""

    return Response(status_code=200)
