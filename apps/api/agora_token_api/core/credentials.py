"""Process-wide Agora credentials, resolved once and passed explicitly."""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from .config import Settings, get_settings


@dataclass(frozen=True, slots=True)
class AgoraCredentials:
    """Immutable app id / certificate pair used to sign tokens."""

    app_id: str
    app_certificate: str = field(repr=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.app_id) and bool(self.app_certificate)


def load_credentials(settings: Settings) -> AgoraCredentials:
    """Build credentials from the ``agora_*`` settings."""

    return AgoraCredentials(
        app_id=settings.agora_app_id,
        app_certificate=settings.agora_app_certificate,
    )


@lru_cache
def get_credentials() -> AgoraCredentials:
    """Return the credentials for this process."""

    return load_credentials(get_settings())
