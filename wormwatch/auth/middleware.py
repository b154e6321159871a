"""Authentication dependencies."""

import secrets
from typing import Annotated

from fastapi import Depends, Header

from wormwatch.config import Settings, get_settings
from wormwatch.errors import AuthError


def secret_matches(expected: str | None, supplied: str | None) -> bool:
    """Exact, constant-time comparison; an unset expected secret never matches."""
    if not expected or supplied is None:
        return False
    return secrets.compare_digest(expected.encode(), supplied.encode())


async def require_admin_secret(
    x_admin_secret: Annotated[str | None, Header()] = None,
    settings: Settings = Depends(get_settings),
) -> None:
    """Require the x-admin-secret header to match the configured secret."""
    if not secret_matches(settings.admin_secret, x_admin_secret):
        raise AuthError("Unauthorized")
