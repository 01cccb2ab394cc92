# src/food_inventory/core/security.py
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from food_inventory.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# auto_error=False: fehlender Header soll 401 liefern, nicht FastAPIs 403
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "ApiKey"},
    )


async def get_user_email(
    api_key: Annotated[str | None, Security(api_key_header)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> str:
    """Löst den API-Key zur E-Mail des Nutzers auf, der die Bestände besitzt."""
    if not api_key:
        raise _unauthorized("Missing X-API-Key header.")
    user_email = settings.api_keys.get(api_key)
    if user_email is None:
        logger.debug("Rejected unknown API key")
        raise _unauthorized("Unknown API key.")
    return user_email
