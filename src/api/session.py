"""
Session cookie issuance.

The cookie value is the opaque registration id; clients never read it
(HttpOnly) and it is only sent back to the API path prefix.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Response

from src.config.settings import Settings


def issue_session_cookie(
    response: Response,
    registration_id: str,
    settings: Settings,
    now: datetime | None = None,
) -> None:
    """
    Attach the session cookie for a registration to the response.

    Args:
        response: Outgoing response
        registration_id: Id returned in the JSON body
        settings: Cookie name, path, TTL and environment
        now: Issuance time, defaults to current UTC time
    """
    issued_at = now or datetime.now(timezone.utc)
    response.set_cookie(
        key=settings.cookie_name,
        value=registration_id,
        expires=issued_at + timedelta(days=settings.cookie_ttl_days),
        path=settings.cookie_path,
        secure=settings.is_production,
        httponly=True,
        samesite="strict",
    )
