"""Shared-secret access marker carried by the client device"""
from typing import Optional
from urllib.parse import quote, unquote

from fastapi import Cookie, Request, Response

from ..config import settings
from ..core import AccessGate

TRIP_KEY_HEADER = "x-trip-key"


async def get_access_gate(
    request: Request,
    trip_key: Optional[str] = Cookie(None, alias=settings.access_cookie_name),
) -> AccessGate:
    """
    Dependency building the caller's access gate from their marker.

    The marker normally lives in an HttpOnly cookie; non-browser clients
    may send it in the X-Trip-Key header instead. Both carry the marker
    percent-encoded, since header values are latin-1 only.
    """
    marker = trip_key or request.headers.get(TRIP_KEY_HEADER)
    if marker is not None:
        marker = unquote(marker)
    return AccessGate(settings.trip_password, marker=marker)


def store_marker(response: Response, gate: AccessGate) -> None:
    """Persist (or clear) the gate's marker on the client"""
    if gate.marker is None:
        response.delete_cookie(settings.access_cookie_name)
        return
    response.set_cookie(
        key=settings.access_cookie_name,
        value=quote(gate.marker, safe=""),
        httponly=True,
        secure=settings.env == "production",  # HTTPS only in production
        samesite="none" if settings.env == "production" else "lax",
        max_age=settings.access_cookie_max_age,
    )
