"""Request introspection helpers."""

from __future__ import annotations

import json
from typing import Any

from starlette.requests import Request

DEFAULT_CLIENT_ID = "localhost"


def client_identity(request: Request) -> str:
    """Return the caller address, preferring the first X-Forwarded-For hop."""

    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client is not None and request.client.host:
        return request.client.host
    return DEFAULT_CLIENT_ID


async def read_json_object(request: Request) -> dict[str, Any]:
    """Decode the body as a JSON object; anything else reads as empty."""

    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        return {}
    return payload if isinstance(payload, dict) else {}


__all__ = ["DEFAULT_CLIENT_ID", "client_identity", "read_json_object"]
