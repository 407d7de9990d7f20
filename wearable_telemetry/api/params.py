"""
Lenient request coercion
"""

import json
import re
from typing import Any, Optional

from fastapi import Request

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")

def coerce_limit(raw: Optional[str], default: int) -> int:
    """Parse a ``limit`` query value without ever rejecting it.

    The leading integer is used ("10abc" -> 10, "7.9" -> 7). Missing,
    non-numeric, zero and negative values fall back to ``default``.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value > 0 else default

async def read_json_body(request: Request) -> Any:
    """Decode the request body as JSON only when it is declared as JSON.

    Empty bodies and bodies of any other content type read as ``{}``.
    Invalid JSON sent as ``application/json`` raises.
    """
    content_type = request.headers.get("content-type", "").lower()
    if not content_type.startswith("application/json"):
        return {}
    body = await request.body()
    return json.loads(body) if body else {}
