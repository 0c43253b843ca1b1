"""Rate limiting configuration for API endpoints."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address


def get_rate_limit_key(request: Request) -> str:
    """Get composite key: conversation_id + IP for message endpoints, IP otherwise."""
    ip = get_remote_address(request)

    # For message endpoints, combine conversation_id with IP
    path = request.url.path
    if path.startswith("/api/conversations/") and path.endswith("/messages"):
        conversation_id = path[len("/api/conversations/"):].split("/")[0]
        return f"conversation:{conversation_id}:{ip}"

    return ip


limiter = Limiter(key_func=get_rate_limit_key)
