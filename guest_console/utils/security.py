"""
Security utilities: organizer authentication and guest rate limiting
"""

import secrets
import time
from collections import defaultdict
from typing import Dict, List

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from guest_console.core.config import settings
from guest_console.utils.responses import rate_limit_error, unauthorized_error

# client ip -> request timestamps within the last minute
rate_limiter: Dict[str, List[float]] = defaultdict(list)

security = HTTPBearer()

def tokens_match(given: str, expected: str) -> bool:
    """Constant-time comparison; bytes so non-ASCII input compares instead of raising"""
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))

def verify_admin_token(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Verify organizer bearer token"""
    if not tokens_match(credentials.credentials, settings.ADMIN_TOKEN):
        unauthorized_error("Invalid admin token")
    return credentials.credentials

def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Sliding one-minute window per IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    minute_ago = time.time() - 60
    # Forget clients whose window has emptied
    for ip in [ip for ip, stamps in rate_limiter.items() if not stamps or stamps[-1] <= minute_ago]:
        del rate_limiter[ip]

    recent = [t for t in rate_limiter.get(client_ip, []) if t > minute_ago]
    rate_limiter[client_ip] = recent

    if len(recent) >= limit:
        return False

    recent.append(time.time())
    return True

def get_client_ip(request: Request) -> str:
    """Extract client IP, honouring reverse proxy headers"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"

def guest_rate_limit(request: Request) -> None:
    """Dependency applying the per-IP limit to public guest endpoints"""
    if not rate_limit_check(get_client_ip(request)):
        rate_limit_error()
