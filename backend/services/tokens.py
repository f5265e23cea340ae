"""
Jetons de session (JWT signé HS256)

- vendeur : {"phone": ...}, valable SESSION_TOKEN_TTL_HOURS
- admin   : {"admin": true}, valable ADMIN_TOKEN_TTL_HOURS
"""

from datetime import datetime, timezone, timedelta
from typing import Any, Dict

import jwt

from config import JWT_SECRET, JWT_ALGORITHM, SESSION_TOKEN_TTL_HOURS, ADMIN_TOKEN_TTL_HOURS
from services.errors import UnauthorizedError


def _encode(claims: Dict[str, Any], ttl: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {**claims, "iat": now, "exp": now + ttl}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def create_session_token(phone: str) -> str:
    return _encode({"phone": phone}, timedelta(hours=SESSION_TOKEN_TTL_HOURS))


def create_admin_token() -> str:
    return _encode({"admin": True}, timedelta(hours=ADMIN_TOKEN_TTL_HOURS))


def decode_token(token: str) -> Dict[str, Any]:
    """Vérifie signature et expiration, lève UnauthorizedError sinon"""
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Session expirée")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Token invalide")
