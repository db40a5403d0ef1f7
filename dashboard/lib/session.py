# dashboard/lib/session.py
"""Signed session tokens (HS256 JWT) stored in the session cookie."""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from dashboard.config import Settings
from dashboard.models.auth import User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def create_session_token(user: User, settings: Settings) -> str:
    iat = datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "iat": iat,
        "exp": iat + timedelta(minutes=settings.session_expire_minutes),
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=ALGORITHM)


def read_session_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """Payload of a valid token, None if it expired or was tampered with."""
    try:
        return jwt.decode(token, settings.session_secret, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Session token expired")
        return None
    except JWTError as e:
        logger.warning("Invalid session token: %s", e)
        return None
