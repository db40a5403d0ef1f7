# dashboard/api/deps.py

from typing import Any, Dict

from fastapi import Depends, Request
from sqlalchemy.engine import Engine

from dashboard.config import Settings, get_settings
from dashboard.db.engine import get_engine
from dashboard.lib.session import read_session_token


class NotAuthenticated(Exception):
    """Raised by `require_session`; the app turns it into a redirect to /login."""


def get_db_engine() -> Engine:
    return get_engine()


def require_session(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    token = request.cookies.get(settings.session_cookie_name)
    session = read_session_token(token, settings) if token else None
    if session is None:
        raise NotAuthenticated()
    return session
