# dashboard/api/auth.py

from functools import partial
from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.engine import Engine

from dashboard.api.deps import get_db_engine
from dashboard.config import Settings, get_settings
from dashboard.lib.auth import authenticate, get_user
from dashboard.lib.session import create_session_token
from dashboard.models.auth import LoginState

router = APIRouter(tags=["auth"])


@router.post("/login")
def login(
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    engine: Engine = Depends(get_db_engine),
    settings: Settings = Depends(get_settings),
):
    """
    Sign in with email and password. On success the session cookie is set
    and the caller is sent to the dashboard.
    """
    result = authenticate(
        None,
        {"email": email, "password": password},
        partial(get_user, engine),
    )

    if result.user is None:
        return JSONResponse(
            status_code=401,
            content=LoginState(message=result.message).model_dump(),
        )

    response = RedirectResponse("/dashboard", status_code=303)
    response.set_cookie(
        settings.session_cookie_name,
        create_session_token(result.user, settings),
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
    )
    return response


@router.post("/logout")
def logout(settings: Settings = Depends(get_settings)):
    response = RedirectResponse("/login", status_code=303)
    response.delete_cookie(settings.session_cookie_name)
    return response
