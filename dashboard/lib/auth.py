# dashboard/lib/auth.py
"""
Email/password sign-in.

Every expected rejection (malformed input, unknown email, wrong password)
surfaces as the same "Invalid credentials." message so a caller cannot
tell which part was wrong. Storage trouble while fetching the user is a
separate AuthError with its own message. Anything else propagates.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from passlib.context import CryptContext
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from dashboard.db.schema import users
from dashboard.models.auth import Credentials, User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

UserLookup = Callable[[str], Optional[User]]


class AuthError(Exception):
    """Base class for sign-in failures the login form knows how to report."""


class CredentialsSignin(AuthError):
    pass


class UserLookupError(AuthError):
    pass


@dataclass(frozen=True)
class SignInResult:
    user: Optional[User] = None
    message: Optional[str] = None


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_user(engine: Engine, email: str) -> Optional[User]:
    try:
        with engine.connect() as conn:
            row = conn.execute(
                select(users).where(users.c.email == email)
            ).mappings().first()
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch user")
        raise UserLookupError("Failed to fetch user.") from exc

    return User(**row) if row is not None else None


def authorize(credentials: Mapping[str, Any], lookup: UserLookup) -> Optional[User]:
    """
    Return the matching user, or None when the credentials don't check out.

    Input that fails the shape check never reaches `lookup`.
    """
    try:
        parsed = Credentials.model_validate(
            {
                "email": credentials.get("email"),
                "password": credentials.get("password"),
            }
        )
    except ValidationError:
        return None

    user = lookup(parsed.email)
    if user is None:
        # same hashing cost as a real comparison
        pwd_context.dummy_verify()
        return None

    if verify_password(parsed.password, user.password):
        return user
    return None


def sign_in(credentials: Mapping[str, Any], lookup: UserLookup) -> User:
    user = authorize(credentials, lookup)
    if user is None:
        raise CredentialsSignin("Invalid credentials.")
    return user


def authenticate(
    prev_state: Any,
    form: Mapping[str, Any],
    lookup: UserLookup,
) -> SignInResult:
    """
    Login form action. `prev_state` is whatever the form last received
    back; it is accepted so callers can thread it through and is not used.
    """
    try:
        user = sign_in(form, lookup)
    except CredentialsSignin:
        logger.info("Rejected sign-in attempt")
        return SignInResult(message="Invalid credentials.")
    except AuthError:
        return SignInResult(message="Something went wrong.")
    return SignInResult(user=user)
