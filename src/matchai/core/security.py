"""Password hashing and session token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import nacl.pwhash
from jose import JWTError, jwt
from nacl.exceptions import InvalidkeyError

from matchai.core.errors import AuthenticationError
from matchai.core.settings import settings


def hash_password(password: str) -> str:
    """Return an Argon2id hash string for ``password``."""
    return nacl.pwhash.str(password.encode("utf-8")).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if ``password`` matches the stored hash; False otherwise."""
    try:
        return nacl.pwhash.verify(password_hash.encode("ascii"), password.encode("utf-8"))
    except (InvalidkeyError, ValueError):
        return False


def create_access_token(user_id: int, extra_claims: dict[str, str] | None = None) -> str:
    """Create a JWT session token whose subject is the numeric user id."""
    to_encode: dict[str, object] = {"sub": str(user_id)}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Resolve a session token to a user id.

    Raises:
        AuthenticationError: If the token is malformed, expired or has no
            numeric subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise AuthenticationError("Could not validate credentials") from err

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise AuthenticationError("Could not validate credentials") from err
