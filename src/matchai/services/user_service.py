"""CRUD-style helpers for managing users."""
from __future__ import annotations

from sqlalchemy.orm import Session

from matchai.core import security
from matchai.core.errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from matchai.models import User
from matchai.schemas.user import UserCreate, UserUpdate

__all__ = [
    "get_user",
    "get_user_by_username",
    "require_user",
    "create_user",
    "authenticate",
    "update_user",
]


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Return the user registered under ``username``, if any."""
    return db.query(User).filter(User.username == username).first()


def require_user(db: Session, user_id: int) -> User:
    """Return the user or raise NotFoundError."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(db: Session, payload: UserCreate) -> User:
    """Persist a new account with a hashed password."""
    if get_user_by_username(db, payload.username) is not None:
        raise ValidationError("Username already exists")

    data = payload.model_dump(exclude={"password"})
    db_user = User(password_hash=security.hash_password(payload.password), **data)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def authenticate(db: Session, username: str, password: str) -> User:
    """Return the user whose credentials match, or raise AuthenticationError."""
    user = get_user_by_username(db, username)
    if user is None or not security.verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid username or password")
    return user


def update_user(db: Session, caller_id: int, user_id: int, update_data: UserUpdate) -> User:
    """Apply a partial profile update on behalf of the account owner."""
    if caller_id != user_id:
        raise AuthorizationError("Not authorized")
    db_user = require_user(db, user_id)

    update_dict = update_data.model_dump(exclude_unset=True)
    for key, value in update_dict.items():
        setattr(db_user, key, value)

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user
