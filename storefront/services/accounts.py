"""Login and registration against the in-memory user list.

Passwords are compared in plaintext; this is a demo shop, not an auth system.
"""
from datetime import datetime

from ..app.state import AppState, next_id
from ..data.models import User, UserRole
from ..utils.errors import AuthenticationError, ConflictError, InvalidArgumentError
from ..utils.logger import get_logger

logger = get_logger()


def login(state: AppState, email: str, password: str) -> User:
    user = state.find_user_by_email((email or "").strip())
    if user is None or user.password != password:
        logger.info(f"[AUTH] failed login for {email!r}")
        raise AuthenticationError("Invalid email or password.")
    logger.info(f"[AUTH] {user.email} logged in")
    return user


def register(state: AppState, name: str, email: str, password: str) -> User:
    name = (name or "").strip()
    email = (email or "").strip()
    if not name or not email or not password:
        raise InvalidArgumentError("Name, email and password are required.")
    if "@" not in email:
        raise InvalidArgumentError("Please enter a valid email address.")
    if state.find_user_by_email(email) is not None:
        raise ConflictError("An account with this email already exists.")

    user = User(
        id=next_id(state.users),
        name=name,
        email=email,
        password=password,
        role=UserRole.customer,
        created_at=datetime.now().isoformat(),
    )
    state.users.append(user)
    logger.info(f"[AUTH] registered {email} as user {user.id}")
    return user


def welcome_message(user: User, returning: bool = True) -> str:
    if returning:
        return f"Welcome back, {user.first_name}!"
    return f"Welcome, {user.first_name}!"
