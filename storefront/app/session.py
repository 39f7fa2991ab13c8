#!/usr/bin/env python3
"""
Session management module for the Buyflex storefront.

A session is one browser tab: its cart, wishlist, logged-in user, shop view
and FlexBot conversation. Sessions live in memory only.
"""

from datetime import datetime
from typing import Dict, List, Optional

from .state import AppState
from ..agents.chat_agent import GREETING
from ..catalog.shop_view import ShopView
from ..data.models import User
from ..schemas.io_models import ChatMessage
from ..services.cart import ShoppingCart, Wishlist
from ..utils.errors import AuthenticationError, NotFoundError
from ..utils.logger import get_logger

logger = get_logger()


class Session:
    """State owned by a single session."""

    def __init__(self, session_id: str, state: AppState, **view_options):
        self.session_id = session_id
        self.state = state
        self.cart = ShoppingCart()
        self.wishlist = Wishlist()
        self.user_id: Optional[int] = None
        self.view = ShopView(state, **view_options)
        self.messages: List[ChatMessage] = [ChatMessage(role="bot", text=GREETING)]
        self.created_at = datetime.now().isoformat()
        self.last_updated = self.created_at

    @property
    def user(self) -> Optional[User]:
        if self.user_id is None:
            return None
        try:
            return self.state.get_user(self.user_id)
        except NotFoundError:
            # Account went away underneath the session
            self.user_id = None
            return None

    def require_user(self) -> User:
        user = self.user
        if user is None:
            raise AuthenticationError("Please log in first.")
        return user

    def add_message(self, message: ChatMessage) -> None:
        self.messages.append(message)
        self.last_updated = datetime.now().isoformat()

    def close(self) -> None:
        self.view.close()


class SessionManager:
    """Manages user sessions in memory."""

    def __init__(self, state: AppState, **view_options):
        """
        Args:
            state: shared application state handed to every session
            view_options: ShopView overrides (timings, window sizes) for new sessions
        """
        self.state = state
        self.view_options = view_options
        self.sessions: Dict[str, Session] = {}

    def create_session(self, session_id: str) -> bool:
        """
        Create a new session.

        Returns:
            True if session was created, False if it already exists
        """
        if session_id in self.sessions:
            return False
        self.sessions[session_id] = Session(session_id, self.state, **self.view_options)
        logger.info(f"[SESSION] created {session_id}")
        return True

    def get(self, session_id: str) -> Session:
        session = self.sessions.get(session_id)
        if session is None:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    def delete_session(self, session_id: str) -> bool:
        session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        logger.info(f"[SESSION] deleted {session_id}")
        return True

    def close_all(self) -> None:
        for session_id in list(self.sessions):
            self.delete_session(session_id)
