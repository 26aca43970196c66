# core/errors.py
from __future__ import annotations


class ConversationError(Exception):
    """Base class for everything the conversation layer raises."""


class EmptyInput(ConversationError, ValueError):
    pass


class NoActiveSession(ConversationError):
    pass


class SessionNotFound(ConversationError, KeyError):
    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"


class GenerationGatewayError(ConversationError):
    """Network error, non-success status or malformed response from the generator."""
