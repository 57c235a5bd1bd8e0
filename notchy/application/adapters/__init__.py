"""
Application adapters.

Exports: ChatRepository, InMemoryChatRepository
"""

from notchy.application.adapters.chat_repository import ChatRepository, InMemoryChatRepository

__all__ = ["ChatRepository", "InMemoryChatRepository"]
